"""Assistant orchestration for uploads and questions.

Responsibilities:
    - Extract, chunk and ingest selected files, one after another
    - Record successfully ingested documents and the active selection
    - Ask questions against the active document

Maintains clean separation from the HTTP and UI layers.
"""

from src.assistant.service import AssistantService, get_assistant_service

__all__ = ["AssistantService", "get_assistant_service"]
