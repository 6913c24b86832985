"""Pydantic models for the pipeline, the remote API and the local API.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ProcessBatchRequest / AskRequest / AskResponse: remote API payloads
    - SourceFile: uploaded file before extraction
    - Batch / UploadResult / DocumentResult: ingestion pipeline values
    - UploadResponse / QuestionRequest / QuestionAnswer / DocumentsResponse: local API
"""

from src.models.schemas import (
    ActiveDocumentRequest,
    AskRequest,
    AskResponse,
    Batch,
    DocumentResult,
    DocumentsResponse,
    ProcessBatchRequest,
    QuestionAnswer,
    QuestionRequest,
    SourceFile,
    UploadResponse,
    UploadResult,
)

__all__ = [
    "ActiveDocumentRequest",
    "AskRequest",
    "AskResponse",
    "Batch",
    "DocumentResult",
    "DocumentsResponse",
    "ProcessBatchRequest",
    "QuestionAnswer",
    "QuestionRequest",
    "SourceFile",
    "UploadResponse",
    "UploadResult",
]
