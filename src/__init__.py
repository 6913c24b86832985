"""Classory Assistant - upload course material, then ask questions about it.

Splits uploaded documents into overlapping word chunks, ingests them through
a remote API in sequential batches, and relays questions about the active
document to the same service.

Components:
    - parsing: Text extraction and chunking
    - ingestion: Batched, ordered chunk submission
    - client: Remote API client and configuration
    - store: Known documents and active selection
    - assistant: Orchestration of uploads and questions
    - api: Local HTTP endpoints
    - ui: NiceGUI chat page
"""

__version__ = "0.1.0"
