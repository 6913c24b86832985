"""FastAPI endpoints for the Classory assistant.

Endpoints:
    - GET /health: Service health status
    - POST /upload: Chunk and ingest .txt / .pdf documents
    - POST /ask: Ask a question about the active document
    - GET /documents: Uploaded documents and the active one
    - PUT /documents/active: Change the active document
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
