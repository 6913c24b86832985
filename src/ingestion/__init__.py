"""Batched ingestion of document chunks into the remote service."""

from src.ingestion.uploader import (
    BatchSubmissionError,
    BatchUploader,
    DocumentUploadError,
    EmptyContentError,
    UploadCancelledError,
    compute_progress,
    iter_batches,
    normalize_document_name,
)

__all__ = [
    "BatchSubmissionError",
    "BatchUploader",
    "DocumentUploadError",
    "EmptyContentError",
    "UploadCancelledError",
    "compute_progress",
    "iter_batches",
    "normalize_document_name",
]
