from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for payloads exchanged with the remote API (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProcessBatchRequest(WireModel):
    """Body of POST /api/process-batch.

    Attributes:
        file_name: Normalized document name all chunks are stored under.
        chunks: Consecutive chunks of the document.
        start_chunk_number: Index of the first chunk within the whole document.
    """

    file_name: str
    chunks: list[str]
    start_chunk_number: int = Field(ge=0)


class AskRequest(WireModel):
    """Body of POST /api/ask."""

    question: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1)


class AskResponse(BaseModel):
    """Response of POST /api/ask.

    Attributes:
        success: Whether the service produced an answer.
        answer: The answer text, present on success.
    """

    success: bool = False
    answer: str | None = None


class SourceFile(BaseModel):
    """An uploaded file before text extraction."""

    filename: str = Field(..., min_length=1)
    content: bytes
    content_type: str | None = None


class Batch(BaseModel):
    """Consecutive chunks submitted in one ingestion request.

    Attributes:
        start_chunk_number: Index of the first chunk within the whole document.
        chunks: The chunks of this batch, in document order.
    """

    start_chunk_number: int = Field(ge=0)
    chunks: list[str]


class UploadResult(BaseModel):
    """Outcome of a document whose batches were all accepted."""

    document_name: str
    total_chunks: int = Field(ge=0)
    batches_submitted: int = Field(ge=0)
    progress: int = Field(ge=0, le=100)


class DocumentResult(BaseModel):
    """Per-document outcome of a multi-file upload.

    Attributes:
        document_name: Normalized name of the document.
        success: Whether every batch was accepted.
        total_chunks: Number of chunks produced, 0 if chunking never ran.
        error: Failure description when success is False.
    """

    document_name: str
    success: bool
    total_chunks: int = 0
    error: str | None = None


class UploadResponse(BaseModel):
    """Response of the local POST /upload endpoint."""

    results: list[DocumentResult]
    active: str | None = None


class QuestionRequest(BaseModel):
    """Request payload for the local POST /ask endpoint."""

    question: str = Field(..., min_length=1)

    @field_validator("question", mode="before")
    @classmethod
    def strip_question(cls, v: str) -> str:
        """Strip whitespace from question before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class QuestionAnswer(BaseModel):
    """Answer returned by the local POST /ask endpoint."""

    answer: str
    file_name: str | None = None


class DocumentsResponse(BaseModel):
    """Known documents and the currently active one."""

    files: list[str]
    active: str | None = None


class ActiveDocumentRequest(BaseModel):
    """Request payload for PUT /documents/active."""

    name: str
