"""Upload, question and document-selection endpoints.

Uploaded files are validated here, then handed to the assistant service,
which chunks them and forwards the chunks to the remote ingestion API.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from src.assistant.service import AssistantService, get_assistant_service
from src.models.schemas import (
    ActiveDocumentRequest,
    DocumentsResponse,
    QuestionAnswer,
    QuestionRequest,
    SourceFile,
    UploadResponse,
)
from src.parsing.pdf_parser import MAX_FILE_SIZE

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

ALLOWED_EXTENSIONS = (".txt", ".pdf")
MAX_UPLOAD_SIZE = MAX_FILE_SIZE

Service = Annotated[AssistantService, Depends(get_assistant_service)]


def _validate_file_extension(filename: str | None) -> str:
    """Validate that file has a .txt or .pdf extension.

    Raises:
        HTTPException: 400 if the name is missing or the extension is invalid.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    if not filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only .txt and .pdf files are accepted: {filename}",
        )

    return filename


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_UPLOAD_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )

    return content


def _documents(service: AssistantService) -> DocumentsResponse:
    return DocumentsResponse(files=service.store.list(), active=service.store.get_active())


@router.post("/upload", response_model=UploadResponse)
async def upload_documents(files: list[UploadFile], service: Service) -> UploadResponse:
    """Upload one or more .txt / .pdf documents.

    All files are validated before any is ingested. They are then processed
    in the order given; a failing document does not stop the ones after it.

    Returns:
        UploadResponse with one result per file and the active document.

    Raises:
        400: Missing filename or unsupported extension.
        413: A file exceeds the 10MB limit.
    """
    sources: list[SourceFile] = []
    for file in files:
        filename = _validate_file_extension(file.filename)
        content = await _read_and_validate_size(file)
        sources.append(
            SourceFile(filename=filename, content=content, content_type=file.content_type)
        )

    results = await service.upload_files(sources)
    failed = [r.document_name for r in results if not r.success]
    if failed:
        logger.warning(f"Upload finished with failures: {', '.join(failed)}")

    return UploadResponse(results=results, active=service.store.get_active())


@router.post("/ask", response_model=QuestionAnswer)
async def ask_question(request: QuestionRequest, service: Service) -> QuestionAnswer:
    """Ask a question about the active document."""
    answer = await service.ask(request.question)
    return QuestionAnswer(answer=answer, file_name=service.store.get_active())


@router.get("/documents", response_model=DocumentsResponse)
async def list_documents(service: Service) -> DocumentsResponse:
    """List uploaded documents, most recent first."""
    return _documents(service)


@router.put("/documents/active", response_model=DocumentsResponse)
async def set_active_document(
    request: ActiveDocumentRequest, service: Service
) -> DocumentsResponse:
    """Select the document questions are answered from.

    Raises:
        404: The document was never uploaded.
    """
    try:
        service.store.set_active(request.name)
    except KeyError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown document: {request.name}",
        ) from e
    return _documents(service)
