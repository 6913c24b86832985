"""PDF text extraction using pypdf.

Pulls the text layer and document metadata out of uploaded course material.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from src.parsing.errors import ExtractionError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"

_METADATA_FIELDS = {
    "title": "/Title",
    "author": "/Author",
    "subject": "/Subject",
    "creator": "/Creator",
    "producer": "/Producer",
}

# Dates stay in raw PDF date format (D:YYYYMMDDHHmmSS...)
_DATE_FIELDS = {
    "creation_date": "/CreationDate",
    "modification_date": "/ModDate",
}


class PDFContent(BaseModel):
    """Text and metadata extracted from a PDF file.

    Attributes:
        text: Page texts joined by blank lines.
        pages: Total number of pages in the document.
        metadata: Document info fields that were present.
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str] = Field(default_factory=dict)


class PDFParseError(ExtractionError):
    """Raised when a PDF cannot be read."""


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Reject empty, oversized or non-PDF content before pypdf sees it."""
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _extract_metadata(reader: PdfReader) -> dict[str, str]:
    """Collect the standard document info fields.

    Args:
        reader: Initialized PdfReader instance.

    Returns:
        Field name to value, only for fields the PDF defines.
    """
    metadata: dict[str, str] = {}

    try:
        info = reader.metadata
        if not info:
            return metadata
        for name, key in {**_METADATA_FIELDS, **_DATE_FIELDS}.items():
            value = info.get(key)
            if value:
                metadata[name] = str(value)
    except Exception as e:
        logger.warning(f"Failed to read PDF metadata: {e}")

    return metadata


def parse_pdf(file_content: bytes) -> PDFContent:
    """Parse a PDF file and extract its text content.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFContent with extracted text, page count, and metadata.

    Raises:
        PDFParseError: If the file is empty, too large, not a PDF, or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    page_texts: list[str] = []
    for number, page in enumerate(reader.pages, start=1):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning(f"Failed to extract text from page {number}: {e}")
            continue
        if page_text:
            page_texts.append(page_text)

    text = "\n\n".join(page_texts)
    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(text=text, pages=pages, metadata=_extract_metadata(reader))
