"""Text extraction for uploaded course material.

PDFs go through pypdf; anything else is treated as plain text.
"""

import logging

from src.models.schemas import SourceFile
from src.parsing.pdf_parser import parse_pdf

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def is_pdf(source: SourceFile) -> bool:
    """Check whether a file should be parsed as PDF, by content type or extension."""
    if source.content_type == PDF_CONTENT_TYPE:
        return True
    return source.filename.lower().endswith(".pdf")


def decode_text(content: bytes) -> str:
    """Decode plain-text bytes as UTF-8.

    A leading byte order mark is dropped and invalid sequences are
    replaced rather than rejected.
    """
    return content.decode("utf-8-sig", errors="replace")


def extract_text(source: SourceFile) -> str:
    """Extract the plain text of an uploaded file.

    Args:
        source: The uploaded file.

    Returns:
        The document text, possibly empty.

    Raises:
        ExtractionError: If the file is a PDF that cannot be parsed.
    """
    if is_pdf(source):
        pdf_content = parse_pdf(source.content)
        title = pdf_content.metadata.get("title")
        logger.info(
            f"Extracted {pdf_content.pages} pages from {source.filename}"
            + (f" (title: {title})" if title else "")
        )
        return pdf_content.text

    return decode_text(source.content)
