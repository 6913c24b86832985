"""Text extraction and chunking for uploaded documents.

Turns uploaded files into ordered, overlapping word chunks ready for the
remote ingestion service.

Responsibilities:
    - PDF text extraction with pypdf
    - Plain-text decoding
    - Word-window chunking with overlap
"""

from src.parsing.chunker import ChunkingConfigError, chunk_text
from src.parsing.errors import ExtractionError
from src.parsing.extractor import extract_text
from src.parsing.pdf_parser import PDFContent, PDFParseError, parse_pdf

__all__ = [
    "ChunkingConfigError",
    "ExtractionError",
    "PDFContent",
    "PDFParseError",
    "chunk_text",
    "extract_text",
    "parse_pdf",
]
