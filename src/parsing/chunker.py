"""Word-window chunking with overlap.

Splits extracted document text into an ordered list of overlapping chunks
sized for the remote ingestion service.
"""

import logging

logger = logging.getLogger(__name__)


class ChunkingConfigError(ValueError):
    """Raised when chunk size and overlap cannot produce a valid window."""


def _validate_window(chunk_size: int, overlap: int) -> None:
    if chunk_size <= 0:
        raise ChunkingConfigError(f"chunk_size must be positive, got {chunk_size}")
    if overlap < 0:
        raise ChunkingConfigError(f"overlap must not be negative, got {overlap}")
    if overlap >= chunk_size:
        raise ChunkingConfigError(
            f"overlap ({overlap}) must be smaller than chunk_size ({chunk_size})"
        )


def chunk_text(text: str, chunk_size: int = 2000, overlap: int = 150) -> list[str]:
    """Split text into overlapping word chunks.

    Text that fits in a single chunk is returned untouched, original
    whitespace included. Longer text is re-joined with single spaces,
    one window of ``chunk_size`` words at a time, each window starting
    ``chunk_size - overlap`` words after the previous one.

    Args:
        text: Raw document text.
        chunk_size: Maximum number of words per chunk.
        overlap: Number of words shared by consecutive chunks.

    Returns:
        Ordered list of chunks, never empty.

    Raises:
        ChunkingConfigError: If chunk_size or overlap is out of range.
    """
    _validate_window(chunk_size, overlap)

    words = text.split()
    if not words:
        return [""]
    if len(words) <= chunk_size:
        return [text]

    step = chunk_size - overlap
    chunks: list[str] = []
    start = 0
    while start < len(words):
        chunks.append(" ".join(words[start : start + chunk_size]))
        next_start = start + step
        # A tail shorter than the overlap would only repeat words already sent
        if len(words) - next_start < overlap:
            break
        start = next_start

    logger.debug(
        f"Split {len(words)} words into {len(chunks)} chunks "
        f"(size={chunk_size}, overlap={overlap})"
    )
    return chunks
