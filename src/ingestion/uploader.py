"""Sequential, batched submission of document chunks to the ingestion service.

Chunks are grouped into fixed-size batches and sent one request at a time.
Each batch carries the index of its first chunk so the service can store
chunks from separate requests in document order. The first failing batch
stops the upload; already accepted batches are left as they are.
"""

import asyncio
import logging
import math
import re
from collections.abc import Awaitable, Callable, Iterator, Sequence

import httpx

from src.models.schemas import Batch, UploadResult

logger = logging.getLogger(__name__)

SubmitBatch = Callable[[str, list[str], int], Awaitable[bool]]
ProgressCallback = Callable[[int], None]

_WHITESPACE = re.compile(r"\s+")


class DocumentUploadError(Exception):
    """Base class for failures that stop a single document's upload."""

    def __init__(self, document_name: str, message: str) -> None:
        super().__init__(message)
        self.document_name = document_name


class EmptyContentError(DocumentUploadError):
    """Raised when a document has nothing to send."""

    def __init__(self, document_name: str) -> None:
        super().__init__(document_name, f"document {document_name} has no extractable text")


class BatchSubmissionError(DocumentUploadError):
    """Raised when the ingestion service rejects or never answers a batch."""

    def __init__(self, document_name: str, offset: int, cause: str) -> None:
        super().__init__(
            document_name,
            f"ingestion failed for batch starting at offset {offset} "
            f"of document {document_name}: {cause}",
        )
        self.offset = offset
        self.cause = cause


class UploadCancelledError(DocumentUploadError):
    """Raised when the caller cancels an upload between two batches."""

    def __init__(self, document_name: str, offset: int) -> None:
        super().__init__(
            document_name,
            f"upload of document {document_name} cancelled before batch at offset {offset}",
        )
        self.offset = offset


def normalize_document_name(name: str) -> str:
    """Replace every whitespace run in a file name with a single underscore."""
    return _WHITESPACE.sub("_", name)


def iter_batches(chunks: Sequence[str], batch_size: int) -> Iterator[Batch]:
    """Split chunks into consecutive batches of at most batch_size.

    Args:
        chunks: The full, ordered chunk sequence of one document.
        batch_size: Maximum chunks per batch.

    Yields:
        Batches in document order, each tagged with its first chunk's index.

    Raises:
        ValueError: If batch_size is not positive.
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    for start in range(0, len(chunks), batch_size):
        yield Batch(start_chunk_number=start, chunks=list(chunks[start : start + batch_size]))


def compute_progress(batch_start: int, batch_size: int, total_chunks: int) -> int:
    """Percentage of a document uploaded once the batch at batch_start is accepted.

    Rounds half up and clamps at 100, since the last batch may be partial.
    """
    ratio = (batch_start + batch_size) / total_chunks
    return min(100, math.floor(ratio * 100 + 0.5))


class BatchUploader:
    """Drives a document's chunks through the ingestion endpoint.

    Attributes:
        submit: Coroutine sending one batch; returns whether it was accepted.
        batch_size: Maximum chunks per request.
        batch_timeout: Optional limit in seconds for one submission.
    """

    def __init__(
        self,
        submit: SubmitBatch,
        batch_size: int = 15,
        batch_timeout: float | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.submit = submit
        self.batch_size = batch_size
        self.batch_timeout = batch_timeout

    async def _submit_batch(self, document_name: str, batch: Batch) -> None:
        call = self.submit(document_name, batch.chunks, batch.start_chunk_number)
        try:
            if self.batch_timeout is None:
                accepted = await call
            else:
                accepted = await asyncio.wait_for(call, timeout=self.batch_timeout)
        except TimeoutError as e:
            raise BatchSubmissionError(
                document_name,
                batch.start_chunk_number,
                f"no response within {self.batch_timeout}s",
            ) from e
        except httpx.HTTPError as e:
            raise BatchSubmissionError(document_name, batch.start_chunk_number, str(e)) from e

        if not accepted:
            raise BatchSubmissionError(
                document_name, batch.start_chunk_number, "service rejected the batch"
            )

    async def upload(
        self,
        document_name: str,
        chunks: Sequence[str],
        on_progress: ProgressCallback | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> UploadResult:
        """Submit every chunk of one document, one batch at a time.

        Args:
            document_name: File name; whitespace is normalized before sending.
            chunks: Ordered chunks of the document.
            on_progress: Called with the new percentage after each accepted batch.
            cancel_event: When set, the upload stops before the next batch.

        Returns:
            UploadResult once every batch has been accepted.

        Raises:
            EmptyContentError: If there are no chunks.
            BatchSubmissionError: On the first batch that fails.
            UploadCancelledError: If cancel_event is set mid-upload.
        """
        name = normalize_document_name(document_name)
        total = len(chunks)
        if total == 0:
            raise EmptyContentError(name)

        progress = 0
        submitted = 0
        for batch in iter_batches(chunks, self.batch_size):
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Upload of {name} cancelled at offset {batch.start_chunk_number}")
                raise UploadCancelledError(name, batch.start_chunk_number)

            try:
                await self._submit_batch(name, batch)
            except BatchSubmissionError as e:
                logger.warning(str(e))
                raise

            submitted += 1
            progress = compute_progress(batch.start_chunk_number, self.batch_size, total)
            logger.info(
                f"{name}: batch at offset {batch.start_chunk_number} accepted "
                f"({len(batch.chunks)} chunks, {progress}%)"
            )
            if on_progress is not None:
                on_progress(progress)

        return UploadResult(
            document_name=name,
            total_chunks=total,
            batches_submitted=submitted,
            progress=progress,
        )
