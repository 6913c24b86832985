"""Assistant service tying extraction, chunking, ingestion and Q&A together.

Architecture Decisions:

1. **Documents one at a time** - Files from one upload are processed in the
   order given, never in parallel, so status messages, progress and the
   known-document list change in a predictable order.

2. **Continue after a failed document** - A failure is recorded for that file
   and the next file is still attempted. A failed document is never added to
   the store nor made active.

3. **Injected store and client** - The service owns no persistence. The chat
   page hands it NiceGUI user storage, the API a process-wide dict.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence

from src.client.api_client import ApiClient, QuestionAnsweringError
from src.client.config import ClientConfig, get_client_config
from src.ingestion.uploader import (
    BatchUploader,
    DocumentUploadError,
    EmptyContentError,
    normalize_document_name,
)
from src.models.schemas import DocumentResult, SourceFile
from src.parsing.chunker import chunk_text
from src.parsing.errors import ExtractionError
from src.parsing.extractor import extract_text
from src.store.documents import DocumentStore, MappingDocumentStore

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]
ProgressCallback = Callable[[int], None]

NO_ACTIVE_DOCUMENT = "Please upload or select a file first."
NO_ANSWER = "No answer found."
UNEXPECTED_ERROR = "Unexpected error occurred."


class AssistantService:
    """Uploads course material and answers questions about it.

    Args:
        config: Pipeline configuration. Loads from environment if not provided.
        store: Known-document store. An in-memory store is used if omitted.
        client: Remote API client. Built from config if omitted.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        store: DocumentStore | None = None,
        client: ApiClient | None = None,
    ) -> None:
        self._config = config or get_client_config()
        self.store: DocumentStore = store if store is not None else MappingDocumentStore()
        self._client = client or ApiClient(self._config)
        self._uploader = BatchUploader(
            submit=self._client.process_batch,
            batch_size=self._config.batch_size,
            batch_timeout=self._config.batch_timeout,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def with_store(self, store: DocumentStore) -> "AssistantService":
        """Return a service sharing this one's config and client but using store."""
        return AssistantService(config=self._config, store=store, client=self._client)

    async def upload_file(
        self,
        source: SourceFile,
        on_status: StatusCallback | None = None,
        on_progress: ProgressCallback | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> DocumentResult:
        """Extract, chunk and ingest a single file.

        Returns:
            DocumentResult describing success or the failure reason.
        """
        name = normalize_document_name(source.filename)
        notify = on_status or (lambda _message: None)
        notify(f"Parsing {name}...")

        chunks: list[str] = []
        try:
            text = extract_text(source)
            if not text.strip():
                raise EmptyContentError(name)
            chunks = chunk_text(text, self._config.chunk_size, self._config.chunk_overlap)

            def report(progress: int) -> None:
                if on_progress is not None:
                    on_progress(progress)
                notify(f"{name}: {progress}%")

            await self._uploader.upload(name, chunks, on_progress=report, cancel_event=cancel_event)
        except (ExtractionError, DocumentUploadError) as e:
            logger.warning(f"Failed to process {name}: {e}")
            notify(f"Failed to process {name}: {e}")
            return DocumentResult(
                document_name=name,
                success=False,
                total_chunks=len(chunks),
                error=str(e),
            )

        self.store.add(name)
        self.store.set_active(name)
        logger.info(f"Ingested {name} ({len(chunks)} chunks)")
        notify(f'File "{name}" processed successfully!')
        return DocumentResult(document_name=name, success=True, total_chunks=len(chunks))

    async def upload_files(
        self,
        files: Sequence[SourceFile],
        on_status: StatusCallback | None = None,
        on_progress: ProgressCallback | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> list[DocumentResult]:
        """Upload several files in order, continuing past failed ones.

        Args:
            files: Files in the order the user selected them.
            on_status: Receives human-readable status lines.
            on_progress: Receives the current document's percentage.
            cancel_event: Stops the in-flight document and skips the rest when set.

        Returns:
            One DocumentResult per file attempted, in input order.

        Raises:
            ValueError: If no files were given.
        """
        if not files:
            raise ValueError("Please select file(s)")

        results: list[DocumentResult] = []
        for source in files:
            if cancel_event is not None and cancel_event.is_set():
                break
            if on_progress is not None:
                on_progress(0)
            results.append(
                await self.upload_file(source, on_status, on_progress, cancel_event)
            )
        return results

    async def ask(self, question: str) -> str:
        """Answer a question about the active document.

        Args:
            question: The user's question.

        Returns:
            Answer text, or a user-facing message when there is none.

        Raises:
            ValueError: If the question is blank.
        """
        question = question.strip()
        if not question:
            raise ValueError("Question must not be empty")

        file_name = self.store.get_active()
        if not file_name:
            return NO_ACTIVE_DOCUMENT

        try:
            response = await self._client.ask(question, file_name)
        except QuestionAnsweringError as e:
            logger.error(f"Question about {file_name} failed: {e}")
            return UNEXPECTED_ERROR

        if response.success and response.answer:
            return response.answer
        return NO_ANSWER

    async def aclose(self) -> None:
        await self._client.aclose()


# Module-level singleton instance
_assistant_service: AssistantService | None = None


def get_assistant_service() -> AssistantService:
    """Get or create the global assistant service.

    Returns:
        The AssistantService instance.
    """
    global _assistant_service
    if _assistant_service is None:
        _assistant_service = AssistantService()
    return _assistant_service
