"""Async HTTP client for the remote ingestion and question-answering service."""

import logging
from types import TracebackType

import httpx
from pydantic import ValidationError

from src.client.config import ClientConfig, get_client_config
from src.models.schemas import AskRequest, AskResponse, ProcessBatchRequest

logger = logging.getLogger(__name__)

PROCESS_BATCH_PATH = "/api/process-batch"
ASK_PATH = "/api/ask"


class QuestionAnsweringError(Exception):
    """Raised when a question could not be sent or its answer not read."""


class ApiClient:
    """Thin wrapper over httpx.AsyncClient for the two remote endpoints.

    Args:
        config: Client configuration; loaded from environment if omitted.
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or get_client_config()
        self._client = httpx.AsyncClient(
            base_url=self._config.api_base,
            timeout=self._config.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def process_batch(
        self, file_name: str, chunks: list[str], start_chunk_number: int
    ) -> bool:
        """Send one batch of chunks for ingestion.

        Args:
            file_name: Normalized document name.
            chunks: The batch's chunks in document order.
            start_chunk_number: Index of the first chunk within the document.

        Returns:
            True if the service answered with a 2xx status.

        Raises:
            httpx.HTTPError: On transport failures.
        """
        payload = ProcessBatchRequest(
            file_name=file_name,
            chunks=chunks,
            start_chunk_number=start_chunk_number,
        )
        response = await self._client.post(
            PROCESS_BATCH_PATH, json=payload.model_dump(by_alias=True)
        )
        if not response.is_success:
            logger.warning(
                f"process-batch returned HTTP {response.status_code} "
                f"for {file_name} at offset {start_chunk_number}"
            )
        return response.is_success

    async def ask(self, question: str, file_name: str) -> AskResponse:
        """Ask a question about one ingested document.

        Args:
            question: The user's question.
            file_name: Normalized name of the document to answer from.

        Returns:
            The parsed answer; success is False for non-2xx responses.

        Raises:
            QuestionAnsweringError: On transport failures or malformed bodies.
        """
        payload = AskRequest(question=question, file_name=file_name)
        try:
            response = await self._client.post(ASK_PATH, json=payload.model_dump(by_alias=True))
        except httpx.HTTPError as e:
            raise QuestionAnsweringError(f"Connection failed: {e}") from e

        if not response.is_success:
            logger.warning(f"ask returned HTTP {response.status_code} for {file_name}")
            return AskResponse(success=False)

        try:
            return AskResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise QuestionAnsweringError(f"Malformed answer: {e}") from e
