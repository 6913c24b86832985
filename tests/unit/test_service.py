"""Unit tests for AssistantService uploads and questions.

The remote API is the FakeRemote from conftest, reached through
httpx.MockTransport; chunk size 5, overlap 1, batch size 2.
"""

import asyncio
from collections.abc import Callable
from unittest.mock import MagicMock, patch

import pytest
import pytest_check as check

from src.assistant import service as service_module
from src.assistant.service import (
    NO_ACTIVE_DOCUMENT,
    NO_ANSWER,
    UNEXPECTED_ERROR,
    AssistantService,
)
from src.client.api_client import QuestionAnsweringError
from src.models.schemas import SourceFile
from src.store.documents import MappingDocumentStore

TWELVE_WORDS = "one two three four five six seven eight nine ten eleven twelve"


def text_file(name: str, text: str) -> SourceFile:
    return SourceFile(filename=name, content=text.encode(), content_type="text/plain")


class TestUploadFile:
    async def test_success_records_active_document(self, service: AssistantService, remote) -> None:
        statuses: list[str] = []
        progress: list[int] = []

        result = await service.upload_file(
            text_file("Week 1 notes.txt", TWELVE_WORDS),
            on_status=statuses.append,
            on_progress=progress.append,
        )

        check.is_true(result.success)
        check.equal(result.document_name, "Week_1_notes.txt")
        check.equal(result.total_chunks, 3)
        check.equal([b["startChunkNumber"] for b in remote.batches], [0, 2])
        check.equal(remote.batches[0]["chunks"], ["one two three four five", "five six seven eight nine"])
        check.equal(remote.batches[1]["chunks"], ["nine ten eleven twelve"])
        check.equal(progress, [67, 100])
        check.equal(service.store.list(), ["Week_1_notes.txt"])
        check.equal(service.store.get_active(), "Week_1_notes.txt")
        check.equal(
            statuses,
            [
                "Parsing Week_1_notes.txt...",
                "Week_1_notes.txt: 67%",
                "Week_1_notes.txt: 100%",
                'File "Week_1_notes.txt" processed successfully!',
            ],
        )

    async def test_short_document_sent_verbatim(self, service: AssistantService, remote) -> None:
        await service.upload_file(text_file("tiny.txt", "  Hello\n class  "))

        assert remote.batches == [
            {"fileName": "tiny.txt", "chunks": ["  Hello\n class  "], "startChunkNumber": 0}
        ]

    async def test_failed_batch_not_recorded(self, service: AssistantService, remote) -> None:
        remote.fail_offsets = {2}

        result = await service.upload_file(text_file("notes.txt", TWELVE_WORDS))

        check.is_false(result.success)
        check.is_in("offset 2 of document notes.txt", result.error)
        check.equal(service.store.list(), [])
        check.is_none(service.store.get_active())

    async def test_empty_text_never_reaches_ingestion(self, service: AssistantService, remote) -> None:
        result = await service.upload_file(text_file("blank.txt", " \n\t "))

        check.is_false(result.success)
        check.is_in("no extractable text", result.error)
        check.equal(remote.batches, [])

    async def test_extraction_failure_skips_chunking(self, service: AssistantService, remote) -> None:
        with patch.object(service_module, "chunk_text") as chunker:
            result = await service.upload_file(
                SourceFile(filename="broken.pdf", content=b"garbage", content_type="application/pdf")
            )

        check.is_false(result.success)
        check.is_in("Invalid PDF", result.error)
        chunker.assert_not_called()
        check.equal(remote.batches, [])

    async def test_pdf_upload(
        self, service: AssistantService, remote, make_pdf: Callable[..., bytes]
    ) -> None:
        source = SourceFile(
            filename="cells.pdf",
            content=make_pdf("The cell membrane"),
            content_type="application/pdf",
        )

        result = await service.upload_file(source)

        check.is_true(result.success)
        check.is_in("membrane", remote.batches[0]["chunks"][0])


class TestUploadFiles:
    async def test_continues_after_failed_document(self, service: AssistantService, remote) -> None:
        files = [
            text_file("first.txt", "alpha beta"),
            SourceFile(filename="second.pdf", content=b"not a pdf"),
            text_file("third.txt", "gamma delta"),
        ]

        results = await service.upload_files(files)

        check.equal([r.success for r in results], [True, False, True])
        check.equal([b["fileName"] for b in remote.batches], ["first.txt", "third.txt"])
        check.equal(service.store.list(), ["third.txt", "first.txt"])
        check.equal(service.store.get_active(), "third.txt")

    async def test_progress_resets_per_document(self, service: AssistantService) -> None:
        progress: list[int] = []

        await service.upload_files(
            [text_file("a.txt", "one"), text_file("b.txt", "two")], on_progress=progress.append
        )

        assert progress == [0, 100, 0, 100]

    async def test_requires_files(self, service: AssistantService) -> None:
        with pytest.raises(ValueError, match="select file"):
            await service.upload_files([])

    async def test_cancelled_upload_skips_remaining(self, service: AssistantService, remote) -> None:
        cancel = asyncio.Event()
        cancel.set()

        results = await service.upload_files([text_file("a.txt", "one")], cancel_event=cancel)

        check.equal(results, [])
        check.equal(remote.batches, [])


class TestAsk:
    async def test_requires_active_document(self, service: AssistantService, remote) -> None:
        assert await service.ask("What is a cell?") == NO_ACTIVE_DOCUMENT
        assert remote.questions == []

    async def test_answers_for_active_document(self, service: AssistantService, remote) -> None:
        await service.upload_file(text_file("bio notes.txt", "plants use light"))

        answer = await service.ask("  What do plants use?  ")

        check.equal(answer, remote.answer)
        check.equal(
            remote.questions, [{"question": "What do plants use?", "fileName": "bio_notes.txt"}]
        )

    async def test_unsuccessful_answer(self, service: AssistantService, remote) -> None:
        service.store.add("bio.txt")
        service.store.set_active("bio.txt")
        remote.ask_status = 500

        assert await service.ask("Why?") == NO_ANSWER

    async def test_unexpected_failure(self, service: AssistantService) -> None:
        service.store.add("bio.txt")
        service.store.set_active("bio.txt")

        with patch.object(
            service._client, "ask", side_effect=QuestionAnsweringError("Connection failed")
        ):
            assert await service.ask("Why?") == UNEXPECTED_ERROR

    async def test_blank_question(self, service: AssistantService) -> None:
        with pytest.raises(ValueError):
            await service.ask("   ")


class TestServiceWiring:
    def test_with_store_shares_client(self, service: AssistantService) -> None:
        store = MappingDocumentStore({})

        scoped = service.with_store(store)

        assert scoped.store is store
        assert scoped._client is service._client
        assert scoped.config is service.config

    def test_singleton_returns_same_instance(self) -> None:
        """get_assistant_service returns the same instance on multiple calls."""
        service_module._assistant_service = None

        with patch.object(service_module, "AssistantService") as mock_service:
            mock_service.return_value = MagicMock()

            first = service_module.get_assistant_service()
            second = service_module.get_assistant_service()

        assert first is second
        mock_service.assert_called_once()
        service_module._assistant_service = None
