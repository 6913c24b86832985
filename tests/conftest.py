"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - make_pdf: Builds small text PDFs in memory
    - config: Small chunk / batch sizes so tests stay readable
    - remote: Scriptable stand-in for the remote ingestion / Q&A service
    - api_client: ApiClient wired to the stand-in through httpx.MockTransport
    - service: AssistantService over an in-memory document store
    - async_client: HTTPX client for the local API using that service
"""

import json
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.assistant.service import AssistantService, get_assistant_service
from src.client.api_client import ApiClient
from src.client.config import ClientConfig
from src.store.documents import MappingDocumentStore

REMOTE_BASE_URL = "http://remote.test"


def _build_pdf(pages: list[str], info: dict[str, str] | None = None) -> bytes:
    """Assemble a minimal PDF with one Helvetica text line per page.

    ``info`` entries (e.g. ``{"Title": "Biology 101"}``) go into the
    document info dictionary.
    """
    page_count = len(pages)
    font_id = 3 + 2 * page_count
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        (
            "<< /Type /Pages /Kids ["
            + " ".join(f"{3 + 2 * i} 0 R" for i in range(page_count))
            + f"] /Count {page_count} >>"
        ).encode(),
    ]
    for i, text in enumerate(pages):
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Contents {4 + 2 * i} 0 R /Resources << /Font << /F1 {font_id} 0 R >> >> >>"
            ).encode()
        )
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")
    info_ref = ""
    if info:
        entries = " ".join(f"/{key} ({value})" for key, value in info.items())
        objects.append(f"<< {entries} >>".encode())
        info_ref = f" /Info {len(objects)} 0 R"

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R{info_ref} >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Return a builder producing PDF bytes, one argument per page."""

    def make(*pages: str, title: str | None = None, mod_date: str | None = None) -> bytes:
        info = {}
        if title:
            info["Title"] = title
        if mod_date:
            info["ModDate"] = mod_date
        return _build_pdf(list(pages), info)

    return make


class FakeRemote:
    """In-memory stand-in for the remote ingestion and question-answering API.

    Attributes:
        batches: Every process-batch body received, in arrival order.
        questions: Every ask body received.
        fail_offsets: startChunkNumber values answered with HTTP 500.
        answer: Answer returned by /api/ask.
        ask_status: Status code returned by /api/ask.
    """

    def __init__(self) -> None:
        self.batches: list[dict] = []
        self.questions: list[dict] = []
        self.fail_offsets: set[int] = set()
        self.answer: str = "Photosynthesis turns light into chemical energy."
        self.ask_status: int = 200
        self.ask_body: bytes | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if request.url.path == "/api/process-batch":
            self.batches.append(body)
            if body["startChunkNumber"] in self.fail_offsets:
                return httpx.Response(500, json={"error": "embedding failed"})
            return httpx.Response(200, json={"success": True})
        if request.url.path == "/api/ask":
            self.questions.append(body)
            if self.ask_body is not None:
                return httpx.Response(self.ask_status, content=self.ask_body)
            return httpx.Response(
                self.ask_status, json={"success": self.ask_status == 200, "answer": self.answer}
            )
        return httpx.Response(404)


@pytest.fixture
def config() -> ClientConfig:
    """Return a config with tiny chunks and batches."""
    return ClientConfig(
        api_base_url=REMOTE_BASE_URL,
        chunk_size=5,
        chunk_overlap=1,
        batch_size=2,
    )


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
async def api_client(config: ClientConfig, remote: FakeRemote) -> AsyncGenerator[ApiClient]:
    """Create an ApiClient that talks to the fake remote service."""
    async with ApiClient(config, transport=httpx.MockTransport(remote.handler)) as client:
        yield client


@pytest.fixture
def service(config: ClientConfig, api_client: ApiClient) -> AssistantService:
    return AssistantService(config=config, store=MappingDocumentStore(), client=api_client)


@pytest.fixture
async def async_client(service: AssistantService) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for the local API backed by the test service.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app = create_app()
    app.dependency_overrides[get_assistant_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
