"""Pytest fixtures and shared test configuration.

Fixtures:
    - generate_content: AsyncMock standing in for the Gemini SDK call
    - gateway: ModelGateway wired to the mocked SDK client
    - async_client: HTTPX client for API testing with the gateway overridden
    - docx_bytes / pdf_bytes / blank_pdf_bytes: generated sample documents
"""

import io
from collections.abc import AsyncGenerator, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from docx import Document
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from gemini_relay.api import app
from gemini_relay.gateway.config import GatewayConfig
from gemini_relay.gateway.model_gateway import ModelGateway, get_model_gateway

OK_RESPONSE = {"candidates": [{"content": {"parts": [{"text": "ok"}]}}]}


def build_pdf(text: str) -> bytes:
    """Build a one-page PDF that draws ``text`` in Helvetica."""
    stream = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(out)


@pytest.fixture
def generate_content() -> AsyncMock:
    """Mocked ``client.aio.models.generate_content`` returning a single "ok" answer."""
    return AsyncMock(return_value=OK_RESPONSE)


@pytest.fixture
def gateway(generate_content: AsyncMock) -> ModelGateway:
    client = MagicMock()
    client.aio.models.generate_content = generate_content
    return ModelGateway(config=GatewayConfig(api_key="test-key"), client=client)


@pytest.fixture
async def async_client(gateway: ModelGateway) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient whose requests reach the app with the mocked gateway.
    """
    app.dependency_overrides[get_model_gateway] = lambda: gateway
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sent_prompt(generate_content: AsyncMock) -> Callable[[], str]:
    """Return a function reading the text part of the last model call."""

    def read() -> str:
        contents = generate_content.call_args.kwargs["contents"]
        return contents[0].parts[0].text

    return read


@pytest.fixture
def docx_bytes() -> bytes:
    document = Document()
    document.add_paragraph("Quarterly report")
    document.add_paragraph("Revenue grew in every region.")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Region"
    table.cell(0, 1).text = "North"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def pdf_bytes() -> bytes:
    return build_pdf("Hello PDF world")


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()
