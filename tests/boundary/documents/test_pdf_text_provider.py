"""
Tests for PdfTextProvider.

Downloads are served by httpx.MockTransport; PDFs are generated in memory
with PyMuPDF.
"""

import fitz
import httpx
import pytest

from paperlens.boundary.documents import PdfTextProvider
from paperlens.core.exceptions import TextExtractionError


def _pdf_bytes(text: str) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    if text:
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


class _ChunkedBody(httpx.AsyncByteStream):
    """Streamed body without Content-Length that records how much was sent."""

    def __init__(self, parts: int, size: int) -> None:
        self.parts = parts
        self.size = size
        self.sent = 0

    async def __aiter__(self):
        for _ in range(self.parts):
            self.sent += 1
            yield b"0" * self.size


def _provider(status: int = 200, content: bytes = b"", content_type: str = "application/pdf") -> PdfTextProvider:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=content, headers={"content-type": content_type})

    return PdfTextProvider(transport=httpx.MockTransport(handler))


class TestPdfTextProvider:
    """Test URL to text extraction."""

    async def test_should_extract_page_text(self) -> None:
        # Arrange
        provider = _provider(content=_pdf_bytes("Sparse attention for long documents"))

        # Act
        text = await provider.extract("https://papers.example/paper.pdf")

        # Assert
        assert "Sparse attention for long documents" in text

    async def test_http_error_should_be_download_failed(self) -> None:
        provider = _provider(status=404)

        with pytest.raises(TextExtractionError) as exc_info:
            await provider.extract("https://papers.example/missing.pdf")

        assert exc_info.value.details["reason"] == "download_failed"

    async def test_non_pdf_should_be_rejected(self) -> None:
        provider = _provider(content=b"<html></html>", content_type="text/html")

        with pytest.raises(TextExtractionError) as exc_info:
            await provider.extract("https://papers.example/index.html")

        assert exc_info.value.details["reason"] == "not_pdf"

    async def test_oversized_pdf_should_be_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"%PDF-" + b"0" * 64, headers={"content-type": "application/pdf"})

        provider = PdfTextProvider(max_bytes=16, transport=httpx.MockTransport(handler))

        with pytest.raises(TextExtractionError) as exc_info:
            await provider.extract("https://papers.example/big.pdf")

        assert exc_info.value.details["reason"] == "too_large"

    async def test_declared_length_over_limit_should_skip_body(self) -> None:
        """Test a large Content-Length is rejected before the body is read."""
        # Arrange
        body = _ChunkedBody(parts=4, size=8)

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers={"content-type": "application/pdf", "content-length": "1000000"},
                stream=body,
            )

        provider = PdfTextProvider(max_bytes=16, transport=httpx.MockTransport(handler))

        # Act
        with pytest.raises(TextExtractionError) as exc_info:
            await provider.extract("https://papers.example/big.pdf")

        # Assert
        assert exc_info.value.details["reason"] == "too_large"
        assert body.sent == 0

    async def test_streamed_body_over_limit_should_stop_reading(self) -> None:
        """Test a body without Content-Length is abandoned once it passes the limit."""
        # Arrange
        body = _ChunkedBody(parts=100, size=8)

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers={"content-type": "application/pdf"}, stream=body)

        provider = PdfTextProvider(max_bytes=16, transport=httpx.MockTransport(handler))

        # Act
        with pytest.raises(TextExtractionError) as exc_info:
            await provider.extract("https://papers.example/big.pdf")

        # Assert
        assert exc_info.value.details["reason"] == "too_large"
        assert body.sent == 3

    async def test_corrupt_pdf_should_be_unreadable(self) -> None:
        provider = _provider(content=b"not a pdf at all")

        with pytest.raises(TextExtractionError) as exc_info:
            await provider.extract("https://papers.example/broken.pdf")

        assert exc_info.value.details["reason"] == "unreadable"

    async def test_pdf_without_text_should_be_empty(self) -> None:
        provider = _provider(content=_pdf_bytes(""))

        with pytest.raises(TextExtractionError) as exc_info:
            await provider.extract("https://papers.example/scanned.pdf")

        assert exc_info.value.details["reason"] == "empty"
