"""
PDF text provider.

Downloads a paper PDF over HTTP and extracts its plain text with PyMuPDF.

Dependencies: httpx, pymupdf
System role: Document text source for new projects
"""

import asyncio
import logging

import fitz  # PyMuPDF
import httpx

from paperlens.core.exceptions import TextExtractionError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


class PdfTextProvider:
    """Fetch a PDF by URL and return its text."""

    def __init__(
        self,
        timeout: float = 30.0,
        max_bytes: int = 50 * 1024 * 1024,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize provider.

        Args:
            timeout: HTTP timeout in seconds
            max_bytes: Largest accepted PDF
            transport: Optional httpx transport (used by tests)
        """
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._transport = transport

    def _too_large(self, url: str) -> TextExtractionError:
        return TextExtractionError(
            f"PDF exceeds {self._max_bytes} bytes",
            url=url,
            reason="too_large",
        )

    def _check_headers(self, url: str, response: httpx.Response) -> None:
        content_type = response.headers.get("content-type", "")
        if not content_type.lower().startswith(PDF_CONTENT_TYPE):
            raise TextExtractionError(
                f"URL does not point to a PDF (content-type: {content_type or 'unknown'})",
                url=url,
                reason="not_pdf",
            )
        content_length = response.headers.get("content-length", "")
        if content_length.isdigit() and int(content_length) > self._max_bytes:
            raise self._too_large(url)

    async def _download(self, url: str) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    self._check_headers(url, response)

                    # Content-Length may be absent or wrong, so the body is capped as it streams
                    body = bytearray()
                    async for part in response.aiter_bytes():
                        body.extend(part)
                        if len(body) > self._max_bytes:
                            raise self._too_large(url)
        except httpx.HTTPError as e:
            logger.warning(f"{__name__}:extract - Download failed for {url}: {type(e).__name__}")
            raise TextExtractionError(
                f"Failed to download PDF: {e}",
                url=url,
                reason="download_failed",
            ) from e
        return bytes(body)

    @staticmethod
    def _read_text(data: bytes) -> str:
        with fitz.open(stream=data, filetype="pdf") as doc:
            return "\n\n".join(page.get_text("text") for page in doc)

    async def extract(self, url: str) -> str:
        """
        Extract text from the PDF at a URL.

        Args:
            url: PDF URL

        Returns:
            str: Text of all pages

        Raises:
            TextExtractionError: download_failed, not_pdf, too_large, unreadable or empty
        """
        data = await self._download(url)
        try:
            text = await asyncio.to_thread(self._read_text, data)
        except Exception as e:
            logger.error(f"{__name__}:extract - PyMuPDF failed for {url}: {type(e).__name__}: {e}")
            raise TextExtractionError(
                "Failed to read PDF",
                url=url,
                reason="unreadable",
            ) from e

        if not text.strip():
            raise TextExtractionError("PDF contains no extractable text", url=url, reason="empty")

        logger.info(f"{__name__}:extract - Extracted {len(text)} chars from {url}")
        return text.strip()
