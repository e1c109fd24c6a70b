"""Test suite for the text extraction endpoint."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from paperlens.api.deps import get_pdf_provider
from paperlens.api.main import create_app
from paperlens.core.exceptions import TextExtractionError


@pytest.fixture
def provider() -> AsyncMock:
    provider = AsyncMock()
    provider.extract = AsyncMock(return_value="Paper text")
    return provider


@pytest.fixture
def client(provider: AsyncMock) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_pdf_provider] = lambda: provider
    return TestClient(app)


class TestExtractTextEndpoint:
    def test_should_return_text(self, client: TestClient) -> None:
        response = client.post("/api/v1/extract-text", json={"url": "https://papers.example/a.pdf"})

        assert response.status_code == 200
        assert response.json() == {"text": "Paper text"}

    @pytest.mark.parametrize(
        ("reason", "status_code"),
        [("download_failed", 400), ("not_pdf", 400), ("empty", 422), ("unreadable", 500)],
    )
    def test_should_map_extraction_failures(
        self, client: TestClient, provider: AsyncMock, reason: str, status_code: int
    ) -> None:
        provider.extract.side_effect = TextExtractionError("failed", url="u", reason=reason)

        response = client.post("/api/v1/extract-text", json={"url": "https://papers.example/a.pdf"})

        assert response.status_code == status_code

    def test_missing_url_should_be_rejected(self, client: TestClient) -> None:
        response = client.post("/api/v1/extract-text", json={"url": ""})

        assert response.status_code == 422
