"""
Test suite for project API endpoints.

Uses the full application with PipelineService replaced through FastAPI
dependency overrides.

System role: Verification of project HTTP API and error mapping
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from paperlens.api.deps import get_pipeline_service
from paperlens.api.main import create_app
from paperlens.core.exceptions import (
    NoDocumentTextError,
    PipelineError,
    ProjectBusyError,
    ProjectNotFoundError,
    ProviderUnavailableError,
)
from paperlens.models.project import ArtifactKind, IngestionResult, RegenerationResult


@pytest.fixture
def pipeline_service() -> AsyncMock:
    service = AsyncMock()
    service.ingest = AsyncMock()
    service.regenerate = AsyncMock()
    return service


@pytest.fixture
def client(pipeline_service: AsyncMock) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_pipeline_service] = lambda: pipeline_service
    return TestClient(app)


@pytest.fixture
def sample_project_id() -> uuid.UUID:
    return uuid.uuid4()


class TestProcessEndpoint:
    """Test POST /projects/{id}/process."""

    def test_process_should_return_chunk_count(
        self, client: TestClient, pipeline_service: AsyncMock, sample_project_id: uuid.UUID
    ) -> None:
        # Arrange
        pipeline_service.ingest.return_value = IngestionResult(
            project_id=str(sample_project_id),
            chunk_count=12,
            vector_store_path="/indices/x",
            processing_time_ms=5.0,
        )

        # Act
        response = client.post(f"/api/v1/projects/{sample_project_id}/process")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"success": True, "chunk_count": 12}
        pipeline_service.ingest.assert_awaited_once_with(sample_project_id)

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (ProjectNotFoundError("p"), 404),
            (ProjectBusyError("p"), 409),
            (PipelineError("Processing failed", cause_kind="NoDocumentTextError"), 422),
            (PipelineError("Processing failed", cause_kind="ProviderUnavailableError"), 500),
        ],
    )
    def test_process_should_map_errors(
        self,
        client: TestClient,
        pipeline_service: AsyncMock,
        sample_project_id: uuid.UUID,
        error: Exception,
        status_code: int,
    ) -> None:
        pipeline_service.ingest.side_effect = error

        response = client.post(f"/api/v1/projects/{sample_project_id}/process")

        assert response.status_code == status_code

    def test_generic_failure_should_not_leak_provider_details(
        self, client: TestClient, pipeline_service: AsyncMock, sample_project_id: uuid.UUID
    ) -> None:
        pipeline_service.ingest.side_effect = PipelineError(
            "Processing failed", cause_kind="ProviderUnavailableError"
        )

        response = client.post(f"/api/v1/projects/{sample_project_id}/process")

        assert response.json() == {"detail": "Processing failed"}

    def test_invalid_project_id_should_be_rejected(self, client: TestClient) -> None:
        response = client.post("/api/v1/projects/not-a-uuid/process")

        assert response.status_code == 422


class TestRegenerateEndpoints:
    """Test summary, diagram and insights regeneration."""

    def test_regenerate_summary_should_return_summary(
        self, client: TestClient, pipeline_service: AsyncMock, sample_project_id: uuid.UUID
    ) -> None:
        # Arrange
        pipeline_service.regenerate.return_value = RegenerationResult(
            kind=ArtifactKind.SUMMARY, summary="Simple words.", level="eli5"
        )

        # Act
        response = client.post(f"/api/v1/projects/{sample_project_id}/regenerate", json={"level": "eli5"})

        # Assert
        assert response.status_code == 200
        assert response.json() == {"success": True, "summary": "Simple words.", "level": "eli5"}
        request = pipeline_service.regenerate.await_args.args[1]
        assert request.kind is ArtifactKind.SUMMARY
        assert request.level == "eli5"

    def test_regenerate_summary_should_reject_unknown_level(
        self, client: TestClient, sample_project_id: uuid.UUID
    ) -> None:
        response = client.post(f"/api/v1/projects/{sample_project_id}/regenerate", json={"level": "phd"})

        assert response.status_code == 422

    def test_regenerate_diagram_should_default_to_flowchart(
        self, client: TestClient, pipeline_service: AsyncMock, sample_project_id: uuid.UUID
    ) -> None:
        # Arrange
        pipeline_service.regenerate.return_value = RegenerationResult(
            kind=ArtifactKind.DIAGRAM, diagram_syntax="flowchart TD\nA --> B", diagram_type="flowchart"
        )

        # Act
        response = client.post(f"/api/v1/projects/{sample_project_id}/regenerate-diagram", json={})

        # Assert
        assert response.status_code == 200
        assert response.json()["diagram_type"] == "flowchart"
        assert pipeline_service.regenerate.await_args.args[1].diagram_type == "flowchart"

    def test_generate_insights_should_return_all_lists(
        self, client: TestClient, pipeline_service: AsyncMock, sample_project_id: uuid.UUID
    ) -> None:
        pipeline_service.regenerate.return_value = RegenerationResult(
            kind=ArtifactKind.INSIGHTS,
            code_snippets=[{"code": "x"}],
            references=[],
            insights=[{"title": "Parallelism"}],
        )

        response = client.post(f"/api/v1/projects/{sample_project_id}/generate-insights")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["code_snippets"] == [{"code": "x"}]
        assert body["insights"] == [{"title": "Parallelism"}]

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (ProjectNotFoundError("p"), 404),
            (NoDocumentTextError("p"), 422),
            (ProviderUnavailableError("down", provider="generation"), 503),
            (RuntimeError("boom"), 500),
        ],
    )
    def test_regeneration_should_map_errors(
        self,
        client: TestClient,
        pipeline_service: AsyncMock,
        sample_project_id: uuid.UUID,
        error: Exception,
        status_code: int,
    ) -> None:
        pipeline_service.regenerate.side_effect = error

        response = client.post(f"/api/v1/projects/{sample_project_id}/regenerate-diagram", json={})

        assert response.status_code == status_code
