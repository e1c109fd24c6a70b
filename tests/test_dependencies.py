"""
Test suite for dependency injection container.

Verifies ServiceCache wiring and the per-request service factories.
Provider clients are patched so no Google credentials are needed.

System role: Verification of DI container
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from paperlens.api.deps.dependencies import (
    ServiceCache,
    get_chat_service,
    get_pipeline_service,
)
from paperlens.application.services import ChatService, PipelineService
from paperlens.configs import Settings
from paperlens.configs.search import SearchSettings
from paperlens.configs.vector_store import VectorStoreSettings


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def service_cache(tmp_path, monkeypatch) -> ServiceCache:
    """ServiceCache with patched provider clients and a temp index root."""
    monkeypatch.delenv("TAVILY_API_KEY", raising=False)
    settings = Settings(
        vector_store=VectorStoreSettings(index_root=str(tmp_path)),
        search=SearchSettings(tavily_api_key=None),
    )
    with patch("paperlens.api.deps.dependencies.GeminiEmbeddingClient") as embedding_cls, patch(
        "paperlens.api.deps.dependencies.GeminiChatClient"
    ) as chat_cls:
        embedding_cls.return_value = MagicMock()
        chat_cls.side_effect = lambda **kwargs: MagicMock(model_id=kwargs["model_id"])
        yield ServiceCache(settings=settings)


class TestServiceCache:
    """Test shared instance wiring."""

    def test_pipeline_and_assembler_should_share_index_cache(self, service_cache: ServiceCache) -> None:
        pipeline = service_cache.document_pipeline
        assembler = service_cache.context_assembler

        assert pipeline._vector_store_task._cache is service_cache.index_cache
        assert assembler._cache is service_cache.index_cache

    def test_instances_should_be_cached(self, service_cache: ServiceCache) -> None:
        assert service_cache.orchestrator is service_cache.orchestrator
        assert service_cache.index_store is service_cache.index_store

    def test_key_terms_should_use_light_model(self, service_cache: ServiceCache) -> None:
        settings = service_cache.settings

        assert service_cache.light_client.model_id == settings.llm.key_terms_model_id
        assert service_cache.chat_client.model_id == settings.llm.model_id

    def test_missing_search_key_should_disable_search(self, service_cache: ServiceCache) -> None:
        assert service_cache.search_client is None
        assert service_cache.context_assembler._search_client is None

    def test_clear_should_drop_instances(self, service_cache: ServiceCache) -> None:
        first = service_cache.index_cache

        service_cache.clear()

        assert service_cache.index_cache is not first


class TestServiceFactories:
    """Test per-request service factories."""

    def test_get_pipeline_service_should_bind_session(
        self, service_cache: ServiceCache, mock_db_session: AsyncSession
    ) -> None:
        with patch("paperlens.api.deps.dependencies.get_service_cache", return_value=service_cache):
            service = get_pipeline_service(db=mock_db_session)

        assert isinstance(service, PipelineService)
        assert service.db is mock_db_session

    def test_get_chat_service_should_bind_session(
        self, service_cache: ServiceCache, mock_db_session: AsyncSession
    ) -> None:
        with patch("paperlens.api.deps.dependencies.get_service_cache", return_value=service_cache):
            service = get_chat_service(db=mock_db_session)

        assert isinstance(service, ChatService)
        assert service.db is mock_db_session
