"""
Dependency injection container.

Factory functions for FastAPI dependencies. Provider clients, the index
store and the index cache are process-wide; services are built per request
around the request's database session.

Dependencies: paperlens.configs, paperlens.application, paperlens.boundary, paperlens.core
System role: DI container for service injection
"""

import logging
import os

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from paperlens.application.services import ChatService, PipelineService
from paperlens.boundary.db import get_async_db
from paperlens.boundary.documents import PdfTextProvider
from paperlens.boundary.llm import GeminiChatClient, GeminiEmbeddingClient
from paperlens.boundary.search import WebSearchClient
from paperlens.boundary.vdb import FAISSIndexStore, IndexCache
from paperlens.configs import Settings, get_settings
from paperlens.core.document_processing.entrypoint import DocumentPipeline
from paperlens.core.generation import GenerationOrchestrator
from paperlens.core.rag.context_assembler import ContextAssembler

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._embedding_client = None
        self._index_store = None
        self._index_cache = None
        self._chat_client = None
        self._light_client = None
        self._search_client = None
        self._search_resolved = False
        self._orchestrator = None
        self._assembler = None
        self._document_pipeline = None
        self._pdf_provider = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def embedding_client(self) -> GeminiEmbeddingClient:
        """Get cached embedding client."""
        if self._embedding_client is None:
            vs = self.settings.vector_store
            self._embedding_client = GeminiEmbeddingClient(
                model=vs.embedding_model,
                google_api_key=self.settings.llm.google_api_key,
                timeout=vs.embedding_timeout,
                max_input_chars=vs.max_input_chars,
            )
        return self._embedding_client

    @property
    def index_store(self) -> FAISSIndexStore:
        """Get cached FAISS index store."""
        if self._index_store is None:
            self._index_store = FAISSIndexStore(
                index_root=self.settings.vector_store.index_root,
                embeddings=self.embedding_client.embeddings,
            )
        return self._index_store

    @property
    def index_cache(self) -> IndexCache:
        """Get cached loaded-index cache."""
        if self._index_cache is None:
            self._index_cache = IndexCache(max_entries=self.settings.vector_store.cache_size)
        return self._index_cache

    @property
    def chat_client(self) -> GeminiChatClient:
        """Get cached generation client."""
        if self._chat_client is None:
            llm = self.settings.llm
            self._chat_client = GeminiChatClient(
                model_id=llm.model_id,
                temperature=llm.temperature,
                google_api_key=llm.google_api_key,
                timeout=llm.request_timeout,
            )
        return self._chat_client

    @property
    def light_client(self) -> GeminiChatClient:
        """Get cached client for key-term extraction."""
        if self._light_client is None:
            llm = self.settings.llm
            self._light_client = GeminiChatClient(
                model_id=llm.key_terms_model_id,
                temperature=0.0,
                google_api_key=llm.google_api_key,
                timeout=llm.request_timeout,
            )
        return self._light_client

    @property
    def search_client(self) -> WebSearchClient | None:
        """Get cached web search client (None when no Tavily key is configured)."""
        if not self._search_resolved:
            search = self.settings.search
            api_key = search.tavily_api_key or os.getenv("TAVILY_API_KEY")
            if api_key:
                self._search_client = WebSearchClient(api_key=api_key, timeout=search.timeout)
            else:
                logger.warning(f"{__name__}:search_client - No Tavily API key, external context disabled")
            self._search_resolved = True
        return self._search_client

    @property
    def orchestrator(self) -> GenerationOrchestrator:
        """Get cached generation orchestrator."""
        if self._orchestrator is None:
            self._orchestrator = GenerationOrchestrator(
                chat_client=self.chat_client,
                light_client=self.light_client,
            )
        return self._orchestrator

    @property
    def context_assembler(self) -> ContextAssembler:
        """Get cached context assembler."""
        if self._assembler is None:
            self._assembler = ContextAssembler(
                embedding_client=self.embedding_client,
                store=self.index_store,
                cache=self.index_cache,
                orchestrator=self.orchestrator,
                search_client=self.search_client,
                settings=self.settings.pipeline,
                max_key_terms=self.settings.search.max_terms,
                max_external_items=self.settings.search.max_results,
            )
        return self._assembler

    @property
    def document_pipeline(self) -> DocumentPipeline:
        """Get cached document pipeline."""
        if self._document_pipeline is None:
            self._document_pipeline = DocumentPipeline(
                embedding_client=self.embedding_client,
                store=self.index_store,
                cache=self.index_cache,
                settings=self.settings.pipeline,
            )
        return self._document_pipeline

    @property
    def pdf_provider(self) -> PdfTextProvider:
        """Get cached PDF text provider."""
        if self._pdf_provider is None:
            self._pdf_provider = PdfTextProvider()
        return self._pdf_provider

    def clear(self) -> None:
        """Clear all cached instances."""
        if self._index_cache is not None:
            self._index_cache.clear()
        self._embedding_client = None
        self._index_store = None
        self._index_cache = None
        self._chat_client = None
        self._light_client = None
        self._search_client = None
        self._search_resolved = False
        self._orchestrator = None
        self._assembler = None
        self._document_pipeline = None
        self._pdf_provider = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_pipeline_service(db: AsyncSession = Depends(get_async_db)) -> PipelineService:
    """
    Get pipeline service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        PipelineService: Ingestion and regeneration service
    """
    cache = get_service_cache()
    return PipelineService(
        db=db,
        pipeline=cache.document_pipeline,
        assembler=cache.context_assembler,
        orchestrator=cache.orchestrator,
    )


def get_chat_service(db: AsyncSession = Depends(get_async_db)) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ChatService: RAG chat service
    """
    cache = get_service_cache()
    return ChatService(
        db=db,
        assembler=cache.context_assembler,
        chat_client=cache.chat_client,
    )


def get_pdf_provider() -> PdfTextProvider:
    """Get PDF text provider."""
    return get_service_cache().pdf_provider
