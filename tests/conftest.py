"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, fake embeddings, temp index root, mock clients
Dependencies: pytest, sqlalchemy, langchain_core
System role: Test infrastructure and fixture management
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from paperlens.boundary.db.base import Base
    from paperlens.boundary.db.models import ProjectModel  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def fake_embeddings() -> DeterministicFakeEmbedding:
    """Deterministic 16-dimensional LangChain embeddings."""
    return DeterministicFakeEmbedding(size=16)


@pytest.fixture
def embedding_client(fake_embeddings):
    """GeminiEmbeddingClient backed by fake embeddings."""
    from paperlens.boundary.llm.embedding_client import GeminiEmbeddingClient

    return GeminiEmbeddingClient(embeddings=fake_embeddings, timeout=5.0)


@pytest.fixture
def index_store(tmp_path, fake_embeddings):
    """FAISSIndexStore rooted in a temporary directory."""
    from paperlens.boundary.vdb import FAISSIndexStore

    return FAISSIndexStore(index_root=tmp_path / "vector_stores", embeddings=fake_embeddings)


@pytest.fixture
def pipeline_settings():
    """Pipeline settings with small limits."""
    from paperlens.core.document_processing.configs import PipelineSettings

    return PipelineSettings(
        chunk_size=200,
        chunk_overlap=40,
        primary_char_limit=500,
        diagram_char_limit=300,
        key_terms_char_limit=100,
        embed_max_attempts=2,
        embed_retry_max_wait=0.01,
    )


@pytest.fixture
def mock_chat_client():
    """
    Create mock GeminiChatClient.

    Returns:
        MagicMock: Client whose complete() is an AsyncMock
    """
    client = MagicMock()
    client.model_id = "gemini-test"
    client.complete = AsyncMock(return_value="")
    return client


@pytest.fixture
def project_id() -> uuid.UUID:
    """Generate a test project ID."""
    return uuid.uuid4()


@pytest.fixture
def paper_text() -> str:
    """Short multi-paragraph paper text."""
    return (
        "Attention Is All You Need.\n\n"
        "We propose the Transformer, a model architecture based solely on attention mechanisms. "
        "The methodology replaces recurrence with multi-head self-attention.\n\n"
        "Experiments on machine translation show superior quality and faster training. "
        "Results indicate the approach generalizes to constituency parsing."
    )
