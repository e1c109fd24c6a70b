"""
Vector store configuration settings.

Manages the local FAISS index layout, embedding model settings and the
bounded cache of loaded per-project indices.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """FAISS vector index configuration (one index directory per project)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    index_root: str = Field(
        default="./vector_stores",
        description="Root directory; each project index lives in <index_root>/<project_id>",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=768,
        description="Expected embedding vector dimension",
    )
    embedding_timeout: float = Field(
        default=60.0,
        description="Timeout in seconds for a single embedding provider call",
    )
    max_input_chars: int = Field(
        default=8000,
        description="Longest text accepted by the embedding provider",
    )

    top_k: int = Field(default=3, description="Default number of chunks retrieved per query")
    cache_size: int = Field(
        default=32,
        description="Maximum number of loaded project indices kept in memory",
    )
