"""
Configuration settings for the document ingestion and generation pipeline.

Provides environment-based configuration for chunking, context assembly
limits and ingestion retry policy.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    """Settings for the paper ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DOC_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=1000,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        description="Overlap between consecutive chunks",
    )

    # Context assembly limits (character caps, not token exact)
    primary_char_limit: int = Field(
        default=15000,
        description="Characters of raw paper text included as the primary section",
    )
    diagram_char_limit: int = Field(
        default=12000,
        description="Primary section cap for diagram generation",
    )
    key_terms_char_limit: int = Field(
        default=5000,
        description="Prefix of the paper scanned for key terms",
    )

    # Retry policy for the embedding step of ingestion
    embed_max_attempts: int = Field(
        default=3,
        description="Attempts for the embedding step before the run fails",
    )
    embed_retry_max_wait: float = Field(
        default=30.0,
        description="Upper bound in seconds for the exponential backoff",
    )


@lru_cache
def get_pipeline_settings() -> PipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        PipelineSettings: Singleton settings loaded from environment
    """
    return PipelineSettings()
