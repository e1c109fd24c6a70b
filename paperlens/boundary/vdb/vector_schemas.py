"""
Vector database schemas.

Pydantic models for the per-project vector index: the loaded index handle,
the on-disk manifest and similarity search results.

Dependencies: pydantic, langchain_community
System role: Type definitions for vector operations
"""

from datetime import datetime, timezone

from langchain_community.vectorstores import FAISS
from pydantic import BaseModel, ConfigDict, Field

MANIFEST_FILENAME = "manifest.json"
MANIFEST_FORMAT_VERSION = 1


class IndexManifest(BaseModel):
    """
    Metadata file written last into every persisted index directory.

    A directory without a readable manifest is treated as no index.
    """

    project_id: str = Field(description="Project the index belongs to")
    dimension: int | None = Field(default=None, description="Embedding dimension (None when empty)")
    size: int = Field(ge=0, description="Number of indexed chunks")
    distance: str = Field(default="cosine", description="Similarity measure of the scores")
    format_version: int = Field(default=MANIFEST_FORMAT_VERSION)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VectorIndex(BaseModel):
    """
    Handle on one project's vector index.

    Built once per ingestion and read-only afterwards. ``store`` is None for
    an index built from zero chunks.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    project_id: str = Field(description="Project identifier")
    dimension: int | None = Field(default=None, description="Embedding dimension")
    size: int = Field(default=0, ge=0, description="Number of indexed chunks")
    location: str | None = Field(default=None, description="Directory the index was loaded from or saved to")
    store: FAISS | None = Field(default=None, exclude=True, repr=False)

    @property
    def is_empty(self) -> bool:
        return self.size == 0 or self.store is None


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    content: str = Field(description="Chunk text content")
    score: float = Field(description="Cosine similarity between query and chunk")
    sequence_index: int = Field(ge=0, description="Position of the chunk in the paper")
