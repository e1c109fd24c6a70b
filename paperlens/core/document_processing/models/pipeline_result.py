"""
Pipeline result model for document indexing.

Represents the outcome of running a paper through chunk, embed and index.

Dependencies: pydantic
System role: Return type for DocumentPipeline.process()
"""

from pydantic import BaseModel, Field


class IndexingResult(BaseModel):
    """Result of the indexing half of an ingestion run."""

    project_id: str = Field(description="Project identifier")
    chunk_count: int = Field(description="Number of chunks indexed")
    dimension: int | None = Field(default=None, description="Embedding dimension of the index")
    index_path: str = Field(description="Directory holding the persisted index")
    processing_time_ms: float = Field(description="Indexing time in milliseconds")
