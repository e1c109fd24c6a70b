"""
Chunk domain model for document processing pipeline.

Represents one bounded, ordered slice of a paper's text and, after the
embedding stage, the vector computed for it.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Contiguous slice of a document, the unit of embedding and retrieval."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Chunk text content")
    sequence_index: int = Field(ge=0, description="Position of the chunk in the document")
    start_index: int = Field(default=0, ge=0, description="Character offset in the source text")

    @property
    def end_index(self) -> int:
        """Offset one past the last character of the chunk."""
        return self.start_index + len(self.text)


class EmbeddedChunk(BaseModel):
    """Chunk paired with its embedding vector."""

    chunk: Chunk = Field(description="Source chunk")
    embedding: list[float] = Field(description="Embedding vector")
