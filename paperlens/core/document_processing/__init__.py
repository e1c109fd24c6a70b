"""
Document processing pipeline for ingestion.

Chunks paper text, embeds the chunks and persists a per-project vector index.
DocumentPipeline lives in ``entrypoint`` and is imported from there, keeping
this package importable by the boundary layer.

Dependencies: langchain_text_splitters, pydantic
System role: Document ingestion pipeline
"""

from .configs import PipelineSettings, get_pipeline_settings
from .models import Chunk, Document, EmbeddedChunk, IndexingResult

__all__ = [
    "PipelineSettings",
    "get_pipeline_settings",
    "Chunk",
    "Document",
    "EmbeddedChunk",
    "IndexingResult",
]
