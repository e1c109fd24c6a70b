"""
Models for document processing pipeline.

Exports: Chunk, EmbeddedChunk, Document, IndexingResult
"""

from .chunk import Chunk, EmbeddedChunk
from .document import Document
from .pipeline_result import IndexingResult

__all__ = [
    "Chunk",
    "EmbeddedChunk",
    "Document",
    "IndexingResult",
]
