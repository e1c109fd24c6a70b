"""
Task modules for document processing pipeline.

Exports: ChunkingTask, ChunkSequence, EmbeddingTask, VectorStoreTask
"""

from .chunking_task import ChunkingTask, ChunkSequence
from .embedding_task import EmbeddingTask
from .vector_store_task import VectorStoreTask

__all__ = [
    "ChunkingTask",
    "ChunkSequence",
    "EmbeddingTask",
    "VectorStoreTask",
]
