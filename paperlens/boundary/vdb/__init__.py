"""
Vector database boundary layer.

Provides the per-project FAISS index store and the cache of loaded indices.
- FAISSIndexStore: build, persist, load and query project indices
- IndexCache: LRU cache of loaded indices

Dependencies: faiss-cpu, langchain_community
System role: Vector store adapter for RAG retrieval
"""

from paperlens.boundary.vdb.faiss_index_store import FAISSIndexStore
from paperlens.boundary.vdb.index_cache import IndexCache
from paperlens.boundary.vdb.vector_schemas import (
    IndexManifest,
    VectorIndex,
    VectorSearchResult,
)

__all__ = [
    "FAISSIndexStore",
    "IndexCache",
    "IndexManifest",
    "VectorIndex",
    "VectorSearchResult",
]
