"""
Vector index build-and-persist task.

Builds the project's FAISS index from embedded chunks, replaces the
persisted index on disk and invalidates the cached copy.

Dependencies: paperlens.boundary.vdb
System role: Final stage of document ingestion pipeline
"""

import logging
from uuid import UUID

from paperlens.boundary.vdb import FAISSIndexStore, IndexCache, VectorIndex
from paperlens.core.document_processing.models import EmbeddedChunk

logger = logging.getLogger(__name__)


class VectorStoreTask:
    """Build, persist and publish a project's vector index."""

    def __init__(self, store: FAISSIndexStore, cache: IndexCache) -> None:
        self._store = store
        self._cache = cache

    async def index(self, project_id: str | UUID, embedded: list[EmbeddedChunk]) -> VectorIndex:
        """
        Replace a project's index with one built from the given chunks.

        Args:
            project_id: Owning project
            embedded: Embedded chunks in sequence order

        Returns:
            VectorIndex: The persisted index

        Raises:
            DimensionMismatchError: When vectors do not share one dimension
        """
        index = self._store.build(
            project_id,
            [item.chunk for item in embedded],
            [item.embedding for item in embedded],
        )
        location = await self._store.persist(index)
        self._cache.invalidate(project_id)

        logger.info(
            "Persisted project vector index",
            extra={
                "project_id": str(project_id),
                "chunk_count": index.size,
                "location": str(location),
            },
        )
        return index
