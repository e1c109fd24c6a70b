"""
LRU cache of loaded vector indices.

Keyed by project id and bounded by entry count. The pipeline invalidates a
project's entry after every re-ingestion so readers never see a replaced
index. A per-project generation counter keeps a load that was in flight
during an invalidation from caching the replaced index.

Dependencies: None
System role: Explicit index state shared by context assembly and chat
"""

import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from uuid import UUID

from paperlens.boundary.vdb.vector_schemas import VectorIndex

logger = logging.getLogger(__name__)


class IndexCache:
    """Bounded LRU cache of VectorIndex handles."""

    def __init__(self, max_entries: int = 32) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, VectorIndex] = OrderedDict()
        self._generations: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, project_id: object) -> bool:
        return str(project_id) in self._entries

    def get(self, project_id: str | UUID) -> VectorIndex | None:
        key = str(project_id)
        index = self._entries.get(key)
        if index is not None:
            self._entries.move_to_end(key)
        return index

    def put(self, project_id: str | UUID, index: VectorIndex) -> None:
        key = str(project_id)
        self._entries[key] = index
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"{__name__}:put - Evicted index for project {evicted}")

    def invalidate(self, project_id: str | UUID) -> None:
        """Drop a project's cached index, if any, and outdate in-flight loads."""
        key = str(project_id)
        self._generations[key] = self._generations.get(key, 0) + 1
        if self._entries.pop(key, None) is not None:
            logger.info(f"{__name__}:invalidate - Invalidated index for project {project_id}")

    def clear(self) -> None:
        self._entries.clear()

    async def get_or_load(
        self,
        project_id: str | UUID,
        loader: Callable[[str | UUID], Awaitable[VectorIndex]],
    ) -> VectorIndex:
        """
        Return the cached index or load and cache it.

        Args:
            project_id: Project identifier
            loader: Coroutine function loading the index (e.g. FAISSIndexStore.load)

        Returns:
            VectorIndex: Cached or freshly loaded handle

        Raises:
            IndexNotFoundError: Propagated from the loader; failures are not cached
        """
        index = self.get(project_id)
        if index is not None:
            return index
        key = str(project_id)
        generation = self._generations.get(key, 0)
        index = await loader(project_id)
        if self._generations.get(key, 0) == generation:
            self.put(project_id, index)
        else:
            logger.info(
                f"{__name__}:get_or_load - Index for project {project_id} replaced during load, not cached"
            )
        return index
