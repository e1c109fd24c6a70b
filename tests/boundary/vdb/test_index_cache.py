"""Tests for the loaded-index LRU cache."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from paperlens.boundary.vdb import IndexCache, VectorIndex
from paperlens.core.exceptions import IndexNotFoundError


def _index(project_id: str) -> VectorIndex:
    return VectorIndex(project_id=project_id)


class TestIndexCache:
    """Test cache bookkeeping."""

    def test_should_evict_least_recently_used(self) -> None:
        """Test the oldest untouched entry is evicted first."""
        # Arrange
        cache = IndexCache(max_entries=2)
        cache.put("a", _index("a"))
        cache.put("b", _index("b"))

        # Act
        cache.get("a")
        cache.put("c", _index("c"))

        # Assert
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert len(cache) == 2

    def test_invalidate_should_drop_entry(self) -> None:
        cache = IndexCache()
        cache.put("a", _index("a"))

        cache.invalidate("a")
        cache.invalidate("missing")

        assert cache.get("a") is None

    def test_should_reject_non_positive_capacity(self) -> None:
        with pytest.raises(ValueError):
            IndexCache(max_entries=0)


class TestIndexCacheGetOrLoad:
    """Test lazy loading through the cache."""

    async def test_should_load_once_and_reuse(self) -> None:
        """Test the loader runs only on a miss."""
        # Arrange
        cache = IndexCache()
        loader = AsyncMock(return_value=_index("a"))

        # Act
        first = await cache.get_or_load("a", loader)
        second = await cache.get_or_load("a", loader)

        # Assert
        assert first is second
        loader.assert_awaited_once_with("a")

    async def test_failed_load_should_not_be_cached(self) -> None:
        # Arrange
        cache = IndexCache()
        loader = AsyncMock(side_effect=IndexNotFoundError("/missing"))

        # Act
        with pytest.raises(IndexNotFoundError):
            await cache.get_or_load("a", loader)

        # Assert
        assert "a" not in cache

    async def test_load_outdated_by_invalidation_should_not_be_cached(self) -> None:
        """Test a load in flight during re-ingestion does not cache the replaced index."""
        # Arrange
        cache = IndexCache()
        replaced = _index("a")
        release = asyncio.Event()
        started = asyncio.Event()

        async def slow_loader(project_id):
            started.set()
            await release.wait()
            return replaced

        # Act
        load = asyncio.create_task(cache.get_or_load("a", slow_loader))
        await started.wait()
        cache.invalidate("a")
        release.set()
        returned = await load

        # Assert
        assert returned is replaced
        assert cache.get("a") is None

    async def test_load_after_invalidation_should_be_cached(self) -> None:
        # Arrange
        cache = IndexCache()
        cache.invalidate("a")
        loader = AsyncMock(return_value=_index("a"))

        # Act
        loaded = await cache.get_or_load("a", loader)

        # Assert
        assert cache.get("a") is loaded
