"""
Tests for FAISSIndexStore.

Covers build, atomic persist, load, the query bound and result ordering.
"""

import json
import uuid
import warnings

import pytest

from paperlens.boundary.vdb import FAISSIndexStore
from paperlens.boundary.vdb.vector_schemas import MANIFEST_FILENAME
from paperlens.core.document_processing.models import Chunk
from paperlens.core.exceptions import (
    DimensionMismatchError,
    IndexNotFoundError,
    InvalidInputError,
)


def _chunks(texts: list[str]) -> list[Chunk]:
    return [Chunk(text=text, sequence_index=i) for i, text in enumerate(texts)]


@pytest.fixture
def sample_chunks() -> list[Chunk]:
    return _chunks(["introduction", "related work", "methodology", "results"])


@pytest.fixture
def sample_vectors() -> list[list[float]]:
    return [
        [1.0, 0.0, 0.0, 0.1],
        [0.7, 0.7, 0.0, 0.1],
        [0.0, 1.0, 0.0, 0.1],
        [0.0, 0.0, 1.0, 0.1],
    ]


class TestFAISSIndexStoreBuild:
    """Test in-memory index construction."""

    def test_build_should_record_size_and_dimension(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        index = index_store.build("p1", sample_chunks, sample_vectors)

        assert index.size == 4
        assert index.dimension == 4
        assert not index.is_empty

    def test_build_should_reject_length_mismatch(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        with pytest.raises(InvalidInputError):
            index_store.build("p1", sample_chunks, sample_vectors[:2])

    def test_build_should_reject_mixed_dimensions(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        """Test vectors of different lengths raise DimensionMismatchError."""
        sample_vectors[2] = [0.0, 1.0]

        with pytest.raises(DimensionMismatchError):
            index_store.build("p1", sample_chunks, sample_vectors)

    def test_build_with_no_chunks_should_be_empty(self, index_store: FAISSIndexStore) -> None:
        index = index_store.build("p1", [], [])

        assert index.is_empty
        assert index.size == 0


class TestFAISSIndexStoreQuery:
    """Test similarity query bound and ordering."""

    def test_query_should_rank_closest_chunk_first(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        """Test a methodology-like query returns the methodology chunk first."""
        # Arrange
        index = index_store.build("p1", sample_chunks, sample_vectors)

        # Act
        results = index_store.query(index, [0.0, 1.0, 0.0, 0.0], k=3)

        # Assert
        assert len(results) == 3
        assert results[0].sequence_index == 2
        assert results[0].content == "methodology"
        assert results[1].sequence_index == 1
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_query_should_return_at_most_k(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        index = index_store.build("p1", sample_chunks, sample_vectors)

        assert len(index_store.query(index, [1.0, 0.0, 0.0, 0.0], k=10)) == 4
        assert len(index_store.query(index, [1.0, 0.0, 0.0, 0.0], k=2)) == 2
        assert index_store.query(index, [1.0, 0.0, 0.0, 0.0], k=0) == []

    def test_equal_scores_should_order_by_sequence_index(
        self, index_store: FAISSIndexStore
    ) -> None:
        """Test ties are broken by ascending sequence index."""
        # Arrange
        chunks = _chunks(["a", "b", "c"])
        vectors = [[0.5, 0.5]] * 3
        index = index_store.build("p1", chunks, vectors)

        # Act
        results = index_store.query(index, [1.0, 0.0], k=3)

        # Assert
        assert [r.sequence_index for r in results] == [0, 1, 2]

    def test_scores_should_be_cosine_similarity(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        """Test unnormalised vectors score as cosine similarity."""
        index = index_store.build("p1", sample_chunks[:1], [[3.0, 0.0, 0.0, 0.0]])

        results = index_store.query(index, [10.0, 0.0, 0.0, 0.0], k=1)

        assert results[0].score == pytest.approx(1.0, abs=1e-5)

    def test_query_with_wrong_dimension_should_raise(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        index = index_store.build("p1", sample_chunks, sample_vectors)

        with pytest.raises(DimensionMismatchError):
            index_store.query(index, [1.0, 0.0], k=2)

    def test_query_on_empty_index_should_return_nothing(self, index_store: FAISSIndexStore) -> None:
        index = index_store.build("p1", [], [])

        assert index_store.query(index, [1.0, 0.0], k=3) == []


class TestFAISSIndexStorePersistence:
    """Test persist and load round trips."""

    async def test_persist_then_load_should_answer_identically(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        """Test a loaded index returns the same results as the built one."""
        # Arrange
        project_id = uuid.uuid4()
        built = index_store.build(project_id, sample_chunks, sample_vectors)
        query = [0.2, 0.9, 0.1, 0.0]
        expected = index_store.query(built, query, k=4)

        # Act
        location = await index_store.persist(built)
        loaded = await index_store.load(project_id)
        actual = index_store.query(loaded, query, k=4)

        # Assert
        assert location == index_store.location_for(project_id)
        assert loaded.location == str(location)
        assert loaded.size == 4
        assert loaded.dimension == 4
        assert [r.sequence_index for r in actual] == [r.sequence_index for r in expected]
        assert [r.content for r in actual] == [r.content for r in expected]
        for a, e in zip(actual, expected):
            assert a.score == pytest.approx(e.score, abs=1e-6)

    async def test_persist_should_replace_previous_index(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        """Test re-persisting swaps the whole index and leaves no staging directories."""
        # Arrange
        project_id = uuid.uuid4()
        await index_store.persist(index_store.build(project_id, sample_chunks, sample_vectors))
        replacement = index_store.build(project_id, _chunks(["only chunk"]), [[0.0, 0.0, 1.0, 0.0]])

        # Act
        await index_store.persist(replacement)
        loaded = await index_store.load(project_id)

        # Assert
        assert loaded.size == 1
        assert index_store.query(loaded, [0.0, 0.0, 1.0, 0.0], k=5)[0].content == "only chunk"
        leftovers = [p.name for p in index_store.index_root.iterdir() if p.name.startswith(".")]
        assert leftovers == []

    async def test_empty_index_should_round_trip(self, index_store: FAISSIndexStore) -> None:
        project_id = uuid.uuid4()
        await index_store.persist(index_store.build(project_id, [], []))

        loaded = await index_store.load(project_id)

        assert loaded.is_empty
        assert index_store.query(loaded, [1.0], k=3) == []

    async def test_load_missing_index_should_raise(self, index_store: FAISSIndexStore) -> None:
        with pytest.raises(IndexNotFoundError):
            await index_store.load(uuid.uuid4())

    async def test_load_without_manifest_should_raise(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        """Test a directory missing its manifest counts as no index."""
        # Arrange
        project_id = uuid.uuid4()
        location = await index_store.persist(index_store.build(project_id, sample_chunks, sample_vectors))
        (location / MANIFEST_FILENAME).unlink()

        # Act / Assert
        with pytest.raises(IndexNotFoundError):
            await index_store.load(project_id)

    async def test_load_with_mismatched_manifest_should_raise(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        # Arrange
        project_id = uuid.uuid4()
        location = await index_store.persist(index_store.build(project_id, sample_chunks, sample_vectors))
        manifest_path = location / MANIFEST_FILENAME
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        manifest["size"] = 99
        manifest_path.write_text(json.dumps(manifest), encoding="utf-8")

        # Act / Assert
        with pytest.raises(IndexNotFoundError):
            await index_store.load(project_id)

    async def test_load_requires_project_or_location(self, index_store: FAISSIndexStore) -> None:
        with pytest.raises(InvalidInputError):
            await index_store.load()


class TestFAISSIndexStoreNormalisation:
    """Test vectors are normalised by the store, not by LangChain."""

    async def test_build_and_load_should_not_warn(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        # Arrange
        project_id = uuid.uuid4()

        # Act
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            built = index_store.build(project_id, sample_chunks, sample_vectors)
            await index_store.persist(built)
            await index_store.load(project_id)

        # Assert
        assert not [w for w in caught if "Normalizing L2" in str(w.message)]

    def test_query_scale_should_not_change_scores(
        self, index_store: FAISSIndexStore, sample_chunks, sample_vectors
    ) -> None:
        index = index_store.build("p1", sample_chunks, sample_vectors)

        small = index_store.query(index, [0.2, 0.9, 0.1, 0.0], k=4)
        large = index_store.query(index, [20.0, 90.0, 10.0, 0.0], k=4)

        assert [r.sequence_index for r in small] == [r.sequence_index for r in large]
        for a, b in zip(small, large):
            assert a.score == pytest.approx(b.score, abs=1e-5)
