"""
Tests for ChunkingTask.

Verifies chunk coverage of the source text, the size bound, the overlap
bound between neighbours and the lazy, restartable chunk sequence.
"""

import random

import pytest

from paperlens.core.document_processing.tasks.chunking_task import ChunkingTask, locate_chunks
from paperlens.core.exceptions import InvalidInputError


def _long_paper(length: int = 50_000) -> str:
    sentences = [f"Sentence {i:05d} covers the method in detail" for i in range(1300)]
    text = ". ".join(sentences)
    return text[:length]


def _ragged_paper(seed: int, words: int = 150) -> str:
    """Words separated by a random mix of blank lines, line breaks and sentence breaks."""
    rng = random.Random(seed)
    separators = [" ", "  ", "\n", "\n\n", "\n\n\n", ". ", "  \n", ".\n\n"]
    parts = []
    for _ in range(words):
        parts.append(f"w{rng.randrange(100)}")
        parts.append(rng.choice(separators))
    return "".join(parts)


class TestChunkingTaskConfiguration:
    """Test splitter parameter validation."""

    def test_should_reject_overlap_not_smaller_than_size(self) -> None:
        """Test overlap equal to chunk size is rejected."""
        with pytest.raises(InvalidInputError) as exc_info:
            ChunkingTask(chunk_size=100, chunk_overlap=100)

        assert exc_info.value.details["field"] == "chunk_overlap"

    def test_should_reject_negative_overlap(self) -> None:
        with pytest.raises(InvalidInputError):
            ChunkingTask(chunk_size=100, chunk_overlap=-1)

    def test_should_reject_non_positive_size(self) -> None:
        with pytest.raises(InvalidInputError):
            ChunkingTask(chunk_size=0, chunk_overlap=0)


class TestChunkingTaskSplitting:
    """Test chunk boundaries for realistic paper text."""

    def test_empty_text_should_yield_no_chunks(self) -> None:
        """Test empty input yields an empty sequence."""
        task = ChunkingTask(chunk_size=1000, chunk_overlap=200)

        assert list(task.chunk("")) == []

    def test_short_text_should_yield_single_chunk(self) -> None:
        """Test text shorter than the chunk size is one chunk."""
        # Arrange
        task = ChunkingTask(chunk_size=1000, chunk_overlap=200)
        text = "A short abstract about sparse attention."

        # Act
        chunks = list(task.chunk(text))

        # Assert
        assert len(chunks) == 1
        assert chunks[0].text == text
        assert chunks[0].sequence_index == 0
        assert chunks[0].start_index == 0

    def test_long_text_should_respect_size_and_overlap_bounds(self) -> None:
        """Test a 50,000 character paper with overlap 100."""
        # Arrange
        text = _long_paper()
        task = ChunkingTask(chunk_size=1000, chunk_overlap=100)

        # Act
        chunks = list(task.chunk(text))

        # Assert
        assert len(chunks) >= 45
        assert all(len(chunk.text) <= 1000 for chunk in chunks)
        for previous, current in zip(chunks, chunks[1:]):
            shared = previous.end_index - current.start_index
            assert 1 <= shared <= 100

    def test_chunks_should_cover_source_text_in_order(self) -> None:
        """Test chunks are exact, ordered slices without gaps."""
        # Arrange
        text = _long_paper(12_000)
        task = ChunkingTask(chunk_size=1000, chunk_overlap=100)

        # Act
        chunks = list(task.chunk(text))

        # Assert
        assert chunks[0].start_index == 0
        assert chunks[-1].end_index == len(text)
        assert [chunk.sequence_index for chunk in chunks] == list(range(len(chunks)))
        for chunk in chunks:
            assert text[chunk.start_index : chunk.end_index] == chunk.text
        for previous, current in zip(chunks, chunks[1:]):
            assert previous.start_index < current.start_index <= previous.end_index

    def test_should_prefer_paragraph_breaks(self) -> None:
        """Test paragraphs that fit are not split mid-sentence."""
        # Arrange
        paragraphs = [f"Paragraph {i} " + "x" * 80 for i in range(4)]
        text = "\n\n".join(paragraphs)
        task = ChunkingTask(chunk_size=120, chunk_overlap=0)

        # Act
        chunks = list(task.chunk(text))

        # Assert
        assert [chunk.text.strip() for chunk in chunks] == paragraphs


class TestChunkSequence:
    """Test the lazy sequence contract."""

    def test_sequence_should_be_restartable(self) -> None:
        """Test iterating twice yields the same chunks."""
        task = ChunkingTask(chunk_size=200, chunk_overlap=20)
        sequence = task.chunk(_long_paper(2_000))

        assert list(sequence) == list(sequence)
        assert sequence.source_text == _long_paper(2_000)


class TestChunkOffsets:
    """Test chunk offsets on text with repeated whitespace runs."""

    @pytest.mark.parametrize(("chunk_size", "chunk_overlap"), [(23, 6), (40, 10), (17, 0)])
    def test_offsets_should_chain_without_gaps(self, chunk_size: int, chunk_overlap: int) -> None:
        """Test ragged paragraph, line and sentence text over many seeds."""
        task = ChunkingTask(chunk_size=chunk_size, chunk_overlap=chunk_overlap)

        for seed in range(100):
            # Arrange
            text = _ragged_paper(seed)

            # Act
            chunks = list(task.chunk(text))

            # Assert
            assert chunks[0].start_index == 0, seed
            assert chunks[-1].end_index == len(text), seed
            for chunk in chunks:
                assert text[chunk.start_index : chunk.end_index] == chunk.text, seed
            for previous, current in zip(chunks, chunks[1:]):
                assert previous.start_index < current.start_index <= previous.end_index, seed
            cores = [
                text[previous.start_index : current.start_index]
                for previous, current in zip(chunks, chunks[1:])
            ]
            assert "".join(cores) + chunks[-1].text == text, seed

    def test_whitespace_piece_should_anchor_after_previous_chunk(self) -> None:
        """Test a lone line break maps to the break between chunks, not an earlier one."""
        # Arrange
        text = "\n\nw94  \nw95\n\nw96 w97"
        pieces = ["\n\nw94  \nw95", "\n", "\nw96 w97"]

        # Act
        starts = locate_chunks(text, pieces)

        # Assert
        assert starts == [0, 11, 12]

    def test_pieces_not_from_text_should_raise(self) -> None:
        with pytest.raises(ValueError):
            locate_chunks("alpha beta", ["alpha ", "gamma"])

    def test_no_pieces_should_map_to_no_offsets(self) -> None:
        assert locate_chunks("", []) == []
