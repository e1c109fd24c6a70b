"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits paper text into bounded, overlapping chunks while preserving context.
Separators are tried in order: paragraph breaks, line breaks, sentence
breaks, words, then raw characters.

Dependencies: langchain_text_splitters
System role: First stage of document ingestion pipeline
"""

from bisect import bisect_left
from collections.abc import Iterator

from langchain_text_splitters import RecursiveCharacterTextSplitter

from paperlens.core.document_processing.models import Chunk
from paperlens.core.exceptions import InvalidInputError

DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


def locate_chunks(text: str, pieces: list[str]) -> list[int]:
    """
    Map split pieces back onto their source text.

    Every piece starts after the previous piece's start and no later than its
    end, the first starts at 0 and the last ends at ``len(text)``. Repeated
    substrings (runs of blank lines, boilerplate) can match more than once,
    so a forward pass keeps every reachable start and a backward pass picks
    one consistent layout.

    Args:
        text: Source text the pieces were split from
        pieces: Chunk texts in split order

    Returns:
        list[int]: Start offset of each piece

    Raises:
        ValueError: When the pieces cannot be laid out over the text
    """
    if not pieces:
        return []

    reachable: list[list[int]] = []
    for position, piece in enumerate(pieces):
        if position == 0:
            found = [0] if text.startswith(piece) else []
        else:
            previous = reachable[-1]
            span = len(pieces[position - 1])
            search_end = previous[-1] + span + len(piece)
            found = []
            match = text.find(piece, previous[0] + 1, search_end)
            while match != -1:
                # Some previous start s must satisfy s < match <= s + span
                i = bisect_left(previous, match - span)
                if i < len(previous) and previous[i] < match:
                    found.append(match)
                match = text.find(piece, match + 1, search_end)
        if position == len(pieces) - 1:
            found = [start for start in found if start + len(piece) == len(text)]
        if not found:
            raise ValueError(f"Chunk {position} does not map onto the source text")
        reachable.append(found)

    starts = [reachable[-1][-1]]
    for position in range(len(pieces) - 2, -1, -1):
        following = starts[-1]
        span = len(pieces[position])
        starts.append(
            max(start for start in reachable[position] if start < following <= start + span)
        )
    starts.reverse()
    return starts


class ChunkSequence:
    """
    Lazy, restartable sequence of chunks over one source text.

    Nothing is split until iteration starts; every new iteration splits the
    source text again, so the sequence can be consumed any number of times.
    """

    def __init__(self, text: str, splitter: RecursiveCharacterTextSplitter) -> None:
        self._text = text
        self._splitter = splitter

    def __iter__(self) -> Iterator[Chunk]:
        if not self._text:
            return
        pieces = self._splitter.split_text(self._text)
        starts = locate_chunks(self._text, pieces)
        for position, (piece, start) in enumerate(zip(pieces, starts)):
            yield Chunk(text=piece, sequence_index=position, start_index=start)

    @property
    def source_text(self) -> str:
        return self._text


class ChunkingTask:
    """Split paper text into chunks using RecursiveCharacterTextSplitter."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        separators: list[str] | None = None,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            separators: Separator hierarchy, most preferred first

        Raises:
            InvalidInputError: When sizes are not positive or overlap >= size
        """
        if chunk_size <= 0:
            raise InvalidInputError("chunk_size must be positive", field="chunk_size")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise InvalidInputError(
                "chunk_overlap must be >= 0 and smaller than chunk_size",
                field="chunk_overlap",
                details={"chunk_size": chunk_size, "chunk_overlap": chunk_overlap},
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        # Separators stay attached and whitespace is kept so that chunk
        # offsets map back onto the source text exactly.
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=separators or DEFAULT_SEPARATORS,
            keep_separator=True,
            strip_whitespace=False,
            length_function=len,
        )

    def chunk(self, text: str) -> ChunkSequence:
        """
        Split text into chunks.

        Args:
            text: Raw paper text (empty text yields an empty sequence)

        Returns:
            ChunkSequence: Lazy sequence of ordered chunks
        """
        return ChunkSequence(text or "", self._splitter)
