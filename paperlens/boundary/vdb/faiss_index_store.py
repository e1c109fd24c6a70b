"""
FAISS index store with one persisted index per project.

Builds an exact inner-product FAISS index over L2-normalised chunk vectors
(scores are cosine similarities), persists it atomically under
``<index_root>/<project_id>/`` and loads it back read-only. An index is
replaced wholesale on re-ingestion and never patched.

On-disk layout:
    index.faiss    FAISS index (LangChain save_local)
    index.pkl      docstore with chunk texts and sequence indices
    manifest.json  written last; its absence means "no index"

Dependencies: faiss-cpu, numpy, langchain_community, langchain_core
System role: Vector store adapter for RAG retrieval
"""

import asyncio
import json
import logging
import shutil
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from uuid import UUID

import faiss
import numpy as np
from langchain_community.vectorstores import FAISS
from langchain_community.vectorstores.utils import DistanceStrategy
from langchain_core.embeddings import Embeddings

from paperlens.boundary.vdb.vector_schemas import (
    MANIFEST_FILENAME,
    IndexManifest,
    VectorIndex,
    VectorSearchResult,
)
from paperlens.core.document_processing.models import Chunk
from paperlens.core.exceptions import (
    DimensionMismatchError,
    IndexNotFoundError,
    InvalidInputError,
)

logger = logging.getLogger(__name__)


@contextmanager
def _staging_dir(parent: Path, name: str) -> Iterator[Path]:
    """Temporary sibling directory removed on exit unless renamed away."""
    staging = Path(tempfile.mkdtemp(prefix=f".{name}.staging-", dir=parent))
    try:
        yield staging
    finally:
        if staging.exists():
            shutil.rmtree(staging, ignore_errors=True)


def _unit_rows(vectors: Sequence[Sequence[float]]) -> np.ndarray:
    """Float32 copy of the vectors scaled to unit L2 norm; zero rows stay zero."""
    matrix = np.array(vectors, dtype=np.float32)
    faiss.normalize_L2(matrix)
    return matrix


class FAISSIndexStore:
    """
    Per-project FAISS index builder, persister and reader.

    The store holds no index state of its own; loaded handles are cached by
    IndexCache.
    """

    def __init__(self, index_root: str | Path, embeddings: Embeddings) -> None:
        """
        Initialize store.

        Args:
            index_root: Root directory holding one subdirectory per project
            embeddings: LangChain embeddings attached to reopened FAISS stores
        """
        self._index_root = Path(index_root)
        self._embeddings = embeddings

    @property
    def index_root(self) -> Path:
        return self._index_root

    def location_for(self, project_id: str | UUID) -> Path:
        """Directory of a project's persisted index."""
        return self._index_root / str(project_id)

    def build(
        self,
        project_id: str | UUID,
        chunks: Sequence[Chunk],
        embeddings: Sequence[Sequence[float]],
    ) -> VectorIndex:
        """
        Build an in-memory index from parallel chunk and vector arrays.

        Args:
            project_id: Owning project
            chunks: Ordered chunks
            embeddings: One vector per chunk, same order

        Returns:
            VectorIndex: Handle ready to persist or query

        Raises:
            InvalidInputError: When the arrays differ in length
            DimensionMismatchError: When vectors do not share one dimension
        """
        if len(chunks) != len(embeddings):
            raise InvalidInputError(
                "chunks and embeddings must have the same length",
                field="embeddings",
                details={"chunks": len(chunks), "embeddings": len(embeddings)},
            )

        project_key = str(project_id)
        if not chunks:
            logger.info(f"{__name__}:build - Empty index for project {project_key}")
            return VectorIndex(project_id=project_key, dimension=None, size=0)

        dimension = len(embeddings[0])
        for vector in embeddings:
            if len(vector) != dimension:
                raise DimensionMismatchError(expected=dimension, actual=len(vector))
        if dimension == 0:
            raise InvalidInputError("Embedding vectors must not be empty", field="embeddings")

        # Vectors are normalised here, LangChain only normalises for L2 distance
        store = FAISS.from_embeddings(
            text_embeddings=[
                (chunk.text, row.tolist())
                for chunk, row in zip(chunks, _unit_rows(embeddings))
            ],
            embedding=self._embeddings,
            metadatas=[{"sequence_index": chunk.sequence_index} for chunk in chunks],
            distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
        )
        logger.info(
            f"{__name__}:build - Built index project={project_key}, size={len(chunks)}, dimension={dimension}"
        )
        return VectorIndex(
            project_id=project_key,
            dimension=dimension,
            size=len(chunks),
            store=store,
        )

    def _write(self, index: VectorIndex, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with _staging_dir(destination.parent, destination.name) as staging:
            if index.store is not None:
                index.store.save_local(str(staging))

            manifest = IndexManifest(
                project_id=index.project_id,
                dimension=index.dimension,
                size=index.size,
            )
            (staging / MANIFEST_FILENAME).write_text(
                manifest.model_dump_json(indent=2), encoding="utf-8"
            )

            # Swap the previous index out before moving the new one in
            retired = None
            if destination.exists():
                retired = destination.parent / f".{destination.name}.retired-{staging.name}"
                destination.rename(retired)
            staging.rename(destination)
            if retired is not None:
                shutil.rmtree(retired, ignore_errors=True)

    async def persist(self, index: VectorIndex, location: str | Path | None = None) -> Path:
        """
        Write an index to disk, replacing any previous index at the location.

        Args:
            index: Index handle to persist
            location: Target directory (defaults to the project's directory)

        Returns:
            Path: Directory now holding the index
        """
        destination = Path(location) if location else self.location_for(index.project_id)
        await asyncio.to_thread(self._write, index, destination)
        index.location = str(destination)
        logger.info(
            f"{__name__}:persist - Persisted index project={index.project_id} to {destination}",
            extra={"project_id": index.project_id, "size": index.size},
        )
        return destination

    def _read(self, project_id: str | UUID | None, location: Path) -> VectorIndex:
        manifest_path = location / MANIFEST_FILENAME
        if not location.is_dir() or not manifest_path.is_file():
            raise IndexNotFoundError(str(location))

        try:
            manifest = IndexManifest.model_validate(
                json.loads(manifest_path.read_text(encoding="utf-8"))
            )
        except (OSError, ValueError) as e:
            raise IndexNotFoundError(str(location), details={"reason": f"unreadable manifest: {e}"}) from e

        if manifest.size == 0:
            return VectorIndex(
                project_id=manifest.project_id,
                dimension=manifest.dimension,
                size=0,
                location=str(location),
            )

        try:
            store = FAISS.load_local(
                str(location),
                self._embeddings,
                allow_dangerous_deserialization=True,
                distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
            )
        except Exception as e:
            logger.error(f"{__name__}:load - Unreadable index at {location}: {type(e).__name__}: {e}")
            raise IndexNotFoundError(str(location), details={"reason": type(e).__name__}) from e

        if store.index.ntotal != manifest.size or store.index.d != manifest.dimension:
            raise IndexNotFoundError(
                str(location),
                details={"reason": "index does not match manifest"},
            )

        return VectorIndex(
            project_id=str(project_id) if project_id is not None else manifest.project_id,
            dimension=manifest.dimension,
            size=manifest.size,
            location=str(location),
            store=store,
        )

    async def load(
        self,
        project_id: str | UUID | None = None,
        location: str | Path | None = None,
    ) -> VectorIndex:
        """
        Load a persisted index.

        Args:
            project_id: Project whose index to load
            location: Explicit index directory (takes precedence over project_id)

        Returns:
            VectorIndex: Read-only handle

        Raises:
            IndexNotFoundError: When the directory, manifest or FAISS files are missing or unreadable
        """
        if location is None and project_id is None:
            raise InvalidInputError("project_id or location is required", field="location")
        path = Path(location) if location else self.location_for(project_id)
        index = await asyncio.to_thread(self._read, project_id, path)
        logger.info(f"{__name__}:load - Loaded index from {path} (size={index.size})")
        return index

    def query(
        self,
        index: VectorIndex,
        vector: Sequence[float],
        k: int,
    ) -> list[VectorSearchResult]:
        """
        Return the k chunks most similar to a query vector.

        Args:
            index: Index to search
            vector: Query embedding
            k: Maximum number of results

        Returns:
            list[VectorSearchResult]: Descending score, ties by ascending sequence_index

        Raises:
            DimensionMismatchError: When the query dimension differs from the index
        """
        if k <= 0 or index.is_empty:
            return []
        if len(vector) != index.dimension:
            raise DimensionMismatchError(expected=index.dimension, actual=len(vector))

        # Exact search over every chunk so the tie order is deterministic
        hits = index.store.similarity_search_with_score_by_vector(
            _unit_rows([vector])[0].tolist(),
            k=index.size,
        )
        results = [
            VectorSearchResult(
                content=doc.page_content,
                score=float(score),
                sequence_index=int(doc.metadata.get("sequence_index", 0)),
            )
            for doc, score in hits
        ]
        results.sort(key=lambda r: (-r.score, r.sequence_index))
        return results[:k]
