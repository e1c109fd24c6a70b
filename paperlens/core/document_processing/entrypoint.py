"""
Document pipeline orchestrator.

Coordinates chunking, embedding and vector index tasks for one paper.

Dependencies: All task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time

from paperlens.boundary.llm.embedding_client import GeminiEmbeddingClient
from paperlens.boundary.vdb import FAISSIndexStore, IndexCache
from paperlens.core.exceptions import NoDocumentTextError

from .configs import PipelineSettings, get_pipeline_settings
from .models import Document, IndexingResult
from .tasks import ChunkingTask, EmbeddingTask, VectorStoreTask

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document indexing: chunk -> embed -> build + persist."""

    def __init__(
        self,
        embedding_client: GeminiEmbeddingClient,
        store: FAISSIndexStore,
        cache: IndexCache,
        settings: PipelineSettings | None = None,
    ) -> None:
        """
        Initialize pipeline with configuration.

        Args:
            embedding_client: Client used for chunk embeddings
            store: Per-project FAISS index store
            cache: Loaded-index cache invalidated after each build
            settings: Pipeline settings (uses defaults if None)
        """
        self._settings = settings or get_pipeline_settings()

        self._chunking_task = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
        )
        self._embedding_task = EmbeddingTask(
            client=embedding_client,
            max_attempts=self._settings.embed_max_attempts,
            retry_max_wait=self._settings.embed_retry_max_wait,
        )
        self._vector_store_task = VectorStoreTask(store=store, cache=cache)

    async def process(self, document: Document) -> IndexingResult:
        """
        Index a paper's text.

        Args:
            document: Project paper text

        Returns:
            IndexingResult: Chunk count, dimension and index location

        Raises:
            NoDocumentTextError: Document has no usable text
            ProviderUnavailableError: Embedding failed after all retries
            DimensionMismatchError: Provider returned inconsistent vectors
        """
        if not document.has_text:
            raise NoDocumentTextError(str(document.project_id))

        start_time = time.perf_counter()
        project_id = str(document.project_id)
        logger.info(f"{__name__}:process - START project={project_id}, text_len={len(document.raw_text)}")

        # Chunk paper text
        chunks = list(self._chunking_task.chunk(document.raw_text))
        logger.info(f"{__name__}:process - Step 1 OK: {len(chunks)} chunks")

        # Embed chunks
        embedded = await self._embedding_task.embed(chunks)

        # Build, persist and publish index
        index = await self._vector_store_task.index(project_id, embedded)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"{__name__}:process - END project={project_id}, elapsed_ms={elapsed_ms:.0f}")

        return IndexingResult(
            project_id=project_id,
            chunk_count=index.size,
            dimension=index.dimension,
            index_path=index.location or "",
            processing_time_ms=elapsed_ms,
        )
