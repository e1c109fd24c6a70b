"""
Embedding generation task for document chunks.

Embeds chunks in provider-sized batches through the Gemini embedding client,
retrying transient provider failures with exponential backoff.

Dependencies: tenacity, paperlens.boundary.llm
System role: Second stage of document ingestion pipeline
"""

import logging
from collections.abc import Iterable

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from paperlens.boundary.llm.embedding_client import GeminiEmbeddingClient
from paperlens.core.document_processing.models import Chunk, EmbeddedChunk
from paperlens.core.exceptions import ProviderUnavailableError

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Generate embeddings for chunks with retry on provider unavailability."""

    def __init__(
        self,
        client: GeminiEmbeddingClient,
        batch_size: int = 100,
        max_attempts: int = 3,
        retry_initial_wait: float = 1.0,
        retry_max_wait: float = 30.0,
    ) -> None:
        """
        Initialize embedding task.

        Args:
            client: Embedding client
            batch_size: Texts sent per provider call
            max_attempts: Attempts per batch before the error propagates
            retry_initial_wait: First backoff delay in seconds
            retry_max_wait: Upper bound for the backoff delay
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if max_attempts <= 0:
            raise ValueError("max_attempts must be positive")

        self._client = client
        self._batch_size = batch_size
        self._max_attempts = max_attempts
        self._retry_initial_wait = retry_initial_wait
        self._retry_max_wait = retry_max_wait

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception_type(ProviderUnavailableError),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential_jitter(
                initial=self._retry_initial_wait,
                max=self._retry_max_wait,
                jitter=self._retry_initial_wait,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:embed - Retry {retry_state.attempt_number}/{self._max_attempts} "
                f"after provider failure"
            ),
            reraise=True,
        )

    async def embed(self, chunks: Iterable[Chunk]) -> list[EmbeddedChunk]:
        """
        Embed chunks in order.

        Whitespace-only chunks carry nothing to retrieve and are skipped.

        Args:
            chunks: Chunks to embed

        Returns:
            list[EmbeddedChunk]: Chunks paired with their vectors

        Raises:
            ProviderUnavailableError: When a batch still fails after all attempts
            InvalidInputError: When a chunk exceeds the provider input limit
        """
        pending = [chunk for chunk in chunks if chunk.text.strip()]
        if not pending:
            return []

        embedded: list[EmbeddedChunk] = []
        for start in range(0, len(pending), self._batch_size):
            batch = pending[start : start + self._batch_size]
            vectors = await self._retrying()(self._client.embed, [c.text for c in batch])
            embedded.extend(
                EmbeddedChunk(chunk=chunk, embedding=vector)
                for chunk, vector in zip(batch, vectors)
            )

        logger.info(f"{__name__}:embed - Embedded {len(embedded)} chunks")
        return embedded
