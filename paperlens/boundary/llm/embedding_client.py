"""
Google Generative AI embedding client.

Maps chunk texts and queries to fixed-dimension vectors through the Gemini
embedding service. Every provider call is bounded by a timeout; provider
failures and timeouts surface as ProviderUnavailableError. No retries are
performed here, the caller owns the retry policy.

Dependencies: langchain_google_genai, langchain_core
System role: Embedding generation adapter
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from paperlens.core.exceptions import InvalidInputError, ProviderUnavailableError

logger = logging.getLogger(__name__)


class GeminiEmbeddingClient:
    """Embedding client wrapping a LangChain Embeddings implementation."""

    def __init__(
        self,
        embeddings: Embeddings | None = None,
        model: str = "models/gemini-embedding-001",
        google_api_key: str | None = None,
        timeout: float = 60.0,
        max_input_chars: int = 8000,
    ) -> None:
        """
        Initialize embedding client.

        Args:
            embeddings: Optional Embeddings instance (Gemini embeddings created if None)
            model: Google embedding model ID
            google_api_key: API key, GOOGLE_API_KEY environment variable used if None
            timeout: Seconds allowed for a single provider call
            max_input_chars: Longest text accepted per input
        """
        if embeddings is None:
            kwargs = {"model": model}
            if google_api_key:
                kwargs["google_api_key"] = google_api_key
            embeddings = GoogleGenerativeAIEmbeddings(**kwargs)
            logger.info(f"{__name__}:__init__ - Initialized Gemini embeddings model={model}")

        self._embeddings = embeddings
        self._timeout = timeout
        self._max_input_chars = max_input_chars

    @property
    def embeddings(self) -> Embeddings:
        """Underlying LangChain embeddings (needed to reopen FAISS stores)."""
        return self._embeddings

    def _validate(self, text: str, position: int | None = None) -> None:
        if not text or not text.strip():
            raise InvalidInputError(
                "Cannot embed empty text",
                field="texts",
                details={"position": position},
            )
        if len(text) > self._max_input_chars:
            raise InvalidInputError(
                f"Text exceeds embedding limit of {self._max_input_chars} characters",
                field="texts",
                details={"position": position, "length": len(text)},
            )

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Embed a batch of texts.

        Args:
            texts: Texts to embed (each non-empty and within the provider limit)

        Returns:
            list[list[float]]: One vector per input text, in order

        Raises:
            InvalidInputError: When a text is empty or too long
            ProviderUnavailableError: When the provider fails or times out
        """
        if not texts:
            return []
        for position, text in enumerate(texts):
            self._validate(text, position)

        try:
            vectors = await asyncio.wait_for(
                self._embeddings.aembed_documents(texts),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:embed - Timed out after {self._timeout}s for {len(texts)} texts")
            raise ProviderUnavailableError(
                f"Embedding provider timed out after {self._timeout}s",
                provider="embedding",
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:embed - {type(e).__name__}: {e}")
            raise ProviderUnavailableError(
                f"Embedding provider failed: {e}",
                provider="embedding",
                details={"text_count": len(texts)},
            ) from e

        if len(vectors) != len(texts):
            raise ProviderUnavailableError(
                "Embedding provider returned a partial batch",
                provider="embedding",
                details={"expected": len(texts), "received": len(vectors)},
            )
        return [list(vector) for vector in vectors]

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a single query.

        Args:
            text: Query text

        Returns:
            list[float]: Query embedding vector

        Raises:
            InvalidInputError: When the query is empty or too long
            ProviderUnavailableError: When the provider fails or times out
        """
        self._validate(text)
        try:
            vector = await asyncio.wait_for(
                self._embeddings.aembed_query(text),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise ProviderUnavailableError(
                f"Embedding provider timed out after {self._timeout}s",
                provider="embedding",
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:embed_query - {type(e).__name__}: {e}")
            raise ProviderUnavailableError(
                f"Embedding provider failed: {e}",
                provider="embedding",
            ) from e
        return list(vector)
