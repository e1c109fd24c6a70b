"""
Gemini chat client for text generation.

Thin async wrapper over ChatGoogleGenerativeAI that turns a prompt into
plain response text. Each call is bounded by a timeout; provider errors and
timeouts surface as ProviderUnavailableError.

Dependencies: langchain_google_genai, langchain_core
System role: Generation provider adapter
"""

import asyncio
import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from paperlens.core.exceptions import ProviderUnavailableError

logger = logging.getLogger(__name__)


def message_text(content) -> str:
    """Flatten chat message content (string or list of parts) into text."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str)
            else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content or "")


class GeminiChatClient:
    """Async text-generation client."""

    def __init__(
        self,
        model: BaseChatModel | None = None,
        model_id: str = "gemini-2.0-flash",
        temperature: float = 0.2,
        google_api_key: str | None = None,
        timeout: float = 120.0,
    ) -> None:
        """
        Initialize chat client.

        Args:
            model: Optional chat model instance (Gemini model created if None)
            model_id: Google model identifier
            temperature: Sampling temperature
            google_api_key: API key, GOOGLE_API_KEY environment variable used if None
            timeout: Seconds allowed for a single generation call
        """
        if model is None:
            kwargs = {"model": model_id, "temperature": temperature}
            if google_api_key:
                kwargs["google_api_key"] = google_api_key
            model = ChatGoogleGenerativeAI(**kwargs)
        self._model = model
        self._model_id = model_id
        self._timeout = timeout

    @property
    def model_id(self) -> str:
        return self._model_id

    async def complete(self, prompt: str) -> str:
        """
        Generate a response for a single prompt.

        Args:
            prompt: Fully composed prompt text

        Returns:
            str: Response text (may be empty)

        Raises:
            ProviderUnavailableError: When the provider fails or times out
        """
        logger.debug(f"{__name__}:complete - START model={self._model_id}, prompt_len={len(prompt)}")
        try:
            message = await asyncio.wait_for(self._model.ainvoke(prompt), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:complete - Timed out after {self._timeout}s (model={self._model_id})")
            raise ProviderUnavailableError(
                f"Generation provider timed out after {self._timeout}s",
                provider="generation",
                details={"model": self._model_id},
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:complete - {type(e).__name__}: {e}")
            raise ProviderUnavailableError(
                f"Generation provider failed: {e}",
                provider="generation",
                details={"model": self._model_id},
            ) from e

        text = message_text(getattr(message, "content", message))
        logger.debug(f"{__name__}:complete - END response_len={len(text)}")
        return text
