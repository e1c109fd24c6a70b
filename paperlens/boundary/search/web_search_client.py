"""
Tavily web search client.

Fetches short external snippets that explain a paper's key terms. Each
search is bounded by a timeout; failures surface as ProviderUnavailableError.

Dependencies: tavily-python
System role: External context provider for context assembly
"""

import asyncio
import logging

from pydantic import BaseModel, Field
from tavily import AsyncTavilyClient

from paperlens.core.exceptions import ProviderUnavailableError

logger = logging.getLogger(__name__)


class SearchHit(BaseModel):
    """Single web search result."""

    title: str = ""
    url: str = ""
    content: str = Field(default="", description="Result snippet")
    score: float | None = None


class WebSearchClient:
    """Async web search through Tavily."""

    def __init__(
        self,
        client: AsyncTavilyClient | None = None,
        api_key: str | None = None,
        timeout: float = 20.0,
    ) -> None:
        """
        Initialize search client.

        Args:
            client: Optional Tavily client (created from api_key if None)
            api_key: Tavily API key, TAVILY_API_KEY environment variable used if None
            timeout: Seconds allowed for a single search
        """
        self._client = client or AsyncTavilyClient(api_key=api_key)
        self._timeout = timeout

    async def search(self, query: str, max_results: int = 3) -> list[SearchHit]:
        """
        Run one web search.

        Args:
            query: Search query
            max_results: Maximum number of hits

        Returns:
            list[SearchHit]: Hits with non-empty content, in provider order

        Raises:
            ProviderUnavailableError: When the search fails or times out
        """
        try:
            response = await asyncio.wait_for(
                self._client.search(query=query, max_results=max_results),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"{__name__}:search - Timed out after {self._timeout}s query={query!r}")
            raise ProviderUnavailableError(
                f"Web search timed out after {self._timeout}s",
                provider="search",
            ) from e
        except Exception as e:
            logger.warning(f"{__name__}:search - {type(e).__name__}: {e}")
            raise ProviderUnavailableError(
                f"Web search failed: {e}",
                provider="search",
                details={"query": query},
            ) from e

        hits = [
            SearchHit(
                title=item.get("title") or "",
                url=item.get("url") or "",
                content=item.get("content") or "",
                score=item.get("score"),
            )
            for item in (response or {}).get("results", [])
        ]
        return [hit for hit in hits if hit.content.strip()][:max_results]
