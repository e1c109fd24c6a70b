"""
Web search boundary.

Exports: WebSearchClient, SearchHit
"""

from paperlens.boundary.search.web_search_client import SearchHit, WebSearchClient

__all__ = ["SearchHit", "WebSearchClient"]
