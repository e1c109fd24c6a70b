"""
Web search configuration settings.

Settings for the Tavily search provider used to enrich generation context.

Dependencies: pydantic_settings
System role: External context configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchSettings(BaseSettings):
    """Tavily web search settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SEARCH_",
        case_sensitive=False,
        extra="ignore",
    )

    tavily_api_key: str | None = Field(
        default=None,
        description="Tavily API key (falls back to TAVILY_API_KEY when unset)",
    )
    max_terms: int = Field(default=3, description="Key terms searched per request")
    max_results: int = Field(default=3, description="External items kept per request")
    timeout: float = Field(default=20.0, description="Timeout in seconds per search call")
