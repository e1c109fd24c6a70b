"""
Generation provider configuration settings.

Settings for the Google Gemini chat models used for artifact generation
and key-term extraction.

Dependencies: pydantic_settings
System role: LLM configuration for the generation orchestrator
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Google Gemini generation settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        description="Google API key (falls back to GOOGLE_API_KEY when unset)",
    )
    model_id: str = Field(
        default="gemini-2.0-flash",
        description="Model used for summaries, diagrams, insights and chat",
    )
    key_terms_model_id: str = Field(
        default="gemini-2.0-flash-lite",
        description="Cheaper model used for key-term extraction",
    )
    temperature: float = Field(default=0.2, description="Sampling temperature")
    request_timeout: float = Field(
        default=120.0,
        description="Timeout in seconds for a single generation call",
    )
