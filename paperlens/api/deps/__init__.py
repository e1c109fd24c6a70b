"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_chat_service,
    get_pdf_provider,
    get_pipeline_service,
    get_service_cache,
)

__all__ = [
    "get_chat_service",
    "get_pdf_provider",
    "get_pipeline_service",
    "get_service_cache",
]
