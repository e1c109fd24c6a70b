"""API routers."""

from .chat import router as chat_router
from .extraction import router as extraction_router
from .health import router as health_router
from .projects import router as projects_router

__all__ = [
    "chat_router",
    "extraction_router",
    "health_router",
    "projects_router",
]
