"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, paperlens.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from paperlens.api.deps.dependencies import get_service_cache
from paperlens.boundary.db import create_tables
from paperlens.observability.logger import configure_logging
from paperlens.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    chat_router,
    extraction_router,
    health_router,
    projects_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    configure_logging(get_service_cache().settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    await create_tables()
    logger.info("Database tables ready")

    yield

    # Shutdown
    get_service_cache().clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="PaperLens RAG API",
        description="Research paper analysis with retrieval-augmented generation",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(projects_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(extraction_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "paperlens.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
