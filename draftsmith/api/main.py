"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, draftsmith.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from draftsmith import __version__
from draftsmith.api.deps.dependencies import get_service_cache
from draftsmith.api.error_handlers import register_exception_handlers
from draftsmith.boundary.db import init_models
from draftsmith.configs import get_settings
from draftsmith.observability import configure_logging
from draftsmith.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    chat_router,
    documents_router,
    health_router,
    profile_router,
    projects_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup configures logging and creates missing tables; shutdown cancels
    pending debounced compiles and releases cached clients.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    await init_models()
    logger.info(
        f"{__name__}:lifespan - Startup complete",
        extra={"environment": settings.environment},
    )

    yield

    # Shutdown
    await get_service_cache().aclose()
    logger.info(f"{__name__}:lifespan - Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="Draftsmith API",
        description="Resume and email drafting from uploaded documents with compile-and-repair",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Correlation must wrap request logging so log lines carry the ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(profile_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(projects_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "draftsmith.api.main:app",
        host=get_settings().host,
        port=get_settings().port,
    )
