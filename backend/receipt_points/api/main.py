"""Entry point for the FastAPI application.

This module constructs the FastAPI app, includes the receipts router,
registers exception handlers and sets up startup and shutdown. When
run with uvicorn it creates the in-memory receipt store and loads
configuration from ``receipt_points.core.config``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from receipt_points import __version__
from receipt_points.api.dependencies import get_storage
from receipt_points.api.error_handlers import register_exception_handlers
from receipt_points.api.routes.receipts import router as receipts_router
from receipt_points.core.config import settings
from receipt_points.core.observability import init_sentry
from receipt_points.services.storage_service import MemoryStorage, Storage

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    logger.info("Starting up...")
    if init_sentry("api"):
        logger.info("Sentry SDK initialized (api)")
    app.state.storage = MemoryStorage()
    yield
    # Shutdown
    logger.info("Shutting down with %d receipts in memory...", len(app.state.storage))


def create_app() -> FastAPI:
    """Build a fully wired application instance."""
    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=__version__,
        lifespan=lifespan,
    )

    # In development allow every origin, otherwise only the configured ones
    allow_origins = ["*"] if settings.is_development else list(settings.BACKEND_CORS_ORIGINS or [])
    application.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)
    application.include_router(receipts_router)

    @application.api_route("/health", methods=["GET", "HEAD"])
    async def health_check(storage: Storage = Depends(get_storage)):
        """Health check endpoint (supports GET & HEAD)."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "receipts": len(storage),
        }

    return application


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    uvicorn.run(
        "receipt_points.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":  # pragma: no cover
    run()
