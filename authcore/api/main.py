"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from authcore import __version__
from authcore.adapters.repository.memory import InMemoryUserRepository
from authcore.api.models import HealthResponse
from authcore.api.v1 import router as v1_router
from authcore.config.settings import get_settings
from authcore.domain.hashing import CredentialHasher

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Account API v1 - Register users and verify credentials",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the in-memory user directory and credential hasher on startup
    - Discards every user record on shutdown
    """
    settings = get_settings()
    logging.getLogger("authcore").setLevel(settings.log_level.upper())

    logger.info("Starting application...")

    repository = InMemoryUserRepository()
    app.state.repository = repository
    app.state.hasher = CredentialHasher(rounds=settings.bcrypt_cost)

    logger.info("Application startup complete (bcrypt cost %d)", settings.bcrypt_cost)

    yield

    logger.info("Shutting down application...")
    count = len(repository)
    repository.clear()
    logger.info("User directory discarded (%d records)", count)


def create_app() -> FastAPI:
    """Build the application with v1 routes and the unversioned aliases."""
    app = FastAPI(
        title="authcore",
        description="In-memory account registration and login API",
        version=__version__,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    app.include_router(v1_router, prefix="/v1")
    # Unversioned paths kept for existing clients.
    app.include_router(v1_router, include_in_schema=False)

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request) -> HealthResponse:
        """Health check endpoint reporting the number of registered users."""
        return HealthResponse(status="healthy", users=len(request.app.state.repository))

    return app


app = create_app()
