"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.
It sets up routes, CORS, the GitHub client lifecycle and error mapping.

Design Decisions:
- Use lifespan events to open and close the shared GitHub client
- Permissive CORS, the dashboard is served from another origin
- Every request failure is answered with 403 and the error text
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from review_queue import __version__
from review_queue.api import router as api_router
from review_queue.config import Settings, get_settings
from review_queue.errors import ReviewQueueError
from review_queue.logging_config import get_logger, setup_logging
from review_queue.services.github_client import GitHubClient

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        transport: Optional httpx transport for the GitHub client

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "Starting PR Review Queue",
            host=settings.host,
            port=settings.port,
            org=settings.github_org
        )

        missing = [
            name for name, value in (
                ("GITHUB_TOKEN", settings.github_token),
                ("GITHUB_ORG", settings.github_org),
            ) if not value
        ]
        if missing:
            logger.warning("GitHub configuration incomplete", missing=missing)

        app.state.github_client = GitHubClient(settings, transport=transport)

        yield

        await app.state.github_client.aclose()
        logger.info("Shutting down PR Review Queue")

    app = FastAPI(
        title="PR Review Queue",
        description="Pending pull-request reviews per team and reviewer",
        version=__version__,
        lifespan=lifespan,
    )

    # Must stay registered before CORSMiddleware, which has to wrap these responses
    @app.middleware("http")
    async def unexpected_error_middleware(request: Request, call_next):
        """Answer unexpected exceptions with 403 and their text."""
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(exc),
                error_type=type(exc).__name__
            )
            return PlainTextResponse(str(exc), status_code=status.HTTP_403_FORBIDDEN)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.exception_handler(ReviewQueueError)
    async def review_queue_exception_handler(
        request: Request,
        exc: ReviewQueueError
    ) -> PlainTextResponse:
        """Answer request failures with 403 and the error text."""
        logger.warning(
            "Request failed",
            path=request.url.path,
            error_id=exc.error_id,
            error_type=type(exc).__name__,
            error=exc.message
        )
        return PlainTextResponse(str(exc), status_code=status.HTTP_403_FORBIDDEN)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancers and monitors."""
        return {
            "status": "healthy",
            "service": "pr-review-queue",
            "version": __version__
        }

    return app


# Initialize logging first
setup_logging()

# Create the application instance
app = create_app()
