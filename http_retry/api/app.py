"""FastAPI application factory for http-retry."""

from typing import Optional

from fastapi import FastAPI

from http_retry import __version__
from http_retry.api.middleware import request_id_middleware
from http_retry.api.routes import mock_backend, retry, system
from http_retry.config import config
from http_retry.core.service import HttpRetryService


def create_app(
    retry_service: Optional[HttpRetryService] = None,
    mock_backend_enabled: Optional[bool] = None,
) -> FastAPI:
    """Create and configure FastAPI app. Factory pattern for testability."""
    app = FastAPI(
        title="http-retry",
        description=(
            "GET an endpoint whose result may not be ready yet, retrying with linear or "
            "exponential backoff and streaming progress events (SSE) until it is."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware
    app.middleware("http")(request_id_middleware)

    # Register routes
    app.include_router(system.router)
    app.include_router(retry.router)

    if mock_backend_enabled is None:
        mock_backend_enabled = config.mock_backend_enabled()
    if mock_backend_enabled:
        app.include_router(mock_backend.router)

    # Store retry service for route access
    app.state.retry_service = retry_service or HttpRetryService()

    return app
