"""FastAPI dependencies for http-retry.

Dependency injection functions for route handlers.
"""

from fastapi import Request

from http_retry.core.service import HttpRetryService


def get_retry_service(request: Request) -> HttpRetryService:
    """Get the HttpRetryService from app state.

    Note:
        Falls back to a default service if none was set.
        Set via: create_app(retry_service=...)
    """
    service = getattr(request.app.state, "retry_service", None)
    if service is None:
        service = HttpRetryService()
        request.app.state.retry_service = service
    return service
