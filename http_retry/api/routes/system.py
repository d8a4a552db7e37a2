"""System routes for http-retry."""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter

from http_retry import __version__
from http_retry.core.retry_config import RetryConfig

router = APIRouter(tags=["System"])


@router.get("/health")
async def health() -> Dict[str, Any]:
    """Liveness check with the default retry options."""
    return {
        "status": "healthy",
        "version": __version__,
        "default_options": RetryConfig().to_options(),
        "timestamp": datetime.now().isoformat() + "Z",
    }
