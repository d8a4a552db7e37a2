"""http-retry: GET with transparent retries until the result is ready.

Usage:
    service = HttpRetryService()
    async for event in service.get(url, {"retries": 5, "strategy": "exponential"}):
        ...
"""

from http_retry.core import (
    BackoffStrategy,
    CancellationToken,
    ErrorCode,
    HttpRetryService,
    InvalidRetryOptionsError,
    RetryConfig,
    RetrySession,
)
from http_retry.models import ErrorRecord, ProgressEvent

__version__ = "1.0.0"

__all__ = [
    "BackoffStrategy",
    "CancellationToken",
    "ErrorCode",
    "ErrorRecord",
    "HttpRetryService",
    "InvalidRetryOptionsError",
    "ProgressEvent",
    "RetryConfig",
    "RetrySession",
]
