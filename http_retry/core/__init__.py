"""Core retry engine for http-retry."""

from http_retry.core.cancellation import CancellationToken
from http_retry.core.errors import ErrorCode, InvalidRetryOptionsError
from http_retry.core.retry_config import BackoffStrategy, RetryConfig
from http_retry.core.service import HttpRetryService
from http_retry.core.session import RetrySession

__all__ = [
    "BackoffStrategy",
    "CancellationToken",
    "ErrorCode",
    "HttpRetryService",
    "InvalidRetryOptionsError",
    "RetryConfig",
    "RetrySession",
]
