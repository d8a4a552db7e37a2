"""Routes for http-retry."""

from http_retry.api.routes import mock_backend, retry, system

__all__ = ["mock_backend", "retry", "system"]
