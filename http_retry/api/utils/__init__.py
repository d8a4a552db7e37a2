"""API utilities for http-retry."""

from http_retry.api.utils.sse import create_sse_event

__all__ = ["create_sse_event"]
