"""HTTP surface for http-retry."""

from http_retry.api.app import create_app

__all__ = ["create_app"]
