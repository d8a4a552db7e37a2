"""Configuration management for http-retry.

Centralizes all environment variable access for better testability and maintainability.
Retry options are per-call values (see ``http_retry.core.retry_config``); only
process-level settings live here.
"""

import os


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration loaded from environment variables."""

    # Logging
    @staticmethod
    def log_level() -> str:
        """Get log level name (DEBUG, INFO, WARNING, ERROR)."""
        return os.environ.get("HTTP_RETRY_LOG_LEVEL", "INFO").upper()

    # Transport
    @staticmethod
    def request_timeout() -> float:
        """Get per-attempt HTTP timeout in seconds."""
        return float(os.environ.get("HTTP_RETRY_REQUEST_TIMEOUT", "30"))

    # Server
    @staticmethod
    def host() -> str:
        return os.environ.get("HTTP_RETRY_HOST", "0.0.0.0")

    @staticmethod
    def port() -> int:
        return int(os.environ.get("HTTP_RETRY_PORT", "8000"))

    # Mock backend
    @staticmethod
    def mock_backend_enabled() -> bool:
        """Whether the /mock routes for manual testing are mounted."""
        return _env_flag("HTTP_RETRY_MOCK_BACKEND", True)

    @staticmethod
    def mock_ready_after() -> float:
        """Seconds after the first request before /mock/data-not-ready-then-ready turns ready."""
        return float(os.environ.get("HTTP_RETRY_MOCK_READY_AFTER", "10"))


# Singleton instance for easy access
config = Config()
