"""Structured logging configuration for http-retry.

Uses structlog for JSON-formatted logging with context management.
"""

import logging

import structlog

from http_retry.config import config


def configure_logging(level: str = "INFO"):
    """Configure structured logging with JSON output."""
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger("http_retry")


# Global logger instance
logger = configure_logging(config.log_level())


def get_logger(**context):
    """Get the configured logger, optionally bound to extra context."""
    if context:
        return logger.bind(**context)
    return logger
