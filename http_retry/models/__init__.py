"""Pydantic models for http-retry."""

from http_retry.models.events import ErrorRecord, ProgressEvent

__all__ = ["ErrorRecord", "ProgressEvent"]
