"""Pydantic models for progress events emitted by a retry operation.

Events only carry the fields that were set for them: ``to_dict()`` drops unset
fields, so a ``{"loading": true}`` event serializes to exactly that.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from http_retry.core.errors import ErrorCode

_EVENT_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ErrorRecord(BaseModel):
    """Structured error attached to an error or countdown event."""

    model_config = _EVENT_CONFIG

    error_code: ErrorCode
    error_message: str
    message: Optional[str] = None
    attempts: Optional[int] = None
    max_retries: Optional[int] = None
    delay: Optional[int] = None  # remaining ms in the current wait
    total_delay: Optional[float] = None  # seconds since the operation started

    @classmethod
    def for_code(cls, error_code: ErrorCode, **fields: Any) -> "ErrorRecord":
        """Build a record with the standard message for ``error_code``."""
        return cls(error_code=error_code, error_message=error_code.message, **fields)


class ProgressEvent(BaseModel):
    """One event on an operation's stream."""

    model_config = _EVENT_CONFIG

    loading: Optional[bool] = None
    ready: Optional[bool] = None
    data: Any = None
    error: Optional[ErrorRecord] = None

    @classmethod
    def loading_started(cls) -> "ProgressEvent":
        return cls(loading=True)

    @classmethod
    def ready_with(cls, data: Any) -> "ProgressEvent":
        return cls(ready=True, data=data, loading=False)

    @classmethod
    def failure(cls, error: ErrorRecord) -> "ProgressEvent":
        return cls(error=error, loading=False)

    def to_dict(self) -> Dict[str, Any]:
        """Wire form: camelCase keys, only the fields set on this event."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
