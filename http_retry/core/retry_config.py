"""Retry configuration for http-retry.

Immutable configuration for retry behavior, merged with defaults once per call.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from http_retry.core.errors import InvalidRetryOptionsError

MAX_RETRIES = 10
MAX_RETRY_INTERVAL = 60000  # 60 seconds
MAX_UPDATE_INTERVAL = 10000  # 10 seconds

_FIELD_ERRORS = {
    "retries": f"Invalid value for retries. It must be a non-negative integer less than {MAX_RETRIES}.",
    "interval": (
        "Invalid value for interval. It must be a non-negative integer less than "
        f"{MAX_RETRY_INTERVAL}."
    ),
    "update_interval": (
        "Invalid value for updateInterval. It must be a non-negative integer less than "
        f"{MAX_UPDATE_INTERVAL}."
    ),
    "strategy": 'Invalid strategy. Valid values are "linear" or "exponential".',
}


class BackoffStrategy(str, Enum):
    """Delay growth model between attempts.

    - LINEAR: constant ``interval``
    - EXPONENTIAL: ``interval * 2 ** attempt``
    """

    LINEAR = "linear"
    EXPONENTIAL = "exponential"


class RetryConfig(BaseModel):
    """Configuration for one retry operation.

    Accepts camelCase names (``updateInterval``) as well as snake_case ones
    (``update_interval``). Values are checked at construction time, before any
    network activity.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    retries: StrictInt = Field(default=3, ge=0, le=MAX_RETRIES)
    interval: StrictInt = Field(default=3000, ge=0, le=MAX_RETRY_INTERVAL)  # ms
    strategy: BackoffStrategy = BackoffStrategy.LINEAR
    update_interval: StrictInt = Field(default=1000, ge=0, le=MAX_UPDATE_INTERVAL)  # ms
    retry_on_server_failure: StrictBool = False
    retry_on_unexpected_format: StrictBool = False
    live_updates: StrictBool = True
    no_updates: StrictBool = False

    @field_validator("retries", "interval", "update_interval", mode="before")
    @classmethod
    def integral_float_to_int(cls, value: Any) -> Any:
        """Accept whole-number floats such as ``3.0``; strings and bools stay rejected."""
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]] = None) -> "RetryConfig":
        """Merge caller options over the defaults and validate.

        Args:
            options: Option mapping, camelCase or snake_case keys

        Returns:
            Frozen RetryConfig

        Raises:
            InvalidRetryOptionsError: If any option is unknown or out of bounds
        """
        try:
            return cls.model_validate(options or {})
        except ValidationError as e:
            raise InvalidRetryOptionsError(_describe(e)) from e

    def to_options(self) -> Dict[str, Any]:
        """Wire form with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    loc = first["loc"][0] if first["loc"] else ""
    field = _field_name(str(loc))
    if field in _FIELD_ERRORS:
        return _FIELD_ERRORS[field]
    if first["type"] == "extra_forbidden":
        return f"Unknown retry option: {loc}."
    return f"Invalid value for {loc}: {first['msg']}."


def _field_name(loc: str) -> str:
    for name, field in RetryConfig.model_fields.items():
        if loc in (name, field.alias):
            return name
    return loc
