"""Response classifier for http-retry.

Classifies raw transport outcomes into categories for retry decisions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from http_retry.core.errors import ErrorCode

_MISSING = object()


class ResponseKind(str, Enum):
    """Response categories for classification and retry decisions.

    - READY: 200 with {ready: true, data}
    - NOT_READY: 404 with {ready: false}, always retryable
    - FORMAT_INVALID: success status with an unexpected body
    - SERVER_FAILURE: anything else (5xx, network errors, malformed 404 bodies)
    """

    READY = "ready"
    NOT_READY = "not_ready"
    FORMAT_INVALID = "format_invalid"
    SERVER_FAILURE = "server_failure"


@dataclass(frozen=True)
class TransportOutcome:
    """Result of one GET attempt as seen by the transport.

    ``ok`` mirrors the transport's success channel: true for a 2xx response whose
    body could be decoded. ``status`` is 0 for network-level failures.
    """

    ok: bool
    status: int
    body: Any = None

    @classmethod
    def success(cls, status: int, body: Any) -> "TransportOutcome":
        return cls(ok=True, status=status, body=body)

    @classmethod
    def failure(cls, status: int, body: Any = None) -> "TransportOutcome":
        return cls(ok=False, status=status, body=body)


@dataclass(frozen=True)
class Classification:
    """Classified outcome. ``data`` is only meaningful for READY."""

    kind: ResponseKind
    data: Any = None

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return _ERROR_CODES.get(self.kind)


_ERROR_CODES = {
    ResponseKind.NOT_READY: ErrorCode.DATA_NOT_READY_YET,
    ResponseKind.FORMAT_INVALID: ErrorCode.UNEXPECTED_RESPONSE_FORMAT,
    ResponseKind.SERVER_FAILURE: ErrorCode.UNKNOWN_ERROR,
}


class ResponseClassifier:
    """Classifies transport outcomes into READY, NOT_READY, FORMAT_INVALID or SERVER_FAILURE.

    Static methods for stateless classification. Every outcome maps to exactly one
    category.
    """

    @staticmethod
    def classify(outcome: TransportOutcome) -> Classification:
        """Classify a transport outcome.

        Args:
            outcome: TransportOutcome from RequestExecutor

        Returns:
            Classification with kind (and data when READY)
        """
        if outcome.ok:
            data = ResponseClassifier._ready_data(outcome)
            if data is not _MISSING:
                return Classification(ResponseKind.READY, data)
            return Classification(ResponseKind.FORMAT_INVALID)

        if ResponseClassifier._is_not_ready(outcome):
            return Classification(ResponseKind.NOT_READY)

        return Classification(ResponseKind.SERVER_FAILURE)

    @staticmethod
    def _ready_data(outcome: TransportOutcome) -> Any:
        body = outcome.body
        if outcome.status != 200 or not isinstance(body, dict):
            return _MISSING
        # `is True` on purpose: 1 or "true" are not ready markers
        if body.get("ready") is not True or "data" not in body:
            return _MISSING
        return body["data"]

    @staticmethod
    def _is_not_ready(outcome: TransportOutcome) -> bool:
        body = outcome.body
        return (
            outcome.status == 404
            and isinstance(body, dict)
            and body.get("ready", _MISSING) is False
        )
