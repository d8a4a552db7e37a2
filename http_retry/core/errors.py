"""Error codes and exceptions for http-retry.

Runtime failures never cross the engine boundary as exceptions: they are reported as
``ErrorRecord`` values on the event stream. The exceptions below are for
configuration problems and internal control flow.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes carried by error events.

    - UNEXPECTED_RESPONSE_FORMAT: success status but the body is not {ready: true, data}
    - DATA_NOT_READY_YET: 404 with {ready: false}, the expected polling condition
    - UNKNOWN_ERROR: any other server or transport failure
    """

    UNEXPECTED_RESPONSE_FORMAT = "UNEXPECTED_RESPONSE_FORMAT"
    DATA_NOT_READY_YET = "DATA_NOT_READY_YET"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self]


ERROR_MESSAGES = {
    ErrorCode.UNEXPECTED_RESPONSE_FORMAT: "Unexpected response format.",
    ErrorCode.DATA_NOT_READY_YET: "Data not ready yet.",
    ErrorCode.UNKNOWN_ERROR: "Server error.",
}


class InvalidRetryOptionsError(ValueError):
    """Raised synchronously when retry options are out of bounds or malformed."""


class OperationCancelled(Exception):
    """Raised at a suspension point once the operation's token is cancelled."""


class InvalidStateTransition(RuntimeError):
    """Raised when the operation state machine is driven out of order."""
