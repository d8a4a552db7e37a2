"""Execution module for http-retry.

Provides the retry engine: classification, backoff, countdowns, single attempts and
the operation state machine.
"""

from http_retry.core.execution.backoff import calculate_delay
from http_retry.core.execution.operation_controller import (
    AttemptRecord,
    OperationController,
    OperationState,
)
from http_retry.core.execution.request_executor import RequestExecutor
from http_retry.core.execution.response_classifier import (
    Classification,
    ResponseClassifier,
    ResponseKind,
    TransportOutcome,
)
from http_retry.core.execution.update_emitter import CountdownTick, countdown

__all__ = [
    "AttemptRecord",
    "Classification",
    "CountdownTick",
    "OperationController",
    "OperationState",
    "RequestExecutor",
    "ResponseClassifier",
    "ResponseKind",
    "TransportOutcome",
    "calculate_delay",
    "countdown",
]
