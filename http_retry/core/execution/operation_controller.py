"""Operation controller for http-retry.

Drives one retry operation: request, classify, back off, repeat, and publishes
ProgressEvents until a terminal state is reached.
"""

import time
import uuid
from contextlib import aclosing
from dataclasses import dataclass, field
from enum import Enum
from typing import AsyncIterator, Optional

from http_retry.core.cancellation import CancellationToken
from http_retry.core.errors import ErrorCode, InvalidStateTransition, OperationCancelled
from http_retry.core.execution.backoff import calculate_delay
from http_retry.core.execution.request_executor import RequestExecutor
from http_retry.core.execution.response_classifier import ResponseClassifier, ResponseKind
from http_retry.core.execution.update_emitter import CountdownTick, countdown
from http_retry.core.logging import get_logger
from http_retry.core.retry_config import RetryConfig
from http_retry.models.events import ErrorRecord, ProgressEvent


class OperationState(str, Enum):
    """Lifecycle of one operation. COMPLETED and CANCELLED are terminal."""

    IDLE = "idle"
    REQUESTING = "requesting"
    AWAITING_RETRY = "awaiting_retry"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({OperationState.COMPLETED, OperationState.CANCELLED})

_TRANSITIONS = {
    OperationState.IDLE: {OperationState.REQUESTING, OperationState.CANCELLED},
    OperationState.REQUESTING: {
        OperationState.AWAITING_RETRY,
        OperationState.COMPLETED,
        OperationState.CANCELLED,
    },
    OperationState.AWAITING_RETRY: {OperationState.REQUESTING, OperationState.CANCELLED},
    OperationState.COMPLETED: set(),
    OperationState.CANCELLED: set(),
}


@dataclass
class AttemptRecord:
    """Per-operation counters. Owned by a single run."""

    attempt_index: int = 0
    start_time: float = field(default_factory=time.monotonic)

    def elapsed_seconds(self) -> float:
        return time.monotonic() - self.start_time


class OperationController:
    """Runs the retry state machine for one GET operation.

    Components are injectable for testing:
    - executor: RequestExecutor performing each attempt
    - classifier: ResponseClassifier mapping outcomes to ResponseKind

    A controller is single-use: ``run()`` may be iterated once.
    """

    def __init__(
        self,
        url: str,
        config: RetryConfig,
        token: CancellationToken,
        executor: Optional[RequestExecutor] = None,
        classifier: Optional[ResponseClassifier] = None,
    ):
        self.url = url
        self.config = config
        self.token = token
        self.executor = executor or RequestExecutor()
        self.classifier = classifier or ResponseClassifier()
        self.state = OperationState.IDLE
        self.record = AttemptRecord()
        self.operation_id = uuid.uuid4().hex[:12]
        self.log = get_logger(operation_id=self.operation_id, url=url)

    @property
    def attempts(self) -> int:
        """Retries performed so far."""
        return self.record.attempt_index

    def _transition(self, new_state: OperationState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise InvalidStateTransition(f"Cannot move from {self.state.value} to {new_state.value}")
        self.log.debug("state_changed", old_state=self.state.value, new_state=new_state.value)
        self.state = new_state

    async def run(self) -> AsyncIterator[ProgressEvent]:
        """Execute the operation, yielding ProgressEvents.

        Yields:
        - {"loading": true} before every request (unless no_updates)
        - countdown or "Attempt N of M" error events while waiting (unless no_updates)
        - one terminal event: ready data, a final error, or a max-retries error

        Nothing is yielded once the token is cancelled.
        """
        self._transition(OperationState.REQUESTING)
        self.record = AttemptRecord()
        self.log.info(
            "operation_started",
            retries=self.config.retries,
            interval=self.config.interval,
            strategy=self.config.strategy.value,
        )

        try:
            while True:
                if not self.config.no_updates:
                    yield ProgressEvent.loading_started()

                try:
                    outcome = await self.executor.execute(self.url, self.token)
                except OperationCancelled:
                    raise
                except Exception as e:
                    # Faults outside the classification table are never retried
                    self.log.exception("transport_fault", error=str(e), error_type=type(e).__name__)
                    self._transition(OperationState.COMPLETED)
                    yield ProgressEvent.failure(ErrorRecord.for_code(ErrorCode.UNKNOWN_ERROR))
                    return

                classification = self.classifier.classify(outcome)
                self.log.info(
                    "attempt_classified",
                    attempt=self.record.attempt_index,
                    status=outcome.status,
                    kind=classification.kind.value,
                )

                if classification.kind == ResponseKind.READY:
                    self._complete("ready")
                    yield ProgressEvent.ready_with(classification.data)
                    return

                error_code = classification.error_code
                if not self._is_retryable(classification.kind):
                    self._complete("failed", error_code=error_code.value)
                    yield ProgressEvent.failure(ErrorRecord.for_code(error_code))
                    return

                if self.record.attempt_index >= self.config.retries:
                    yield self._max_retries_error(error_code)
                    return

                delay = calculate_delay(
                    self.config.interval, self.record.attempt_index, self.config.strategy
                )
                self._transition(OperationState.AWAITING_RETRY)
                retry_number = self.record.attempt_index
                self.record.attempt_index += 1
                self.log.info(
                    "retry_scheduled",
                    attempt=self.record.attempt_index,
                    delay_ms=delay,
                    error_code=error_code.value,
                )

                async with aclosing(self._wait(error_code, delay, retry_number)) as updates:
                    async for event in updates:
                        yield event
                self.token.raise_if_cancelled()
                self._transition(OperationState.REQUESTING)
        except OperationCancelled:
            self._transition(OperationState.CANCELLED)
            self.log.info("operation_cancelled", attempts=self.record.attempt_index)
        finally:
            # Closed by the consumer mid-run
            if self.state not in TERMINAL_STATES:
                self.state = OperationState.CANCELLED

    def _is_retryable(self, kind: ResponseKind) -> bool:
        if kind == ResponseKind.NOT_READY:
            return True
        if kind == ResponseKind.FORMAT_INVALID:
            return self.config.retry_on_unexpected_format
        if kind == ResponseKind.SERVER_FAILURE:
            return self.config.retry_on_server_failure
        return False

    def _complete(self, outcome: str, **context) -> None:
        self._transition(OperationState.COMPLETED)
        self.log.info(
            "operation_completed",
            outcome=outcome,
            attempts=self.record.attempt_index,
            total_delay=round(self.record.elapsed_seconds(), 3),
            **context,
        )

    async def _wait(
        self, error_code: ErrorCode, delay: int, retry_number: int
    ) -> AsyncIterator[ProgressEvent]:
        """Wait ``delay`` ms, emitting the configured progress updates.

        ``retry_number`` is the attempt index the wait was scheduled from, so the
        first wait reports ``Attempt 0 of M``.
        """
        if self.config.no_updates:
            await self.token.sleep(delay / 1000)
            return

        if not self.config.live_updates:
            yield ProgressEvent.failure(
                ErrorRecord.for_code(
                    error_code,
                    message=f"Attempt {retry_number} of {self.config.retries}",
                    attempts=retry_number,
                    max_retries=self.config.retries,
                )
            )
            await self.token.sleep(delay / 1000)
            return

        async with aclosing(countdown(delay, self.config.update_interval, self.token)) as ticks:
            async for tick in ticks:
                yield self._countdown_event(error_code, retry_number, tick)

    def _countdown_event(
        self, error_code: ErrorCode, retry_number: int, tick: CountdownTick
    ) -> ProgressEvent:
        return ProgressEvent.failure(
            ErrorRecord.for_code(
                error_code,
                message=(
                    f"Retrying in {tick.remaining_seconds} seconds... "
                    f"(Attempt {retry_number} of {self.config.retries})"
                ),
                attempts=retry_number,
                max_retries=self.config.retries,
                delay=tick.remaining_ms,
            )
        )

    def _max_retries_error(self, error_code: ErrorCode) -> ProgressEvent:
        total_delay = self.record.elapsed_seconds()
        self._complete("max_retries", error_code=error_code.value)
        return ProgressEvent.failure(
            ErrorRecord.for_code(
                error_code,
                message=(
                    f"Max retries reached. Retried {self.config.retries} times "
                    f"over {total_delay:.0f} seconds."
                ),
                attempts=self.record.attempt_index,
                max_retries=self.config.retries,
                total_delay=round(total_delay, 3),
            )
        )
