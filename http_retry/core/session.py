"""Retry session: one caller context with at most one live operation."""

from typing import AsyncIterator, Optional

from http_retry.core.cancellation import CancellationToken
from http_retry.core.logging import logger
from http_retry.core.retry_config import RetryConfig
from http_retry.core.service import HttpRetryService, RetryOptions
from http_retry.models.events import ProgressEvent


class RetrySession:
    """Holds the state a progress display needs for one URL.

    Starting a new load cancels the previous operation before the new one can emit
    anything. ``close()`` cancels every operation started by the session.
    """

    def __init__(
        self,
        url: str,
        options: RetryOptions = None,
        service: Optional[HttpRetryService] = None,
        description: str = "",
    ):
        self.url = url
        self.options = options
        self.description = description
        self.service = service or HttpRetryService()

        self.data = None
        self.error_message = ""
        # An entire retry operation is in progress
        self.operation_in_progress = False
        # A single HTTP request is in flight
        self.request_loading = False

        self._root = CancellationToken()
        self._current: Optional[CancellationToken] = None

    @property
    def closed(self) -> bool:
        return self._root.cancelled

    def load(self) -> AsyncIterator[ProgressEvent]:
        """Cancel any running operation and start a new one.

        Raises:
            InvalidRetryOptionsError: If the session options are invalid
            RuntimeError: If the session was closed
        """
        if self.closed:
            raise RuntimeError("Retry session is closed")

        self._cancel_current()
        options = self.options
        if not isinstance(options, RetryConfig):
            options = RetryConfig.from_options(options)

        token = self._root.child()
        self._current = token
        self.operation_in_progress = True
        stream = self.service.get(self.url, options, token)
        return self._track(stream, token)

    async def run(self) -> Optional[ProgressEvent]:
        """Load and consume the whole stream. Returns the last event, if any."""
        last = None
        async for event in self.load():
            last = event
        return last

    def stop(self) -> None:
        """Abort the running operation and clear the displayed result."""
        self._cancel_current()
        self.data = None
        self.error_message = ""

    def close(self) -> None:
        """Cancel everything. The session cannot be reused afterwards."""
        self._root.cancel()
        self._current = None
        self._reset_flags()

    def _cancel_current(self) -> None:
        if self._current is not None and not self._current.cancelled:
            logger.info(
                "session_operation_superseded", url=self.url, description=self.description
            )
            self._current.cancel()
        self._current = None
        self._reset_flags()

    def _reset_flags(self) -> None:
        self.operation_in_progress = False
        self.request_loading = False

    async def _track(
        self, stream: AsyncIterator[ProgressEvent], token: CancellationToken
    ) -> AsyncIterator[ProgressEvent]:
        try:
            async for event in stream:
                if token.cancelled:
                    break
                self._apply(event)
                yield event
        finally:
            await stream.aclose()
            # Detach the finished operation from the session scope
            token.cancel()
            if self._current is token:
                self._current = None
                self._reset_flags()

    def _apply(self, event: ProgressEvent) -> None:
        if event.loading is not None:
            self.request_loading = event.loading

        if event.ready:
            self.data = event.data
            self.error_message = ""
            return

        if event.error is not None:
            self.error_message = " ".join(
                part for part in (event.error.error_message, event.error.message) if part
            )
        self.data = None
