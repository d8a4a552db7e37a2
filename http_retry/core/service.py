"""Caller-facing retry service.

``HttpRetryService.get()`` validates options synchronously and returns the
operation's event stream.
"""

from contextlib import aclosing
from typing import Any, AsyncIterator, Dict, Optional, Union

import httpx

from http_retry.core.cancellation import CancellationToken
from http_retry.core.execution import OperationController, RequestExecutor, ResponseClassifier
from http_retry.core.retry_config import RetryConfig
from http_retry.models.events import ProgressEvent

RetryOptions = Union[RetryConfig, Dict[str, Any], None]


class HttpRetryService:
    """GET with transparent retries until the resource reports ready.

    Follows Dependency Inversion Principle: the executor (and through it the httpx
    client) can be injected.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        executor: Optional[RequestExecutor] = None,
        classifier: Optional[ResponseClassifier] = None,
    ):
        self.executor = executor or RequestExecutor(client=client)
        self.classifier = classifier or ResponseClassifier()

    def get(
        self,
        url: str,
        options: RetryOptions = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[ProgressEvent]:
        """Start a retry operation.

        Options are merged over the defaults and validated here, before the stream
        is returned and before any network activity.

        Args:
            url: Target URL
            options: RetryConfig or option mapping (camelCase or snake_case keys)
            cancel_token: Optional caller token; cancelling it ends the stream silently

        Returns:
            Async iterator of ProgressEvent, ending after the terminal event or on
            cancellation

        Raises:
            InvalidRetryOptionsError: If options are out of bounds or unknown
        """
        config = options if isinstance(options, RetryConfig) else RetryConfig.from_options(options)
        parent = cancel_token or CancellationToken()
        return self._stream(url, config, parent.child())

    async def _stream(
        self, url: str, config: RetryConfig, token: CancellationToken
    ) -> AsyncIterator[ProgressEvent]:
        controller = OperationController(
            url, config, token, executor=self.executor, classifier=self.classifier
        )
        try:
            async with aclosing(controller.run()) as events:
                async for event in events:
                    if token.cancelled:
                        break
                    yield event
        finally:
            token.cancel()
