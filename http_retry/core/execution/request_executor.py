"""Request executor for http-retry.

Performs exactly one GET attempt and reports the raw transport outcome.
"""

import json
import time
from typing import Any, Optional

import httpx

from http_retry.config import config
from http_retry.core.cancellation import CancellationToken
from http_retry.core.execution.response_classifier import TransportOutcome
from http_retry.core.logging import logger

_UNDECODABLE = object()


class RequestExecutor:
    """Executes single GET attempts over httpx.

    Handles body decoding and maps network failures to status 0 outcomes.
    Follows Single Responsibility Principle: no retry decisions are made here.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None):
        """Initialize RequestExecutor.

        Args:
            client: Optional shared httpx.AsyncClient (a client per attempt if not provided)
            timeout: Per-attempt timeout in seconds when no client is provided
        """
        self.client = client
        self.timeout = timeout if timeout is not None else config.request_timeout()

    async def execute(self, url: str, token: CancellationToken) -> TransportOutcome:
        """Issue one GET request, abandoning it if ``token`` is cancelled first.

        Args:
            url: Target URL
            token: CancellationToken of the owning operation

        Returns:
            TransportOutcome (success-with-body or failure-with-status)

        Raises:
            OperationCancelled: If the token fires before the outcome resolves.
                The request is cancelled and no outcome is produced.
            Exception: Any transport fault other than httpx.TransportError
        """
        return await token.guard(self._fetch(url))

    async def _fetch(self, url: str) -> TransportOutcome:
        start_time = time.time()
        try:
            if self.client is not None:
                response = await self.client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url)
        except httpx.TransportError as e:
            logger.warning(
                "request_transport_error",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
                execution_time_ms=(time.time() - start_time) * 1000,
            )
            return TransportOutcome.failure(status=0)

        logger.debug(
            "request_completed",
            url=url,
            status=response.status_code,
            execution_time_ms=(time.time() - start_time) * 1000,
        )
        return self._to_outcome(response)

    @staticmethod
    def _to_outcome(response: httpx.Response) -> TransportOutcome:
        body = _decode_body(response)
        if response.is_success and body is not _UNDECODABLE:
            return TransportOutcome.success(response.status_code, body)
        if body is _UNDECODABLE:
            body = response.text
        return TransportOutcome.failure(response.status_code, body)


def _decode_body(response: httpx.Response) -> Any:
    """JSON body, None for an empty body, or _UNDECODABLE."""
    if not response.content:
        return None
    try:
        return json.loads(response.content)
    except ValueError:
        return _UNDECODABLE
