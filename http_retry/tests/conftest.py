"""Shared test helpers for http-retry."""

from typing import Any, AsyncIterator, List

import httpx
import pytest

from http_retry.models.events import ProgressEvent

READY = (200, {"ready": True, "data": "some data"})
NOT_READY = (404, {"ready": False})
INVALID_FORMAT = (200, {"ready": False, "data": "x"})
SERVER_ERROR = (500, {"error": "500 error"})


class ScriptedBackend:
    """httpx.MockTransport handler replaying scripted responses.

    Each script entry is a (status, json_body) tuple, an httpx.Response, or an
    exception to raise. The last entry repeats once the script is exhausted.
    """

    def __init__(self, *script: Any):
        self.script = list(script)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        entry = self.script[min(len(self.requests), len(self.script)) - 1]
        if isinstance(entry, BaseException):
            raise entry
        if isinstance(entry, httpx.Response):
            return entry
        status, body = entry
        return httpx.Response(status, json=body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


async def collect(events: AsyncIterator[ProgressEvent]) -> List[ProgressEvent]:
    """Drain an event stream into a list."""
    return [event async for event in events]


@pytest.fixture
def backend():
    """Factory for ScriptedBackend instances."""
    return ScriptedBackend
