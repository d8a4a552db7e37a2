"""Unit tests for RequestExecutor."""

import asyncio

import httpx
import pytest

from http_retry.core.cancellation import CancellationToken
from http_retry.core.errors import OperationCancelled
from http_retry.core.execution.request_executor import RequestExecutor
from http_retry.tests.conftest import ScriptedBackend

URL = "http://backend.test/resource"


class TestRequestOutcomes:
    """Test mapping of HTTP responses to transport outcomes."""

    @pytest.mark.asyncio
    async def test_success_outcome(self):
        backend = ScriptedBackend((200, {"ready": True, "data": "x"}))

        async with backend.client() as client:
            outcome = await RequestExecutor(client=client).execute(URL, CancellationToken())

        assert outcome.ok is True
        assert outcome.status == 200
        assert outcome.body == {"ready": True, "data": "x"}
        assert backend.calls == 1
        assert backend.requests[0].method == "GET"
        assert str(backend.requests[0].url) == URL

    @pytest.mark.asyncio
    async def test_not_found_outcome_keeps_body(self):
        backend = ScriptedBackend((404, {"ready": False}))

        async with backend.client() as client:
            outcome = await RequestExecutor(client=client).execute(URL, CancellationToken())

        assert outcome.ok is False
        assert outcome.status == 404
        assert outcome.body == {"ready": False}

    @pytest.mark.asyncio
    async def test_server_error_outcome(self):
        backend = ScriptedBackend((500, {"error": "500 error"}))

        async with backend.client() as client:
            outcome = await RequestExecutor(client=client).execute(URL, CancellationToken())

        assert outcome.ok is False
        assert outcome.status == 500

    @pytest.mark.asyncio
    async def test_empty_success_body(self):
        backend = ScriptedBackend(httpx.Response(200))

        async with backend.client() as client:
            outcome = await RequestExecutor(client=client).execute(URL, CancellationToken())

        assert outcome.ok is True
        assert outcome.body is None

    @pytest.mark.asyncio
    async def test_undecodable_success_body_is_failure(self):
        backend = ScriptedBackend(httpx.Response(200, text="<html>oops</html>"))

        async with backend.client() as client:
            outcome = await RequestExecutor(client=client).execute(URL, CancellationToken())

        assert outcome.ok is False
        assert outcome.status == 200
        assert outcome.body == "<html>oops</html>"

    @pytest.mark.asyncio
    async def test_network_error_maps_to_status_zero(self):
        backend = ScriptedBackend(httpx.ConnectError("connection refused"))

        async with backend.client() as client:
            outcome = await RequestExecutor(client=client).execute(URL, CancellationToken())

        assert outcome.ok is False
        assert outcome.status == 0

    @pytest.mark.asyncio
    async def test_unexpected_fault_propagates(self):
        backend = ScriptedBackend(RuntimeError("transport bug"))

        async with backend.client() as client:
            with pytest.raises(RuntimeError, match="transport bug"):
                await RequestExecutor(client=client).execute(URL, CancellationToken())


class TestRequestCancellation:
    """Test cancelled attempts produce no outcome."""

    @pytest.mark.asyncio
    async def test_cancel_before_execute(self):
        backend = ScriptedBackend((200, {"ready": True, "data": "x"}))
        token = CancellationToken()
        token.cancel()

        async with backend.client() as client:
            with pytest.raises(OperationCancelled):
                await RequestExecutor(client=client).execute(URL, token)

        assert backend.calls == 0

    @pytest.mark.asyncio
    async def test_cancel_in_flight_request(self):
        """Test the in-flight request is abandoned when the token fires."""
        completed = []

        async def slow_handler(request):
            await asyncio.sleep(10)
            completed.append(request)
            return httpx.Response(200, json={"ready": True, "data": "late"})

        token = CancellationToken()
        asyncio.get_running_loop().call_later(0.02, token.cancel)

        async with httpx.AsyncClient(transport=httpx.MockTransport(slow_handler)) as client:
            with pytest.raises(OperationCancelled):
                await RequestExecutor(client=client).execute(URL, token)

        assert completed == []
