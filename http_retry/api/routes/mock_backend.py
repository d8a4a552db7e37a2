"""Mock backend routes for manual testing of retry behavior.

Each route reproduces one case of the backend wire contract:
ready (200 {ready: true, data}), not ready (404 {ready: false}), and the failure
shapes that must not be mistaken for either.
"""

import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from http_retry.config import config

router = APIRouter(prefix="/mock", tags=["Mock Backend"])

MOCK_DATA = "Welcome to the mock backend"


@router.get("/valid-data")
async def valid_data():
    """Ready on the first request."""
    return JSONResponse(status_code=200, content={"ready": True, "data": MOCK_DATA})


@router.get("/data-not-ready")
async def data_not_ready():
    """Never ready."""
    return JSONResponse(status_code=404, content={"ready": False})


@router.get("/data-not-ready-then-ready")
async def data_not_ready_then_ready(request: Request):
    """Not ready until ``HTTP_RETRY_MOCK_READY_AFTER`` seconds after the first request."""
    state = request.app.state
    now = time.monotonic()
    first_request_time = getattr(state, "mock_first_request_time", None)

    if first_request_time is None:
        state.mock_first_request_time = now
        return JSONResponse(status_code=404, content={"ready": False})

    if now - first_request_time >= config.mock_ready_after():
        return JSONResponse(status_code=200, content={"ready": True, "data": MOCK_DATA})
    return JSONResponse(status_code=404, content={"ready": False})


@router.get("/invalid-format-404")
async def invalid_format_404():
    """Looks ready but carries a 404: a server failure, not a not-ready signal."""
    return JSONResponse(status_code=404, content={"ready": True, "data": MOCK_DATA})


@router.get("/invalid-format-200")
async def invalid_format_200():
    """Success status with an unexpected body."""
    return JSONResponse(status_code=200, content={"ready": False, "data": MOCK_DATA})


@router.get("/server-error-500")
async def server_error_500():
    return JSONResponse(status_code=500, content={"error": "500 error"})
