"""Retry routes for http-retry - streams an operation's progress as SSE."""

from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, StreamingResponse

from http_retry.api.dependencies import get_retry_service
from http_retry.api.utils import create_sse_event
from http_retry.core.errors import InvalidRetryOptionsError
from http_retry.core.logging import logger
from http_retry.core.service import HttpRetryService
from http_retry.models.events import ProgressEvent

router = APIRouter(tags=["Retry"])


async def _stream_events(events: AsyncIterator[ProgressEvent]) -> AsyncIterator[str]:
    """Relay ProgressEvents as SSE.

    Yields SSE events:
        - {"type": "progress", ...event fields} for every ProgressEvent
        - {"type": "complete"} once the operation reached a terminal state
    """
    try:
        async for event in events:
            yield create_sse_event("progress", event.to_dict())
        yield create_sse_event("complete", {})
    finally:
        # Client disconnects land here too; closing the stream cancels the operation
        await events.aclose()


@router.get("/retry")
async def retry_route(
    url: str = Query(..., min_length=1, description="Endpoint to poll until it reports ready"),
    retries: Optional[int] = Query(None, description="Max retry attempts after the first request (0-10)"),
    interval: Optional[int] = Query(None, description="Base delay between attempts in ms (0-60000)"),
    strategy: Optional[str] = Query(None, description="linear or exponential"),
    update_interval: Optional[int] = Query(
        None, alias="updateInterval", description="Countdown tick period in ms (0-10000)"
    ),
    retry_on_server_failure: Optional[bool] = Query(None, alias="retryOnServerFailure"),
    retry_on_unexpected_format: Optional[bool] = Query(None, alias="retryOnUnexpectedFormat"),
    live_updates: Optional[bool] = Query(None, alias="liveUpdates"),
    no_updates: Optional[bool] = Query(None, alias="noUpdates"),
    service: HttpRetryService = Depends(get_retry_service),
):
    """GET ``url`` with retries, streaming progress events.

    Returns:
        - **text/event-stream** of progress events, then a ``complete`` event
        - **422** with ``error`` when the retry options are invalid
    """
    options = {
        "retries": retries,
        "interval": interval,
        "strategy": strategy,
        "update_interval": update_interval,
        "retry_on_server_failure": retry_on_server_failure,
        "retry_on_unexpected_format": retry_on_unexpected_format,
        "live_updates": live_updates,
        "no_updates": no_updates,
    }
    options = {key: value for key, value in options.items() if value is not None}

    try:
        events = service.get(url, options)
    except InvalidRetryOptionsError as e:
        logger.warning("retry_options_rejected", url=url, error=str(e))
        return JSONResponse(status_code=422, content={"success": False, "error": str(e)})

    return StreamingResponse(
        _stream_events(events),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
