"""Countdown ticks emitted while waiting between attempts."""

import asyncio
import math
from dataclasses import dataclass
from typing import AsyncIterator

from http_retry.core.cancellation import CancellationToken
from http_retry.core.errors import OperationCancelled


@dataclass(frozen=True)
class CountdownTick:
    """Time left in the current wait."""

    remaining_ms: int

    @property
    def remaining_seconds(self) -> int:
        """Remaining time rounded up to whole seconds for display."""
        return math.ceil(self.remaining_ms / 1000)


async def countdown(
    duration_ms: int, period_ms: int, token: CancellationToken
) -> AsyncIterator[CountdownTick]:
    """Yield a tick now and every ``period_ms`` until ``duration_ms`` has elapsed.

    The generator only returns once the full duration has passed, so iterating it
    to the end is the wait itself. No tick is produced at or after the deadline.
    A zero duration produces no tick at all. With ``period_ms == 0`` only the
    first tick is produced. Cancelling ``token`` ends the sequence at once
    without a further tick.

    Args:
        duration_ms: Total wait in ms
        period_ms: Tick period in ms
        token: CancellationToken of the owning operation
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + duration_ms / 1000

    def remaining() -> float:
        return max(deadline - loop.time(), 0.0)

    if token.cancelled or remaining() <= 0:
        return
    yield CountdownTick(remaining_ms=round(remaining() * 1000))

    period = period_ms / 1000
    try:
        while True:
            left = remaining()
            if left <= 0:
                return
            if period <= 0 or period >= left:
                await token.sleep(left)
                return
            await token.sleep(period)
            left = remaining()
            if token.cancelled or left <= 0:
                return
            yield CountdownTick(remaining_ms=round(left * 1000))
    except OperationCancelled:
        return
