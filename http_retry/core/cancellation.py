"""Hierarchical cancellation tokens.

A token is shared by every suspension point of one operation: the in-flight request,
the backoff wait and the countdown tick timer. Cancelling a token cancels all of its
children synchronously, so no child can resume and emit after its parent is cancelled.
"""

import asyncio
from typing import Awaitable, List, Optional, TypeVar

from http_retry.core.errors import OperationCancelled

T = TypeVar("T")


class CancellationToken:
    """Cooperative cancellation signal with parent/child scopes."""

    def __init__(self, parent: Optional["CancellationToken"] = None):
        self._event = asyncio.Event()
        self._children: List["CancellationToken"] = []
        self.parent = parent
        if parent is not None:
            parent._children.append(self)
            if parent.cancelled:
                self.cancel()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def child(self) -> "CancellationToken":
        """Create a child scope cancelled together with this one."""
        return CancellationToken(parent=self)

    def cancel(self) -> None:
        """Signal cancellation to this scope and every child scope. Idempotent."""
        if self._event.is_set():
            return
        self._event.set()
        children, self._children = self._children, []
        for child in children:
            child.cancel()
        if self.parent is not None and self in self.parent._children:
            self.parent._children.remove(self)

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelled()

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless this token fires first.

        The awaitable is cancelled when the token wins the race. If both finish in
        the same loop iteration, cancellation wins.

        Raises:
            OperationCancelled: If the token is (or becomes) cancelled
        """
        task = asyncio.ensure_future(awaitable)
        if self.cancelled:
            await _discard(task)
            raise OperationCancelled()

        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            await _discard(task)
            raise
        finally:
            waiter.cancel()

        if self.cancelled:
            await _discard(task)
            raise OperationCancelled()
        return task.result()

    async def sleep(self, seconds: float) -> None:
        """Sleep for ``seconds`` or until cancelled."""
        await self.guard(asyncio.sleep(max(seconds, 0)))


async def _discard(task: "asyncio.Future") -> None:
    """Cancel an abandoned task and wait for it to unwind."""
    if not task.done():
        task.cancel()
    await asyncio.gather(task, return_exceptions=True)
