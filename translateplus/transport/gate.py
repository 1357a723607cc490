"""Admission gate bounding the number of in-flight API calls.

Each executor owns its own gate, so several clients in one process do not
share a budget. Waiting callers suspend on a semaphore instead of polling.
The counter is only touched on the event loop thread between awaits, and
the semaphore guarantees it never exceeds the limit.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class AdmissionGate:
    """Counts in-flight requests and blocks admission at the limit."""

    def __init__(self, limit: int):
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self._limit = limit
        self._in_flight = 0
        self._semaphore = asyncio.BoundedSemaphore(limit)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def in_flight(self) -> int:
        return self._in_flight

    async def acquire(self) -> None:
        await self._semaphore.acquire()
        self._in_flight += 1

    def release(self) -> None:
        # Synchronous so it cannot be interrupted by cancellation in a finally
        self._in_flight -= 1
        self._semaphore.release()

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold one admission slot for the duration of the block."""
        await self.acquire()
        try:
            yield
        finally:
            self.release()
