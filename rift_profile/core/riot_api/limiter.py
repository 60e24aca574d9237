"""Process-wide concurrency cap for upstream Riot API calls."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

import structlog

logger = structlog.get_logger(__name__)


class ConcurrencyLimiter:
    """Counting semaphore shared by every caller of one RiotAPIClient.

    All profile and match-window requests in the process go through the same
    instance, so the number of in-flight upstream calls never exceeds
    ``capacity`` no matter how many aggregations run at once.
    """

    def __init__(self, capacity: int = 20):
        """
        Initialize the limiter.

        Args:
            capacity: Maximum number of concurrent upstream calls (K)
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self._in_flight = 0
        self._peak_in_flight = 0

    @property
    def in_flight(self) -> int:
        """Number of permits currently held."""
        return self._in_flight

    @property
    def peak_in_flight(self) -> int:
        """Highest number of permits held at the same time since creation."""
        return self._peak_in_flight

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold one permit for the duration of the block.

        The permit is returned on every exit path, including cancellation
        while the block is suspended on network I/O.
        """
        await self._semaphore.acquire()
        self._in_flight += 1
        if self._in_flight > self._peak_in_flight:
            self._peak_in_flight = self._in_flight
        try:
            yield
        finally:
            self._in_flight -= 1
            self._semaphore.release()

    def snapshot(self) -> Dict[str, int]:
        """Current limiter state, for health reporting."""
        return {
            "capacity": self.capacity,
            "in_flight": self._in_flight,
            "peak_in_flight": self._peak_in_flight,
        }
