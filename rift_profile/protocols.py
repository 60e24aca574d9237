"""Protocol definitions for injectable infrastructure."""

from contextlib import AbstractAsyncContextManager
from typing import Dict, Protocol, runtime_checkable


@runtime_checkable
class ConcurrencyLimiterProtocol(Protocol):
    """What RiotAPIClient needs from a concurrency limiter.

    ``slot()`` must release its permit on every exit path, cancellation
    included.
    """

    capacity: int

    @property
    def in_flight(self) -> int:
        """Number of permits currently held."""
        ...

    def slot(self) -> AbstractAsyncContextManager[None]:
        """Hold one permit for the duration of an ``async with`` block."""
        ...

    def snapshot(self) -> Dict[str, int]:
        """Current state, for health reporting."""
        ...
