"""Ordered fallback strategies.

A :class:`FallbackChain` tries named strategies one after another and stops
at the first that succeeds. Ranked and mastery resolution use it to walk
from the puuid-keyed endpoint to the summoner-id-keyed one; asset
resolution uses it to walk CDN candidates.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, List, Sequence, Tuple, Type, TypeVar

import structlog

from .riot_api.errors import RiotAPIError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Strategy(Generic[T]):
    """One way of obtaining a value.

    A disabled strategy (missing prerequisite, e.g. no summoner id) is skipped
    without being attempted.
    """

    name: str
    run: Callable[[], Awaitable[T]]
    enabled: bool = True


@dataclass(frozen=True)
class FallbackResult(Generic[T]):
    """Value produced by the first successful strategy."""

    value: T
    strategy: str


class FallbackExhausted(Exception):
    """Every enabled strategy failed, or none was enabled."""

    def __init__(self, chain: str):
        super().__init__(chain)
        self.chain = chain
        self.failures: List[Tuple[str, BaseException]] = []
        self.skipped: List[str] = []

    def __str__(self) -> str:
        if not self.failures:
            return f"{self.chain}: no strategy was applicable (skipped {self.skipped})"
        tried = ", ".join(f"{name}: {err}" for name, err in self.failures)
        return f"{self.chain}: all strategies failed ({tried})"


class FallbackChain(Generic[T]):
    """Try strategies in order; first success short-circuits."""

    def __init__(
        self,
        name: str,
        strategies: Sequence[Strategy[T]],
        catch: Tuple[Type[BaseException], ...] = (RiotAPIError, ValueError),
    ):
        """
        Initialize the chain.

        Args:
            name: Chain name used in logs
            strategies: Strategies in priority order
            catch: Exception types that move on to the next strategy;
                anything else propagates immediately
        """
        self.name = name
        self.strategies = list(strategies)
        self.catch = catch

    async def resolve(self) -> FallbackResult[T]:
        """
        Run the chain.

        Returns:
            FallbackResult with the value and the name of the strategy that produced it

        Raises:
            FallbackExhausted: If no strategy produced a value
        """
        exhausted = FallbackExhausted(chain=self.name)

        for strategy in self.strategies:
            if not strategy.enabled:
                exhausted.skipped.append(strategy.name)
                continue

            try:
                value = await strategy.run()
            except self.catch as e:
                logger.debug(
                    "Fallback strategy failed",
                    chain=self.name,
                    strategy=strategy.name,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                exhausted.failures.append((strategy.name, e))
                continue

            if exhausted.failures:
                logger.info(
                    "Fallback strategy succeeded after earlier failures",
                    chain=self.name,
                    strategy=strategy.name,
                    failed=[name for name, _ in exhausted.failures],
                )
            return FallbackResult(value=value, strategy=strategy.name)

        raise exhausted
