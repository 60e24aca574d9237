"""Anti-Corruption Layer (Gateway) for Riot Match API.

This module provides isolation between Riot API and our domain model: it
turns match ids and match payloads into :class:`MatchSummary` objects and
owns the parallel, order-preserving detail fetch.
"""

import asyncio
import time
from typing import TYPE_CHECKING, List

import structlog

from rift_profile.core.riot_api.errors import RiotAPIError

from .models import MatchSummary
from .transformers import match_dto_to_summary

if TYPE_CHECKING:
    from rift_profile.core.riot_api.client import RiotAPIClient

logger = structlog.get_logger(__name__)


class RiotMatchGateway:
    """Gateway to Riot Match API - Anti-Corruption Layer.

    Responsibilities:
    - Hide Riot API complexity from domain
    - Transform Riot DTOs to domain models
    - Fan out match detail calls while keeping request order
    """

    def __init__(self, riot_client: "RiotAPIClient"):
        """Initialize gateway with Riot API client.

        :param riot_client: Riot API client instance
        """
        self.riot_client = riot_client

    async def fetch_match_ids(self, puuid: str, start: int, count: int) -> List[str]:
        """Fetch one page of a player's match ids, newest first.

        :param puuid: Player PUUID
        :param start: Offset into the history
        :param count: Page size
        :returns: List of match IDs
        :raises: RiotAPIError: If API call fails
        """
        match_ids = await self.riot_client.get_match_ids(puuid, start=start, count=count)

        logger.debug(
            "match_ids_fetched",
            puuid=puuid,
            start=start,
            requested=count,
            returned=len(match_ids),
        )
        return match_ids

    async def fetch_match_summary(self, match_id: str) -> MatchSummary:
        """Fetch one match and convert it to the domain model.

        :param match_id: Riot match identifier
        :returns: MatchSummary domain object
        :raises: RiotAPIError: If API call fails
        """
        match_dto = await self.riot_client.get_match(match_id)
        return match_dto_to_summary(match_dto)

    async def fetch_match_summaries(
        self, match_ids: List[str], tolerate_failures: bool = False
    ) -> List[MatchSummary]:
        """Fetch match details in parallel, returned in ``match_ids`` order.

        Every call goes through the client's shared limiter, so a large batch
        waits for permits instead of exceeding the global cap.

        :param match_ids: Identifiers in display order
        :param tolerate_failures: Drop matches that fail instead of raising
        :returns: Summaries in the same relative order as ``match_ids``
        :raises: RiotAPIError: First failure, when ``tolerate_failures`` is False
        """
        if not match_ids:
            return []

        started = time.perf_counter()

        if tolerate_failures:
            summaries = await self._gather_tolerant(match_ids)
        else:
            summaries = await self._gather_strict(match_ids)

        logger.info(
            "match_details_fetched",
            requested=len(match_ids),
            fetched=len(summaries),
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return summaries

    async def _gather_strict(self, match_ids: List[str]) -> List[MatchSummary]:
        tasks = [
            asyncio.ensure_future(self.fetch_match_summary(match_id))
            for match_id in match_ids
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            # Stop the siblings of the failed fetch before propagating
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _gather_tolerant(self, match_ids: List[str]) -> List[MatchSummary]:
        results = await asyncio.gather(
            *(self.fetch_match_summary(match_id) for match_id in match_ids),
            return_exceptions=True,
        )

        summaries: List[MatchSummary] = []
        for match_id, result in zip(match_ids, results):
            if isinstance(result, (RiotAPIError, ValueError)):
                logger.warning(
                    "match_detail_dropped",
                    match_id=match_id,
                    error_type=type(result).__name__,
                    error=str(result),
                )
                continue
            if isinstance(result, BaseException):
                raise result
            summaries.append(result)
        return summaries
