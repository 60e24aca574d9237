"""Match window service: incremental "load more" for match history.

Failures propagate verbatim. A failed page is something the caller should
be able to see and retry, so nothing here degrades silently.
"""

import asyncio
from typing import Optional

import structlog

from rift_profile.core.config import get_global_settings
from rift_profile.core.decorators import service_error_handler
from rift_profile.core.exceptions import UpstreamUnavailableError
from rift_profile.core.validation import require_identifier, validate_window

from .gateway import RiotMatchGateway
from .models import MatchWindow, dedupe_match_ids

logger = structlog.get_logger(__name__)


class MatchWindowFetcher:
    """Fetch one page of match ids plus their details for a known puuid."""

    def __init__(
        self,
        gateway: RiotMatchGateway,
        max_count: Optional[int] = None,
        deadline_seconds: Optional[float] = None,
    ):
        """Initialize the fetcher.

        :param gateway: Riot match gateway
        :param max_count: Largest page accepted (config default if None)
        :param deadline_seconds: Deadline for one window; 0 disables it
        """
        settings = get_global_settings()
        self.gateway = gateway
        self.max_count = max_count or settings.match_window_max_count
        self.deadline_seconds = (
            settings.match_window_deadline_seconds
            if deadline_seconds is None
            else deadline_seconds
        )

    @service_error_handler("MatchWindowFetcher")
    async def fetch_window(self, puuid: str, start: int, count: int) -> MatchWindow:
        """Fetch matches ``[start, start + count)`` of a player's history.

        Repeated calls with the same arguments return the same identifiers,
        since finished matches never change. Callers appending to an existing
        list should still merge by ``match_id``.

        :param puuid: Player PUUID
        :param start: Offset into the history
        :param count: Page size
        :returns: MatchWindow with matches in upstream order
        :raises ValidationError: On a missing puuid or out-of-range window
        :raises RiotAPIError: If the id list or any match detail fails
        :raises UpstreamUnavailableError: If the deadline expires, e.g. while
            the client keeps backing off from 429s
        """
        puuid = require_identifier(puuid, "puuid")
        validate_window(start, count, self.max_count)

        if not self.deadline_seconds:
            return await self._fetch(puuid, start, count)

        try:
            async with asyncio.timeout(self.deadline_seconds):
                return await self._fetch(puuid, start, count)
        except TimeoutError as e:
            logger.warning(
                "match_window_deadline_exceeded",
                puuid=puuid,
                start=start,
                count=count,
                deadline_seconds=self.deadline_seconds,
            )
            raise UpstreamUnavailableError(
                f"match window exceeded {self.deadline_seconds}s",
                service="MatchWindowFetcher",
                operation="fetch_window",
                original_error=e,
            ) from e

    async def _fetch(self, puuid: str, start: int, count: int) -> MatchWindow:
        match_ids = await self.gateway.fetch_match_ids(puuid, start, count)
        if not match_ids:
            logger.info("match_window_empty", puuid=puuid, start=start, count=count)
            return MatchWindow(matches=[], has_more=False, next_start=start)

        # Short page means exhausted; heuristic only, the upstream sends no total
        has_more = len(match_ids) == count

        matches = await self.gateway.fetch_match_summaries(dedupe_match_ids(match_ids))

        logger.info(
            "match_window_fetched",
            puuid=puuid,
            start=start,
            count=count,
            returned=len(matches),
            has_more=has_more,
        )
        return MatchWindow(
            matches=matches,
            has_more=has_more,
            next_start=start + len(match_ids),
        )
