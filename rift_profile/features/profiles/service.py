"""Profile aggregation: Riot ID in, full profile out.

Steps run in a fixed order because each one needs the puuid (and sometimes
the summoner id) produced before it:

1. account by Riot ID          - hard failure
2. summoner by puuid           - hard failure
3. ranked entries              - soft, degrades to no rank
4. top champion mastery        - soft, degrades to an empty list
5. first window of match ids   - soft, degrades to no matches
6. match details in parallel   - soft per match, order preserved
"""

import asyncio
from typing import Awaitable, List, Optional, Tuple, TypeVar

import structlog

from rift_profile.core.config import get_global_settings
from rift_profile.core.decorators import service_error_handler
from rift_profile.core.exceptions import PlayerNotFoundError, UpstreamUnavailableError
from rift_profile.core.fallback import FallbackChain, FallbackExhausted, Strategy
from rift_profile.core.riot_api.client import RiotAPIClient
from rift_profile.core.riot_api.errors import NotFoundError, RiotAPIError
from rift_profile.core.validation import normalize_riot_id
from rift_profile.features.matches.gateway import RiotMatchGateway
from rift_profile.features.matches.models import MatchSummary, dedupe_match_ids

from .mastery import MasteryLookup
from .models import Account, MasteryEntry, PlayerIdentifier, Profile, RankedEntry, Summoner
from .transformers import (
    account_dto_to_domain,
    choose_ranked_entry,
    league_entry_dto_to_domain,
    summoner_dto_to_domain,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class ProfileAggregator:
    """Builds a :class:`Profile` from a Riot ID.

    Only account and summoner resolution can fail the whole request; every
    later step degrades to an empty or missing value.
    """

    def __init__(
        self,
        riot_client: RiotAPIClient,
        match_gateway: Optional[RiotMatchGateway] = None,
        mastery_lookup: Optional[MasteryLookup] = None,
        match_count: Optional[int] = None,
        mastery_count: Optional[int] = None,
        deadline_seconds: Optional[float] = None,
    ):
        """
        Initialize the aggregator.

        :param riot_client: Shared Riot API client
        :param match_gateway: Match gateway (built from the client if None)
        :param mastery_lookup: Mastery lookup (built from the client if None)
        :param match_count: Size of the first match window
        :param mastery_count: Number of mastery entries requested
        :param deadline_seconds: Overall deadline; 0 disables it
        """
        settings = get_global_settings()
        self.riot_client = riot_client
        self.match_gateway = match_gateway or RiotMatchGateway(riot_client)
        self.mastery_lookup = mastery_lookup or MasteryLookup(riot_client)
        self.match_count = match_count or settings.profile_match_count
        self.mastery_count = mastery_count or settings.profile_mastery_count
        self.deadline_seconds = (
            settings.profile_deadline_seconds
            if deadline_seconds is None
            else deadline_seconds
        )

    @service_error_handler("ProfileAggregator")
    async def get_profile(self, game_name: str, tag_line: str) -> Profile:
        """
        Aggregate a player's profile.

        :param game_name: Riot ID name part
        :param tag_line: Riot ID tag part
        :returns: Profile with account, summoner, rank, mastery and first matches
        :raises ValidationError: If either Riot ID part is missing
        :raises PlayerNotFoundError: If the account or summoner does not exist
        :raises UpstreamUnavailableError: If account/summoner lookup fails
            otherwise, or the deadline expires
        """
        game_name, tag_line = normalize_riot_id(game_name, tag_line)
        identifier = PlayerIdentifier(game_name=game_name, tag_line=tag_line)

        if not self.deadline_seconds:
            return await self._aggregate(identifier)

        try:
            async with asyncio.timeout(self.deadline_seconds):
                return await self._aggregate(identifier)
        except TimeoutError as e:
            logger.warning(
                "profile_deadline_exceeded",
                riot_id=str(identifier),
                deadline_seconds=self.deadline_seconds,
            )
            raise UpstreamUnavailableError(
                f"profile lookup exceeded {self.deadline_seconds}s",
                service="ProfileAggregator",
                operation="get_profile",
                original_error=e,
            ) from e

    async def _aggregate(self, identifier: PlayerIdentifier) -> Profile:
        logger.info("profile_aggregation_started", riot_id=str(identifier))

        account = await self._resolve_account(identifier)
        summoner = await self._resolve_summoner(account)

        ranked_entries = await self._resolve_ranked(summoner)
        mastery = await self._resolve_mastery(summoner)

        match_ids, page_length = await self._resolve_match_ids(account.puuid)
        matches = await self._resolve_matches(match_ids)

        profile = Profile(
            account=account,
            summoner=summoner,
            ranked_entry=choose_ranked_entry(ranked_entries),
            ranked_entries=ranked_entries,
            mastery=mastery,
            matches=matches,
            has_more_matches=page_length == self.match_count,
            next_match_start=page_length,
        )

        logger.info(
            "profile_aggregation_completed",
            puuid=account.puuid,
            ranked=profile.ranked_entry is not None,
            mastery_entries=len(mastery),
            matches=len(matches),
        )
        return profile

    async def _required(self, step: str, call: Awaitable[T], **context: object) -> T:
        """Await a hard step, mapping upstream errors to service errors."""
        try:
            return await call
        except NotFoundError as e:
            raise PlayerNotFoundError(
                "Summoner not found",
                operation=step,
                context=dict(context),
                original_error=e,
            ) from e
        except RiotAPIError as e:
            raise UpstreamUnavailableError(
                str(e),
                service="ProfileAggregator",
                operation=step,
                status_code=e.status_code,
                context=dict(context),
                original_error=e,
            ) from e

    async def _resolve_account(self, identifier: PlayerIdentifier) -> Account:
        dto = await self._required(
            "resolve_account",
            self.riot_client.get_account_by_riot_id(
                identifier.game_name, identifier.tag_line
            ),
            riot_id=str(identifier),
        )
        return account_dto_to_domain(dto)

    async def _resolve_summoner(self, account: Account) -> Summoner:
        dto = await self._required(
            "resolve_summoner",
            self.riot_client.get_summoner_by_puuid(account.puuid),
            puuid=account.puuid,
        )
        return summoner_dto_to_domain(dto)

    async def _resolve_ranked(self, summoner: Summoner) -> List[RankedEntry]:
        async def by_puuid() -> List[RankedEntry]:
            dtos = await self.riot_client.get_league_entries_by_puuid(summoner.puuid)
            return [league_entry_dto_to_domain(dto) for dto in dtos]

        async def by_summoner() -> List[RankedEntry]:
            dtos = await self.riot_client.get_league_entries_by_summoner(
                summoner.internal_id  # type: ignore[arg-type]
            )
            return [league_entry_dto_to_domain(dto) for dto in dtos]

        chain: FallbackChain[List[RankedEntry]] = FallbackChain(
            "ranked_entries",
            [
                Strategy("by_puuid", by_puuid),
                Strategy("by_summoner", by_summoner, enabled=bool(summoner.internal_id)),
            ],
        )
        try:
            return (await chain.resolve()).value
        except FallbackExhausted as e:
            logger.info("ranked_unavailable", puuid=summoner.puuid, reason=str(e))
            return []

    async def _resolve_mastery(self, summoner: Summoner) -> List[MasteryEntry]:
        chain = self.mastery_lookup.build_chain(
            summoner.puuid, summoner.internal_id, self.mastery_count
        )
        try:
            return (await chain.resolve()).value
        except FallbackExhausted as e:
            logger.info("mastery_unavailable", puuid=summoner.puuid, reason=str(e))
            return []

    async def _resolve_match_ids(self, puuid: str) -> Tuple[List[str], int]:
        """Unique ids of the first window plus the raw page length.

        The pagination cursor counts the page as the upstream returned it,
        duplicates included.
        """
        try:
            match_ids = await self.match_gateway.fetch_match_ids(
                puuid, 0, self.match_count
            )
        except RiotAPIError as e:
            logger.warning("match_ids_unavailable", puuid=puuid, error=str(e))
            return [], 0
        return dedupe_match_ids(match_ids), len(match_ids)

    async def _resolve_matches(self, match_ids: List[str]) -> List[MatchSummary]:
        return await self.match_gateway.fetch_match_summaries(
            match_ids, tolerate_failures=True
        )
