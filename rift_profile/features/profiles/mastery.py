"""Champion mastery: upstream lookup with fallbacks, and the local estimate.

When both mastery endpoints fail, callers that already hold match history
can estimate mastery by counting games per champion with
:func:`compute_fallback_mastery`. That function is pure and never touches
the network.
"""

from typing import List, Optional

import structlog

from rift_profile.core.decorators import service_error_handler
from rift_profile.core.exceptions import ValidationError
from rift_profile.core.fallback import FallbackChain, FallbackExhausted, Strategy
from rift_profile.core.riot_api.client import RiotAPIClient
from rift_profile.core.riot_api.constants import Platform
from rift_profile.features.matches.models import MatchSummary

from .models import MasteryEntry
from .transformers import mastery_dto_to_domain

logger = structlog.get_logger(__name__)

FALLBACK_MASTERY_LIMIT = 40


def compute_fallback_mastery(
    matches: List[MatchSummary],
    puuid: str,
    limit: int = FALLBACK_MASTERY_LIMIT,
) -> List[MasteryEntry]:
    """Estimate mastery from the champions ``puuid`` played in ``matches``.

    Champions are ranked by game count, most played first. Ties keep the
    order in which the champion first appears in ``matches``.

    :param matches: Match history in display order
    :param puuid: Player whose games are counted
    :param limit: Maximum number of entries returned
    :returns: Synthetic mastery entries carrying ``games`` only
    """
    counts: dict[int, int] = {}
    for match in matches:
        participant = match.participant_for(puuid)
        if participant is None:
            continue
        counts[participant.champion_id] = counts.get(participant.champion_id, 0) + 1

    # dict keeps first-seen order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        MasteryEntry(champion_id=champion_id, games=games)
        for champion_id, games in ranked[:limit]
    ]


class MasteryLookup:
    """Top-N champion mastery by puuid and/or encrypted summoner id."""

    def __init__(self, riot_client: RiotAPIClient):
        """
        :param riot_client: Shared Riot API client
        """
        self.riot_client = riot_client

    def build_chain(
        self,
        puuid: Optional[str],
        summoner_id: Optional[str],
        count: int,
        platform: Optional[Platform] = None,
        resolve_summoner_id: bool = False,
    ) -> FallbackChain[List[MasteryEntry]]:
        """Ordered mastery strategies for the ids at hand.

        :param puuid: Player PUUID, if known
        :param summoner_id: Encrypted summoner id, if known
        :param count: Number of champions requested
        :param platform: Platform routing value
        :param resolve_summoner_id: Add a last strategy that looks the summoner
            id up from the puuid when none was given
        """

        async def by_puuid() -> List[MasteryEntry]:
            dtos = await self.riot_client.get_top_masteries_by_puuid(
                puuid, count, platform  # type: ignore[arg-type]
            )
            return [mastery_dto_to_domain(dto) for dto in dtos]

        async def by_summoner() -> List[MasteryEntry]:
            dtos = await self.riot_client.get_top_masteries_by_summoner(
                summoner_id, count, platform  # type: ignore[arg-type]
            )
            return [mastery_dto_to_domain(dto) for dto in dtos]

        async def by_resolved_summoner() -> List[MasteryEntry]:
            summoner = await self.riot_client.get_summoner_by_puuid(
                puuid, platform  # type: ignore[arg-type]
            )
            if not summoner.id:
                raise ValueError("summoner id not available for puuid")
            dtos = await self.riot_client.get_top_masteries_by_summoner(
                summoner.id, count, platform
            )
            return [mastery_dto_to_domain(dto) for dto in dtos]

        return FallbackChain(
            "champion_mastery",
            [
                Strategy("by_puuid", by_puuid, enabled=bool(puuid)),
                Strategy("by_summoner", by_summoner, enabled=bool(summoner_id)),
                Strategy(
                    "by_resolved_summoner",
                    by_resolved_summoner,
                    enabled=resolve_summoner_id and bool(puuid) and not summoner_id,
                ),
            ],
        )

    @service_error_handler("MasteryLookup")
    async def get_top_masteries(
        self,
        summoner_id: Optional[str] = None,
        puuid: Optional[str] = None,
        count: int = 5,
        platform: Optional[str] = None,
    ) -> List[MasteryEntry]:
        """Top-N mastery, trying every applicable endpoint before giving up.

        An empty result means every endpoint failed; callers holding match
        history should then use :func:`compute_fallback_mastery`.

        :param summoner_id: Encrypted summoner id
        :param puuid: Player PUUID
        :param count: Number of champions
        :param platform: Platform name, case-insensitive (NA1 if unknown)
        :raises ValidationError: If neither id is given or count is not positive
        """
        summoner_id = (summoner_id or "").strip() or None
        puuid = (puuid or "").strip() or None
        if not summoner_id and not puuid:
            raise ValidationError("summonerId or puuid is required", field="puuid")
        if count < 1:
            raise ValidationError("count must be positive", field="count", value=count)

        chain = self.build_chain(
            puuid,
            summoner_id,
            count,
            Platform.parse(platform),
            resolve_summoner_id=True,
        )
        try:
            result = await chain.resolve()
        except FallbackExhausted as e:
            logger.warning("mastery_unavailable", puuid=puuid, reason=str(e))
            return []
        return result.value
