"""Transformers from Riot account/summoner/league/mastery DTOs to profile models."""

from typing import List, Optional

from rift_profile.core.enums import MasterySource
from rift_profile.core.riot_api.constants import RANKED_QUEUE_PREFERENCE
from rift_profile.core.riot_api.models import (
    AccountDTO,
    ChampionMasteryDTO,
    LeagueEntryDTO,
    SummonerDTO,
)

from .models import Account, MasteryEntry, Profile, RankedEntry, Summoner
from .schemas import ProfileResponse


def account_dto_to_domain(dto: AccountDTO) -> Account:
    return Account(puuid=dto.puuid, game_name=dto.game_name, tag_line=dto.tag_line)


def summoner_dto_to_domain(dto: SummonerDTO) -> Summoner:
    return Summoner(
        puuid=dto.puuid,
        internal_id=dto.id or None,
        summoner_level=dto.summoner_level,
        profile_icon_id=dto.profile_icon_id,
    )


def league_entry_dto_to_domain(dto: LeagueEntryDTO) -> RankedEntry:
    return RankedEntry(
        queue_type=dto.queue_type,
        tier=dto.tier,
        division=dto.rank,
        league_points=dto.league_points,
        wins=dto.wins,
        losses=dto.losses,
    )


def mastery_dto_to_domain(dto: ChampionMasteryDTO) -> MasteryEntry:
    return MasteryEntry(
        champion_id=dto.champion_id,
        champion_points=dto.champion_points,
        champion_level=dto.champion_level,
        chest_granted=dto.chest_granted,
    )


def choose_ranked_entry(entries: List[RankedEntry]) -> Optional[RankedEntry]:
    """Pick the entry that represents the player: solo queue, then flex, then any.

    :param entries: Every ranked entry returned upstream
    :returns: Preferred entry, or None when the player is unranked
    """
    for queue_type in RANKED_QUEUE_PREFERENCE:
        for entry in entries:
            if entry.queue_type == queue_type:
                return entry
    return entries[0] if entries else None


def profile_to_response(profile: Profile) -> ProfileResponse:
    """Transform a Profile into the API response.

    When upstream mastery came back empty but match history exists, the
    response carries the mastery estimated from games played.

    :param profile: Aggregated profile
    :returns: Profile response schema for API
    """
    from .mastery import compute_fallback_mastery

    mastery = profile.mastery
    source = MasterySource.UPSTREAM if mastery else MasterySource.NONE
    if not mastery and profile.matches:
        mastery = compute_fallback_mastery(profile.matches, profile.puuid)
        if mastery:
            source = MasterySource.MATCH_HISTORY

    return ProfileResponse(
        account=profile.account,
        summoner=profile.summoner,
        ranked_entry=profile.ranked_entry,
        ranked_entries=profile.ranked_entries,
        mastery=mastery,
        mastery_source=source,
        matches=profile.matches,
        has_more=profile.has_more_matches,
        next_start=profile.next_match_start,
    )
