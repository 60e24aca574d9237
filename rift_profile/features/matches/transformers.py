"""Transformers from Riot match DTOs to match domain models."""

from rift_profile.core.riot_api.models import MatchDTO, ParticipantDTO

from .models import MatchSummary, Participant


def participant_dto_to_domain(dto: ParticipantDTO) -> Participant:
    """Translate one participant row.

    :param dto: Riot API participant data
    :returns: Participant domain object
    """
    spells = [s for s in (dto.summoner1_id, dto.summoner2_id) if s is not None]
    items = [dto.item0, dto.item1, dto.item2, dto.item3, dto.item4, dto.item5, dto.item6]

    return Participant(
        puuid=dto.puuid,
        riot_id_game_name=dto.riot_id_game_name or dto.summoner_name,
        riot_id_tagline=dto.riot_id_tagline,
        team_id=dto.team_id,
        win=dto.win,
        champion_id=dto.champion_id,
        champion_name=dto.champion_name,
        champion_level=dto.champ_level,
        kills=dto.kills,
        deaths=dto.deaths,
        assists=dto.assists,
        cs=dto.total_minions_killed + dto.neutral_minions_killed,
        gold_earned=dto.gold_earned,
        damage_to_champions=dto.total_damage_dealt_to_champions,
        vision_score=dto.vision_score,
        position=dto.team_position or None,
        summoner_spells=spells,
        items=items,
    )


def match_dto_to_summary(dto: MatchDTO) -> MatchSummary:
    """Translate a full match payload.

    Matches recorded before gameEndTimestamp existed report gameDuration in
    milliseconds instead of seconds.

    :param dto: Riot API match data
    :returns: MatchSummary domain object
    """
    duration = dto.info.game_duration
    if dto.info.game_end_timestamp is None and duration > 100_000:
        duration //= 1000

    return MatchSummary(
        match_id=dto.match_id,
        participants=[participant_dto_to_domain(p) for p in dto.info.participants],
        duration_seconds=duration,
        queue_id=dto.info.queue_id,
        game_mode=dto.info.game_mode,
        game_version=dto.info.game_version,
        game_creation=dto.info.game_creation,
    )
