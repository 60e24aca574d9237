"""Domain models for match history."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Participant(BaseModel):
    """One player's line in a finished match."""

    puuid: str
    riot_id_game_name: Optional[str] = None
    riot_id_tagline: Optional[str] = None
    team_id: int
    win: bool
    champion_id: int
    champion_name: str
    champion_level: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    cs: int = 0
    gold_earned: int = 0
    damage_to_champions: int = 0
    vision_score: Optional[float] = None
    position: Optional[str] = None
    summoner_spells: List[int] = Field(default_factory=list)
    items: List[int] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def kda(self) -> float:
        """(kills + assists) / deaths, with zero deaths counted as one."""
        return (self.kills + self.assists) / max(self.deaths, 1)


class MatchSummary(BaseModel):
    """A fetched match. Immutable and keyed uniquely by ``match_id``."""

    match_id: str
    participants: List[Participant]
    duration_seconds: int
    queue_id: Optional[int] = None
    game_mode: Optional[str] = None
    game_version: Optional[str] = None
    game_creation: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    def participant_for(self, puuid: str) -> Optional[Participant]:
        """Return the participant row belonging to ``puuid``, if present."""
        for participant in self.participants:
            if participant.puuid == puuid:
                return participant
        return None


class MatchWindow(BaseModel):
    """One page of match history.

    ``has_more`` is a heuristic: the upstream never says where the history
    ends, so a page shorter than requested is taken as the end. A full page
    that happens to be the last one reports ``has_more=True`` and the next
    request returns an empty window.
    """

    matches: List[MatchSummary]
    has_more: bool
    next_start: int


def dedupe_match_ids(match_ids: List[str]) -> List[str]:
    """Drop repeated ids, keeping the first occurrence and the original order."""
    seen: set[str] = set()
    unique: List[str] = []
    for match_id in match_ids:
        if match_id not in seen:
            seen.add(match_id)
            unique.append(match_id)
    return unique


def merge_matches(
    existing: List[MatchSummary], new: List[MatchSummary]
) -> tuple[List[MatchSummary], int]:
    """
    Append matches whose id is not already present.

    :param existing: Matches already held, in display order
    :param new: Matches from a later window
    :returns: The merged list and the number of matches actually added
    """
    seen = {match.match_id for match in existing}
    merged = list(existing)
    added = 0
    for match in new:
        if match.match_id in seen:
            continue
        seen.add(match.match_id)
        merged.append(match)
        added += 1
    return merged, added
