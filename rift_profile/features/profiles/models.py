"""Domain models for an aggregated player profile."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from rift_profile.features.matches.models import (
    MatchSummary,
    MatchWindow,
    merge_matches,
)


class PlayerIdentifier(BaseModel):
    """Riot ID as typed by the user. Case is kept for display."""

    game_name: str
    tag_line: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.game_name}#{self.tag_line}"


class Account(BaseModel):
    """Resolved Riot account. ``puuid`` is the join key for everything else."""

    puuid: str
    game_name: str
    tag_line: str

    model_config = ConfigDict(frozen=True)


class Summoner(BaseModel):
    """Platform player record.

    ``internal_id`` is the encrypted summoner id; puuid-only upstream
    responses leave it out.
    """

    puuid: str
    internal_id: Optional[str] = None
    summoner_level: int
    profile_icon_id: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class RankedEntry(BaseModel):
    """Standing in one ranked queue."""

    queue_type: str
    tier: str
    division: str
    league_points: int
    wins: int
    losses: int

    @property
    def win_rate(self) -> float:
        """Win rate as a percentage."""
        total_games = self.wins + self.losses
        if total_games == 0:
            return 0.0
        return (self.wins / total_games) * 100


class MasteryEntry(BaseModel):
    """Champion mastery.

    Upstream entries carry points, level and chest state. Entries synthesized
    from match history carry only ``games``.
    """

    champion_id: int
    champion_points: Optional[int] = None
    champion_level: Optional[int] = None
    chest_granted: Optional[bool] = None
    games: Optional[int] = None

    @property
    def is_synthetic(self) -> bool:
        """True for entries computed locally from match history."""
        return self.champion_points is None


class Profile(BaseModel):
    """Aggregate root built by the profile aggregator.

    ``matches`` only ever grows, through :meth:`append_matches`, and never
    holds two matches with the same id.
    """

    account: Account
    summoner: Summoner
    ranked_entry: Optional[RankedEntry] = None
    ranked_entries: List[RankedEntry] = Field(default_factory=list)
    mastery: List[MasteryEntry] = Field(default_factory=list)
    matches: List[MatchSummary] = Field(default_factory=list)
    has_more_matches: bool = False
    next_match_start: int = 0

    @property
    def puuid(self) -> str:
        return self.account.puuid

    def append_matches(self, new_matches: List[MatchSummary]) -> int:
        """Append a later window, skipping ids already present.

        :param new_matches: Matches from a match window
        :returns: Number of matches actually appended
        """
        self.matches, added = merge_matches(self.matches, new_matches)
        return added

    def apply_window(self, window: MatchWindow) -> int:
        """Append a fetched window and move the pagination cursor.

        :param window: Result of a match-window fetch
        :returns: Number of matches actually appended
        """
        added = self.append_matches(window.matches)
        self.has_more_matches = window.has_more
        self.next_match_start = max(self.next_match_start, window.next_start)
        return added
