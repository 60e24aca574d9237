"""Pydantic schemas for profile and mastery API responses."""

from typing import List, Optional

from pydantic import BaseModel, Field

from rift_profile.core.enums import MasterySource
from rift_profile.features.matches.models import MatchSummary

from .models import Account, MasteryEntry, RankedEntry, Summoner


class ProfileResponse(BaseModel):
    """Schema for an aggregated profile."""

    account: Account
    summoner: Summoner
    ranked_entry: Optional[RankedEntry] = Field(
        None, description="Solo queue if ranked there, else flex, else any queue"
    )
    ranked_entries: List[RankedEntry] = Field(default_factory=list)
    mastery: List[MasteryEntry] = Field(default_factory=list)
    mastery_source: MasterySource = Field(
        MasterySource.NONE,
        description="upstream, match_history (estimated from games played) or none",
    )
    matches: List[MatchSummary] = Field(default_factory=list)
    has_more: bool = Field(False, description="Approximate; see /matches")
    next_start: int = Field(0, description="Offset for the next /matches call")


class MasteryResponse(BaseModel):
    """Schema for a mastery lookup.

    An empty list means no endpoint answered; the caller may estimate mastery
    from match history instead.
    """

    mastery: List[MasteryEntry] = Field(default_factory=list)
