"""Player profile feature: aggregation and champion mastery."""

from .mastery import MasteryLookup, compute_fallback_mastery
from .models import (
    Account,
    MasteryEntry,
    PlayerIdentifier,
    Profile,
    RankedEntry,
    Summoner,
)
from .service import ProfileAggregator

__all__ = [
    "MasteryLookup",
    "compute_fallback_mastery",
    "Account",
    "MasteryEntry",
    "PlayerIdentifier",
    "Profile",
    "RankedEntry",
    "Summoner",
    "ProfileAggregator",
]
