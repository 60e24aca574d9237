"""Shared enums used across features."""

from enum import Enum


class Tier(str, Enum):
    """League of Legends rank tiers."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"
    UNRANKED = "UNRANKED"


class AssetKind(str, Enum):
    """Kinds of visual asset the resolver knows how to locate."""

    CHAMPION = "champion"
    ITEM = "item"
    SPELL = "spell"
    RANK = "rank"


class MasterySource(str, Enum):
    """Where a profile's mastery list came from."""

    UPSTREAM = "upstream"
    MATCH_HISTORY = "match_history"
    NONE = "none"
