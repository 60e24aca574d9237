"""Riot API constants and enum definitions."""

from enum import Enum
from typing import Optional


class Region(str, Enum):
    """Riot API regions for regional routing."""

    AMERICAS = "americas"
    ASIA = "asia"
    EUROPE = "europe"
    SEA = "sea"


class Platform(str, Enum):
    """Riot API platforms for platform routing."""

    BR1 = "br1"
    EUN1 = "eun1"
    EUW1 = "euw1"
    JP1 = "jp1"
    KR = "kr"
    LA1 = "la1"
    LA2 = "la2"
    NA1 = "na1"
    OC1 = "oc1"
    PH2 = "ph2"
    RU = "ru"
    SG2 = "sg2"
    TH2 = "th2"
    TR1 = "tr1"
    TW2 = "tw2"
    VN2 = "vn2"
    PBE1 = "pbe1"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Platform":
        """Case-insensitive lookup; unknown or empty values resolve to NA1."""
        if isinstance(value, Platform):
            return value
        if not value:
            return cls.NA1
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.NA1


class QueueType(str, Enum):
    """Ranked queue identifiers as reported by league-v4."""

    RANKED_SOLO_5X5 = "RANKED_SOLO_5x5"
    RANKED_FLEX_SR = "RANKED_FLEX_SR"
    RANKED_FLEX_TT = "RANKED_FLEX_TT"


# Preferred order when a single ranked entry represents the player
RANKED_QUEUE_PREFERENCE = (
    QueueType.RANKED_SOLO_5X5.value,
    QueueType.RANKED_FLEX_SR.value,
)
