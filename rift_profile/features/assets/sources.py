"""Candidate CDN sources for each asset kind.

Each kind has an ordered list of sources. A source turns an identifier into
a URL, or returns None when it cannot serve that identifier at all (e.g. a
summoner spell Data Dragon has no file name for).
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from rift_profile.core.enums import AssetKind, Tier

DDRAGON_CDN = "https://ddragon.leagueoflegends.com/cdn"
CDRAGON_CDN = "https://cdn.communitydragon.org"
CDRAGON_RAW = "https://raw.communitydragon.org"
CDRAGON_GAME_DATA = "plugins/rcp-be-lol-game-data/global/default"

# Data Dragon spell image names, keyed by summoner spell id
DDRAGON_SPELL_NAMES: Dict[int, str] = {
    1: "SummonerBoost",
    3: "SummonerExhaust",
    4: "SummonerFlash",
    6: "SummonerHaste",
    7: "SummonerHeal",
    11: "SummonerSmite",
    12: "SummonerTeleport",
    14: "SummonerDot",
    21: "SummonerBarrier",
    32: "SummonerSnowball",
}

# Community Dragon icon names; covers the rotating-mode spells too
CDRAGON_SPELL_NAMES: Dict[int, str] = {
    1: "summonerboost",
    3: "summonerexhaust",
    4: "summonerflash",
    6: "summonerhaste",
    7: "summonerheal",
    11: "summonersmite",
    12: "summonerteleport",
    13: "summonermana",
    14: "summonerdot",
    21: "summonerbarrier",
    30: "summonerpororecall",
    31: "summonerporopounce",
    32: "summonersnowball",
    39: "summonerultimatespellbook",
    54: "summonerclarity",
    55: "summonerheal",
    2201: "summonerheal",
    2202: "summonerexhaust",
}

RANKED_TIERS = {tier.value for tier in Tier}


@dataclass(frozen=True)
class AssetSource:
    """One CDN location pattern for a kind of asset."""

    name: str
    build_url: Callable[[str, str], Optional[str]]

    def url_for(self, resource_id: str, version: str) -> Optional[str]:
        return self.build_url(resource_id, version)


@dataclass(frozen=True)
class Candidate:
    """A concrete URL to try."""

    source: str
    url: str


def _numeric(resource_id: str) -> Optional[int]:
    return int(resource_id) if resource_id.isascii() and resource_id.isdigit() else None


def _champion_square(resource_id: str, version: str) -> Optional[str]:
    if _numeric(resource_id) is None:
        return None
    return f"{CDRAGON_CDN}/latest/champion/{resource_id}/square"


def _champion_icon_raw(resource_id: str, version: str) -> Optional[str]:
    if _numeric(resource_id) is None:
        return None
    return f"{CDRAGON_RAW}/latest/{CDRAGON_GAME_DATA}/v1/champion-icons/{resource_id}.png"


def _item_ddragon(resource_id: str, version: str) -> Optional[str]:
    if _numeric(resource_id) is None:
        return None
    return f"{DDRAGON_CDN}/{version}/img/item/{resource_id}.png"


def _item_cdragon(resource_id: str, version: str) -> Optional[str]:
    if _numeric(resource_id) is None:
        return None
    return f"{CDRAGON_CDN}/{version}/item/{resource_id}"


def _item_icon_raw(resource_id: str, version: str) -> Optional[str]:
    if _numeric(resource_id) is None:
        return None
    return f"{CDRAGON_RAW}/pbe/{CDRAGON_GAME_DATA}/assets/items/icons2d/{resource_id}.png"


def _spell_ddragon(resource_id: str, version: str) -> Optional[str]:
    spell_id = _numeric(resource_id)
    name = DDRAGON_SPELL_NAMES.get(spell_id) if spell_id is not None else None
    if name is None:
        return None
    return f"{DDRAGON_CDN}/{version}/img/spell/{name}.png"


def _spell_icon_raw(resource_id: str, version: str) -> Optional[str]:
    spell_id = _numeric(resource_id)
    name = CDRAGON_SPELL_NAMES.get(spell_id) if spell_id is not None else None
    if name is None:
        return None
    return f"{CDRAGON_RAW}/pbe/{CDRAGON_GAME_DATA}/data/spells/icons2d/{name}.png"


def _rank_emblem(resource_id: str, version: str) -> Optional[str]:
    tier = resource_id.upper()
    if tier not in RANKED_TIERS:
        return None
    return (
        f"{CDRAGON_RAW}/latest/plugins/rcp-fe-lol-shared-components"
        f"/global/default/{tier.lower()}.png"
    )


SOURCES: Dict[AssetKind, List[AssetSource]] = {
    AssetKind.CHAMPION: [
        AssetSource("cdragon_square", _champion_square),
        AssetSource("cdragon_raw", _champion_icon_raw),
    ],
    AssetKind.ITEM: [
        AssetSource("ddragon", _item_ddragon),
        AssetSource("cdragon", _item_cdragon),
        AssetSource("cdragon_raw", _item_icon_raw),
    ],
    AssetKind.SPELL: [
        AssetSource("ddragon", _spell_ddragon),
        AssetSource("cdragon_raw", _spell_icon_raw),
    ],
    AssetKind.RANK: [
        AssetSource("cdragon_raw", _rank_emblem),
    ],
}


def candidate_urls(kind: AssetKind, resource_id: str, version: str) -> List[Candidate]:
    """Build the ordered list of URLs that might serve an asset.

    Args:
        kind: Asset kind
        resource_id: Numeric id, or a tier name for rank emblems
        version: Data Dragon version used in versioned paths

    Returns:
        Candidates in priority order; empty if no source knows the id
    """
    resource_id = resource_id.strip()
    candidates = []
    for source in SOURCES[kind]:
        url = source.url_for(resource_id, version)
        if url is not None:
            candidates.append(Candidate(source=source.name, url=url))
    return candidates
