"""Riot API endpoint definitions and routing information."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

from .constants import Region, Platform


@dataclass(frozen=True)
class RequestSpec:
    """One logical upstream request."""

    url: str
    params: Dict[str, Any] = field(default_factory=dict)
    method: str = "GET"

    @property
    def path(self) -> str:
        """URL without scheme and host, used as the log key."""
        stripped = self.url.replace("https://", "").replace("http://", "")
        parts = stripped.split("/", 1)
        return "/" + parts[1] if len(parts) == 2 else stripped


def _segment(value: Union[str, int]) -> str:
    return quote(str(value), safe="")


class RiotAPIEndpoints:
    """Riot API endpoint definitions and routing."""

    def __init__(
        self,
        region: Region = Region.AMERICAS,
        platform: Platform = Platform.NA1,
        base_domain: str = "api.riotgames.com",
    ):
        """
        Initialize endpoint configuration.

        Args:
            region: Default region for regional endpoints
            platform: Default platform for platform endpoints
            base_domain: Host suffix shared by every routing value
        """
        self.region = region
        self.platform = platform
        self.base_domain = base_domain

    def get_base_url(self, region: Optional[Region] = None) -> str:
        """Get base URL for regional endpoints."""
        region = region or self.region
        region_str = region.value if isinstance(region, Region) else region
        return f"https://{region_str}.{self.base_domain}"

    def get_platform_url(self, platform: Optional[Platform] = None) -> str:
        """Get base URL for platform endpoints."""
        platform = platform or self.platform
        platform_str = platform.value if isinstance(platform, Platform) else platform
        return f"https://{platform_str}.{self.base_domain}"

    # Account endpoints (Regional)
    def account_by_riot_id(
        self, game_name: str, tag_line: str, region: Optional[Region] = None
    ) -> RequestSpec:
        """Get account by Riot ID endpoint."""
        base_url = self.get_base_url(region)
        return RequestSpec(
            f"{base_url}/riot/account/v1/accounts/by-riot-id/"
            f"{_segment(game_name)}/{_segment(tag_line)}"
        )

    # Summoner endpoints (Platform)
    def summoner_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> RequestSpec:
        """Get summoner by PUUID endpoint."""
        platform_url = self.get_platform_url(platform)
        return RequestSpec(
            f"{platform_url}/lol/summoner/v4/summoners/by-puuid/{_segment(puuid)}"
        )

    # League endpoints (Platform)
    def league_entries_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> RequestSpec:
        """Get league entries by PUUID endpoint."""
        platform_url = self.get_platform_url(platform)
        return RequestSpec(
            f"{platform_url}/lol/league/v4/entries/by-puuid/{_segment(puuid)}"
        )

    def league_entries_by_summoner(
        self, summoner_id: str, platform: Optional[Platform] = None
    ) -> RequestSpec:
        """Get league entries by encrypted summoner ID endpoint."""
        platform_url = self.get_platform_url(platform)
        return RequestSpec(
            f"{platform_url}/lol/league/v4/entries/by-summoner/{_segment(summoner_id)}"
        )

    # Champion mastery endpoints (Platform)
    def top_masteries_by_puuid(
        self, puuid: str, count: int, platform: Optional[Platform] = None
    ) -> RequestSpec:
        """Get top champion masteries by PUUID endpoint."""
        platform_url = self.get_platform_url(platform)
        return RequestSpec(
            f"{platform_url}/lol/champion-mastery/v4/champion-masteries/"
            f"by-puuid/{_segment(puuid)}/top",
            params={"count": count},
        )

    def top_masteries_by_summoner(
        self, summoner_id: str, count: int, platform: Optional[Platform] = None
    ) -> RequestSpec:
        """Get top champion masteries by encrypted summoner ID endpoint."""
        platform_url = self.get_platform_url(platform)
        return RequestSpec(
            f"{platform_url}/lol/champion-mastery/v4/champion-masteries/"
            f"by-summoner/{_segment(summoner_id)}/top",
            params={"count": count},
        )

    # Match endpoints (Regional)
    def match_ids_by_puuid(
        self,
        puuid: str,
        start: int = 0,
        count: int = 20,
        region: Optional[Region] = None,
    ) -> RequestSpec:
        """Get match id list by PUUID endpoint."""
        base_url = self.get_base_url(region)
        return RequestSpec(
            f"{base_url}/lol/match/v5/matches/by-puuid/{_segment(puuid)}/ids",
            params={"start": start, "count": count},
        )

    def match_by_id(self, match_id: str, region: Optional[Region] = None) -> RequestSpec:
        """Get match by ID endpoint."""
        base_url = self.get_base_url(region)
        return RequestSpec(f"{base_url}/lol/match/v5/matches/{_segment(match_id)}")
