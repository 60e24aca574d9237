"""
Riot API client package for League of Legends API integration.

This package provides the rate-limited HTTP client every upstream call goes
through, the shared concurrency limiter, endpoint routing and response DTOs.
"""

from .client import RiotAPIClient
from .limiter import ConcurrencyLimiter
from .errors import (
    RiotAPIError,
    NotFoundError,
    UpstreamError,
    NetworkError,
)
from .models import (
    AccountDTO,
    SummonerDTO,
    LeagueEntryDTO,
    ChampionMasteryDTO,
    ParticipantDTO,
    MatchDTO,
)
from .endpoints import RequestSpec, RiotAPIEndpoints
from .constants import Region, Platform, QueueType

__all__ = [
    "RiotAPIClient",
    "ConcurrencyLimiter",
    "RiotAPIError",
    "NotFoundError",
    "UpstreamError",
    "NetworkError",
    "AccountDTO",
    "SummonerDTO",
    "LeagueEntryDTO",
    "ChampionMasteryDTO",
    "ParticipantDTO",
    "MatchDTO",
    "RequestSpec",
    "RiotAPIEndpoints",
    "Region",
    "Platform",
    "QueueType",
]
