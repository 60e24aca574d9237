"""Dependencies for the matches feature.

Injects the gateway into the window fetcher following dependency inversion.
"""

from typing import Annotated

from fastapi import Depends

from rift_profile.core.dependencies import RiotClientDep

from .gateway import RiotMatchGateway
from .service import MatchWindowFetcher


async def get_riot_match_gateway(
    riot_client: RiotClientDep,
) -> RiotMatchGateway:
    """Get Riot match gateway instance.

    :param riot_client: Shared Riot API client
    :returns: Riot match gateway
    """
    return RiotMatchGateway(riot_client)


async def get_match_window_fetcher(
    gateway: Annotated[RiotMatchGateway, Depends(get_riot_match_gateway)],
) -> MatchWindowFetcher:
    """Get match window fetcher instance.

    :param gateway: Riot match gateway (Anti-Corruption Layer)
    :returns: Match window fetcher
    """
    return MatchWindowFetcher(gateway)


# Type aliases for cleaner dependency injection
RiotMatchGatewayDep = Annotated[RiotMatchGateway, Depends(get_riot_match_gateway)]
MatchWindowFetcherDep = Annotated[MatchWindowFetcher, Depends(get_match_window_fetcher)]

__all__ = [
    "get_riot_match_gateway",
    "get_match_window_fetcher",
    "RiotMatchGatewayDep",
    "MatchWindowFetcherDep",
]
