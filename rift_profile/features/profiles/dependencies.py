"""Dependencies for the profiles feature."""

from typing import Annotated

from fastapi import Depends

from rift_profile.core.dependencies import RiotClientDep
from rift_profile.features.matches.dependencies import RiotMatchGatewayDep

from .mastery import MasteryLookup
from .service import ProfileAggregator


async def get_mastery_lookup(
    riot_client: RiotClientDep,
) -> MasteryLookup:
    """Get mastery lookup instance.

    :param riot_client: Shared Riot API client
    :returns: Mastery lookup
    """
    return MasteryLookup(riot_client)


async def get_profile_aggregator(
    riot_client: RiotClientDep,
    gateway: RiotMatchGatewayDep,
    mastery_lookup: Annotated[MasteryLookup, Depends(get_mastery_lookup)],
) -> ProfileAggregator:
    """Get profile aggregator instance.

    :param riot_client: Shared Riot API client
    :param gateway: Riot match gateway
    :param mastery_lookup: Mastery lookup
    :returns: Profile aggregator with injected collaborators
    """
    return ProfileAggregator(
        riot_client, match_gateway=gateway, mastery_lookup=mastery_lookup
    )


# Type aliases for cleaner dependency injection
MasteryLookupDep = Annotated[MasteryLookup, Depends(get_mastery_lookup)]
ProfileAggregatorDep = Annotated[ProfileAggregator, Depends(get_profile_aggregator)]

__all__ = [
    "get_mastery_lookup",
    "get_profile_aggregator",
    "MasteryLookupDep",
    "ProfileAggregatorDep",
]
