"""Profile and mastery API endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
import structlog

from rift_profile.core.exceptions import (
    PlayerNotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)
from rift_profile.core.rate_limiter import (
    MASTERY_LOOKUP_LIMIT,
    PROFILE_LOOKUP_LIMIT,
    limiter,
)

from .dependencies import MasteryLookupDep, ProfileAggregatorDep
from .schemas import MasteryResponse, ProfileResponse
from .transformers import profile_to_response

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["profiles"])


def _first_given(*values: Optional[str]) -> Optional[str]:
    """First query value that was sent; snake_case and camelCase names both work."""
    for value in values:
        if value is not None:
            return value
    return None


@router.get("/profiles", response_model=ProfileResponse)
@limiter.limit(PROFILE_LOOKUP_LIMIT)
async def get_profile(
    request: Request,
    aggregator: ProfileAggregatorDep,
    game_name: Optional[str] = Query(None, description="Riot ID name part"),
    tag_line: Optional[str] = Query(None, description="Riot ID tag part (default NA1)"),
    game_name_camel: Optional[str] = Query(None, alias="gameName", include_in_schema=False),
    tag_line_camel: Optional[str] = Query(None, alias="tagLine", include_in_schema=False),
):
    """
    Look up a player by Riot ID and return the aggregated profile.

    Rank, mastery and match history are best effort: when their endpoints
    fail the profile still comes back with those parts empty.

    Examples:
        GET /profiles?game_name=Faker&tag_line=KR1
        GET /profiles?gameName=Faker&tagLine=KR1
    """
    game_name = _first_given(game_name, game_name_camel) or ""
    tag_line = _first_given(tag_line, tag_line_camel) or "NA1"
    try:
        profile = await aggregator.get_profile(game_name, tag_line)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except PlayerNotFoundError:
        raise HTTPException(status_code=404, detail="Summoner not found")
    except UpstreamUnavailableError as e:
        logger.error(
            "profile_lookup_failed",
            game_name=game_name,
            tag_line=tag_line,
            error=str(e),
        )
        raise HTTPException(status_code=502, detail="Failed to fetch summoner")

    return profile_to_response(profile)


@router.get("/mastery", response_model=MasteryResponse)
@limiter.limit(MASTERY_LOOKUP_LIMIT)
async def get_mastery(
    request: Request,
    lookup: MasteryLookupDep,
    summoner_id: Optional[str] = Query(None, description="Encrypted summoner id"),
    summoner_id_camel: Optional[str] = Query(None, alias="summonerId", include_in_schema=False),
    puuid: Optional[str] = Query(None, description="Player PUUID"),
    count: int = Query(5, description="Number of champions"),
    platform: str = Query("NA1", description="Platform, e.g. NA1 or EUW1"),
):
    """
    Top champion mastery for a player.

    Tries the puuid endpoint, then the summoner-id endpoint, then resolves
    the summoner id from the puuid. Returns an empty list if all fail.
    """
    try:
        mastery = await lookup.get_top_masteries(
            summoner_id=_first_given(summoner_id, summoner_id_camel),
            puuid=puuid,
            count=count,
            platform=platform,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return MasteryResponse(mastery=mastery)
