"""Match history API endpoints."""

from fastapi import APIRouter, HTTPException, Query, Request
import structlog

from rift_profile.core.exceptions import UpstreamUnavailableError, ValidationError
from rift_profile.core.rate_limiter import MATCH_WINDOW_LIMIT, limiter
from rift_profile.core.riot_api.errors import RiotAPIError

from .dependencies import MatchWindowFetcherDep
from .schemas import MatchWindowResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("", response_model=MatchWindowResponse)
@limiter.limit(MATCH_WINDOW_LIMIT)
async def get_match_window(
    request: Request,
    fetcher: MatchWindowFetcherDep,
    puuid: str = Query("", description="Player PUUID"),
    start: int = Query(20, description="Offset into the match history"),
    count: int = Query(20, description="Number of matches to return"),
):
    """
    Load the next page of a player's match history.

    ``has_more`` is false once a page comes back short of ``count``.
    """
    try:
        window = await fetcher.fetch_window(puuid, start, count)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except RiotAPIError as e:
        logger.error(
            "match_window_failed",
            puuid=puuid,
            start=start,
            count=count,
            error=str(e),
        )
        raise HTTPException(status_code=502, detail="Failed to fetch matches")
    except UpstreamUnavailableError as e:
        logger.error(
            "match_window_timed_out",
            puuid=puuid,
            start=start,
            count=count,
            error=str(e),
        )
        raise HTTPException(status_code=502, detail="Failed to fetch matches")

    return MatchWindowResponse(
        matches=window.matches,
        has_more=window.has_more,
        next_start=window.next_start,
    )
