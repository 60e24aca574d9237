"""Asset endpoints.

Every route answers 200 with an image once the request itself is valid.
Unresolvable assets get a transparent placeholder and ``X-Placeholder: true``.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response

from rift_profile.core.exceptions import ValidationError

from .dependencies import AssetResolverDep
from .models import AssetResult
from .service import AssetResolver, parse_asset_request

router = APIRouter(prefix="/assets", tags=["assets"])


def _asset_response(asset: AssetResult) -> Response:
    headers = {"Cache-Control": asset.cache_control}
    if asset.degraded:
        headers["X-Placeholder"] = "true"
    else:
        headers["X-Asset-Source"] = asset.source
        headers["X-Upstream-URL"] = asset.url

    return Response(content=asset.content, media_type=asset.content_type, headers=headers)


async def _serve(
    resolver: AssetResolver, kind: str, resource_id: Optional[str]
) -> Response:
    try:
        asset_kind, resource_id = parse_asset_request(kind, resource_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    asset = await resolver.resolve(asset_kind, resource_id)
    return _asset_response(asset)


@router.get("/champion-icon")
async def get_champion_icon(
    resolver: AssetResolverDep,
    id: Optional[str] = Query(None, description="Champion id"),
):
    """Champion square portrait."""
    return await _serve(resolver, "champion", id)


@router.get("/item-icon")
async def get_item_icon(
    resolver: AssetResolverDep,
    id: Optional[str] = Query(None, description="Item id"),
):
    """Item icon."""
    return await _serve(resolver, "item", id)


@router.get("/summoner-spell")
async def get_summoner_spell(
    resolver: AssetResolverDep,
    id: Optional[str] = Query(None, description="Summoner spell id"),
):
    """Summoner spell icon."""
    return await _serve(resolver, "spell", id)


@router.get("/ranked-emblem")
async def get_ranked_emblem(
    resolver: AssetResolverDep,
    tier: Optional[str] = Query(None, description="Tier, e.g. GOLD"),
):
    """Ranked tier emblem."""
    return await _serve(resolver, "rank", tier)


@router.get("/{kind}/{resource_id}")
async def get_asset(kind: str, resource_id: str, resolver: AssetResolverDep):
    """
    Generic asset lookup.

    Examples:
        GET /assets/champion/103
        GET /assets/rank/gold
    """
    return await _serve(resolver, kind, resource_id)
