"""Asset resolution feature: champion, item, spell and rank images."""

from .cache import AssetCache
from .models import (
    CACHE_POLICIES,
    PLACEHOLDER_PNG,
    CachePolicy,
    DegradedAsset,
    ResolvedAsset,
)
from .service import AssetResolver, parse_asset_request
from .sources import candidate_urls

__all__ = [
    "AssetCache",
    "CACHE_POLICIES",
    "PLACEHOLDER_PNG",
    "CachePolicy",
    "DegradedAsset",
    "ResolvedAsset",
    "AssetResolver",
    "parse_asset_request",
    "candidate_urls",
]
