"""Dependencies for the assets feature."""

from typing import Annotated

from fastapi import Depends, Request

from rift_profile.core.config import get_global_settings
from rift_profile.core.dependencies import AssetHttpClientDep

from .cache import AssetCache
from .service import AssetResolver


def get_asset_cache(request: Request) -> AssetCache:
    """Process-wide asset cache, created on first use if the lifespan did not."""
    cache = getattr(request.app.state, "asset_cache", None)
    if cache is None:
        cache = AssetCache(maxsize=get_global_settings().asset_cache_max_entries)
        request.app.state.asset_cache = cache
    return cache


AssetCacheDep = Annotated[AssetCache, Depends(get_asset_cache)]


async def get_asset_resolver(
    http_client: AssetHttpClientDep,
    cache: AssetCacheDep,
) -> AssetResolver:
    """Get asset resolver instance.

    :param http_client: Shared CDN HTTP client
    :param cache: Shared origin cache
    :returns: Asset resolver
    """
    return AssetResolver(http_client, cache=cache)


# Type aliases for cleaner dependency injection
AssetResolverDep = Annotated[AssetResolver, Depends(get_asset_resolver)]

__all__ = [
    "get_asset_cache",
    "get_asset_resolver",
    "AssetCacheDep",
    "AssetResolverDep",
]
