"""Core dependencies for FastAPI application."""

from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, Request

from .riot_api import RiotAPIClient


def get_riot_client(request: Request) -> RiotAPIClient:
    """Process-wide Riot API client created in the application lifespan.

    Sharing one instance is what makes the concurrency cap global.
    """
    client = getattr(request.app.state, "riot_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Riot API client not initialized")
    return client


def get_asset_http_client(request: Request) -> httpx.AsyncClient:
    """Plain HTTP client used for CDN fetches (no API key, no retries)."""
    client = getattr(request.app.state, "asset_http_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Asset client not initialized")
    return client


# Type aliases for cleaner dependency injection
RiotClientDep = Annotated[RiotAPIClient, Depends(get_riot_client)]
AssetHttpClientDep = Annotated[httpx.AsyncClient, Depends(get_asset_http_client)]

__all__ = [
    "get_riot_client",
    "get_asset_http_client",
    "RiotClientDep",
    "AssetHttpClientDep",
]
