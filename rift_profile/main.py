"""Main FastAPI application for the Rift Profile service."""

from contextlib import asynccontextmanager
from typing import Any, Dict

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from rift_profile import __version__
from rift_profile.core.config import get_global_settings
from rift_profile.core.logging import setup_logging
from rift_profile.core.rate_limiter import limiter
from rift_profile.core.riot_api import ConcurrencyLimiter, RiotAPIClient
from rift_profile.features.assets.cache import AssetCache
from rift_profile.features.assets.router import router as assets_router
from rift_profile.features.matches.router import router as matches_router
from rift_profile.features.profiles.router import router as profiles_router
from rift_profile.middleware import RequestLoggingMiddleware

settings = get_global_settings()
setup_logging(settings.log_level)
logger = structlog.get_logger(__name__)


def _validate_api_key_configuration() -> None:
    """Log Riot API key configuration status."""
    api_key = settings.riot_api_key
    if not api_key or api_key == "your_riot_api_key_here":
        logger.warning(
            "RIOT_API_KEY not configured; upstream calls will fail with 401/403",
            hint="Get your key from https://developer.riotgames.com",
        )
    elif api_key.startswith("RGAPI-"):
        logger.info("Riot API key configured (development key detected)")
        logger.warning("Development API keys expire every 24 hours")
    else:
        logger.info("Riot API key configured")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Owns the process-wide Riot client (and therefore the single concurrency
    limiter every request shares) and the CDN client used for assets.
    """
    logger.info("Starting up Rift Profile application", version=__version__)
    _validate_api_key_configuration()

    riot_client = RiotAPIClient(
        limiter=ConcurrencyLimiter(settings.riot_max_concurrent_requests)
    )
    await riot_client.start_session()

    asset_http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.asset_request_timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": f"RiftProfile/{__version__}"},
    )

    app.state.riot_client = riot_client
    app.state.asset_http_client = asset_http_client
    app.state.asset_cache = AssetCache(maxsize=settings.asset_cache_max_entries)

    try:
        yield
    finally:
        logger.info("Shutting down Rift Profile application")
        await riot_client.close()
        await asset_http_client.aclose()


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "profiles",
        "description": "Aggregated player profiles and champion mastery.",
    },
    {
        "name": "matches",
        "description": "Paged match history for infinite scroll.",
    },
    {
        "name": "assets",
        "description": "Champion, item, summoner spell and rank images with CDN fallback.",
    },
    {
        "name": "health",
        "description": "Health check and upstream limiter status.",
    },
]

# Create FastAPI application
app = FastAPI(
    title="Rift Profile",
    description="""
    League of Legends player profiles aggregated from the Riot API.

    ## Features

    * **Profiles**: Account, level, rank, top champions and recent matches from one Riot ID
    * **Match History**: Further pages of match history by PUUID
    * **Assets**: Icons resolved across Data Dragon and Community Dragon

    ## Rate Limiting

    Upstream calls share one process-wide concurrency cap and back off on 429.
    Profile and match endpoints are additionally throttled per client IP.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure rate limiter for FastAPI app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(RequestLoggingMiddleware)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profiles_router)
app.include_router(matches_router)
app.include_router(assets_router)


@app.get("/health", tags=["health"])
async def health_check(request: Request) -> Dict[str, Any]:
    """
    Health check endpoint.

    Reports the upstream limiter state (capacity, in-flight and peak
    in-flight calls) alongside the usual liveness fields.
    """
    riot_client = getattr(request.app.state, "riot_client", None)
    asset_cache = getattr(request.app.state, "asset_cache", None)
    return {
        "status": "healthy",
        "version": __version__,
        "debug": settings.debug,
        "riot_api": riot_client.stats() if riot_client else None,
        "asset_cache": asset_cache.stats() if asset_cache else None,
    }
