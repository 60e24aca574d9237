"""Asset resolution: walk CDN candidates, fall back to a placeholder.

:meth:`AssetResolver.resolve` never raises. A missing icon should leave a
transparent gap in the page, not a broken request.
"""

from typing import Optional, Tuple

import httpx
import structlog

from rift_profile.core.config import get_global_settings
from rift_profile.core.enums import AssetKind
from rift_profile.core.exceptions import AssetUnresolvedError, ValidationError
from rift_profile.core.fallback import FallbackChain, FallbackExhausted, Strategy

from .cache import AssetCache
from .models import CACHE_POLICIES, AssetResult, DegradedAsset, ResolvedAsset
from .sources import Candidate, candidate_urls

logger = structlog.get_logger(__name__)

DEFAULT_CONTENT_TYPE = "image/png"


def parse_asset_request(kind: str, resource_id: Optional[str]) -> Tuple[AssetKind, str]:
    """
    Validate a raw ``(kind, id)`` pair from a request.

    :param kind: Asset kind name, case-insensitive
    :param resource_id: Asset identifier
    :returns: Parsed kind and trimmed identifier
    :raises ValidationError: If the kind is unknown or the id is missing
    """
    try:
        asset_kind = AssetKind((kind or "").strip().lower())
    except ValueError:
        raise ValidationError(
            f"unknown asset kind {kind!r}",
            service="AssetResolver",
            operation="parse_asset_request",
            field="kind",
            value=kind,
        ) from None

    resource_id = (resource_id or "").strip()
    if not resource_id:
        raise ValidationError(
            "asset id is required",
            service="AssetResolver",
            operation="parse_asset_request",
            field="id",
        )

    if asset_kind == AssetKind.RANK:
        resource_id = resource_id.upper()
    return asset_kind, resource_id


class AssetResolver:
    """Locate champion, item, spell and rank images across public CDNs."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        ddragon_version: Optional[str] = None,
        cache: Optional[AssetCache] = None,
    ):
        """
        Initialize the resolver.

        Args:
            http_client: Shared HTTP client used for CDN fetches
            ddragon_version: Version segment for Data Dragon URLs
            cache: Origin cache for resolved assets
        """
        settings = get_global_settings()
        self.http_client = http_client
        self.ddragon_version = ddragon_version or settings.ddragon_version
        self.cache = cache if cache is not None else AssetCache(
            maxsize=settings.asset_cache_max_entries
        )

    async def resolve(self, kind: AssetKind, resource_id: str) -> AssetResult:
        """
        Resolve an asset.

        Args:
            kind: Asset kind
            resource_id: Identifier as returned by :func:`parse_asset_request`

        Returns:
            ResolvedAsset from the first candidate answering 2xx, otherwise a
            DegradedAsset carrying the placeholder image
        """
        cached = self.cache.get(kind, resource_id)
        if cached is not None:
            return cached

        try:
            asset = await self._resolve_uncached(kind, resource_id)
        except AssetUnresolvedError as e:
            logger.info(
                "asset_unresolved",
                kind=kind.value,
                id=resource_id,
                attempted=e.context.get("attempted"),
            )
            return DegradedAsset(kind=kind, resource_id=resource_id)
        except Exception:
            logger.exception("asset_resolution_failed", kind=kind.value, id=resource_id)
            return DegradedAsset(kind=kind, resource_id=resource_id)

        self.cache.set(asset)
        return asset

    async def _resolve_uncached(self, kind: AssetKind, resource_id: str) -> ResolvedAsset:
        candidates = candidate_urls(kind, resource_id, self.ddragon_version)
        if not candidates:
            raise AssetUnresolvedError(kind.value, resource_id)

        chain: FallbackChain[ResolvedAsset] = FallbackChain(
            f"asset:{kind.value}",
            [
                Strategy(candidate.source, self._fetcher(kind, resource_id, candidate))
                for candidate in candidates
            ],
            catch=(httpx.HTTPError,),
        )
        try:
            result = await chain.resolve()
        except FallbackExhausted as e:
            raise AssetUnresolvedError(
                kind.value,
                resource_id,
                attempted=[candidate.url for candidate in candidates],
            ) from e

        logger.debug(
            "asset_resolved",
            kind=kind.value,
            id=resource_id,
            source=result.strategy,
            url=result.value.url,
        )
        return result.value

    def _fetcher(self, kind: AssetKind, resource_id: str, candidate: Candidate):
        async def fetch() -> ResolvedAsset:
            response = await self.http_client.get(candidate.url)
            response.raise_for_status()

            content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE
            return ResolvedAsset(
                kind=kind,
                resource_id=resource_id,
                content=response.content,
                content_type=content_type,
                source=candidate.source,
                url=candidate.url,
                cache_policy=CACHE_POLICIES[kind],
            )

        return fetch
