"""Asset resolution results and cache policies."""

import base64
from dataclasses import dataclass
from typing import Optional, Union

from rift_profile.core.enums import AssetKind

# Transparent 1x1 PNG served when no source has the asset
PLACEHOLDER_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
PLACEHOLDER_CONTENT_TYPE = "image/png"


@dataclass(frozen=True)
class CachePolicy:
    """Cache lifetimes, in seconds, for one kind of response.

    ``max_age`` applies to browsers, ``s_maxage`` to shared caches and to our
    own origin cache.
    """

    max_age: int
    s_maxage: Optional[int] = None
    stale_while_revalidate: Optional[int] = None

    @property
    def header(self) -> str:
        """Render as a Cache-Control header value."""
        parts = ["public", f"max-age={self.max_age}"]
        if self.s_maxage is not None:
            parts.append(f"s-maxage={self.s_maxage}")
        if self.stale_while_revalidate is not None:
            parts.append(f"stale-while-revalidate={self.stale_while_revalidate}")
        return ", ".join(parts)

    @property
    def origin_ttl(self) -> int:
        return self.s_maxage if self.s_maxage is not None else self.max_age


HOUR = 3600
DAY = 24 * HOUR
WEEK = 7 * DAY

# Art only changes on patch releases
CACHE_POLICIES = {
    AssetKind.CHAMPION: CachePolicy(
        max_age=HOUR, s_maxage=DAY, stale_while_revalidate=WEEK
    ),
    AssetKind.ITEM: CachePolicy(
        max_age=DAY, s_maxage=WEEK, stale_while_revalidate=30 * DAY
    ),
    AssetKind.SPELL: CachePolicy(
        max_age=DAY, s_maxage=WEEK, stale_while_revalidate=30 * DAY
    ),
    AssetKind.RANK: CachePolicy(
        max_age=DAY, s_maxage=WEEK, stale_while_revalidate=30 * DAY
    ),
}
PLACEHOLDER_CACHE_POLICY = CachePolicy(max_age=HOUR)


@dataclass(frozen=True)
class ResolvedAsset:
    """Asset served by one of the candidate sources."""

    kind: AssetKind
    resource_id: str
    content: bytes
    content_type: str
    source: str
    url: str
    cache_policy: CachePolicy

    degraded = False

    @property
    def cache_control(self) -> str:
        return self.cache_policy.header


@dataclass(frozen=True)
class DegradedAsset:
    """Placeholder returned when every candidate failed."""

    kind: AssetKind
    resource_id: str
    content: bytes = PLACEHOLDER_PNG
    content_type: str = PLACEHOLDER_CONTENT_TYPE
    cache_policy: CachePolicy = PLACEHOLDER_CACHE_POLICY

    degraded = True

    @property
    def cache_control(self) -> str:
        return self.cache_policy.header


AssetResult = Union[ResolvedAsset, DegradedAsset]
