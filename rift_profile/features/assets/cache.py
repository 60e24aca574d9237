"""
In-memory origin cache for resolved assets.
"""

import threading
import time
from typing import Callable, Dict, Optional, Tuple

import structlog

from rift_profile.core.enums import AssetKind

from .models import ResolvedAsset

logger = structlog.get_logger(__name__)

CacheKey = Tuple[AssetKind, str]


class AssetCache:
    """TTL cache keyed by ``(kind, resource_id)`` with a TTL per entry.

    Only resolved assets are stored. Placeholders are never cached here so a
    CDN that recovers is picked up on the next request.
    """

    def __init__(
        self,
        maxsize: int = 2048,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            maxsize: Maximum number of entries
            clock: Monotonic time source, replaceable in tests
        """
        self.maxsize = maxsize
        self.clock = clock
        self.entries: Dict[CacheKey, Tuple[ResolvedAsset, float]] = {}
        self.lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get(self, kind: AssetKind, resource_id: str) -> Optional[ResolvedAsset]:
        """
        Get a cached asset if it has not expired.

        Args:
            kind: Asset kind
            resource_id: Asset identifier

        Returns:
            The cached asset, or None
        """
        key = (kind, resource_id)
        with self.lock:
            entry = self.entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            asset, expiry = entry
            if self.clock() >= expiry:
                del self.entries[key]
                self._misses += 1
                logger.debug("asset_cache_expired", kind=kind.value, id=resource_id)
                return None

            self._hits += 1
            return asset

    def set(self, asset: ResolvedAsset, ttl: Optional[float] = None) -> None:
        """
        Store a resolved asset.

        Args:
            asset: Asset to store
            ttl: Lifetime in seconds (defaults to the asset's shared-cache lifetime)
        """
        ttl = asset.cache_policy.origin_ttl if ttl is None else ttl
        if ttl <= 0:
            return

        key = (asset.kind, asset.resource_id)
        with self.lock:
            # Evict the oldest insertion when full
            if len(self.entries) >= self.maxsize and key not in self.entries:
                oldest_key = next(iter(self.entries))
                del self.entries[oldest_key]
                logger.debug(
                    "asset_cache_eviction",
                    kind=oldest_key[0].value,
                    id=oldest_key[1],
                )

            self.entries[key] = (asset, self.clock() + ttl)

    def clear(self) -> None:
        with self.lock:
            count = len(self.entries)
            self.entries.clear()
            self._hits = 0
            self._misses = 0
            logger.info("asset_cache_cleared", entries_removed=count)

    def stats(self) -> Dict[str, float]:
        """Get cache statistics."""
        with self.lock:
            total = self._hits + self._misses
            return {
                "size": len(self.entries),
                "maxsize": self.maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total if total > 0 else 0.0,
            }

    def __len__(self) -> int:
        return len(self.entries)
