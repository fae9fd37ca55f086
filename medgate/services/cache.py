"""In-memory, per-key TTL cache for reference-data collections.

How it works:
- Cache hit: the entry exists and ``clock() < expires_at``; the stored
  collection is returned and the loader is not called.
- Cache miss: no entry, or the entry has expired. Reads never mutate
  storage; an expired entry stays until the next put or invalidate.
  ``fetch_or_load`` awaits the loader and stores the result only if the
  loader returned successfully.
- Invalidation: mutations against a reference-data type drop that key.
  The bulk ``"all"`` view is dropped together with any single type, and
  ``invalidate()`` with no key clears everything.

Concurrent misses for the same key are not coalesced: each caller runs
its own load and the last load to complete is what stays cached.
"""
import time
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from medgate.core.config import REFERENCE_DATA_CACHE_TTL
from medgate.core.logging_config import logger
from medgate.schemas import ReferenceDataItem

# Key of the merged collection of every reference-data type
ALL_KEY = "all"

Collection = List[ReferenceDataItem]
Loader = Callable[[], Awaitable[Sequence[ReferenceDataItem]]]


class CacheEntry:
    """A cached collection with its expiry timestamp."""

    def __init__(self, collection: Sequence[ReferenceDataItem], expires_at: float):
        self.collection = list(collection)
        self.expires_at = expires_at

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class ReferenceDataCache:
    """Keyed store of reference-data collections with a fixed TTL.

    ``put`` and ``invalidate`` are the only mutators. There is no size
    bound: keys are reference-data type names, a small closed set.
    """

    def __init__(self, ttl: float = REFERENCE_DATA_CACHE_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._stats = {
            "hits": 0,
            "misses": 0,
            "loads": 0,
            "load_failures": 0,
            "invalidations": 0,
        }

    def get(self, key: str) -> Optional[Collection]:
        """Return a copy of the cached collection, or None on a miss."""
        entry = self._entries.get(key)
        if entry is None:
            self._stats["misses"] += 1
            return None

        if entry.is_expired(self._clock()):
            self._stats["misses"] += 1
            logger.debug(f"Reference data cache expired: key={key}")
            return None

        self._stats["hits"] += 1
        return list(entry.collection)

    def put(self, key: str, collection: Sequence[ReferenceDataItem]) -> None:
        self._entries[key] = CacheEntry(collection, self._clock() + self.ttl)
        logger.debug(f"Reference data cached: key={key}, items={len(collection)}, ttl={self.ttl}s")

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one key (and the bulk view), or everything when key is None."""
        self._stats["invalidations"] += 1
        if key is None:
            self._entries.clear()
            logger.info("Reference data cache cleared")
            return

        self._entries.pop(key, None)
        self._entries.pop(ALL_KEY, None)
        logger.info(f"Reference data cache invalidated: key={key}")

    async def fetch_or_load(self, key: str, loader: Loader) -> Collection:
        cached = self.get(key)
        if cached is not None:
            return cached

        logger.debug(f"Cache miss - loading reference data: key={key}")
        self._stats["loads"] += 1
        try:
            collection = await loader()
        except Exception:
            self._stats["load_failures"] += 1
            logger.warning(f"Reference data load failed, cache left unchanged: key={key}")
            raise

        self.put(key, collection)
        return list(collection)

    def is_cached(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and not entry.is_expired(self._clock())

    def keys(self) -> List[str]:
        now = self._clock()
        return [key for key, entry in self._entries.items() if not entry.is_expired(now)]

    def stats(self) -> Dict[str, int]:
        return dict(self._stats, entries=len(self.keys()))
