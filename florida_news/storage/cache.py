"""In-memory result cache.

Holds the last good payload and when it was built. The entry is swapped as a
whole, so a reader never sees a half-written payload even when several
rebuilds overlap; the last successful store wins.
"""

import time
from typing import Callable, Optional

from florida_news.models.schemas import CacheEntry, ResultPayload


class ResultCache:
    """Time-boxed cache for a single ResultPayload.

    Args:
        ttl: Seconds a stored payload stays fresh
        clock: Returns the current time in seconds (injectable for tests)
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entry = CacheEntry()

    @property
    def entry(self) -> CacheEntry:
        return self._entry

    def is_fresh(self, now: Optional[float] = None) -> bool:
        return self.get(now) is not None

    def get(self, now: Optional[float] = None) -> Optional[ResultPayload]:
        """Return the stored payload while fresh, otherwise None (a miss)."""
        entry = self._entry
        if now is None:
            now = self._clock()
        if entry.payload is not None and now - entry.built_at < self.ttl:
            return entry.payload
        return None

    def store(self, payload: ResultPayload, now: Optional[float] = None) -> bool:
        """Replace the cached payload.

        Empty payloads are never stored, so an outage that yields nothing
        does not evict the last good result.

        Returns:
            True if the entry was replaced
        """
        if not payload.articles:
            return False
        if now is None:
            now = self._clock()
        self._entry = CacheEntry(payload=payload, built_at=now)
        return True

    def clear(self) -> None:
        self._entry = CacheEntry()
