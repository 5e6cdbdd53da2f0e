"""
In-memory cache for upstream responses.

Each domain service owns one TimedCache:
- flights and solar-system use a single implicit slot
- satellites key entries by observer position, search radius and category

Design rationale:
Upstream APIs are slow, rate limited and frequently unavailable. Serving
repeated dashboard polls from memory within a short TTL keeps latency low and
keeps us inside the upstream quotas. Entries are replaced wholesale, never
patched, so concurrent writers racing on the same key are harmless: the last
writer wins.

The clock is injectable so expiry can be tested without sleeping.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_KEY = '__default__'


@dataclass(frozen=True)
class CacheEntry:
    """A cached record batch and the time it was written (epoch seconds)."""
    records: Sequence[Any]
    written_at: float

    @property
    def timestamp_ms(self) -> int:
        """Write time in epoch milliseconds, as reported to clients."""
        return int(self.written_at * 1000)


class TimedCache:
    """
    Thread-safe TTL cache.

    An entry is valid while `clock() - written_at < ttl_seconds`. Expired
    entries are dropped on read; there is no background eviction thread.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
        max_entries: Optional[int] = None,
        name: str = 'cache',
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.name = name
        self._clock = clock

        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._last_write: float = 0

        # Statistics
        self._hits = 0
        self._misses = 0

    def get(self, key: str = DEFAULT_KEY) -> Optional[CacheEntry]:
        """
        Get a fresh entry by key.

        Returns None if not cached or expired. Key matching is exact.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                age = self._clock() - entry.written_at
                if age < self.ttl_seconds:
                    self._hits += 1
                    return entry
                # Expired
                del self._entries[key]

            self._misses += 1
            return None

    def put(
        self,
        records: Sequence[Any],
        key: str = DEFAULT_KEY,
        written_at: Optional[float] = None,
    ) -> CacheEntry:
        """Replace the entry for `key` with a new record batch."""
        if written_at is None:
            written_at = self._clock()
        entry = CacheEntry(records=tuple(records), written_at=written_at)

        with self._lock:
            self._entries[key] = entry
            self._last_write = written_at

            if self.max_entries and len(self._entries) > self.max_entries:
                self._evict_oldest()

        logger.debug(f'{self.name}: stored {len(entry.records)} records under {key!r}')
        return entry

    def _evict_oldest(self) -> None:
        """Remove oldest entries when over capacity."""
        entries = sorted(
            self._entries.items(),
            key=lambda x: x[1].written_at
        )
        # Remove oldest 10%
        to_remove = max(1, len(entries) // 10)
        for key, _ in entries[:to_remove]:
            del self._entries[key]

    def clear(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._entries.clear()

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            lookups = self._hits + self._misses
            return {
                'entries': len(self._entries),
                'ttl_seconds': self.ttl_seconds,
                'hits': self._hits,
                'misses': self._misses,
                'hit_rate': self._hits / lookups if lookups > 0 else 0,
                'last_write': self._last_write,
            }
