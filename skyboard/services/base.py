"""
Shared plumbing for the domain services.

Each service owns its cache, clock, random source and retry settings, all
injectable for tests, and counts how often each provenance was served.
"""

import random
import threading
import time
from collections import Counter
from typing import Callable, Optional

from skyboard.cache import TimedCache
from skyboard.models.provenance import Source


class DomainService:
    """Base class for the flight, satellite and solar-system services."""

    name = 'domain'

    def __init__(
        self,
        cache: TimedCache,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.cache = cache
        self._clock = clock
        self._rng = rng or random.Random()
        self._sleep = sleep

        self._lock = threading.Lock()
        self._source_counts: Counter = Counter()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _now_seconds(self) -> int:
        return int(self._clock())

    def _count(self, source: Source) -> Source:
        with self._lock:
            self._source_counts[source.value] += 1
        return source

    @property
    def stats(self) -> dict:
        """Responses served per source, plus cache statistics."""
        with self._lock:
            sources = {source.value: self._source_counts[source.value] for source in Source}
        return {
            'sources': sources,
            'degraded_responses': sum(
                count for value, count in sources.items() if Source(value).is_degraded
            ),
            'cache': self.cache.stats,
        }
