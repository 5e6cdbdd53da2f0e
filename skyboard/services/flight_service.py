"""
Flight service - serves /api/flights.

Pipeline:
1. Cache: a fresh snapshot (30s TTL) is served sliced to `limit`. The slot
   always holds the full batch, never a slice sized by an earlier request
2. Mock: mock=true generates a full synthetic batch and caches it
3. OpenSky: single attempt, short timeout, no retry. OpenSky is often
   unavailable for anonymous users, so a fast fallback beats waiting
4. Fallback: any upstream failure is expected and answered with
   synthetic flights plus a warning
5. Emergency: any unexpected error is answered with fresh synthetic
   flights (no cache write) and the error text

The response is always HTTP 200 with a populated flights array.
"""

import logging
import random
import time
from typing import Callable, List, Optional

from skyboard.cache import TimedCache
from skyboard.config import config
from skyboard.ingestion.errors import UpstreamError
from skyboard.ingestion.opensky_client import OpenSkyClient, normalize_states
from skyboard.models.flight import FlightRecord
from skyboard.models.provenance import Source, build_envelope
from skyboard.services.base import DomainService
from skyboard.synthetic.flights import MAX_FLIGHTS, generate_flights

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 500
MAX_LIMIT = 2000
EMERGENCY_LIMIT = 500

FALLBACK_WARNING = (
    'OpenSky Network API is currently unavailable. '
    'Using enhanced realistic flight data for demonstration.'
)
EMERGENCY_WARNING = 'System error occurred. Using emergency flight data.'


def clamp_limit(limit: int) -> int:
    return max(0, min(limit, MAX_LIMIT))


class FlightService(DomainService):
    """Fetch-cache-fallback pipeline for aircraft positions."""

    name = 'flights'

    def __init__(
        self,
        client: Optional[OpenSkyClient] = None,
        cache: Optional[TimedCache] = None,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ):
        cache = cache or TimedCache(config.cache.flights_ttl_seconds, clock=clock, name='flights')
        super().__init__(cache=cache, clock=clock, rng=rng)
        self.client = client or OpenSkyClient.from_config()

    def get_flights(
        self,
        limit: int = DEFAULT_LIMIT,
        use_mock: bool = False,
        region: str = 'global',
    ) -> dict:
        """
        Build the /api/flights response payload.

        `region` is advisory only: OpenSky is always queried globally and
        the value is echoed back.
        """
        limit = clamp_limit(limit)
        logger.info(f'[Flight API] Request: region={region}, limit={limit}, mock={use_mock}')

        try:
            return self._get_flights(limit, use_mock, region)
        except Exception as e:
            logger.exception('[Flight API] Unexpected system error')
            return self._emergency(limit, region, e)

    def _get_flights(self, limit: int, use_mock: bool, region: str) -> dict:
        # Cache is checked regardless of the mock setting
        entry = self.cache.get()
        if entry is not None:
            logger.debug('[Flight API] Returning cached data')
            flights = entry.records[:limit]
            return self._envelope(
                Source.CACHE, flights, region,
                timestamp=entry.timestamp_ms,
                total=len(entry.records),
            )

        if use_mock:
            logger.info('[Flight API] Generating synthetic flights (mock requested)')
            return self._synthetic(Source.MOCK, limit, region)

        try:
            payload = self.client.get_states()
            flights, total = normalize_states(payload, MAX_LIMIT, now=self._now_seconds())
        except UpstreamError as e:
            # Expected: OpenSky is frequently unavailable
            logger.info(f'[Flight API] OpenSky failed ({e.kind.value}): {e}')
            return self._synthetic(Source.FALLBACK, limit, region, warning=FALLBACK_WARNING)

        logger.info(f'[Flight API] OpenSky success: {len(flights)} of {total} states')
        entry = self.cache.put(flights)
        return self._envelope(
            Source.OPENSKY, flights[:limit], region,
            timestamp=entry.timestamp_ms,
            total=total,
        )

    def _synthetic(self, source: Source, limit: int, region: str, warning: Optional[str] = None) -> dict:
        flights = generate_flights(MAX_FLIGHTS, rng=self._rng, now=self._now_seconds())
        entry = self.cache.put(flights)
        return self._envelope(
            source, flights[:limit], region,
            timestamp=entry.timestamp_ms,
            total=len(flights),
            warning=warning,
        )

    def _emergency(self, limit: int, region: str, error: Exception) -> dict:
        flights = generate_flights(min(limit, EMERGENCY_LIMIT), rng=self._rng, now=self._now_seconds())
        return self._envelope(
            Source.EMERGENCY_FALLBACK, flights, region,
            timestamp=self._now_ms(),
            total=len(flights),
            error=str(error) or type(error).__name__,
            warning=EMERGENCY_WARNING,
        )

    def _envelope(
        self,
        source: Source,
        flights: List[FlightRecord],
        region: str,
        *,
        timestamp: int,
        total: int,
        error: Optional[str] = None,
        warning: Optional[str] = None,
    ) -> dict:
        return build_envelope(
            'flights', flights,
            source=self._count(source),
            timestamp=timestamp,
            total=total,
            error=error,
            warning=warning,
            processed=len(flights),
            region=region,
        )
