"""
Satellite service - serves /api/satellites.

Cache entries are keyed by the exact observer/radius/category signature
(60s TTL). Live data comes from N2YO with up to two attempts and linear
backoff; on exhaustion the last error is reported alongside synthetic
satellites for the requested category.
"""

import logging
import random
import time
from typing import Callable, List, Optional

from skyboard.cache import TimedCache
from skyboard.config import config
from skyboard.ingestion.errors import UpstreamError
from skyboard.ingestion.http import with_retries
from skyboard.ingestion.n2yo_client import AboveResult, N2YOClient, ObserverQuery, normalize_above
from skyboard.models.provenance import Source, build_envelope
from skyboard.models.satellite import SatelliteRecord
from skyboard.services.base import DomainService
from skyboard.synthetic.satellites import category_name, generate_satellites

logger = logging.getLogger(__name__)

DEFAULT_LATITUDE = 37.7749
DEFAULT_LONGITUDE = -122.4194
DEFAULT_ALTITUDE = 0.0
DEFAULT_RADIUS = 70
DEFAULT_CATEGORY = 0

SYNTHETIC_COUNT = 50
EMERGENCY_COUNT = 30

FALLBACK_WARNING = 'N2YO API is currently unavailable. Using realistic satellite data for demonstration.'
EMERGENCY_WARNING = 'System error occurred. Using emergency satellite data.'


class SatelliteService(DomainService):
    """Fetch-cache-fallback pipeline for satellites above an observer."""

    name = 'satellites'

    def __init__(
        self,
        client: Optional[N2YOClient] = None,
        cache: Optional[TimedCache] = None,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
        max_attempts: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
    ):
        cache = cache or TimedCache(
            config.cache.satellites_ttl_seconds,
            clock=clock,
            max_entries=config.cache.satellites_max_entries,
            name='satellites',
        )
        super().__init__(cache=cache, clock=clock, rng=rng, sleep=sleep)
        self.client = client or N2YOClient.from_config()
        self.max_attempts = max_attempts or config.retry.max_attempts
        self.backoff_seconds = config.retry.backoff_seconds if backoff_seconds is None else backoff_seconds

    def get_satellites(self, query: ObserverQuery, use_mock: bool = False) -> dict:
        """Build the /api/satellites response payload."""
        logger.info(
            f'[Satellite API] Request: lat={query.latitude}, lng={query.longitude}, '
            f'alt={query.altitude}, radius={query.radius}, category={query.category_id}, mock={use_mock}'
        )

        try:
            return self._get_satellites(query, use_mock)
        except Exception as e:
            logger.exception('[Satellite API] Unexpected error')
            return self._emergency(query.category_id, e)

    def _get_satellites(self, query: ObserverQuery, use_mock: bool) -> dict:
        key = query.cache_key

        entry = self.cache.get(key)
        if entry is not None:
            logger.debug(f'[Satellite API] Returning cached data for {key}')
            return self._envelope(
                Source.CACHE, entry.records, query.category_id,
                timestamp=entry.timestamp_ms,
            )

        if use_mock:
            logger.info('[Satellite API] Generating synthetic satellites (mock requested)')
            return self._synthetic(Source.MOCK, query)

        if not self.client.is_configured:
            return self._synthetic(
                Source.FALLBACK, query,
                error='N2YO API key not configured',
                warning=FALLBACK_WARNING,
            )

        try:
            result = self._fetch_live(query)
        except UpstreamError as e:
            logger.warning(f'[Satellite API] All attempts failed, falling back to synthetic data: {e}')
            return self._synthetic(
                Source.FALLBACK, query,
                error=str(e),
                warning=FALLBACK_WARNING,
            )

        logger.info(f'[Satellite API] Successfully processed {len(result.satellites)} satellites')
        entry = self.cache.put(result.satellites, key=key)
        return self._envelope(
            Source.N2YO, result.satellites, query.category_id,
            timestamp=entry.timestamp_ms,
            transaction_count=result.transaction_count,
            category=result.category_name,
        )

    def _fetch_live(self, query: ObserverQuery) -> AboveResult:
        return with_retries(
            lambda: normalize_above(self.client.get_above(query)),
            attempts=self.max_attempts,
            backoff_seconds=self.backoff_seconds,
            sleep=self._sleep,
            label='Satellite API',
        )

    def _synthetic(
        self,
        source: Source,
        query: ObserverQuery,
        error: Optional[str] = None,
        warning: Optional[str] = None,
    ) -> dict:
        satellites = generate_satellites(query.category_id, SYNTHETIC_COUNT, rng=self._rng)
        entry = self.cache.put(satellites, key=query.cache_key)
        return self._envelope(
            source, satellites, query.category_id,
            timestamp=entry.timestamp_ms,
            error=error,
            warning=warning,
        )

    def _emergency(self, category_id: int, error: Exception) -> dict:
        satellites = generate_satellites(category_id, EMERGENCY_COUNT, rng=self._rng)
        return self._envelope(
            Source.EMERGENCY_FALLBACK, satellites, category_id,
            timestamp=self._now_ms(),
            error=str(error) or type(error).__name__,
            warning=EMERGENCY_WARNING,
        )

    def _envelope(
        self,
        source: Source,
        satellites: List[SatelliteRecord],
        category_id: int,
        *,
        timestamp: int,
        transaction_count: int = 0,
        category: Optional[str] = None,
        error: Optional[str] = None,
        warning: Optional[str] = None,
    ) -> dict:
        return build_envelope(
            'satellites', satellites,
            source=self._count(source),
            timestamp=timestamp,
            total=len(satellites),
            error=error,
            warning=warning,
            transactionCount=transaction_count,
            categoryName=category or category_name(category_id),
        )
