"""
Solar-system service - serves /api/solar-system.

The body catalogue barely changes, so a single cache slot holds the full,
unfiltered list for 24 hours and the `type` filter is applied on every
response. Live data comes from Le Systeme Solaire with up to two attempts
and linear backoff; the fallback is the fixed Sun-and-planets table.
"""

import logging
import random
import time
from typing import Callable, List, Optional, Sequence

from skyboard.cache import TimedCache
from skyboard.config import config
from skyboard.ingestion.errors import UpstreamError
from skyboard.ingestion.http import with_retries
from skyboard.ingestion.solar_system_client import SolarSystemClient, normalize_bodies
from skyboard.models.provenance import Source, build_envelope
from skyboard.models.solar_body import BodyType, SolarBodyRecord
from skyboard.services.base import DomainService
from skyboard.synthetic.solar_system import ALL_TYPES, filter_bodies, generate_solar_bodies

logger = logging.getLogger(__name__)

BODY_TYPES = frozenset([ALL_TYPES] + [t.value for t in BodyType])

FALLBACK_WARNING = 'Using mock data due to API unavailability'
EMERGENCY_WARNING = 'Using emergency mock data'
NO_MATCH_WARNING = 'No {type} bodies in this data set'


def parse_body_type(value: Optional[str]) -> str:
    """Validate the `type` filter; unknown values select everything."""
    if not value:
        return ALL_TYPES
    value = value.lower()
    if value not in BODY_TYPES:
        logger.warning(f'[Solar System API] Unknown body type {value!r}, returning all bodies')
        return ALL_TYPES
    return value


class SolarSystemService(DomainService):
    """Fetch-cache-fallback pipeline for solar-system bodies."""

    name = 'solar_system'

    def __init__(
        self,
        client: Optional[SolarSystemClient] = None,
        cache: Optional[TimedCache] = None,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
        max_attempts: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
    ):
        cache = cache or TimedCache(config.cache.solar_system_ttl_seconds, clock=clock, name='solar_system')
        super().__init__(cache=cache, clock=clock, rng=rng, sleep=sleep)
        self.client = client or SolarSystemClient.from_config()
        self.max_attempts = max_attempts or config.retry.max_attempts
        self.backoff_seconds = config.retry.backoff_seconds if backoff_seconds is None else backoff_seconds

    def get_bodies(self, body_type: str = ALL_TYPES, use_mock: bool = False) -> dict:
        """Build the /api/solar-system response payload."""
        body_type = parse_body_type(body_type)
        logger.info(f'[Solar System API] Request: type={body_type}, mock={use_mock}')

        try:
            return self._get_bodies(body_type, use_mock)
        except Exception as e:
            logger.exception('[Solar System API] Unexpected error')
            return self._emergency(body_type, e)

    def _get_bodies(self, body_type: str, use_mock: bool) -> dict:
        entry = self.cache.get()
        if entry is not None:
            logger.debug('[Solar System API] Returning cached data')
            return self._envelope(Source.CACHE, entry.records, body_type, timestamp=entry.timestamp_ms)

        if use_mock:
            logger.info('[Solar System API] Generating mock data')
            return self._synthetic(Source.MOCK, body_type)

        try:
            bodies = with_retries(
                lambda: normalize_bodies(self.client.get_bodies()),
                attempts=self.max_attempts,
                backoff_seconds=self.backoff_seconds,
                sleep=self._sleep,
                label='Solar System API',
            )
        except UpstreamError as e:
            logger.warning(f'[Solar System API] All attempts failed, falling back to mock data: {e}')
            return self._synthetic(Source.FALLBACK, body_type, error=str(e), warning=FALLBACK_WARNING)

        logger.info(f'[Solar System API] Successfully processed {len(bodies)} bodies')
        entry = self.cache.put(bodies)
        return self._envelope(Source.SOLAR_SYSTEM_API, bodies, body_type, timestamp=entry.timestamp_ms)

    def _synthetic(
        self,
        source: Source,
        body_type: str,
        error: Optional[str] = None,
        warning: Optional[str] = None,
    ) -> dict:
        bodies = generate_solar_bodies()
        entry = self.cache.put(bodies)
        return self._envelope(source, bodies, body_type, timestamp=entry.timestamp_ms, error=error, warning=warning)

    def _emergency(self, body_type: str, error: Exception) -> dict:
        return self._envelope(
            Source.EMERGENCY_FALLBACK, generate_solar_bodies(), body_type,
            timestamp=self._now_ms(),
            error=str(error) or type(error).__name__,
            warning=EMERGENCY_WARNING,
        )

    def _envelope(
        self,
        source: Source,
        bodies: Sequence[SolarBodyRecord],
        body_type: str,
        *,
        timestamp: int,
        error: Optional[str] = None,
        warning: Optional[str] = None,
    ) -> dict:
        filtered: List[SolarBodyRecord] = filter_bodies(bodies, body_type)
        if not filtered:
            # The built-in table only has the Sun and planets, so moon,
            # asteroid and comet filters come back empty off the live path
            no_match = NO_MATCH_WARNING.format(type=body_type)
            warning = f'{warning}. {no_match}' if warning else no_match
        return build_envelope(
            'bodies', filtered,
            source=self._count(source),
            timestamp=timestamp,
            total=len(bodies),
            error=error,
            warning=warning,
            filtered=len(filtered),
        )
