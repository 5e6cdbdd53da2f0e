"""
N2YO API client and "what's up" normalizer.

Endpoint:
    GET /satellite/above/{lat}/{lng}/{alt}/{radius}/{category}/&apiKey={key}

Response shape:
    {
        "info": {"category": "ISS", "transactionscount": 12, "satcount": 1},
        "above": [
            {"satid": 25544, "satname": "SPACE STATION",
             "intDesignator": "1998-067A", "launchDate": "1998-11-20",
             "satlat": 39.9, "satlng": -76.1, "satalt": 420.3},
            ...
        ]
    }

On a bad key or quota exhaustion N2YO answers 200 with {"error": "..."}
and no "above" array.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional

import requests

from skyboard.config import config
from skyboard.ingestion.coerce import is_finite_number, is_number
from skyboard.ingestion.errors import UpstreamMalformed
from skyboard.ingestion.http import fetch_json
from skyboard.models.satellite import SatelliteRecord

logger = logging.getLogger(__name__)

UPSTREAM_NAME = 'N2YO'


@dataclass(frozen=True)
class ObserverQuery:
    """Observer location and search window for a 'satellites above' query."""
    latitude: float
    longitude: float
    altitude: float
    radius: int
    category_id: int

    @property
    def cache_key(self) -> str:
        """Exact-match cache key; no spatial proximity matching."""
        return f'{self.latitude}_{self.longitude}_{self.altitude}_{self.radius}_{self.category_id}'


@dataclass(frozen=True)
class AboveResult:
    """Normalized N2YO response."""
    satellites: List[SatelliteRecord]
    transaction_count: int
    category_name: Optional[str]


class N2YOClient:
    """Client for the N2YO satellite-above endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = 'https://api.n2yo.com/rest/v1/satellite',
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

        if not api_key:
            logger.warning('N2YO API key not configured - satellite lookups will use synthetic data')

    @classmethod
    def from_config(cls) -> 'N2YOClient':
        return cls(
            api_key=config.n2yo.api_key,
            base_url=config.n2yo.base_url,
            timeout=config.n2yo.timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def get_above(self, query: ObserverQuery) -> Any:
        """Fetch the raw list of satellites above the observer."""
        url = (
            f'{self.base_url}/above/{query.latitude}/{query.longitude}/'
            f'{query.altitude}/{query.radius}/{query.category_id}/&apiKey={self.api_key}'
        )
        return fetch_json(
            self.session,
            url,
            upstream=UPSTREAM_NAME,
            timeout=self.timeout,
            headers={'Cache-Control': 'no-cache'},
        )


def is_valid_satellite(sat: Any) -> bool:
    """Check a raw 'above' row is well-typed, finite and in range."""
    if not isinstance(sat, dict):
        return False
    if not is_number(sat.get('satid')) or not math.isfinite(sat['satid']):
        return False
    if not isinstance(sat.get('satname'), str):
        return False
    if not all(is_finite_number(sat.get(field)) for field in ('satlat', 'satlng', 'satalt')):
        return False
    return abs(sat['satlat']) <= 90 and abs(sat['satlng']) <= 180 and sat['satalt'] >= 0


def satellite_to_record(sat: dict) -> SatelliteRecord:
    return SatelliteRecord(
        satid=int(sat['satid']),
        satname=sat['satname'].strip(),
        int_designator=sat.get('intDesignator') or 'Unknown',
        launch_date=sat.get('launchDate') or 'Unknown',
        satlat=float(sat['satlat']),
        satlng=float(sat['satlng']),
        satalt=float(sat['satalt']),
    )


def normalize_above(payload: Any) -> AboveResult:
    """
    Normalize an N2YO 'above' payload.

    Raises:
        UpstreamMalformed if the `above` array is missing or no row survives
        validation
    """
    if not isinstance(payload, dict):
        raise UpstreamMalformed('N2YO returned a non-object body', UPSTREAM_NAME)

    above = payload.get('above')
    if not isinstance(above, list):
        detail = payload.get('error')
        message = 'Invalid data format from N2YO - missing or invalid satellites array'
        if detail:
            message = f'{message} ({detail})'
        raise UpstreamMalformed(message, UPSTREAM_NAME)

    satellites = [satellite_to_record(sat) for sat in above if is_valid_satellite(sat)]
    if not satellites:
        raise UpstreamMalformed(f'N2YO returned no usable satellites ({len(above)} rows)', UPSTREAM_NAME)

    info = payload.get('info') if isinstance(payload.get('info'), dict) else {}
    transaction_count = info.get('transactionscount')

    logger.debug(f'Normalized {len(satellites)} of {len(above)} N2YO satellites')

    return AboveResult(
        satellites=satellites,
        transaction_count=int(transaction_count) if is_finite_number(transaction_count) else 0,
        category_name=info.get('category') or None,
    )
