"""
OpenSky Network API client and state-vector normalizer.

OpenSky is frequently unavailable for anonymous users, so the flights
service makes a single attempt with a short timeout and falls back to
synthetic data on any failure.

OpenSky state vector format (array indices):
0: icao24          - ICAO24 hex address
1: callsign        - Callsign (8 chars max)
2: origin_country  - Country of registration
3: time_position   - Unix timestamp of last position update
4: last_contact    - Unix timestamp of last message
5: longitude       - WGS84 longitude
6: latitude        - WGS84 latitude
7: baro_altitude   - Barometric altitude (meters)
8: on_ground       - Boolean
9: velocity        - Ground speed (m/s)
10: true_track     - Track angle (degrees, 0=north)
11: vertical_rate  - Vertical rate (m/s)
12: sensors        - Sensor IDs (array)
13: geo_altitude   - Geometric altitude (meters)
14: squawk         - Transponder code
15: spi            - Special position indicator
16: position_source - 0=ADS-B, 1=ASTERIX, 2=MLAT, 3=FLARM
"""

import logging
import math
import random
from typing import Any, List, Optional, Tuple

import requests
from requests.auth import HTTPBasicAuth

from skyboard.config import config
from skyboard.ingestion.coerce import safe_number, truncate, wrap_degrees
from skyboard.ingestion.errors import UpstreamMalformed
from skyboard.ingestion.http import fetch_json
from skyboard.models.flight import (
    CALLSIGN_MAX_LENGTH,
    COUNTRY_MAX_LENGTH,
    REGISTRATION_MAX_LENGTH,
    FlightRecord,
    FlightStatus,
)

logger = logging.getLogger(__name__)

UPSTREAM_NAME = 'OpenSky'

STATE_VECTOR_FIELDS = 17
MPS_TO_KNOTS = 1.94384
METERS_TO_FEET = 3.28084
MPS_TO_FPM = 196.85


class OpenSkyClient:
    """
    Client for the OpenSky /states/all endpoint.

    Authentication is optional; anonymous access works but is heavily
    rate limited.
    """

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        base_url: str = 'https://opensky-network.org/api',
        timeout: float = 8.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.auth = None
        if username and password:
            self.auth = HTTPBasicAuth(username, password)
            logger.info('OpenSky client initialized with authentication')

        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> 'OpenSkyClient':
        """Create client from application configuration."""
        return cls(
            username=config.opensky.username,
            password=config.opensky.password,
            base_url=config.opensky.base_url,
            timeout=config.opensky.timeout_seconds,
        )

    def get_states(self) -> Any:
        """
        Fetch the raw global state-vector snapshot.

        Raises:
            UpstreamError subclasses on timeout, HTTP or transport errors
        """
        return fetch_json(
            self.session,
            f'{self.base_url}/states/all',
            upstream=UPSTREAM_NAME,
            timeout=self.timeout,
            auth=self.auth,
        )


def _coordinate(value: Any) -> Optional[float]:
    """Parse a coordinate, or None if it is null or not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def has_valid_position(arr: Any) -> bool:
    """Check a raw state row has all fields and an in-range position."""
    if not isinstance(arr, (list, tuple)) or len(arr) < STATE_VECTOR_FIELDS:
        return False
    longitude = _coordinate(arr[5])
    latitude = _coordinate(arr[6])
    if longitude is None or latitude is None:
        return False
    return abs(longitude) <= 180 and abs(latitude) <= 90


def default_heading(icao24: Optional[str], index: int) -> float:
    """
    Heading for rows that report no true track.

    Picked at random in [0, 360), but seeded from the aircraft address so the
    same row always normalizes to the same heading.
    """
    rng = random.Random(f'heading:{icao24 or index}')
    return rng.random() * 360.0


def _squawk(value: Any) -> str:
    if isinstance(value, str) and len(value) == 4 and value.isdigit():
        return value
    return '0000'


def state_to_record(arr: List[Any], index: int, now: int) -> FlightRecord:
    """Map one validated OpenSky state row onto a FlightRecord."""
    icao24 = arr[0] if isinstance(arr[0], str) and arr[0] else None
    callsign = arr[1].strip() if isinstance(arr[1], str) else ''
    origin_country = arr[2] if isinstance(arr[2], str) and arr[2] else 'Unknown'
    on_ground = bool(arr[8])

    true_track = arr[10]
    if true_track is None:
        heading = default_heading(icao24, index)
    else:
        heading = wrap_degrees(safe_number(true_track, default_heading(icao24, index)))

    return FlightRecord(
        id=icao24 or f'live_{index}',
        callsign=truncate(callsign or f'UNKN{index:03d}', CALLSIGN_MAX_LENGTH),
        latitude=float(arr[6]),
        longitude=float(arr[5]),
        altitude=max(0.0, safe_number(arr[7]) * METERS_TO_FEET),
        speed=max(0.0, safe_number(arr[9]) * MPS_TO_KNOTS),
        heading=heading,
        status=FlightStatus.TAXIING if on_ground else FlightStatus.EN_ROUTE,
        aircraft_type='Unknown',
        origin='LIVE',
        destination='DATA',
        squawk=_squawk(arr[14]),
        registration=truncate((icao24 or f'REG{index}').upper(), REGISTRATION_MAX_LENGTH),
        country=truncate(origin_country, COUNTRY_MAX_LENGTH),
        last_contact=int(safe_number(arr[4], now)),
        on_ground=on_ground,
        vertical_rate=safe_number(arr[11]) * MPS_TO_FPM,
    )


def normalize_states(payload: Any, limit: int, now: int) -> Tuple[List[FlightRecord], int]:
    """
    Normalize an OpenSky /states/all payload.

    Args:
        payload: Decoded JSON body
        limit: Maximum number of records to return
        now: Epoch seconds used when a row has no last_contact

    Returns:
        Tuple of (records, total state rows reported by upstream)

    Raises:
        UpstreamMalformed if `states` is missing, empty, or has no row
        with a usable position
    """
    states = payload.get('states') if isinstance(payload, dict) else None
    if not isinstance(states, list) or not states:
        raise UpstreamMalformed('OpenSky returned no states', UPSTREAM_NAME)

    valid = [arr for arr in states if has_valid_position(arr)]
    if not valid:
        raise UpstreamMalformed('OpenSky states contained no valid positions', UPSTREAM_NAME)

    records = [
        state_to_record(list(arr), index, now)
        for index, arr in enumerate(valid[:max(0, limit)])
    ]

    logger.debug(f'Normalized {len(records)} of {len(states)} OpenSky state vectors')
    return records, len(states)
