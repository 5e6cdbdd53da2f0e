"""
Le Systeme Solaire API client and body normalizer.

The upstream reports masses in scientific notation
({"massValue": 5.97237, "massExponent": 24}), uses French ids ("soleil" is
the Sun) and leaves many numeric fields null or zero for small bodies.
Bodies are normalized into SolarBodyRecord with every numeric field coerced
to a finite number.
"""

import logging
import math
from typing import Any, List, Optional

import requests

from skyboard.config import config
from skyboard.ingestion.coerce import is_number, safe_number
from skyboard.ingestion.errors import UpstreamMalformed
from skyboard.ingestion.http import fetch_json
from skyboard.models.solar_body import BodyType, SolarBodyRecord

logger = logging.getLogger(__name__)

UPSTREAM_NAME = 'Solar System API'

# Field projection keeps the payload small (the full catalogue is ~300 bodies)
REQUESTED_FIELDS = (
    'id,name,englishName,isPlanet,moons,semimajorAxis,mass,vol,density,gravity,'
    'meanRadius,equaRadius,sideralOrbit,sideralRotation,avgTemp,bodyType,'
    'aroundPlanet,discoveredBy,discoveryDate'
)

SUN_ID = 'soleil'


class SolarSystemClient:
    """Client for the /bodies endpoint of api.le-systeme-solaire.net."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = 'https://api.le-systeme-solaire.net/rest',
        timeout: float = 20.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> 'SolarSystemClient':
        return cls(
            api_key=config.solar_system.api_key,
            base_url=config.solar_system.base_url,
            timeout=config.solar_system.timeout_seconds,
        )

    def get_bodies(self) -> Any:
        """Fetch the raw body catalogue."""
        headers = {'Cache-Control': 'no-cache'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'

        return fetch_json(
            self.session,
            f'{self.base_url}/bodies',
            upstream=UPSTREAM_NAME,
            timeout=self.timeout,
            params={'data': REQUESTED_FIELDS},
            headers=headers,
        )


def classify_body(body: dict) -> BodyType:
    """
    Derive the body type.

    Precedence: the Sun, then planets, then anything orbiting a planet,
    then comets; everything else is an asteroid.
    """
    if body.get('id') == SUN_ID:
        return BodyType.STAR
    if body.get('isPlanet'):
        return BodyType.PLANET
    if body.get('aroundPlanet'):
        return BodyType.MOON
    if body.get('bodyType') == 'Comet':
        return BodyType.COMET
    return BodyType.ASTEROID


def body_mass(body: dict) -> float:
    """massValue x 10^massExponent, or 0 when absent or not finite."""
    mass = body.get('mass')
    if not isinstance(mass, dict):
        return 0.0
    value = mass.get('massValue')
    exponent = mass.get('massExponent')
    if not is_number(value) or not is_number(exponent):
        return 0.0
    try:
        result = value * math.pow(10, exponent)
    except (OverflowError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


def _optional_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def body_to_record(body: dict) -> SolarBodyRecord:
    body_type = classify_body(body)
    around = body.get('aroundPlanet') if isinstance(body.get('aroundPlanet'), dict) else {}
    moons = body.get('moons')

    return SolarBodyRecord(
        id=body['id'],
        name=body.get('name') or body['englishName'],
        english_name=body['englishName'],
        type=body_type,
        is_planet=bool(body.get('isPlanet')),
        radius=safe_number(body.get('meanRadius') or body.get('equaRadius')),
        mass=body_mass(body),
        density=safe_number(body.get('density')),
        gravity=safe_number(body.get('gravity')),
        temperature=safe_number(body.get('avgTemp')),
        distance_from_sun=safe_number(body.get('semimajorAxis')),
        orbital_period=safe_number(body.get('sideralOrbit')),
        rotation_period=safe_number(body.get('sideralRotation')),
        moons=len(moons) if isinstance(moons, list) else 0,
        discovered_by=_optional_text(body.get('discoveredBy')),
        discovery_date=_optional_text(body.get('discoveryDate')),
        parent_body=_optional_text(around.get('planet')) if body_type is BodyType.MOON else None,
    )


def normalize_bodies(payload: Any) -> List[SolarBodyRecord]:
    """
    Normalize a /bodies payload.

    Raises:
        UpstreamMalformed if the `bodies` array is missing or no body has
        both an id and an English name
    """
    bodies = payload.get('bodies') if isinstance(payload, dict) else None
    if not isinstance(bodies, list):
        raise UpstreamMalformed(
            'Invalid data format from Solar System API - missing or invalid bodies array',
            UPSTREAM_NAME,
        )

    records = [
        body_to_record(body)
        for body in bodies
        if isinstance(body, dict) and body.get('id') and body.get('englishName')
    ]
    if not records:
        raise UpstreamMalformed(f'Solar System API returned no usable bodies ({len(bodies)} rows)', UPSTREAM_NAME)

    logger.debug(f'Normalized {len(records)} of {len(bodies)} solar-system bodies')
    return records
