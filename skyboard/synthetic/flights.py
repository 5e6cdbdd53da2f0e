"""
Synthetic flight generator.

Produces plausible aircraft positions when OpenSky is unavailable or mock
data is requested. Each flight:

1. Picks an airline, aircraft type and origin/destination pair from the
   fixed tables below
2. Places the aircraft along the straight line between the airports at a
   random progress fraction, perturbed by up to +/-0.25 degrees
3. Derives the flight phase from progress:
   - progress < 0.05 -> Takeoff (climbing) or Taxiing (on ground)
   - progress > 0.95 -> Landing (descending) or Taxiing (on ground)
   - otherwise       -> En Route at the type's cruise band
4. Points the heading at the destination

Every helper takes the random source explicitly so tests can seed it.
"""

import math
import random
import string
import time
from typing import List, NamedTuple, Optional, Tuple

from skyboard.ingestion.coerce import wrap_degrees
from skyboard.models.flight import FlightRecord, FlightStatus

MAX_FLIGHTS = 1000

TAKEOFF_PROGRESS = 0.05
LANDING_PROGRESS = 0.95
POSITION_JITTER_DEGREES = 0.25


class Airline(NamedTuple):
    code: str
    name: str
    country: str


class AircraftType(NamedTuple):
    type: str
    cruise_altitude: int  # feet
    cruise_speed: int  # knots


class Airport(NamedTuple):
    code: str
    lat: float
    lng: float
    city: str


AIRLINES: Tuple[Airline, ...] = (
    Airline('UAL', 'United Airlines', 'United States'),
    Airline('DAL', 'Delta Air Lines', 'United States'),
    Airline('AAL', 'American Airlines', 'United States'),
    Airline('SWA', 'Southwest Airlines', 'United States'),
    Airline('JBU', 'JetBlue Airways', 'United States'),
    Airline('BAW', 'British Airways', 'United Kingdom'),
    Airline('VIR', 'Virgin Atlantic', 'United Kingdom'),
    Airline('AFR', 'Air France', 'France'),
    Airline('DLH', 'Lufthansa', 'Germany'),
    Airline('KLM', 'KLM Royal Dutch Airlines', 'Netherlands'),
    Airline('UAE', 'Emirates', 'United Arab Emirates'),
    Airline('QTR', 'Qatar Airways', 'Qatar'),
    Airline('SIA', 'Singapore Airlines', 'Singapore'),
    Airline('CPA', 'Cathay Pacific', 'Hong Kong'),
    Airline('ANA', 'All Nippon Airways', 'Japan'),
    Airline('JAL', 'Japan Airlines', 'Japan'),
    Airline('KAL', 'Korean Air', 'South Korea'),
    Airline('ACA', 'Air Canada', 'Canada'),
    Airline('QFA', 'Qantas', 'Australia'),
    Airline('THY', 'Turkish Airlines', 'Turkey'),
)

AIRCRAFT_TYPES: Tuple[AircraftType, ...] = (
    AircraftType('B737-800', 37000, 450),
    AircraftType('A320-200', 36000, 440),
    AircraftType('B777-300ER', 41000, 490),
    AircraftType('A350-900', 42000, 485),
    AircraftType('B787-9', 43000, 480),
    AircraftType('A330-300', 38000, 470),
    AircraftType('B747-8F', 39000, 475),
    AircraftType('A380-800', 41000, 485),
    AircraftType('B737 MAX 8', 37000, 455),
    AircraftType('A321neo', 38000, 450),
    AircraftType('CRJ-900', 35000, 420),
    AircraftType('E190', 36000, 430),
)

AIRPORTS: Tuple[Airport, ...] = (
    Airport('LAX', 33.9425, -118.4081, 'Los Angeles'),
    Airport('JFK', 40.6413, -73.7781, 'New York'),
    Airport('LHR', 51.47, -0.4543, 'London'),
    Airport('CDG', 49.0097, 2.5479, 'Paris'),
    Airport('NRT', 35.772, 140.3929, 'Tokyo'),
    Airport('SYD', -33.9399, 151.1753, 'Sydney'),
    Airport('DXB', 25.2532, 55.3657, 'Dubai'),
    Airport('SIN', 1.3644, 103.9915, 'Singapore'),
    Airport('ORD', 41.9742, -87.9073, 'Chicago'),
    Airport('ATL', 33.6407, -84.4277, 'Atlanta'),
    Airport('DEN', 39.8561, -104.6737, 'Denver'),
    Airport('DFW', 32.8998, -97.0403, 'Dallas'),
    Airport('SEA', 47.4502, -122.3088, 'Seattle'),
    Airport('SFO', 37.6213, -122.379, 'San Francisco'),
    Airport('MIA', 25.7959, -80.287, 'Miami'),
    Airport('FRA', 50.0379, 8.5622, 'Frankfurt'),
    Airport('AMS', 52.3105, 4.7683, 'Amsterdam'),
    Airport('MAD', 40.4839, -3.568, 'Madrid'),
    Airport('FCO', 41.8003, 12.2389, 'Rome'),
    Airport('IST', 41.2753, 28.7519, 'Istanbul'),
)


class Route(NamedTuple):
    airline: Airline
    aircraft: AircraftType
    origin: Airport
    destination: Airport


class Phase(NamedTuple):
    status: FlightStatus
    altitude: float
    speed: float
    vertical_rate: float

    @property
    def on_ground(self) -> bool:
        return self.status.is_grounded


# -----------------------------------------------------------------------------
# Pick from tables
# -----------------------------------------------------------------------------

def pick_route(rng: random.Random) -> Route:
    """Pick airline, aircraft and a distinct origin/destination pair."""
    origin, destination = rng.sample(AIRPORTS, 2)
    return Route(
        airline=rng.choice(AIRLINES),
        aircraft=rng.choice(AIRCRAFT_TYPES),
        origin=origin,
        destination=destination,
    )


# -----------------------------------------------------------------------------
# Perturb / derive
# -----------------------------------------------------------------------------

def interpolate_position(
    origin: Airport,
    destination: Airport,
    progress: float,
    rng: random.Random,
) -> Tuple[float, float]:
    """Linear interpolation along the route plus jitter, clamped to valid ranges."""
    lat = origin.lat + (destination.lat - origin.lat) * progress
    lng = origin.lng + (destination.lng - origin.lng) * progress

    lat += rng.uniform(-POSITION_JITTER_DEGREES, POSITION_JITTER_DEGREES)
    lng += rng.uniform(-POSITION_JITTER_DEGREES, POSITION_JITTER_DEGREES)

    return max(-90.0, min(90.0, lat)), max(-180.0, min(180.0, lng))


def flight_phase(progress: float, aircraft: AircraftType, rng: random.Random) -> Phase:
    """
    Phase-appropriate status, altitude (ft), speed (kt) and vertical rate (fpm).

    Grounded phases always report zero altitude and vertical rate.
    """
    if progress < TAKEOFF_PROGRESS or progress > LANDING_PROGRESS:
        if rng.random() < 0.5:
            return Phase(
                status=FlightStatus.TAXIING,
                altitude=0.0,
                speed=rng.uniform(5, 30),
                vertical_rate=0.0,
            )
        if progress < TAKEOFF_PROGRESS:
            return Phase(
                status=FlightStatus.TAKEOFF,
                altitude=rng.uniform(500, 5500),
                speed=rng.uniform(150, 250),
                vertical_rate=rng.uniform(1500, 3000),
            )
        return Phase(
            status=FlightStatus.LANDING,
            altitude=rng.uniform(200, 3200),
            speed=rng.uniform(120, 200),
            vertical_rate=rng.uniform(-1200, -600),
        )

    return Phase(
        status=FlightStatus.EN_ROUTE,
        altitude=max(0.0, aircraft.cruise_altitude + rng.uniform(-2000, 2000)),
        speed=max(0.0, aircraft.cruise_speed + rng.uniform(-25, 25)),
        vertical_rate=rng.uniform(-500, 500),
    )


def bearing(lat: float, lng: float, destination: Airport) -> float:
    """Planar bearing from the current position to the destination, in [0, 360)."""
    heading = math.degrees(math.atan2(destination.lng - lng, destination.lat - lat))
    return wrap_degrees(heading)


def make_callsign(airline: Airline, rng: random.Random) -> str:
    return f'{airline.code}{rng.randint(1000, 9999)}'


def make_registration(airline: Airline, rng: random.Random) -> str:
    """
    Tail number in the style of the airline's country.

    US: N###XX, UK: G-XXXX, elsewhere: <code>-###
    """
    if airline.country == 'United States':
        letters = ''.join(rng.choice(string.ascii_uppercase) for _ in range(2))
        return f'N{rng.randint(100, 999)}{letters}'
    if airline.country == 'United Kingdom':
        letters = ''.join(rng.choice(string.ascii_uppercase) for _ in range(4))
        return f'G-{letters}'
    return f'{airline.code}-{rng.randint(0, 999):03d}'


def make_squawk(rng: random.Random) -> str:
    """Transponder codes are four octal digits."""
    return ''.join(str(rng.randint(0, 7)) for _ in range(4))


# -----------------------------------------------------------------------------
# Generator
# -----------------------------------------------------------------------------

def generate_flight(index: int, rng: random.Random, now: int) -> FlightRecord:
    route = pick_route(rng)
    progress = rng.random()
    lat, lng = interpolate_position(route.origin, route.destination, progress, rng)
    phase = flight_phase(progress, route.aircraft, rng)

    return FlightRecord(
        id=f'mock_{index:06d}',
        callsign=make_callsign(route.airline, rng),
        latitude=lat,
        longitude=lng,
        altitude=phase.altitude,
        speed=phase.speed,
        heading=bearing(lat, lng, route.destination),
        status=phase.status,
        aircraft_type=route.aircraft.type,
        origin=route.origin.code,
        destination=route.destination.code,
        squawk=make_squawk(rng),
        registration=make_registration(route.airline, rng),
        country=route.airline.country,
        last_contact=now - rng.randint(0, 59),
        on_ground=phase.on_ground,
        vertical_rate=phase.vertical_rate,
    )


def generate_flights(
    limit: int = 500,
    rng: Optional[random.Random] = None,
    now: Optional[int] = None,
) -> List[FlightRecord]:
    """
    Generate up to `limit` synthetic flights (never more than MAX_FLIGHTS).

    Args:
        limit: Requested number of flights
        rng: Random source; a fresh unseeded one is used when omitted
        now: Epoch seconds used for lastContact
    """
    rng = rng or random.Random()
    now = int(time.time()) if now is None else now
    count = max(0, min(limit, MAX_FLIGHTS))
    return [generate_flight(i, rng, now) for i in range(count)]
