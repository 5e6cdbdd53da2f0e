"""
Shared fixtures for SkyBoard tests.

Upstream clients are replaced with in-memory fakes and time is driven by a
manual clock, so no test touches the network or sleeps.
"""

import random

import pytest

from skyboard.app import create_app
from skyboard.cache import TimedCache
from skyboard.services import FlightService, SatelliteService, SolarSystemService


START_TIME = 1_700_000_000.0


class ManualClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: float = START_TIME):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """
    Records calls and replays scripted outcomes.

    Each outcome is either a payload to return or an exception to raise;
    the last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def _next(self, *args):
        self.calls.append(args)
        index = min(len(self.calls), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeOpenSkyClient(FakeUpstream):
    def get_states(self):
        return self._next()


class FakeN2YOClient(FakeUpstream):
    def __init__(self, *outcomes, configured: bool = True):
        super().__init__(*outcomes)
        self.is_configured = configured

    def get_above(self, query):
        return self._next(query)


class FakeSolarSystemClient(FakeUpstream):
    def get_bodies(self):
        return self._next()


# -----------------------------------------------------------------------------
# Sample upstream payloads
# -----------------------------------------------------------------------------

def state_row(
    icao24='a1b2c3',
    callsign='UAL839  ',
    country='United States',
    last_contact=1_699_999_990,
    lng=-122.4,
    lat=37.6,
    baro_altitude=10000.0,
    on_ground=False,
    velocity=230.0,
    true_track=275.0,
    vertical_rate=0.0,
    squawk='1200',
):
    return [
        icao24, callsign, country, last_contact - 1, last_contact,
        lng, lat, baro_altitude, on_ground, velocity, true_track,
        vertical_rate, None, baro_altitude, squawk, False, 0,
    ]


def opensky_payload(*rows):
    return {'time': 1_700_000_000, 'states': list(rows) or [state_row()]}


def n2yo_payload(*sats, category='ISS', transactions=7):
    return {
        'info': {'category': category, 'transactionscount': transactions, 'satcount': len(sats)},
        'above': list(sats) or [satellite_row()],
    }


def satellite_row(satid=25544, satname=' SPACE STATION ', lat=39.9, lng=-76.1, alt=420.3, **extra):
    row = {
        'satid': satid,
        'satname': satname,
        'intDesignator': '1998-067A',
        'launchDate': '1998-11-20',
        'satlat': lat,
        'satlng': lng,
        'satalt': alt,
    }
    row.update(extra)
    return row


def solar_payload(*bodies):
    return {'bodies': list(bodies) or [
        {
            'id': 'soleil', 'name': 'Soleil', 'englishName': 'Sun', 'isPlanet': False,
            'mass': {'massValue': 1.989, 'massExponent': 30}, 'meanRadius': 696342,
            'density': 1.41, 'gravity': 274, 'avgTemp': 5778, 'semimajorAxis': 0,
            'sideralOrbit': 0, 'sideralRotation': 609.12, 'bodyType': 'Star',
        },
        {
            'id': 'terre', 'name': 'La Terre', 'englishName': 'Earth', 'isPlanet': True,
            'moons': [{'moon': 'La Lune'}], 'mass': {'massValue': 5.97237, 'massExponent': 24},
            'meanRadius': 6371.0084, 'density': 5.5136, 'gravity': 9.8, 'avgTemp': 288,
            'semimajorAxis': 149598023, 'sideralOrbit': 365.256, 'sideralRotation': 23.9345,
            'bodyType': 'Planet',
        },
        {
            'id': 'lune', 'name': 'La Lune', 'englishName': 'Moon', 'isPlanet': False,
            'aroundPlanet': {'planet': 'terre', 'rel': 'https://api.le-systeme-solaire.net/rest/bodies/terre'},
            'mass': {'massValue': 7.346, 'massExponent': 22}, 'meanRadius': 1737,
            'density': 3.344, 'gravity': 1.62, 'avgTemp': 0, 'semimajorAxis': 384400,
            'sideralOrbit': 27.3217, 'sideralRotation': 655.728, 'bodyType': 'Moon',
            'discoveredBy': '', 'discoveryDate': '',
        },
    ]}


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def sleeps():
    """Collects backoff delays instead of sleeping."""
    return []


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_services(clock, sleeps, rng):
    """Build the three services around fake upstreams."""

    def _make(opensky=None, n2yo=None, solar=None, flight_cache=None):
        flights = FlightService(
            client=opensky or FakeOpenSkyClient(opensky_payload()),
            cache=flight_cache or TimedCache(30, clock=clock, name='flights'),
            clock=clock,
            rng=rng,
        )
        satellites = SatelliteService(
            client=n2yo or FakeN2YOClient(n2yo_payload()),
            cache=TimedCache(60, clock=clock, name='satellites'),
            clock=clock,
            rng=rng,
            sleep=sleeps.append,
            max_attempts=2,
            backoff_seconds=1.0,
        )
        solar_system = SolarSystemService(
            client=solar or FakeSolarSystemClient(solar_payload()),
            cache=TimedCache(24 * 60 * 60, clock=clock, name='solar_system'),
            clock=clock,
            rng=rng,
            sleep=sleeps.append,
            max_attempts=2,
            backoff_seconds=1.0,
        )
        return flights, satellites, solar_system

    return _make


@pytest.fixture
def make_client(make_services):
    """Flask test client wired to fake upstreams."""

    def _make(**upstreams):
        flights, satellites, solar_system = make_services(**upstreams)
        app = create_app(
            flight_service=flights,
            satellite_service=satellites,
            solar_system_service=solar_system,
        )
        app.config['TESTING'] = True
        return app.test_client()

    return _make
