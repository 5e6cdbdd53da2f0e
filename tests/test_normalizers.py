"""Tests for the upstream response normalizers."""

import json

import pytest

from skyboard.ingestion.coerce import safe_number, wrap_degrees
from skyboard.ingestion.errors import UpstreamMalformed
from skyboard.ingestion.n2yo_client import ObserverQuery, normalize_above
from skyboard.ingestion.opensky_client import (
    METERS_TO_FEET,
    MPS_TO_FPM,
    MPS_TO_KNOTS,
    default_heading,
    normalize_states,
)
from skyboard.ingestion.solar_system_client import body_mass, classify_body, normalize_bodies
from skyboard.models.flight import FlightStatus
from skyboard.models.solar_body import BodyType

from conftest import n2yo_payload, opensky_payload, satellite_row, solar_payload, state_row

NOW = 1_700_000_000


class TestCoerce:

    def test_safe_number(self):
        assert safe_number(12) == 12.0
        assert safe_number('12.5') == 12.5
        assert safe_number(None) == 0
        assert safe_number(True, 7) == 7
        assert safe_number('n/a', 3) == 3
        assert safe_number(float('nan'), 3) == 3
        assert safe_number(float('inf')) == 0

    def test_wrap_degrees(self):
        assert wrap_degrees(-90) == 270.0
        assert wrap_degrees(720.5) == pytest.approx(0.5)
        assert wrap_degrees(-1e-15) == 0.0


class TestOpenSkyNormalizer:

    def test_converts_units(self):
        records, total = normalize_states(opensky_payload(state_row(vertical_rate=5.0)), 10, NOW)

        assert total == 1
        flight = records[0]
        assert flight.id == 'a1b2c3'
        assert flight.callsign == 'UAL839'
        assert flight.altitude == pytest.approx(10000 * METERS_TO_FEET)
        assert flight.speed == pytest.approx(230 * MPS_TO_KNOTS)
        assert flight.vertical_rate == pytest.approx(5 * MPS_TO_FPM)
        assert flight.heading == 275.0
        assert flight.registration == 'A1B2C3'
        assert flight.status is FlightStatus.EN_ROUTE
        assert flight.squawk == '1200'
        assert (flight.origin, flight.destination) == ('LIVE', 'DATA')

    def test_drops_rows_without_valid_position(self):
        payload = opensky_payload(
            state_row(icao24='aaaaaa', lat=None),
            state_row(icao24='bbbbbb', lng=200.0),
            state_row(icao24='cccccc', lat=float('nan')),
            ['short', 'row'],
            state_row(icao24='dddddd'),
        )
        records, total = normalize_states(payload, 10, NOW)

        assert [r.id for r in records] == ['dddddd']
        assert total == 5

    def test_missing_callsign(self):
        records, _ = normalize_states(opensky_payload(state_row(callsign=None)), 10, NOW)
        assert records[0].callsign == 'UNKN000'

    def test_truncates_text_fields(self):
        row = state_row(callsign='ABCDEFGHIJKLMN', country='X' * 80)
        flight = normalize_states(opensky_payload(row), 10, NOW)[0][0]

        assert flight.callsign == 'ABCDEFGHIJ'
        assert len(flight.country) == 50

    def test_missing_heading_is_deterministic(self):
        row = state_row(true_track=None)
        first = normalize_states(opensky_payload(row), 10, NOW)[0][0]
        second = normalize_states(opensky_payload(row), 10, NOW)[0][0]

        assert first.heading == second.heading == default_heading('a1b2c3', 0)
        assert 0 <= first.heading < 360

    def test_on_ground_is_taxiing(self):
        row = state_row(on_ground=True, baro_altitude=None, velocity=4.0)
        flight = normalize_states(opensky_payload(row), 10, NOW)[0][0]

        assert flight.status is FlightStatus.TAXIING
        assert flight.on_ground is True
        assert flight.altitude == 0.0

    def test_negative_altitude_clamped(self):
        flight = normalize_states(opensky_payload(state_row(baro_altitude=-30.0)), 10, NOW)[0][0]
        assert flight.altitude == 0.0

    def test_limit(self):
        rows = [state_row(icao24=f'{i:06x}') for i in range(5)]
        records, total = normalize_states(opensky_payload(*rows), 3, NOW)

        assert len(records) == 3
        assert total == 5

    def test_idempotent(self):
        payload = opensky_payload(state_row(), state_row(icao24='ffffff', true_track=None))
        first = [r.to_dict() for r in normalize_states(payload, 10, NOW)[0]]
        second = [r.to_dict() for r in normalize_states(payload, 10, NOW)[0]]
        assert json.dumps(first) == json.dumps(second)

    @pytest.mark.parametrize('payload', [
        {'time': NOW, 'states': None},
        {'time': NOW, 'states': []},
        {'time': NOW},
        [],
        {'time': NOW, 'states': [state_row(lat=None)]},
    ])
    def test_malformed(self, payload):
        with pytest.raises(UpstreamMalformed):
            normalize_states(payload, 10, NOW)


class TestN2YONormalizer:

    def test_normalizes_satellites(self):
        result = normalize_above(n2yo_payload(satellite_row(intDesignator=None, launchDate='')))

        assert result.transaction_count == 7
        assert result.category_name == 'ISS'
        sat = result.satellites[0]
        assert sat.satid == 25544
        assert sat.satname == 'SPACE STATION'
        assert sat.int_designator == 'Unknown'
        assert sat.launch_date == 'Unknown'

    def test_drops_invalid_rows(self):
        payload = n2yo_payload(
            satellite_row(satid=True),
            satellite_row(satid=2, lat='39.9'),
            satellite_row(satid=3, lat=95.0),
            satellite_row(satid=4, satname=None),
            satellite_row(satid=5, alt=float('nan')),
            satellite_row(satid=7, alt=-1.0),
            satellite_row(satid=6),
        )
        assert [s.satid for s in normalize_above(payload).satellites] == [6]

    def test_error_body(self):
        with pytest.raises(UpstreamMalformed, match='Invalid API Key'):
            normalize_above({'error': 'Invalid API Key!'})

    def test_no_usable_rows(self):
        with pytest.raises(UpstreamMalformed):
            normalize_above(n2yo_payload(satellite_row(lat=None)))

    def test_observer_cache_key(self):
        query = ObserverQuery(latitude=10.0, longitude=20.0, altitude=0.0, radius=70, category_id=2)
        assert query.cache_key == '10.0_20.0_0.0_70_2'


class TestSolarSystemNormalizer:

    def test_classifies_and_maps(self):
        bodies = {b.id: b for b in normalize_bodies(solar_payload())}

        assert bodies['soleil'].type is BodyType.STAR
        assert bodies['terre'].type is BodyType.PLANET
        assert bodies['terre'].moons == 1
        assert bodies['terre'].mass == pytest.approx(5.97237e24)

        moon = bodies['lune'].to_dict()
        assert moon['type'] == 'moon'
        assert moon['parentBody'] == 'terre'
        assert 'discoveredBy' not in moon
        assert 'parentBody' not in bodies['terre'].to_dict()

    def test_classify_precedence(self):
        assert classify_body({'id': 'soleil', 'isPlanet': True}) is BodyType.STAR
        assert classify_body({'id': 'x', 'isPlanet': True, 'aroundPlanet': {'planet': 'y'}}) is BodyType.PLANET
        assert classify_body({'id': 'halley', 'bodyType': 'Comet'}) is BodyType.COMET
        assert classify_body({'id': 'ceres', 'bodyType': 'Dwarf Planet'}) is BodyType.ASTEROID

    def test_mass(self):
        assert body_mass({'mass': {'massValue': 2.0, 'massExponent': 3}}) == 2000.0
        assert body_mass({'mass': {'massValue': 1.0, 'massExponent': 400}}) == 0.0
        assert body_mass({'mass': None}) == 0.0
        assert body_mass({}) == 0.0

    def test_radius_falls_back_to_equatorial(self):
        payload = solar_payload({'id': 'x', 'englishName': 'X', 'meanRadius': 0, 'equaRadius': 12.5})
        assert normalize_bodies(payload)[0].radius == 12.5

    def test_nulls_become_zero(self):
        payload = solar_payload({'id': 'x', 'englishName': 'X', 'density': None, 'gravity': 'n/a'})
        body = normalize_bodies(payload)[0]
        assert body.density == 0.0
        assert body.gravity == 0.0
        assert body.moons == 0

    def test_skips_bodies_without_names(self):
        payload = solar_payload({'id': 'x'}, {'englishName': 'Y'}, {'id': 'z', 'englishName': 'Z'})
        assert [b.id for b in normalize_bodies(payload)] == ['z']

    @pytest.mark.parametrize('payload', [{}, {'bodies': None}, {'bodies': [{'id': 'x'}]}, 'oops'])
    def test_malformed(self, payload):
        with pytest.raises(UpstreamMalformed):
            normalize_bodies(payload)
