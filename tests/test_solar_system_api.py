"""Tests for GET /api/solar-system."""

from skyboard.ingestion.errors import NetworkError

from conftest import FakeSolarSystemClient, solar_payload

PLANETS = ['mercury', 'venus', 'earth', 'mars', 'jupiter', 'saturn', 'uranus', 'neptune']


class TestSolarSystemEndpoint:

    def test_mock_planets(self, make_client):
        solar = FakeSolarSystemClient(solar_payload())
        data = make_client(solar=solar).get('/api/solar-system?type=planet&mock=true').get_json()

        assert solar.calls == []
        assert data['source'] == 'mock'
        assert [b['id'] for b in data['bodies']] == PLANETS
        assert all(b['isPlanet'] and b['type'] == 'planet' for b in data['bodies'])
        assert data['total'] == 9
        assert data['filtered'] == 8

    def test_live_data(self, make_client):
        data = make_client().get('/api/solar-system').get_json()

        assert data['source'] == 'solar-system-api'
        assert [b['type'] for b in data['bodies']] == ['star', 'planet', 'moon']
        assert data['total'] == data['filtered'] == 3

    def test_moon_filter(self, make_client):
        data = make_client().get('/api/solar-system?type=moon').get_json()

        assert data['filtered'] == 1
        assert data['bodies'][0]['englishName'] == 'Moon'
        assert data['bodies'][0]['parentBody'] == 'terre'

    def test_cache_holds_unfiltered_list(self, make_client, clock):
        solar = FakeSolarSystemClient(solar_payload())
        client = make_client(solar=solar)

        first = client.get('/api/solar-system?type=planet').get_json()
        clock.advance(60 * 60)
        second = client.get('/api/solar-system?type=star').get_json()

        assert len(solar.calls) == 1
        assert second['source'] == 'cache'
        assert second['timestamp'] == first['timestamp']
        assert [b['id'] for b in second['bodies']] == ['soleil']
        assert second['total'] == 3

    def test_retries_then_falls_back(self, make_client, sleeps):
        solar = FakeSolarSystemClient(NetworkError('Solar System API request failed: refused'))
        response = make_client(solar=solar).get('/api/solar-system')
        data = response.get_json()

        assert response.status_code == 200
        assert len(solar.calls) == 2
        assert sleeps == [1.0]
        assert data['source'] == 'fallback'
        assert data['error'] == 'Solar System API request failed: refused'
        assert data['warning']
        assert len(data['bodies']) == 9

    def test_malformed_body_falls_back(self, make_client):
        solar = FakeSolarSystemClient({'message': 'maintenance'})
        data = make_client(solar=solar).get('/api/solar-system').get_json()

        assert data['source'] == 'fallback'
        assert 'bodies array' in data['error']

    def test_unknown_type_returns_all(self, make_client):
        data = make_client().get('/api/solar-system?type=dwarf&mock=true').get_json()

        assert data['filtered'] == data['total'] == 9

    def test_mock_moon_filter_is_empty_with_warning(self, make_client):
        data = make_client().get('/api/solar-system?type=moon&mock=true').get_json()

        assert data['source'] == 'mock'
        assert data['bodies'] == []
        assert data['filtered'] == 0
        assert data['total'] == 9
        assert data['warning'] == 'No moon bodies in this data set'

    def test_fallback_comet_filter_keeps_fallback_warning(self, make_client):
        solar = FakeSolarSystemClient(NetworkError('refused'))
        data = make_client(solar=solar).get('/api/solar-system?type=comet').get_json()

        assert data['source'] == 'fallback'
        assert data['bodies'] == []
        assert data['warning'].startswith('Using mock data due to API unavailability')
        assert 'No comet bodies' in data['warning']

    def test_internal_error_is_emergency_fallback(self, make_client):
        solar = FakeSolarSystemClient(TypeError('boom'))
        data = make_client(solar=solar).get('/api/solar-system?type=star').get_json()

        assert data['source'] == 'emergency_fallback'
        assert data['error'] == 'boom'
        assert [b['id'] for b in data['bodies']] == ['sun']
        assert len(solar.calls) == 1
