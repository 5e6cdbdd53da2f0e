"""Tests for the status and health endpoints."""

from skyboard import __version__
from skyboard.ingestion.errors import UpstreamTimeout

from conftest import FakeOpenSkyClient


class TestStatusEndpoint:

    def test_healthy_before_any_degradation(self, make_client):
        client = make_client()
        client.get('/api/flights')

        data = client.get('/api/metrics/status').get_json()

        assert data['status'] == 'healthy'
        assert set(data['domains']) == {'flights', 'satellites', 'solar_system'}
        assert data['domains']['flights']['sources']['opensky'] == 1
        assert data['domains']['flights']['cache']['entries'] == 1
        assert data['config']['max_attempts'] >= 1

    def test_fallback_marks_degraded(self, make_client):
        client = make_client(opensky=FakeOpenSkyClient(UpstreamTimeout('slow')))
        client.get('/api/flights')
        client.get('/api/flights')

        flights = client.get('/api/metrics/status').get_json()['domains']['flights']

        assert flights['sources']['fallback'] == 1
        assert flights['sources']['cache'] == 1
        assert flights['degraded_responses'] == 1
        assert flights['cache']['hits'] == 1

    def test_status_reports_degraded(self, make_client):
        client = make_client(opensky=FakeOpenSkyClient(UpstreamTimeout('slow')))
        client.get('/api/flights')

        assert client.get('/api/metrics/status').get_json()['status'] == 'degraded'


class TestAppRoutes:

    def test_health(self, make_client):
        response = make_client().get('/health')
        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'ok'
        assert data['version'] == __version__

    def test_unknown_route_is_json_404(self, make_client):
        response = make_client().get('/api/comets')
        assert response.status_code == 404
        assert response.get_json() == {'error': 'Not found', 'path': '/api/comets'}
