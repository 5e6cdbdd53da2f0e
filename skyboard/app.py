"""
SkyBoard Flask Application.

Main entry point for the API service. Initializes:
- Domain services (flights, satellites, solar-system), each with its cache
- API routes
- CORS for the dashboard

Usage:
    python -m skyboard.app

Or with gunicorn:
    gunicorn 'skyboard.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask, request
from flask_cors import CORS

from skyboard import __version__
from skyboard.api import flights_bp, metrics_bp, satellites_bp, solar_system_bp
from skyboard.config import config
from skyboard.services import FlightService, SatelliteService, SolarSystemService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(
    flight_service: Optional[FlightService] = None,
    satellite_service: Optional[SatelliteService] = None,
    solar_system_service: Optional[SolarSystemService] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        flight_service: Service for /api/flights (built from config if None)
        satellite_service: Service for /api/satellites (built from config if None)
        solar_system_service: Service for /api/solar-system (built from config if None)

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    # Services own the process-lifetime caches
    app.config['FLIGHT_SERVICE'] = flight_service or FlightService()
    app.config['SATELLITE_SERVICE'] = satellite_service or SatelliteService()
    app.config['SOLAR_SYSTEM_SERVICE'] = solar_system_service or SolarSystemService()

    # Register API blueprints
    app.register_blueprint(flights_bp)
    app.register_blueprint(satellites_bp)
    app.register_blueprint(solar_system_bp)
    app.register_blueprint(metrics_bp)

    @app.route('/health')
    def health():
        """Liveness probe; upstream health is reported by /api/metrics/status."""
        return {'status': 'ok', 'version': __version__}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    # Domain endpoints always answer 200; these only cover unknown routes
    # and failures outside the service pipelines.
    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found', 'path': request.path}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Unhandled error on {request.path}: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    logger.info(f'Starting SkyBoard on http://localhost:{config.port}')

    app.run(
        host='0.0.0.0',
        port=config.port,
        debug=config.debug,
    )


if __name__ == '__main__':
    run_development_server()
