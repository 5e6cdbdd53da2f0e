"""
Domain services.

Each service runs the fetch-cache-validate-fallback pipeline for one domain
and always returns a populated, JSON-ready payload tagged with its source.
"""

from skyboard.services.flight_service import FlightService
from skyboard.services.satellite_service import SatelliteService
from skyboard.services.solar_system_service import SolarSystemService

__all__ = ['FlightService', 'SatelliteService', 'SolarSystemService']
