"""
API module for SkyBoard.

Provides REST endpoints for:
- Aircraft positions
- Satellites above an observer
- Solar-system bodies
- Service status
"""

from skyboard.api.flights import flights_bp
from skyboard.api.metrics import metrics_bp
from skyboard.api.satellites import satellites_bp
from skyboard.api.solar_system import solar_system_bp

__all__ = ['flights_bp', 'satellites_bp', 'solar_system_bp', 'metrics_bp']
