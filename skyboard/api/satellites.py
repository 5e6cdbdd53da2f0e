"""
Satellite data API endpoint.

- GET /api/satellites - Satellites above an observer
"""

import logging

from flask import Blueprint, current_app, jsonify

from skyboard.api.params import flag_arg, float_arg, int_arg
from skyboard.ingestion.n2yo_client import ObserverQuery
from skyboard.services.satellite_service import (
    DEFAULT_ALTITUDE,
    DEFAULT_CATEGORY,
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    DEFAULT_RADIUS,
)

logger = logging.getLogger(__name__)

satellites_bp = Blueprint('satellites', __name__, url_prefix='/api/satellites')


@satellites_bp.route('', methods=['GET'])
def list_satellites():
    """
    List satellites above the observer.

    Query parameters:
    - lat, lng: observer position in degrees (default San Francisco)
    - alt: observer altitude in meters (default 0)
    - radius: search radius in degrees (default 70)
    - category: N2YO category id (default 0 = all)
    - mock: 'true' to force synthetic data
    """
    query = ObserverQuery(
        latitude=float_arg('lat', DEFAULT_LATITUDE),
        longitude=float_arg('lng', DEFAULT_LONGITUDE),
        altitude=float_arg('alt', DEFAULT_ALTITUDE),
        radius=int_arg('radius', DEFAULT_RADIUS),
        category_id=int_arg('category', DEFAULT_CATEGORY),
    )

    service = current_app.config['SATELLITE_SERVICE']
    return jsonify(service.get_satellites(query, use_mock=flag_arg('mock')))
