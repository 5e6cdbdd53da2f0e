"""
Flight data API endpoint.

- GET /api/flights - Aircraft positions (live, cached or synthetic)
"""

import logging
import time

from flask import Blueprint, current_app, jsonify, request

from skyboard.api.params import flag_arg, int_arg
from skyboard.services.flight_service import DEFAULT_LIMIT

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')


@flights_bp.route('', methods=['GET'])
def list_flights():
    """
    List aircraft positions.

    Query parameters:
    - region: string, advisory only (default global)
    - limit: int, max flights to return (default 500, clamped to 0-2000)
    - mock: 'true' to force synthetic data

    Always answers 200; check `source` for provenance.
    """
    start_time = time.perf_counter()

    region = request.args.get('region') or 'global'
    limit = int_arg('limit', DEFAULT_LIMIT)
    use_mock = flag_arg('mock')

    service = current_app.config['FLIGHT_SERVICE']
    payload = service.get_flights(limit=limit, use_mock=use_mock, region=region)

    query_time_ms = (time.perf_counter() - start_time) * 1000
    logger.debug(f'/api/flights answered from {payload["source"]} in {query_time_ms:.1f}ms')

    return jsonify(payload)
