"""
Metrics API endpoints.

Provides endpoints for:
- GET /api/metrics/status - Cache and provenance statistics per domain
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from skyboard.config import config

logger = logging.getLogger(__name__)

metrics_bp = Blueprint('metrics', __name__, url_prefix='/api/metrics')

SERVICE_KEYS = {
    'flights': 'FLIGHT_SERVICE',
    'satellites': 'SATELLITE_SERVICE',
    'solar_system': 'SOLAR_SYSTEM_SERVICE',
}


@metrics_bp.route('/status', methods=['GET'])
def get_system_status():
    """
    Get service health and status information.

    Returns:
    - Per-domain cache statistics
    - Per-domain response counts by source
    - Upstream configuration
    """
    start_time = time.perf_counter()

    domains = {}
    for domain, key in SERVICE_KEYS.items():
        service = current_app.config.get(key)
        domains[domain] = service.stats if service else None

    degraded = any(
        stats and stats['degraded_responses'] > 0
        for stats in domains.values()
    )

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'status': 'degraded' if degraded else 'healthy',
        'domains': domains,
        'config': {
            'opensky_authenticated': config.opensky.is_authenticated,
            'n2yo_configured': config.n2yo.is_configured,
            'solar_system_key_configured': bool(config.solar_system.api_key),
            'timeouts_seconds': {
                'flights': config.opensky.timeout_seconds,
                'satellites': config.n2yo.timeout_seconds,
                'solar_system': config.solar_system.timeout_seconds,
            },
            'max_attempts': config.retry.max_attempts,
        },
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })
