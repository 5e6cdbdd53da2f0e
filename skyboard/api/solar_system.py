"""
Solar-system API endpoint.

- GET /api/solar-system - Sun, planets, moons, asteroids and comets
"""

from flask import Blueprint, current_app, jsonify, request

from skyboard.api.params import flag_arg

solar_system_bp = Blueprint('solar_system', __name__, url_prefix='/api/solar-system')


@solar_system_bp.route('', methods=['GET'])
def list_bodies():
    """
    List solar-system bodies.

    Query parameters:
    - type: all|planet|moon|asteroid|comet|star (default all)
    - mock: 'true' to force the built-in table
    """
    service = current_app.config['SOLAR_SYSTEM_SERVICE']
    payload = service.get_bodies(
        body_type=request.args.get('type', 'all'),
        use_mock=flag_arg('mock'),
    )
    return jsonify(payload)
