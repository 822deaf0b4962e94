"""
Service API routes.
Endpoints that are not tied to the booking engine.
"""

from flask import Blueprint, current_app, jsonify

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint.

    Returns:
        JSON with status and version
    """
    return jsonify({
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME', 'HallBook')
    })
