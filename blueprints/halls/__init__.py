"""
Halls blueprint initialization.
Assembles the hall booking JSON API under /halls/api.

Route modules live in routes/api/:
- reservations.py - Reservation requests and listings
- availability.py - Interval availability checks
- calendar.py - Monthly availability calendar
- approvals.py - Token-addressed approval decisions
- requesters.py - Per-requester reservation lists
"""

from flask import Blueprint

# Create main halls blueprint
halls_bp = Blueprint('halls', __name__)

# API routes (all REST endpoints)
from blueprints.halls.routes.api import api_bp  # noqa: E402
halls_bp.register_blueprint(api_bp, url_prefix='/api')
