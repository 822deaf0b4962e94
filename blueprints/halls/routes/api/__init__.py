"""
Halls API routes package.
Split into smaller modules by resource.
"""

from flask import Blueprint

# Create the API blueprint
api_bp = Blueprint('api', __name__)

# Import and register routes from submodules
from blueprints.halls.routes.api import reservations  # noqa: E402
from blueprints.halls.routes.api import availability  # noqa: E402
from blueprints.halls.routes.api import calendar  # noqa: E402
from blueprints.halls.routes.api import approvals  # noqa: E402
from blueprints.halls.routes.api import requesters  # noqa: E402

# Register all route functions on the blueprint
reservations.register_routes(api_bp)
availability.register_routes(api_bp)
calendar.register_routes(api_bp)
approvals.register_routes(api_bp)
requesters.register_routes(api_bp)
