"""
Requester API routes.
"""

from blueprints.halls.routes.api.reservations import public_reservation
from blueprints.halls.services import list_for_requester
from utils.api_response import api_success


def register_routes(bp):
    """Register requester routes on the blueprint."""

    @bp.route('/requesters/<requester_id>/reservations', methods=['GET'])
    def requester_reservations(requester_id):
        """Get a requester's reservations, newest first (tokens excluded)."""
        reservations = list_for_requester(requester_id)
        return api_success(
            data=[public_reservation(r) for r in reservations],
            count=len(reservations)
        )
