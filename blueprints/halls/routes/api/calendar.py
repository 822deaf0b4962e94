"""
Calendar API routes.
"""

from flask import request

from blueprints.halls.services import monthly_calendar
from models.reservation import DAY_AVAILABLE
from utils.api_response import api_success


def register_routes(bp):
    """Register calendar routes on the blueprint."""

    @bp.route('/calendar/<int:year>/<int:month>', methods=['GET'])
    def month_calendar(year, month):
        """
        Get per-day availability for a month.

        Query params:
            hall: Hall name, repeatable (default: configured halls)

        Returns:
            JSON mapping each day to 'available' or 'fully-booked'
        """
        halls = [h.strip() for h in request.args.getlist('hall') if h.strip()]
        days = monthly_calendar(halls, year, month)

        return api_success(
            data=days,
            available_days=sum(1 for status in days.values() if status == DAY_AVAILABLE)
        )
