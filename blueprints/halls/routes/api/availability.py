"""
Availability API routes.
"""

from flask import request

from blueprints.halls.forms import AvailabilityQueryForm, form_errors
from blueprints.halls.services import check_availability
from utils.api_response import api_success, api_error
from utils.messages import get_message


def register_routes(bp):
    """Register availability routes on the blueprint."""

    @bp.route('/availability', methods=['GET'])
    def availability():
        """
        Check whether an interval is free for a hall.

        Query params:
            hall: Hall name
            date: Day (YYYY-MM-DD)
            start, end: Interval (HH:MM)

        Returns:
            JSON with an advisory 'available' flag
        """
        form = AvailabilityQueryForm(formdata=request.args)
        if not form.validate():
            return api_error(get_message('invalid_request'), 400,
                             code='validation_error', fields=form_errors(form))

        available = check_availability(
            form.hall.data.strip(), form.date.data, form.start.data, form.end.data
        )
        return api_success(data={
            'hall': form.hall.data.strip(),
            'date': form.date.data.isoformat(),
            'start': form.start.data,
            'end': form.end.data,
            'available': available,
        })
