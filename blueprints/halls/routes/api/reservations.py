"""
Reservation API routes.
Submit booking requests and list active reservations.
"""

from flask import request

from blueprints.halls.forms import ReservationRequestForm, form_errors
from blueprints.halls.services import create_reservation
from models.reservation import (
    current_state, get_reservation_by_id, get_reservations_by_hall_and_day,
    get_reservations_by_month, ValidationError
)
from utils.api_response import api_success, api_error
from utils.messages import get_message
from utils.datetime_helpers import is_valid_month
from utils.validators import validate_date_format


def public_reservation(reservation: dict) -> dict:
    """Serialize a reservation for API output (token excluded)."""
    data = {key: value for key, value in reservation.items() if key != 'token'}
    data['current_state'] = current_state(reservation)
    return data


def register_routes(bp):
    """Register reservation API routes on the blueprint."""

    @bp.route('/reservations', methods=['POST'])
    def submit_reservation():
        """
        Submit a booking request.

        Request body (JSON):
            requester_name, requester_email, requester_id (optional),
            hall, reservation_date (YYYY-MM-DD), start_time, end_time (HH:MM)

        Returns:
            201 with the reservation id, decision token and view state
        """
        form = ReservationRequestForm()
        if not form.validate_on_submit():
            return api_error(get_message('invalid_request'), 400,
                             code='validation_error', fields=form_errors(form))

        reservation_id, token = create_reservation(form.to_request())
        reservation = get_reservation_by_id(reservation_id)

        return api_success(
            data={
                'id': reservation_id,
                'token': token,
                'status': reservation['status'],
                'current_state': current_state(reservation),
                'approval_required': reservation['approval_required'],
                'classifier_reason': reservation['classifier_reason'],
            },
            message=get_message('reservation_created'),
            status=201
        )

    @bp.route('/reservations', methods=['GET'])
    def list_reservations():
        """
        List active reservations.

        Query params:
            hall + date: Active reservations for a hall on a day
            year + month: Active reservations for a month (all halls)

        Returns:
            JSON list of reservations (tokens excluded)
        """
        hall = request.args.get('hall', '').strip()
        day = request.args.get('date', '').strip()
        year = request.args.get('year', type=int)
        month = request.args.get('month', type=int)

        if hall and day:
            if not validate_date_format(day):
                raise ValidationError(f"Invalid date: {day}")
            reservations = get_reservations_by_hall_and_day(hall, day)
        elif year and month:
            if not is_valid_month(year, month):
                raise ValidationError(get_message('invalid_month'))
            reservations = get_reservations_by_month(year, month)
        else:
            return api_error(get_message('invalid_query'), 400, code='validation_error')

        return api_success(
            data=[public_reservation(r) for r in reservations],
            count=len(reservations)
        )
