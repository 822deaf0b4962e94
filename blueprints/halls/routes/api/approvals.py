"""
Approval API routes.
The decision token in the URL is the only credential: whoever holds the
approval link may decide once.
"""

from blueprints.halls.forms import DecisionForm, form_errors
from blueprints.halls.routes.api.reservations import public_reservation
from blueprints.halls.services import decide
from models.reservation import get_reservation_by_token, STATUS_APPROVED
from utils.api_response import api_success, api_error
from utils.messages import get_message


def register_routes(bp):
    """Register approval routes on the blueprint."""

    @bp.route('/approvals/<token>', methods=['GET'])
    def approval_detail(token):
        """Get the reservation addressed by an approval link."""
        reservation = get_reservation_by_token(token)
        return api_success(data=public_reservation(reservation))

    @bp.route('/approvals/<token>', methods=['POST'])
    def approval_decide(token):
        """
        Approve or reject the reservation addressed by an approval link.

        Request body (JSON):
            outcome: 'approved' or 'rejected'
            reason: Required when rejecting

        Returns:
            JSON with the reservation after the decision
        """
        form = DecisionForm()
        if not form.validate_on_submit():
            return api_error(get_message('invalid_request'), 400,
                             code='validation_error', fields=form_errors(form))

        reservation = decide(token, form.outcome.data, form.reason.data)

        key = 'reservation_approved' if reservation['status'] == STATUS_APPROVED \
            else 'reservation_rejected'
        return api_success(data=public_reservation(reservation), message=get_message(key))
