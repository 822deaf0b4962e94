"""
Hall booking service.

Core operations of the reservation engine:
- create_reservation: validate, advise, classify, persist, notify
- check_availability / monthly_calendar: advisory availability reads
- decide: token-addressed approval state machine
- list_for_requester: a requester's reservations
"""

import logging

from flask import current_app

from extensions import get_authorization_gate, get_notification_sink
from models.reservation import (
    STATUS_APPROVED, STATUS_REJECTED, DECISION_OUTCOMES,
    check_availability, create_hall_reservation, find_conflicts, get_month_status,
    get_requester_history_summary, get_reservation_by_token, is_terminal,
    get_reservations_by_requester, list_active_reservations, mirror_reservation,
    transition_reservation_status, validate_interval,
    AlreadyDecidedError, ClassifierUnavailableError, ConflictError,
    MissingReasonError, ReservationError, ValidationError,
)
from utils.validators import sanitize_input, validate_email
from .notification_service import (
    build_approval_requested_event, build_decision_made_event, dispatch_notification
)

logger = logging.getLogger(__name__)

__all__ = [
    'create_reservation', 'check_availability', 'monthly_calendar',
    'decide', 'list_for_requester',
]


# =============================================================================
# CREATE
# =============================================================================

def _clean_request(request: dict) -> dict:
    """Normalize and validate a reservation request."""
    hall = sanitize_input(request.get('hall'), max_length=100)
    name = sanitize_input(request.get('requester_name'), max_length=200)
    email = sanitize_input(request.get('requester_email'), max_length=254)
    requester_id = sanitize_input(request.get('requester_id'), max_length=200) or None

    if not hall:
        raise ValidationError("Hall is required")
    if len(name) < 2:
        raise ValidationError("Requester name must be at least 2 characters")
    if not validate_email(email):
        raise ValidationError("A valid requester email is required")

    start_time = request.get('start_time')
    end_time = request.get('end_time')
    day = validate_interval(request.get('reservation_date'), start_time, end_time)

    return {
        'hall': hall,
        'reservation_date': day,
        'start_time': start_time,
        'end_time': end_time,
        'requester_name': name,
        'requester_email': email,
        'requester_id': requester_id or email.lower(),
    }


def _build_authorization_context(data: dict, active: list) -> dict:
    """Build the opaque context handed to the authorization gate."""
    if active:
        booked = ', '.join(f"{r['start_time']}-{r['end_time']}" for r in active)
        availability = f"{len(active)} active reservations that day ({booked})"
    else:
        availability = 'No other reservations that day'

    return {
        'requester_id': data['requester_id'],
        'hall': data['hall'],
        'reservation_date': data['reservation_date'],
        'start_time': data['start_time'],
        'end_time': data['end_time'],
        'requester_history': get_requester_history_summary(data['requester_id']),
        'hall_availability': availability,
    }


def _evaluate_gate(context: dict) -> dict:
    gate = get_authorization_gate()
    try:
        return gate.evaluate(context)
    except ReservationError:
        raise
    except Exception as e:
        logger.error(f"Authorization gate failed: {e}", exc_info=True)
        raise ClassifierUnavailableError(
            "The approval classifier is unavailable; the reservation was not created"
        ) from e


def create_reservation(request: dict) -> tuple:
    """
    Create a pending reservation.

    Args:
        request: dict with hall, reservation_date, start_time, end_time,
                 requester_name, requester_email and optional requester_id

    Returns:
        tuple: (reservation_id, token)

    Raises:
        ValidationError: Malformed request
        ConflictError: Overlap detected before or at commit time
        ClassifierUnavailableError: Authorization gate failed
        StorageUnavailableError: Authoritative store failed
    """
    data = _clean_request(request)
    buffer_minutes = current_app.config['BUFFER_MINUTES']

    # Advisory pre-check, the store re-checks at commit time
    active = list_active_reservations(data['hall'], data['reservation_date'])
    clashes = find_conflicts(active, (data['start_time'], data['end_time']), buffer_minutes)
    if clashes:
        raise ConflictError(
            f"The selected time slot for {data['hall']} is not available due to an "
            f"existing booking or the required {buffer_minutes}-minute gap",
            conflicts=[{'start_time': c['start_time'], 'end_time': c['end_time'],
                        'status': c['status']} for c in clashes]
        )

    verdict = _evaluate_gate(_build_authorization_context(data, active))

    reservation = create_hall_reservation(
        approval_required=verdict['requires_approval'],
        classifier_reason=verdict.get('reason', ''),
        buffer_minutes=buffer_minutes,
        **data
    )

    if current_app.config.get('AUTO_APPROVE_CLEARED') and not reservation['approval_required']:
        decide(reservation['token'], STATUS_APPROVED)
    else:
        dispatch_notification(get_notification_sink(), build_approval_requested_event(reservation))

    return reservation['id'], reservation['token']


# =============================================================================
# AVAILABILITY
# =============================================================================

def monthly_calendar(halls: list, year: int, month: int) -> dict:
    """Per-day availability for a month ({'YYYY-MM-DD': 'available' | 'fully-booked'})."""
    return get_month_status(halls, year, month)


# =============================================================================
# DECIDE
# =============================================================================

def _replay(reservation: dict, outcome: str) -> dict:
    """Handle a decision on an already-decided reservation."""
    if reservation['status'] == outcome:
        logger.info(f"Reservation {reservation['id']} already {outcome}; replay ignored")
        return reservation
    raise AlreadyDecidedError(
        f"This booking request was already {reservation['status']}",
        reservation=reservation
    )


def decide(token: str, outcome: str, reason: str = None) -> dict:
    """
    Apply a director decision to the reservation addressed by a token.

    Replaying the stored outcome returns the reservation unchanged; a
    different outcome raises AlreadyDecidedError carrying the stored data.

    Args:
        token: Decision token
        outcome: 'approved' or 'rejected'
        reason: Required when rejecting

    Returns:
        dict: The reservation after the decision

    Raises:
        NotFoundError: Unknown token
        AlreadyDecidedError: A different decision is already stored
        MissingReasonError: Rejection without reason
        ValidationError: Unknown outcome
        StorageUnavailableError: Authoritative store failed
    """
    if outcome not in DECISION_OUTCOMES:
        raise ValidationError(f"Outcome must be one of: {', '.join(DECISION_OUTCOMES)}")

    reservation = get_reservation_by_token(token)
    if is_terminal(reservation['status']):
        return _replay(reservation, outcome)

    reason = sanitize_input(reason, max_length=1000)
    if outcome == STATUS_REJECTED and not reason:
        raise MissingReasonError("Please provide a reason for rejection")

    applied = transition_reservation_status(token, outcome, reason)
    reservation = get_reservation_by_token(token)
    if not applied:
        return _replay(reservation, outcome)

    logger.info(f"Reservation {reservation['id']} {outcome}")

    mirror_reservation(reservation)
    dispatch_notification(get_notification_sink(), build_decision_made_event(reservation))
    return reservation


# =============================================================================
# REQUESTER
# =============================================================================

def list_for_requester(requester_id: str) -> list:
    """Get a requester's reservations from the authoritative store, newest first."""
    return get_reservations_by_requester(requester_id)
