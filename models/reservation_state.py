"""
Reservation state management functions.
Handles the approval state machine, the conditional status transition,
and the derived view state.
"""

import logging
import sqlite3

from database import get_db
from utils.datetime_helpers import get_timestamp
from .reservation_errors import (
    InvalidStateTransitionError, StorageUnavailableError, ValidationError
)

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

STATUS_PENDING = 'pending'
STATUS_APPROVED = 'approved'
STATUS_REJECTED = 'rejected'

# Statuses that occupy a hall for conflict purposes
ACTIVE_STATUSES = (STATUS_PENDING, STATUS_APPROVED)

DECISION_OUTCOMES = (STATUS_APPROVED, STATUS_REJECTED)

VALID_TRANSITIONS = {
    STATUS_PENDING: {STATUS_APPROVED, STATUS_REJECTED},
    STATUS_APPROVED: set(),
    STATUS_REJECTED: set(),
}

# Derived view states
VIEW_AWAITING_APPROVAL = 'awaiting_approval'
VIEW_PROVISIONALLY_CONFIRMED = 'provisionally_confirmed'


# =============================================================================
# STATE QUERIES
# =============================================================================

def current_state(reservation: dict) -> str:
    """
    Derive the view state of a reservation from its persisted fields.

    Returns:
        str: 'awaiting_approval', 'provisionally_confirmed', 'approved' or 'rejected'
    """
    status = reservation['status']
    if status != STATUS_PENDING:
        return status
    if reservation.get('approval_required', True):
        return VIEW_AWAITING_APPROVAL
    return VIEW_PROVISIONALLY_CONFIRMED


def is_terminal(status: str) -> bool:
    """Check whether a status admits no further transitions."""
    return not VALID_TRANSITIONS.get(status)


def validate_state_transition(current: str, new_state: str) -> None:
    """
    Validate a transition against VALID_TRANSITIONS.

    Raises:
        ValidationError: If the target is not a known status
        InvalidStateTransitionError: If the transition is not allowed
    """
    if new_state not in VALID_TRANSITIONS:
        raise ValidationError(f"Unknown reservation status: {new_state}")
    if new_state not in VALID_TRANSITIONS.get(current, set()):
        raise InvalidStateTransitionError(
            f"Cannot change a {current} reservation to {new_state}"
        )


# =============================================================================
# STATE TRANSITIONS
# =============================================================================

def transition_reservation_status(token: str, new_status: str, reason: str = None) -> bool:
    """
    Conditionally move a pending reservation to a terminal status.

    The update is keyed on status = 'pending' inside a write transaction, so
    under concurrent calls with the same token exactly one returns True.

    Args:
        token: Decision token
        new_status: 'approved' or 'rejected'
        reason: Decision reason (stored for rejections, cleared for approvals)

    Returns:
        bool: True if this call performed the transition

    Raises:
        ValidationError: If the target is not a decision outcome
        StorageUnavailableError: If the store cannot be written
    """
    if new_status not in DECISION_OUTCOMES:
        raise ValidationError(f"Not a decision outcome: {new_status}")
    validate_state_transition(STATUS_PENDING, new_status)
    decision_reason = reason if new_status == STATUS_REJECTED else None

    try:
        db = get_db()
        cursor = db.cursor()
        cursor.execute('BEGIN IMMEDIATE')
    except sqlite3.Error as e:
        raise StorageUnavailableError(f"Reservation store unavailable: {e}") from e

    try:
        cursor.execute('''
            UPDATE hall_reservations
            SET status = ?,
                decided_at = ?,
                decision_reason = ?
            WHERE token = ? AND status = ?
        ''', (new_status, get_timestamp(), decision_reason, token, STATUS_PENDING))
        applied = cursor.rowcount == 1
        db.commit()
    except sqlite3.Error as e:
        db.rollback()
        raise StorageUnavailableError(f"Reservation store unavailable: {e}") from e

    if applied:
        logger.info(f"Reservation transitioned to {new_status}")
    else:
        logger.info(f"Transition to {new_status} lost: reservation no longer pending")
    return applied
