"""
Reservation data access functions.

This module re-exports the reservation engine from the split modules:
- reservation_conflicts.py: Buffered interval conflict detection
- reservation_state.py: Approval state machine and view state
- reservation_crud.py: Authoritative create and reads
- reservation_mirror.py: Best-effort mirror store and reconciliation
- reservation_availability.py: Availability index and calendar aggregation
- reservation_errors.py: Exception taxonomy
"""

# Conflict detection
from .reservation_conflicts import (
    DEFAULT_BUFFER_MINUTES,
    conflicts,
    find_conflicts,
    to_minutes,
    format_minutes,
)

# State management
from .reservation_state import (
    # Constants
    STATUS_PENDING,
    STATUS_APPROVED,
    STATUS_REJECTED,
    ACTIVE_STATUSES,
    DECISION_OUTCOMES,
    VALID_TRANSITIONS,
    # Queries
    current_state,
    is_terminal,
    validate_state_transition,
    # Transitions
    transition_reservation_status,
)

# CRUD operations
from .reservation_crud import (
    generate_token,
    create_hall_reservation,
    get_reservation_by_id,
    get_reservation_by_token,
    get_reservations_by_hall_and_day,
    get_reservations_by_requester,
    get_reservations_by_month,
    get_all_reservations,
    get_requester_history_summary,
)

# Mirror store
from .reservation_mirror import (
    mirror_reservation,
    record_fetch_failure,
    get_mirror_record,
    get_requester_mirror,
    get_fetch_failures,
    find_stale_mirror_records,
    resync_mirror,
)

# Availability and calendar
from .reservation_availability import (
    DAY_AVAILABLE,
    DAY_FULLY_BOOKED,
    validate_interval,
    list_active_reservations,
    check_availability,
    generate_candidate_slots,
    hall_has_free_slot,
    get_month_status,
)

# Errors
from .reservation_errors import (
    ReservationError,
    ValidationError,
    MissingReasonError,
    ConflictError,
    NotFoundError,
    AlreadyDecidedError,
    InvalidStateTransitionError,
    ClassifierUnavailableError,
    StorageUnavailableError,
    TokenCollisionError,
)
