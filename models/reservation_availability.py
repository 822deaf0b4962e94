"""
Availability queries and calendar aggregation.
Advisory read paths: store failures degrade to empty results and are logged.
"""

import logging

from flask import current_app

from utils.datetime_helpers import parse_date, days_in_month, is_valid_month
from utils.validators import (
    validate_time_format, validate_time_range, validate_within_hours, validate_time_step
)
from .reservation_conflicts import conflicts, format_minutes
from .reservation_crud import get_reservations_by_hall_and_day
from .reservation_errors import StorageUnavailableError, ValidationError
from .reservation_mirror import record_fetch_failure

logger = logging.getLogger(__name__)

DAY_AVAILABLE = 'available'
DAY_FULLY_BOOKED = 'fully-booked'


# =============================================================================
# VALIDATION
# =============================================================================

def validate_interval(reservation_date, start_time: str, end_time: str) -> str:
    """
    Validate a requested day and interval.

    Args:
        reservation_date: date or 'YYYY-MM-DD'
        start_time: Start (HH:MM)
        end_time: End (HH:MM)

    Returns:
        str: Normalized day (YYYY-MM-DD)

    Raises:
        ValidationError: If any part is malformed or outside operational hours
    """
    try:
        day = parse_date(reservation_date).isoformat()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {reservation_date}")

    if not validate_time_format(start_time) or not validate_time_format(end_time):
        raise ValidationError("Times must use the HH:MM format")

    if not validate_time_range(start_time, end_time):
        raise ValidationError("End time must be after start time")

    config = current_app.config
    open_hour = config['OPERATIONAL_START_HOUR']
    close_hour = config['OPERATIONAL_END_HOUR']
    if not validate_within_hours(start_time, end_time, open_hour, close_hour):
        raise ValidationError(
            f"Bookings must fall within operational hours "
            f"({open_hour:02d}:00-{close_hour:02d}:00)"
        )

    step = config.get('BOOKING_TIME_STEP_MINUTES')
    if not (validate_time_step(start_time, step) and validate_time_step(end_time, step)):
        raise ValidationError(f"Times must be on a {step}-minute grid")

    return day


# =============================================================================
# AVAILABILITY INDEX
# =============================================================================

def list_active_reservations(hall: str, reservation_date: str) -> list:
    """
    Get active (pending/approved) reservations for a hall on a day.

    On store failure returns an empty list; the failure is logged and
    recorded as a fetch-failure event.

    Args:
        hall: Hall name
        reservation_date: Day (YYYY-MM-DD)

    Returns:
        list: Reservation dicts ordered by start time
    """
    try:
        return get_reservations_by_hall_and_day(hall, reservation_date)
    except StorageUnavailableError as e:
        logger.error(f"Availability read failed for {hall} on {reservation_date}: {e.message}",
                     exc_info=True)
        record_fetch_failure(hall, reservation_date, e.message)
        return []


def check_availability(hall: str, reservation_date, start_time: str, end_time: str) -> bool:
    """
    Check whether an interval is free for a hall (advisory).

    Returns:
        bool: True if no active reservation conflicts, buffer included

    Raises:
        ValidationError: If the interval is malformed
    """
    day = validate_interval(reservation_date, start_time, end_time)
    buffer_minutes = current_app.config['BUFFER_MINUTES']

    return not any(
        conflicts((r['start_time'], r['end_time']), (start_time, end_time), buffer_minutes)
        for r in list_active_reservations(hall, day)
    )


# =============================================================================
# CALENDAR AGGREGATION
# =============================================================================

def generate_candidate_slots(open_hour: int = None, close_hour: int = None,
                             slot_minutes: int = None) -> list:
    """
    Generate fixed-width candidate slots within operational hours.

    Returns:
        list: (start, end) tuples of 'HH:MM' strings
    """
    config = current_app.config
    open_hour = config['OPERATIONAL_START_HOUR'] if open_hour is None else open_hour
    close_hour = config['OPERATIONAL_END_HOUR'] if close_hour is None else close_hour
    slot_minutes = slot_minutes or config['SLOT_DURATION_MINUTES']

    slots = []
    start = open_hour * 60
    while start + slot_minutes <= close_hour * 60:
        slots.append((format_minutes(start), format_minutes(start + slot_minutes)))
        start += slot_minutes
    return slots


def hall_has_free_slot(active: list, slots: list, buffer_minutes: int) -> bool:
    """Check whether at least one slot is conflict-free against active reservations."""
    for slot in slots:
        if not any(conflicts((r['start_time'], r['end_time']), slot, buffer_minutes)
                   for r in active):
            return True
    return False


def get_month_status(halls: list, year: int, month: int) -> dict:
    """
    Derive per-day availability for a month across halls.

    A day is 'available' if any hall has at least one conflict-free slot,
    otherwise 'fully-booked'. Active reservations are fetched once per
    hall/day and reused across slots.

    Args:
        halls: Hall names (empty: configured default halls)
        year: Year
        month: Month (1-12)

    Returns:
        dict: {'YYYY-MM-DD': 'available' | 'fully-booked'}

    Raises:
        ValidationError: If the month is invalid
    """
    if not is_valid_month(int(year), int(month)):
        raise ValidationError(f"Invalid month: {year}-{month}")

    halls = list(halls or current_app.config['DEFAULT_HALLS'])
    buffer_minutes = current_app.config['BUFFER_MINUTES']
    slots = generate_candidate_slots()

    status = {}
    for day in days_in_month(int(year), int(month)):
        day_key = day.isoformat()
        status[day_key] = DAY_FULLY_BOOKED
        for hall in halls:
            if hall_has_free_slot(list_active_reservations(hall, day_key), slots, buffer_minutes):
                status[day_key] = DAY_AVAILABLE
                break
    return status
