"""
Interval conflict detection with buffer windows.
Pure functions, no database access.
"""

from datetime import time

# Mandatory idle time around every active reservation
DEFAULT_BUFFER_MINUTES = 60


def to_minutes(value) -> int:
    """
    Convert a time of day to minutes since midnight.

    Args:
        value: 'HH:MM' string or datetime.time

    Returns:
        int: Minutes since midnight

    Raises:
        ValueError: If the value is not a valid time of day
    """
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    hours, minutes = str(value).split(':')
    hours, minutes = int(hours), int(minutes)
    if not (0 <= hours <= 24 and 0 <= minutes < 60) or (hours == 24 and minutes):
        raise ValueError(f"Invalid time of day: {value}")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as 'HH:MM'."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def conflicts(existing: tuple, candidate: tuple, buffer_minutes: int = DEFAULT_BUFFER_MINUTES) -> bool:
    """
    Test whether a candidate interval collides with an existing one.

    The existing interval is widened by the buffer on both sides. Boundaries
    are exclusive: a candidate starting exactly at existing end + buffer, or
    ending exactly at existing start - buffer, does not conflict.

    Args:
        existing: (start, end) of the active reservation
        candidate: (start, end) of the requested interval
        buffer_minutes: Idle minutes required before and after existing

    Returns:
        bool: True if the intervals conflict
    """
    existing_start, existing_end = (to_minutes(v) for v in existing)
    candidate_start, candidate_end = (to_minutes(v) for v in candidate)

    return (
        candidate_start < existing_end + buffer_minutes
        and existing_start - buffer_minutes < candidate_end
    )


def find_conflicts(reservations: list, candidate: tuple,
                   buffer_minutes: int = DEFAULT_BUFFER_MINUTES) -> list:
    """
    Return the reservations that conflict with a candidate interval.

    Args:
        reservations: Reservation dicts with 'start_time' and 'end_time'
        candidate: (start, end) of the requested interval
        buffer_minutes: Idle minutes required around each reservation

    Returns:
        list: Conflicting reservation dicts, in input order
    """
    return [
        r for r in reservations
        if conflicts((r['start_time'], r['end_time']), candidate, buffer_minutes)
    ]
