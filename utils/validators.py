"""
Semantic validation helpers for booking input.
Shape checks live in the WTForms forms; these run in the service layer so
direct callers get the same rules as the JSON API.
"""

import re
from datetime import datetime

from email_validator import EmailNotValidError, validate_email as check_email_address

# Zero-padded 24h clock
TIME_PATTERN = re.compile(r'^([01][0-9]|2[0-3]):[0-5][0-9]$')


def validate_email(email: str) -> bool:
    """
    Check an email address with email-validator (syntax only, no DNS).

    Args:
        email: Address to check

    Returns:
        True if the address is syntactically valid
    """
    if not email:
        return False
    try:
        check_email_address(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_date_format(date_str: str) -> bool:
    """Check a 'YYYY-MM-DD' calendar date."""
    try:
        datetime.strptime(date_str, '%Y-%m-%d')
    except (TypeError, ValueError):
        return False
    return True


def validate_time_format(time_str: str) -> bool:
    """Check an 'HH:MM' time of day."""
    return isinstance(time_str, str) and bool(TIME_PATTERN.match(time_str))


def validate_time_range(start_time: str, end_time: str) -> bool:
    """Check that both times are well formed and end is strictly after start."""
    if not (validate_time_format(start_time) and validate_time_format(end_time)):
        return False
    return end_time > start_time


def validate_within_hours(start_time: str, end_time: str, open_hour: int, close_hour: int) -> bool:
    """
    Check that an interval lies inside operational hours.

    Args:
        start_time: Start (HH:MM)
        end_time: End (HH:MM)
        open_hour: First bookable hour
        close_hour: Closing hour, a booking may end exactly at it

    Returns:
        True if open <= start and end <= close
    """
    return start_time >= f'{open_hour:02d}:00' and end_time <= f'{close_hour:02d}:00'


def validate_time_step(time_str: str, step_minutes: int) -> bool:
    """Check that a time falls on the booking grid (always true without a step)."""
    if not step_minutes:
        return True
    hours, minutes = time_str.split(':')
    return (int(hours) * 60 + int(minutes)) % step_minutes == 0


def sanitize_input(text, max_length: int = None) -> str:
    """
    Trim free text and cap its length.

    Args:
        text: Raw value (None gives '')
        max_length: Maximum length (optional)

    Returns:
        Cleaned text
    """
    if text is None:
        return ''
    cleaned = str(text).strip()
    if max_length:
        cleaned = cleaned[:max_length]
    return cleaned
