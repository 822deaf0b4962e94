"""Timezone-aware date/time helpers for the hall reservation engine."""

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime
from zoneinfo import ZoneInfo

from flask import current_app


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'UTC')
    return ZoneInfo(tz_name)


def get_now() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone())


def get_timestamp() -> str:
    """Get the current time as an ISO-8601 string (seconds precision)."""
    return get_now().isoformat(timespec='seconds')


def parse_date(value) -> date:
    """
    Parse a calendar day.

    Args:
        value: date object or 'YYYY-MM-DD' string

    Returns:
        date: Parsed date

    Raises:
        ValueError: If the string is not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value), '%Y-%m-%d').date()


def is_valid_month(year: int, month: int) -> bool:
    """Check a year/month pair is representable as calendar dates."""
    return MINYEAR <= year <= MAXYEAR and 1 <= month <= 12


def days_in_month(year: int, month: int) -> list:
    """Get every date of a month, in order."""
    _, last_day = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, last_day + 1)]
