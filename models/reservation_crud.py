"""
Reservation CRUD operations against the authoritative store.
Handles create (with commit-time conflict check) and indexed reads.
"""

import logging
import secrets
import sqlite3

from flask import current_app

from database import get_db
from utils.datetime_helpers import get_timestamp, days_in_month, is_valid_month
from .reservation_conflicts import find_conflicts, to_minutes
from .reservation_errors import (
    ConflictError, NotFoundError, StorageUnavailableError, TokenCollisionError, ValidationError
)
from .reservation_mirror import mirror_reservation
from .reservation_state import ACTIVE_STATUSES, STATUS_PENDING

logger = logging.getLogger(__name__)


# =============================================================================
# HELPERS
# =============================================================================

def generate_token() -> str:
    """Generate an opaque, URL-safe decision token."""
    return secrets.token_urlsafe(32)


def row_to_reservation(row) -> dict:
    """Convert a hall_reservations row into a reservation dict."""
    reservation = dict(row)
    reservation['approval_required'] = bool(reservation['approval_required'])
    return reservation


def _fetch_all(query: str, params: tuple) -> list:
    """Run a read query, wrapping store failures."""
    try:
        db = get_db()
        cursor = db.cursor()
        cursor.execute(query, params)
        return [row_to_reservation(row) for row in cursor.fetchall()]
    except sqlite3.Error as e:
        raise StorageUnavailableError(f"Reservation store unavailable: {e}") from e


def _fetch_one(query: str, params: tuple):
    try:
        db = get_db()
        cursor = db.cursor()
        cursor.execute(query, params)
        row = cursor.fetchone()
    except sqlite3.Error as e:
        raise StorageUnavailableError(f"Reservation store unavailable: {e}") from e
    return row_to_reservation(row) if row else None


# =============================================================================
# CREATE
# =============================================================================

def create_hall_reservation(
    hall: str,
    reservation_date: str,
    start_time: str,
    end_time: str,
    requester_name: str,
    requester_email: str,
    requester_id: str = None,
    approval_required: bool = True,
    classifier_reason: str = '',
    token: str = None,
    buffer_minutes: int = None
) -> dict:
    """
    Persist a new pending reservation.

    Conflicts are re-checked inside the write transaction, so an earlier
    advisory availability read is never trusted. After commit the record is
    mirrored on a best-effort basis.

    Args:
        hall: Hall name
        reservation_date: Day (YYYY-MM-DD)
        start_time: Start (HH:MM)
        end_time: End (HH:MM)
        requester_name: Requester display name
        requester_email: Requester email
        requester_id: External requester identity (default: lower-cased email)
        approval_required: Gate verdict
        classifier_reason: Gate explanation (advisory)
        token: Decision token (default: freshly generated)
        buffer_minutes: Buffer around active reservations (default: config)

    Returns:
        dict: The stored reservation

    Raises:
        ConflictError: If a buffered overlap exists at commit time
        TokenCollisionError: If the token is already in use
        StorageUnavailableError: If the authoritative write fails
        ValidationError: If end_time is not after start_time
    """
    try:
        if to_minutes(end_time) <= to_minutes(start_time):
            raise ValidationError("End time must be after start time")
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid interval: {start_time}-{end_time}") from e

    if buffer_minutes is None:
        buffer_minutes = current_app.config.get('BUFFER_MINUTES', 60)
    if not requester_id:
        requester_id = requester_email.strip().lower()
    token = token or generate_token()

    try:
        db = get_db()
        cursor = db.cursor()
        cursor.execute('BEGIN IMMEDIATE')
    except sqlite3.Error as e:
        raise StorageUnavailableError(f"Reservation store unavailable: {e}") from e

    try:
        cursor.execute('''
            SELECT * FROM hall_reservations
            WHERE hall = ? AND reservation_date = ?
              AND status IN (?, ?)
            ORDER BY start_time
        ''', (hall, reservation_date, *ACTIVE_STATUSES))
        active = [row_to_reservation(row) for row in cursor.fetchall()]

        clashes = find_conflicts(active, (start_time, end_time), buffer_minutes)
        if clashes:
            raise ConflictError(
                f"{hall} is not available on {reservation_date} from {start_time} to "
                f"{end_time}: an existing booking or the required buffer overlaps",
                conflicts=[{'start_time': c['start_time'], 'end_time': c['end_time'],
                            'status': c['status']} for c in clashes]
            )

        cursor.execute('''
            INSERT INTO hall_reservations (
                hall, reservation_date, start_time, end_time,
                requester_name, requester_email, requester_id,
                status, token, created_at,
                approval_required, classifier_reason
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ''', (
            hall, reservation_date, start_time, end_time,
            requester_name, requester_email, requester_id,
            STATUS_PENDING, token, get_timestamp(),
            1 if approval_required else 0, classifier_reason or ''
        ))
        reservation_id = cursor.lastrowid

        db.commit()

    except sqlite3.IntegrityError as e:
        db.rollback()
        if 'token' in str(e):
            logger.critical(f"Token collision while creating reservation for {hall} on {reservation_date}")
            raise TokenCollisionError("Decision token already exists") from e
        raise StorageUnavailableError(f"Reservation could not be stored: {e}") from e
    except sqlite3.Error as e:
        db.rollback()
        raise StorageUnavailableError(f"Reservation store unavailable: {e}") from e
    except Exception:
        db.rollback()
        raise

    reservation = get_reservation_by_id(reservation_id)
    logger.info(f"Reservation {reservation_id} created for {hall} on {reservation_date} "
                f"{start_time}-{end_time} (approval_required={approval_required})")

    mirror_reservation(reservation)
    return reservation


# =============================================================================
# READ
# =============================================================================

def get_reservation_by_id(reservation_id: int) -> dict:
    """
    Get reservation by id.

    Raises:
        NotFoundError: If no reservation has this id
        StorageUnavailableError: If the store cannot be read
    """
    reservation = _fetch_one('SELECT * FROM hall_reservations WHERE id = ?', (reservation_id,))
    if not reservation:
        raise NotFoundError(f"Reservation {reservation_id} not found")
    return reservation


def get_reservation_by_token(token: str) -> dict:
    """
    Get reservation by decision token (single indexed lookup).

    Raises:
        NotFoundError: If the token is unknown
        StorageUnavailableError: If the store cannot be read
    """
    reservation = _fetch_one('SELECT * FROM hall_reservations WHERE token = ?', (token,))
    if not reservation:
        raise NotFoundError("No reservation matches this approval link")
    return reservation


def get_reservations_by_hall_and_day(hall: str, reservation_date: str,
                                     statuses: tuple = ACTIVE_STATUSES) -> list:
    """
    Get reservations for a hall on a day, ordered by start time.

    Args:
        hall: Hall name
        reservation_date: Day (YYYY-MM-DD)
        statuses: Statuses to include (default: active ones)

    Raises:
        StorageUnavailableError: If the store cannot be read
    """
    placeholders = ','.join('?' * len(statuses))
    return _fetch_all(f'''
        SELECT * FROM hall_reservations
        WHERE hall = ? AND reservation_date = ?
          AND status IN ({placeholders})
        ORDER BY start_time, id
    ''', (hall, reservation_date, *statuses))


def get_reservations_by_requester(requester_id: str) -> list:
    """
    Get every reservation of a requester, newest first.

    Raises:
        StorageUnavailableError: If the store cannot be read
    """
    return _fetch_all('''
        SELECT * FROM hall_reservations
        WHERE requester_id = ?
        ORDER BY created_at DESC, id DESC
    ''', (requester_id,))


def get_reservations_by_month(year: int, month: int,
                              statuses: tuple = ACTIVE_STATUSES) -> list:
    """
    Get reservations in a calendar month, ordered by day and start time.

    Raises:
        ValidationError: If the month is out of range
        StorageUnavailableError: If the store cannot be read
    """
    if not is_valid_month(year, month):
        raise ValidationError(f"Invalid month: {year}-{month}")
    days = days_in_month(year, month)
    placeholders = ','.join('?' * len(statuses))
    return _fetch_all(f'''
        SELECT * FROM hall_reservations
        WHERE reservation_date BETWEEN ? AND ?
          AND status IN ({placeholders})
        ORDER BY reservation_date, start_time, id
    ''', (days[0].isoformat(), days[-1].isoformat(), *statuses))


def get_all_reservations() -> list:
    """Get every reservation in id order."""
    return _fetch_all('SELECT * FROM hall_reservations ORDER BY id', ())


def get_requester_history_summary(requester_id: str) -> str:
    """
    Summarize a requester's past decisions for the authorization gate.

    Returns:
        str: e.g. '3 previous requests: 2 approved, 1 rejected, 0 pending'
    """
    history = get_reservations_by_requester(requester_id)
    if not history:
        return 'No previous requests.'

    counts = {'approved': 0, 'rejected': 0, 'pending': 0}
    for reservation in history:
        counts[reservation['status']] += 1
    return (f"{len(history)} previous requests: {counts['approved']} approved, "
            f"{counts['rejected']} rejected, {counts['pending']} pending")
