"""
Mirror store operations.

The mirror holds a denormalized copy of every reservation keyed by id plus a
per-requester index. It is eventually consistent with the authoritative store:
every write is a full-record upsert, so a record left stale by a failed write
is repaired by the next successful write for that reservation or by
resync_mirror(). Nothing on the request path reads from it.
"""

import json
import logging

from database import get_db, get_mirror_db
from utils.datetime_helpers import get_timestamp

logger = logging.getLogger(__name__)

# Fields copied into mirror payloads (the token stays in the authoritative store)
MIRROR_FIELDS = (
    'id', 'hall', 'reservation_date', 'start_time', 'end_time',
    'requester_name', 'requester_email', 'requester_id', 'status',
    'created_at', 'decided_at', 'decision_reason',
    'approval_required', 'classifier_reason',
)


def _mirror_payload(reservation: dict) -> dict:
    return {field: reservation.get(field) for field in MIRROR_FIELDS}


# =============================================================================
# WRITES (best-effort)
# =============================================================================

def write_mirror_record(reservation: dict) -> None:
    """Upsert the denormalized record and the requester index entry."""
    db = get_mirror_db()
    payload = json.dumps(_mirror_payload(reservation))
    mirrored_at = get_timestamp()

    try:
        db.execute('''
            INSERT INTO hall_bookings
            (reservation_id, hall, reservation_date, status, payload, mirrored_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(reservation_id) DO UPDATE SET
                hall = excluded.hall,
                reservation_date = excluded.reservation_date,
                status = excluded.status,
                payload = excluded.payload,
                mirrored_at = excluded.mirrored_at
        ''', (reservation['id'], reservation['hall'], reservation['reservation_date'],
              reservation['status'], payload, mirrored_at))

        db.execute('''
            INSERT INTO requester_bookings
            (requester_id, reservation_id, status, payload, mirrored_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(requester_id, reservation_id) DO UPDATE SET
                status = excluded.status,
                payload = excluded.payload,
                mirrored_at = excluded.mirrored_at
        ''', (reservation['requester_id'], reservation['id'], reservation['status'],
              payload, mirrored_at))

        db.commit()
    except Exception:
        db.rollback()
        raise


def mirror_reservation(reservation: dict) -> bool:
    """
    Best-effort propagation of a reservation to the mirror store.

    Failures are logged and swallowed: the authoritative store is the sole
    source of truth.

    Args:
        reservation: Reservation dict as stored authoritatively

    Returns:
        bool: True if the mirror was updated
    """
    try:
        write_mirror_record(reservation)
        return True
    except Exception as e:
        logger.error(
            f"Mirror write failed for reservation {reservation.get('id')} "
            f"(status={reservation.get('status')}): {e}",
            exc_info=True
        )
        return False


def record_fetch_failure(hall: str, day: str, error: str) -> None:
    """
    Record an authoritative read failure as an observability event.

    Keeps the latest failure per hall/day. Never raises.
    """
    try:
        db = get_mirror_db()
        db.execute('''
            INSERT OR REPLACE INTO data_fetch_failures
            (hall, reservation_date, error, recorded_at)
            VALUES (?, ?, ?, ?)
        ''', (hall, day, error, get_timestamp()))
        db.commit()
    except Exception as e:
        logger.error(f"Failed to record fetch failure for {hall} on {day}: {e}")


# =============================================================================
# READS (operational tooling only)
# =============================================================================

def get_mirror_record(reservation_id: int) -> dict:
    """
    Get the mirrored copy of a reservation.

    Returns:
        dict or None if not mirrored
    """
    db = get_mirror_db()
    row = db.execute(
        'SELECT payload FROM hall_bookings WHERE reservation_id = ?', (reservation_id,)
    ).fetchone()
    return json.loads(row['payload']) if row else None


def get_requester_mirror(requester_id: str) -> list:
    """
    Get the mirrored per-requester index entries.

    Returns:
        list: Reservation payloads ordered by id
    """
    db = get_mirror_db()
    rows = db.execute('''
        SELECT payload FROM requester_bookings
        WHERE requester_id = ?
        ORDER BY reservation_id
    ''', (requester_id,)).fetchall()
    return [json.loads(row['payload']) for row in rows]


def get_fetch_failures() -> list:
    """Get recorded read failures, most recent first."""
    db = get_mirror_db()
    rows = db.execute(
        'SELECT * FROM data_fetch_failures ORDER BY recorded_at DESC'
    ).fetchall()
    return [dict(row) for row in rows]


# =============================================================================
# RECONCILIATION
# =============================================================================

def find_stale_mirror_records() -> list:
    """
    Compare the mirror against the authoritative store.

    Returns:
        list: Dicts {'id', 'authoritative_status', 'mirror_status'} for every
              reservation missing from the mirror or mirrored with another status
    """
    authoritative = get_db().execute(
        'SELECT id, status FROM hall_reservations ORDER BY id'
    ).fetchall()
    mirrored = {
        row['reservation_id']: row['status']
        for row in get_mirror_db().execute('SELECT reservation_id, status FROM hall_bookings')
    }

    stale = []
    for row in authoritative:
        mirror_status = mirrored.get(row['id'])
        if mirror_status != row['status']:
            stale.append({
                'id': row['id'],
                'authoritative_status': row['status'],
                'mirror_status': mirror_status,
            })
    return stale


def resync_mirror() -> int:
    """
    Rewrite the mirror from the authoritative store.

    Returns:
        int: Number of reservations mirrored
    """
    from .reservation_crud import get_all_reservations

    count = 0
    for reservation in get_all_reservations():
        write_mirror_record(reservation)
        count += 1

    logger.info(f"Mirror resynchronized: {count} reservations")
    return count
