"""
Database schema definitions.
Table creation and indexes for the authoritative store and the mirror store.
"""


def drop_tables(db):
    """Drop all authoritative tables."""
    db.execute('DROP TABLE IF EXISTS hall_reservations')


def create_tables(db):
    """Create authoritative tables."""

    # Reservations are never deleted; decided rows stay as audit records
    db.execute('''
        CREATE TABLE hall_reservations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            hall TEXT NOT NULL,
            reservation_date TEXT NOT NULL,
            start_time TEXT NOT NULL,
            end_time TEXT NOT NULL,
            requester_name TEXT NOT NULL,
            requester_email TEXT NOT NULL,
            requester_id TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'approved', 'rejected')),
            token TEXT NOT NULL,
            created_at TEXT NOT NULL,
            decided_at TEXT,
            decision_reason TEXT,
            approval_required INTEGER NOT NULL DEFAULT 1,
            classifier_reason TEXT DEFAULT '',
            CHECK (end_time > start_time)
        )
    ''')


def create_indexes(db):
    """Create authoritative indexes."""
    db.execute('CREATE UNIQUE INDEX idx_hall_reservations_token ON hall_reservations(token)')
    db.execute('''
        CREATE INDEX idx_hall_reservations_hall_day
        ON hall_reservations(hall, reservation_date, status)
    ''')
    db.execute('CREATE INDEX idx_hall_reservations_requester ON hall_reservations(requester_id)')
    db.execute('CREATE INDEX idx_hall_reservations_date ON hall_reservations(reservation_date)')


def drop_mirror_tables(db):
    """Drop all mirror tables."""
    for table in ('data_fetch_failures', 'requester_bookings', 'hall_bookings'):
        db.execute(f'DROP TABLE IF EXISTS {table}')


def create_mirror_tables(db):
    """Create mirror tables (denormalized records, requester index, fetch failures)."""
    db.execute('''
        CREATE TABLE hall_bookings (
            reservation_id INTEGER PRIMARY KEY,
            hall TEXT NOT NULL,
            reservation_date TEXT NOT NULL,
            status TEXT NOT NULL,
            payload TEXT NOT NULL,
            mirrored_at TEXT NOT NULL
        )
    ''')

    db.execute('''
        CREATE TABLE requester_bookings (
            requester_id TEXT NOT NULL,
            reservation_id INTEGER NOT NULL,
            status TEXT NOT NULL,
            payload TEXT NOT NULL,
            mirrored_at TEXT NOT NULL,
            PRIMARY KEY (requester_id, reservation_id)
        )
    ''')

    db.execute('''
        CREATE TABLE data_fetch_failures (
            hall TEXT NOT NULL,
            reservation_date TEXT NOT NULL,
            error TEXT NOT NULL,
            recorded_at TEXT NOT NULL,
            PRIMARY KEY (hall, reservation_date)
        )
    ''')
