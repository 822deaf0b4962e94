"""
Database connection management.
Handles per-request connections to the authoritative store and the mirror
store, initialization, and teardown.
"""

import logging
import sqlite3
from flask import g, current_app

logger = logging.getLogger(__name__)


def _connect(db_path: str) -> sqlite3.Connection:
    """Open a SQLite connection with row factory and pragmas applied."""
    conn = sqlite3.connect(db_path, timeout=10)
    conn.row_factory = sqlite3.Row
    # Enable WAL mode for better concurrency
    conn.execute('PRAGMA journal_mode = WAL')
    return conn


def get_db():
    """
    Get the request-scoped connection to the authoritative store.

    Returns:
        sqlite3.Connection: Database connection object
    """
    if 'db' not in g:
        db_path = current_app.config.get('DATABASE_PATH', 'instance/hallbook.db')
        g.db = _connect(db_path)
    return g.db


def get_mirror_db():
    """
    Get the request-scoped connection to the mirror store.

    Returns:
        sqlite3.Connection: Mirror database connection object
    """
    if 'mirror_db' not in g:
        db_path = current_app.config.get('MIRROR_DATABASE_PATH', 'instance/hallbook_mirror.db')
        g.mirror_db = _connect(db_path)
    return g.mirror_db


def close_db(e=None):
    """
    Close both store connections.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    for key in ('db', 'mirror_db'):
        conn = g.pop(key, None)
        if conn is not None:
            conn.close()


def init_db():
    """
    Initialize both stores: drop existing tables and create the schema.
    WARNING: This will delete all existing data!
    """
    from database.schema import (
        drop_tables, create_tables, create_indexes,
        drop_mirror_tables, create_mirror_tables
    )

    db = get_db()
    drop_tables(db)
    create_tables(db)
    create_indexes(db)
    db.commit()

    mirror = get_mirror_db()
    drop_mirror_tables(mirror)
    create_mirror_tables(mirror)
    mirror.commit()

    logger.info("Database initialized successfully")
