"""
Database package for the hall reservation engine.

This package provides modular database operations:
- connection: Connection management for both stores (get_db, get_mirror_db, close_db, init_db)
- schema: Table creation and indexes

All functions are re-exported from this module.
"""

from database.connection import get_db, get_mirror_db, close_db, init_db
from database.schema import (
    drop_tables, create_tables, create_indexes,
    drop_mirror_tables, create_mirror_tables,
)

__all__ = [
    # Connection
    'get_db',
    'get_mirror_db',
    'close_db',
    'init_db',
    # Schema
    'drop_tables',
    'create_tables',
    'create_indexes',
    'drop_mirror_tables',
    'create_mirror_tables',
]
