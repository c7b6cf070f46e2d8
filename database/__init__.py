"""
Database package for the booking service.

This package provides modular database operations:
- connection: Connection management (get_db, close_db, init_db, ensure_schema)
- migrations: Additive schema migrations
- schema: Table creation and indexes
- seed: Default admin account
"""

from database.connection import (
    get_db, close_db, init_db, ensure_schema, immediate_transaction, reset_schema_cache
)
from database.migrations import (
    run_all_migrations,
    migrate_reservations_logistics,
    migrate_reservations_active_slot_index,
)
from database.schema import drop_tables, create_tables, create_indexes
from database.seed import seed_database

__all__ = [
    # Connection
    'get_db',
    'close_db',
    'init_db',
    'ensure_schema',
    'immediate_transaction',
    'reset_schema_cache',
    # Migrations
    'run_all_migrations',
    'migrate_reservations_logistics',
    'migrate_reservations_active_slot_index',
    # Schema
    'drop_tables',
    'create_tables',
    'create_indexes',
    # Seed
    'seed_database',
]
