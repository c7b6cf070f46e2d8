"""
Reservations migrations.
Additive changes to the reservations table.
"""

import logging
import sqlite3

from database.connection import get_db

logger = logging.getLogger(__name__)


def _add_column(db, table: str, column: str, definition: str) -> bool:
    """
    Add a column, treating "duplicate column" as already applied.

    Returns:
        bool: True if the column was added
    """
    try:
        db.execute(f'ALTER TABLE {table} ADD COLUMN {column} {definition}')
    except sqlite3.OperationalError as e:
        if 'duplicate column' in str(e).lower():
            return False
        raise
    logger.info('Added column %s.%s', table, column)
    return True


def migrate_reservations_logistics() -> bool:
    """
    Migration: Add parking and elevator availability to reservations.

    Both hold 'あり' or 'なし'. Older rows keep NULL.

    Returns:
        bool: True if migration applied, False if already applied
    """
    db = get_db()

    try:
        added_parking = _add_column(db, 'reservations', 'has_parking', 'TEXT')
        added_elevator = _add_column(db, 'reservations', 'has_elevator', 'TEXT')
        db.commit()
    except Exception:
        db.rollback()
        raise

    return added_parking or added_elevator


def migrate_reservations_active_slot_index() -> bool:
    """
    Migration: Enforce one active reservation per date and time slot.

    A partial unique index over non-cancelled rows backs the admission
    check. If legacy data already holds a double booking the index cannot
    be built; that is logged and the transactional check stays in charge.

    Returns:
        bool: True if the index exists after the migration
    """
    db = get_db()

    existing = db.execute(
        "SELECT name FROM sqlite_master WHERE type = 'index' AND name = 'idx_reservations_active_slot'"
    ).fetchone()
    if existing:
        return False

    try:
        db.execute('''
            CREATE UNIQUE INDEX idx_reservations_active_slot
            ON reservations(reservation_date, reservation_time)
            WHERE status != 'cancelled'
        ''')
        db.commit()
    except sqlite3.IntegrityError as e:
        db.rollback()
        logger.warning('Could not create idx_reservations_active_slot: %s', e)
        return False

    logger.info('Created index: idx_reservations_active_slot')
    return True
