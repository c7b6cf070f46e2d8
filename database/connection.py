"""
Database connection management.
Handles per-request connections, lazy schema setup, transactions and teardown.
"""

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager

from flask import g, current_app

logger = logging.getLogger(__name__)

# Database paths whose schema has been ensured by this process
_initialized_paths = set()
_init_lock = threading.Lock()


def get_db():
    """
    Get the request-scoped database connection with row factory.

    Returns:
        sqlite3.Connection: Database connection object
    """
    if 'db' not in g:
        db_path = current_app.config.get('DATABASE_PATH', 'instance/kaitori.db')
        if db_path != ':memory:':
            directory = os.path.dirname(db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
        g.db = sqlite3.connect(
            db_path,
            timeout=current_app.config.get('DATABASE_TIMEOUT', 10)
        )
        g.db.row_factory = sqlite3.Row
        g.db.execute('PRAGMA foreign_keys = ON')
        # WAL lets readers proceed while a booking holds the write lock
        g.db.execute('PRAGMA journal_mode = WAL')
    return g.db


def close_db(e=None):
    """
    Close database connection.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    db = g.pop('db', None)
    if db is not None:
        db.close()


@contextmanager
def immediate_transaction(db=None):
    """
    Run a block inside a write-locked transaction.

    BEGIN IMMEDIATE takes SQLite's reserved lock up front, so a
    count-then-insert inside the block cannot interleave with another
    writer. Commits on success, rolls back on any exception.

    Args:
        db: Connection to use (default: request connection)

    Yields:
        sqlite3.Connection
    """
    db = db or get_db()
    db.execute('BEGIN IMMEDIATE')
    try:
        yield db
    except BaseException:
        db.rollback()
        raise
    else:
        db.commit()


def ensure_schema(force: bool = False) -> bool:
    """
    Create missing tables, indexes and columns, and seed the default admin.

    Idempotent. Runs at most once per process for each database path
    unless forced; in-memory databases are ensured on every call since
    each connection starts empty.

    Args:
        force: Run even if this path was already ensured

    Returns:
        bool: True if the schema step ran, False if skipped
    """
    from database.schema import create_tables, create_indexes
    from database.migrations import run_all_migrations
    from database.seed import seed_database

    db_path = current_app.config.get('DATABASE_PATH', 'instance/kaitori.db')
    in_memory = db_path == ':memory:'

    if not force and not in_memory and db_path in _initialized_paths:
        return False

    with _init_lock:
        if not force and not in_memory and db_path in _initialized_paths:
            return False

        db = get_db()
        create_tables(db)
        create_indexes(db)
        db.commit()

        run_all_migrations()

        seed_database(db)
        db.commit()

        if not in_memory:
            _initialized_paths.add(db_path)
        logger.info('Schema ensured for %s', db_path)
        return True


def reset_schema_cache():
    """Forget which database paths have been ensured."""
    with _init_lock:
        _initialized_paths.clear()


def init_db():
    """
    Initialize database: drop existing tables, create new schema, insert seed data.
    WARNING: This will delete all existing data!
    """
    from database.schema import drop_tables

    db = get_db()

    drop_tables(db)
    db.commit()

    ensure_schema(force=True)
    logger.info('Database initialized')
