"""
Database migrations package.
Organized by feature area for maintainability.

Each migration is idempotent. The run_all_migrations() function executes
all migrations in order.
"""

import logging

from .reservations import (
    migrate_reservations_logistics,
    migrate_reservations_active_slot_index,
)

logger = logging.getLogger(__name__)


# Ordered list of all migrations
MIGRATIONS = [
    # Phase 1: Logistics fields collected by the booking form
    ('reservations_logistics', migrate_reservations_logistics),

    # Phase 2: Database-level double booking guard
    ('reservations_active_slot_index', migrate_reservations_active_slot_index),
]


def run_all_migrations() -> dict:
    """
    Run all migrations in order.

    Each migration is idempotent - safe to run multiple times. A failing
    migration is recorded and the remaining ones still run.

    Returns:
        dict: {
            'total': int,
            'applied': int,
            'skipped': int,
            'failed': int,
            'results': [(name, bool, str), ...]
        }
    """
    results = []
    applied = 0
    skipped = 0
    failed = 0

    for name, migration_func in MIGRATIONS:
        try:
            if migration_func():
                applied += 1
                results.append((name, True, 'applied'))
            else:
                skipped += 1
                results.append((name, True, 'skipped'))
        except Exception as e:
            failed += 1
            results.append((name, False, str(e)))
            logger.error('Migration %s failed: %s', name, e, exc_info=True)

    if applied or failed:
        logger.info('Migrations complete: %d applied, %d skipped, %d failed', applied, skipped, failed)

    return {
        'total': len(MIGRATIONS),
        'applied': applied,
        'skipped': skipped,
        'failed': failed,
        'results': results
    }


__all__ = [
    'run_all_migrations',
    'MIGRATIONS',
    'migrate_reservations_logistics',
    'migrate_reservations_active_slot_index',
]
