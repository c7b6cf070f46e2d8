#!/usr/bin/env python
"""
Booking database health check.

Detects rows that break the booking invariants, typically left behind by
data written before the admission rules or the active-slot index existed:
- Double bookings (same date and slot)
- Days over capacity
- Active reservations on blackout dates
- Unknown status or slot values

Usage:
    python scripts/health_check.py --db-path instance/kaitori.db
"""

import argparse
import os
import sqlite3
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.reservation_rules import DAILY_CAPACITY, RESERVATION_STATUSES as STATUSES, TIME_SLOTS


def get_connection(db_path: str) -> sqlite3.Connection:
    """Open a read-only connection to the SQLite database."""
    conn = sqlite3.connect(f"file:{db_path}?mode=ro", uri=True)
    conn.row_factory = sqlite3.Row
    return conn


def issue(category: str, check: str, severity: str, count: int, details: list) -> dict:
    """Create a standardized issue dict."""
    return {
        'category': category,
        'check': check,
        'severity': severity,
        'count': count,
        'details': details[:20]  # Cap at 20 examples
    }


def check_data_integrity(conn: sqlite3.Connection) -> list:
    """
    Check booking invariants.

    Returns list of issue dicts.
    """
    results = []

    # --- 1. Double bookings ---
    rows = conn.execute('''
        SELECT reservation_date, reservation_time, COUNT(*) as booking_count,
               GROUP_CONCAT(id, ', ') as ids
        FROM reservations
        WHERE status != 'cancelled'
        GROUP BY reservation_date, reservation_time
        HAVING COUNT(*) > 1
    ''').fetchall()
    results.append(issue(
        category='Data Integrity',
        check='Double bookings (same date, same slot)',
        severity='fail' if rows else 'ok',
        count=len(rows),
        details=[
            f"{r['reservation_date']} {r['reservation_time']}: {r['booking_count']} bookings (ids {r['ids']})"
            for r in rows
        ]
    ))

    # --- 2. Days over capacity ---
    rows = conn.execute('''
        SELECT reservation_date, COUNT(*) as booking_count
        FROM reservations
        WHERE status != 'cancelled'
        GROUP BY reservation_date
        HAVING COUNT(*) > ?
    ''', (DAILY_CAPACITY,)).fetchall()
    results.append(issue(
        category='Data Integrity',
        check=f'Days over capacity (> {DAILY_CAPACITY} bookings)',
        severity='fail' if rows else 'ok',
        count=len(rows),
        details=[f"{r['reservation_date']}: {r['booking_count']} bookings" for r in rows]
    ))

    # --- 3. Bookings on blackout dates ---
    rows = conn.execute('''
        SELECT r.id, r.reservation_date, r.reservation_time, u.reason
        FROM reservations r
        JOIN unavailable_dates u ON u.date = r.reservation_date
        WHERE r.status != 'cancelled'
        ORDER BY r.reservation_date
    ''').fetchall()
    results.append(issue(
        category='Business Logic',
        check='Active bookings on unavailable dates',
        severity='warn' if rows else 'ok',
        count=len(rows),
        details=[
            f"id={r['id']} on {r['reservation_date']} {r['reservation_time']} (reason: {r['reason'] or '-'})"
            for r in rows
        ]
    ))

    return results


def check_value_domains(conn: sqlite3.Connection) -> list:
    """
    Check enumerated columns hold known values.

    Returns list of issue dicts.
    """
    results = []

    status_marks = ','.join('?' * len(STATUSES))
    rows = conn.execute(
        f'SELECT id, status FROM reservations WHERE status NOT IN ({status_marks})',
        STATUSES
    ).fetchall()
    results.append(issue(
        category='Business Logic',
        check='Unknown reservation status',
        severity='fail' if rows else 'ok',
        count=len(rows),
        details=[f"id={r['id']} status={r['status']!r}" for r in rows]
    ))

    slot_marks = ','.join('?' * len(TIME_SLOTS))
    rows = conn.execute(
        f'SELECT id, reservation_time FROM reservations WHERE reservation_time NOT IN ({slot_marks})',
        TIME_SLOTS
    ).fetchall()
    results.append(issue(
        category='Business Logic',
        check='Reservation time outside defined slots',
        severity='warn' if rows else 'ok',
        count=len(rows),
        details=[f"id={r['id']} time={r['reservation_time']!r}" for r in rows]
    ))

    return results


def run_checks(conn: sqlite3.Connection) -> list:
    """Run every check against an open connection."""
    return check_data_integrity(conn) + check_value_domains(conn)


def main():
    parser = argparse.ArgumentParser(
        description='Run health checks on the booking database'
    )
    parser.add_argument('--db-path', type=str,
                        default=os.environ.get('DATABASE_PATH', 'instance/kaitori.db'),
                        help='Path to SQLite database file')
    args = parser.parse_args()

    if not os.path.exists(args.db_path):
        print(f"Error: Database not found: {args.db_path}")
        sys.exit(1)

    conn = get_connection(args.db_path)
    results = run_checks(conn)
    conn.close()

    for r in results:
        icon = {'ok': '[OK]', 'warn': '[WARN]', 'fail': '[FAIL]'}.get(r['severity'], '[?]')
        print(f"{icon} {r['check']} ({r['count']} issues)")
        for d in r['details'][:3]:
            print(f"    -> {d}")

    sys.exit(1 if any(r['severity'] == 'fail' for r in results) else 0)


if __name__ == '__main__':
    main()
