"""
Tests for the database health check script.
"""

import sqlite3

from database import get_db
from scripts.health_check import get_connection, run_checks


def _by_check(results):
    return {r['check']: r for r in results}


class TestHealthCheck:
    """Tests for run_checks."""

    def test_clean_database(self, app, reservation_payload):
        from models.reservation import create_reservation

        create_reservation(reservation_payload())

        results = run_checks(get_db())

        assert all(r['severity'] == 'ok' for r in results)

    def test_detects_legacy_problems(self, app, insert_raw_reservation):
        db = get_db()
        db.execute('DROP INDEX idx_reservations_active_slot')
        db.commit()

        insert_raw_reservation('2025-03-10', '10:00')
        insert_raw_reservation('2025-03-10', '10:00')
        for legacy_time in ('09:00', '12:00', '14:00'):
            insert_raw_reservation('2025-03-10', legacy_time)
        insert_raw_reservation('2025-03-11', '10:00', status='archived')
        db.execute("INSERT INTO unavailable_dates (date, reason) VALUES ('2025-03-11', '')")
        db.commit()

        results = _by_check(run_checks(db))

        assert results['Double bookings (same date, same slot)']['severity'] == 'fail'
        assert results['Days over capacity (> 4 bookings)']['severity'] == 'fail'
        assert results['Active bookings on unavailable dates']['count'] == 1
        assert results['Unknown reservation status']['severity'] == 'fail'
        assert results['Reservation time outside defined slots']['count'] == 1

    def test_read_only_connection(self, app):
        path = app.config['DATABASE_PATH']

        conn = get_connection(path)
        try:
            results = run_checks(conn)
            try:
                conn.execute("INSERT INTO unavailable_dates (date) VALUES ('2025-01-01')")
                wrote = True
            except sqlite3.OperationalError:
                wrote = False
        finally:
            conn.close()

        assert len(results) == 5
        assert wrote is False

    def test_shares_booking_constants(self):
        from models import reservation_rules
        from scripts import health_check

        assert health_check.TIME_SLOTS is reservation_rules.TIME_SLOTS
        assert health_check.STATUSES is reservation_rules.RESERVATION_STATUSES
        assert health_check.DAILY_CAPACITY == reservation_rules.DAILY_CAPACITY
