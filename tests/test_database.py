"""
Tests for schema management and migrations.
"""

from database import ensure_schema, get_db, init_db, run_all_migrations


LEGACY_RESERVATIONS_TABLE = '''
    CREATE TABLE reservations (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        customer_name TEXT NOT NULL,
        customer_email TEXT NOT NULL,
        customer_phone TEXT NOT NULL,
        customer_postal_code TEXT,
        customer_address TEXT NOT NULL,
        reservation_date TEXT NOT NULL,
        reservation_time TEXT NOT NULL,
        item_category TEXT NOT NULL,
        item_description TEXT,
        estimated_quantity INTEGER,
        status TEXT NOT NULL DEFAULT 'pending',
        notes TEXT,
        customer_notes TEXT,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
'''


def _columns(db, table):
    return {row['name'] for row in db.execute(f'PRAGMA table_info({table})').fetchall()}


def _indexes(db):
    return {
        row['name'] for row in db.execute(
            "SELECT name FROM sqlite_master WHERE type = 'index'"
        ).fetchall()
    }


def _insert_legacy(db, reservation_date, reservation_time, status='pending'):
    db.execute('''
        INSERT INTO reservations (
            customer_name, customer_email, customer_phone, customer_address,
            reservation_date, reservation_time, item_category, status
        ) VALUES ('旧顧客', 'old@example.com', '03-0000-0000', '東京都港区', ?, ?, '家具', ?)
    ''', (reservation_date, reservation_time, status))


class TestSchema:
    """Tests for table and index creation."""

    def test_tables_exist(self, app):
        db = get_db()
        tables = {
            row['name'] for row in db.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            ).fetchall()
        }

        assert {'reservations', 'unavailable_dates', 'admins'} <= tables

    def test_reservation_columns(self, app):
        columns = _columns(get_db(), 'reservations')

        assert {
            'customer_postal_code', 'item_category', 'estimated_quantity',
            'has_parking', 'has_elevator', 'notes', 'customer_notes', 'updated_at',
        } <= columns

    def test_indexes_exist(self, app):
        assert {
            'idx_reservation_date', 'idx_customer_email', 'idx_status',
            'idx_created_at', 'idx_unavailable_dates', 'idx_reservations_active_slot',
        } <= _indexes(get_db())

    def test_default_admin_seeded(self, app):
        rows = get_db().execute('SELECT username, password_hash FROM admins').fetchall()

        assert [row['username'] for row in rows] == ['admin']
        assert rows[0]['password_hash'] != 'admin123'


class TestEnsureSchema:
    """Tests for lazy schema setup."""

    def test_runs_once_per_path(self, bare_app):
        assert ensure_schema() is True
        assert ensure_schema() is False
        assert ensure_schema(force=True) is True

    def test_idempotent_and_seeds_once(self, bare_app):
        ensure_schema()
        ensure_schema(force=True)
        ensure_schema(force=True)

        count = get_db().execute('SELECT COUNT(*) FROM admins').fetchone()[0]
        assert count == 1

    def test_keeps_existing_data(self, app, reservation_payload):
        from models.reservation import create_reservation

        create_reservation(reservation_payload())
        ensure_schema(force=True)

        count = get_db().execute('SELECT COUNT(*) FROM reservations').fetchone()[0]
        assert count == 1

    def test_init_db_resets_data(self, app, reservation_payload):
        from models.reservation import create_reservation

        create_reservation(reservation_payload())
        init_db()

        count = get_db().execute('SELECT COUNT(*) FROM reservations').fetchone()[0]
        assert count == 0

    def test_first_request_creates_schema(self, bare_app):
        client = bare_app.test_client()

        response = client.get('/api/calendar?year=2025&month=3')

        assert response.status_code == 200
        assert 'reservations' in {
            row['name'] for row in get_db().execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            ).fetchall()
        }


class TestMigrations:
    """Tests for upgrading databases created by older versions."""

    def test_legacy_table_gains_logistics_columns(self, bare_app):
        db = get_db()
        db.execute(LEGACY_RESERVATIONS_TABLE)
        _insert_legacy(db, '2024-12-01', '10:00')
        db.commit()

        ensure_schema()

        assert {'has_parking', 'has_elevator'} <= _columns(db, 'reservations')
        row = db.execute('SELECT has_parking, customer_name FROM reservations').fetchone()
        assert row['has_parking'] is None
        assert row['customer_name'] == '旧顧客'

    def test_second_run_skips_everything(self, app):
        result = run_all_migrations()

        assert result['total'] == 2
        assert result['applied'] == 0
        assert result['skipped'] == 2
        assert result['failed'] == 0

    def test_unique_slot_index_skipped_on_legacy_double_booking(self, bare_app):
        db = get_db()
        db.execute(LEGACY_RESERVATIONS_TABLE)
        _insert_legacy(db, '2024-12-01', '10:00')
        _insert_legacy(db, '2024-12-01', '10:00')
        db.commit()

        ensure_schema()

        assert 'idx_reservations_active_slot' not in _indexes(db)
        assert db.execute('SELECT COUNT(*) FROM reservations').fetchone()[0] == 2

    def test_cancelled_duplicates_do_not_block_index(self, bare_app):
        db = get_db()
        db.execute(LEGACY_RESERVATIONS_TABLE)
        _insert_legacy(db, '2024-12-01', '10:00')
        _insert_legacy(db, '2024-12-01', '10:00', status='cancelled')
        db.commit()

        ensure_schema()

        assert 'idx_reservations_active_slot' in _indexes(db)
