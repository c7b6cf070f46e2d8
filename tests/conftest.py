"""
Pytest configuration and fixtures.
Each test gets its own SQLite file so tests never share bookings.
"""

import os
import pytest

os.environ.setdefault('FLASK_ENV', 'test')


@pytest.fixture
def app(tmp_path):
    """Create test application with an initialized, isolated database."""
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['DATABASE_PATH'] = str(tmp_path / 'kaitori_test.db')

    with app.app_context():
        init_db()
        yield app


@pytest.fixture
def bare_app(tmp_path):
    """Create test application whose database file has no schema yet."""
    from app import create_app

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['DATABASE_PATH'] = str(tmp_path / 'kaitori_bare.db')

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def reservation_payload():
    """Build a valid booking form body; keyword arguments override fields."""
    def build(**overrides):
        payload = {
            'customer_name': '山田太郎',
            'customer_email': 'taro@example.com',
            'customer_phone': '090-1234-5678',
            'customer_postal_code': '150-0001',
            'customer_address': '東京都渋谷区神宮前1-1-1',
            'reservation_date': '2025-03-10',
            'reservation_time': '10:00',
            'item_category': ['家電', '家具'],
            'item_description': '冷蔵庫とソファ',
            'estimated_quantity': 3,
            'has_parking': 'あり',
            'has_elevator': 'なし',
            'customer_notes': '午前中に連絡ください',
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def insert_raw_reservation(app):
    """
    Insert a reservation row directly, bypassing admission rules.
    Used to reproduce data written by older versions of the service.
    """
    from database import get_db

    def insert(reservation_date, reservation_time, status='pending', customer_name='既存顧客'):
        db = get_db()
        cursor = db.execute('''
            INSERT INTO reservations (
                customer_name, customer_email, customer_phone, customer_address,
                reservation_date, reservation_time, item_category, status
            ) VALUES (?, 'old@example.com', '03-1234-5678', '東京都港区1-1', ?, ?, '家具', ?)
        ''', (customer_name, reservation_date, reservation_time, status))
        db.commit()
        return cursor.lastrowid

    return insert
