"""
Database seed data.
Initial data population for fresh database installations.
"""

from flask import current_app
from werkzeug.security import generate_password_hash


def seed_database(db):
    """
    Insert the default admin account.

    INSERT OR IGNORE keeps an existing admin (and its password) untouched
    on repeat runs.
    """
    username = current_app.config.get('ADMIN_USERNAME', 'admin')
    password = current_app.config.get('ADMIN_PASSWORD', 'admin123')

    db.execute('''
        INSERT OR IGNORE INTO admins (username, password_hash)
        VALUES (?, ?)
    ''', (username, generate_password_hash(password)))
