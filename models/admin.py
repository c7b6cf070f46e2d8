"""
Admin model and credential checks.
Handles admin authentication and Flask-Login integration.
"""

import logging

from werkzeug.security import generate_password_hash, check_password_hash

from database import get_db

logger = logging.getLogger(__name__)

# Prefixes written by werkzeug.security.generate_password_hash
HASH_PREFIXES = ('scrypt:', 'pbkdf2:')


class Admin:
    """
    Admin class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, admin_dict):
        self.id = admin_dict['id']
        self.username = admin_dict['username']
        self.created_at = admin_dict.get('created_at')

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    def get_id(self):
        """Required by Flask-Login. Returns admin ID as string."""
        return str(self.id)


def get_admin_by_id(admin_id: int) -> dict:
    """Get admin by ID, or None."""
    db = get_db()
    row = db.execute('SELECT * FROM admins WHERE id = ?', (admin_id,)).fetchone()
    return dict(row) if row else None


def get_admin_by_username(username: str) -> dict:
    """Get admin by username, or None."""
    db = get_db()
    row = db.execute('SELECT * FROM admins WHERE username = ?', (username,)).fetchone()
    return dict(row) if row else None


def is_password_hashed(stored: str) -> bool:
    """True if the stored secret is a Werkzeug hash rather than legacy plaintext."""
    return bool(stored) and stored.startswith(HASH_PREFIXES)


def set_admin_password(admin_id: int, password: str) -> None:
    """Store a freshly salted hash for an admin."""
    db = get_db()
    db.execute(
        'UPDATE admins SET password_hash = ? WHERE id = ?',
        (generate_password_hash(password), admin_id)
    )
    db.commit()


def create_admin(username: str, password: str) -> int:
    """
    Create an admin account.

    Returns:
        int: New admin ID

    Raises:
        ValueError: If the username is taken
    """
    if get_admin_by_username(username):
        raise ValueError(f'Admin {username} already exists')

    db = get_db()
    cursor = db.execute(
        'INSERT INTO admins (username, password_hash) VALUES (?, ?)',
        (username, generate_password_hash(password))
    )
    db.commit()
    return cursor.lastrowid


def authenticate_admin(username: str, password: str) -> dict:
    """
    Check admin credentials.

    Rows written before passwords were hashed hold the plaintext secret;
    those are compared verbatim once and re-hashed on success.

    Args:
        username: Admin username
        password: Submitted password

    Returns:
        dict or None: Admin row if the credentials match
    """
    if not isinstance(username, str) or not isinstance(password, str):
        return None
    if not username or not password:
        return None

    admin = get_admin_by_username(username)
    if admin is None:
        return None

    stored = admin['password_hash']

    if is_password_hashed(stored):
        return admin if check_password_hash(stored, password) else None

    if stored != password:
        return None

    set_admin_password(admin['id'], password)
    logger.info('Upgraded legacy plaintext password for admin %s', username)
    return admin
