"""
Unavailable (blackout) date model.
CRUD operations for dates on which no visits can be booked.
"""

from typing import Optional

from database import get_db
from utils.errors import ValidationError
from utils.messages import get_message
from utils.validators import is_scalar, validate_date_format


def set_unavailable_date(date: str, reason: str = None) -> dict:
    """
    Mark a date unavailable, replacing the reason if it is already marked.

    Args:
        date: Date to block (YYYY-MM-DD)
        reason: Optional reason shown to admins

    Returns:
        dict: Stored record

    Raises:
        ValidationError: If the date is missing or malformed
    """
    if not date:
        raise ValidationError(get_message('date_required'))
    if not validate_date_format(date):
        raise ValidationError(get_message('invalid_date'))
    if not is_scalar(reason):
        raise ValidationError(get_message('invalid_field', field='reason'))

    db = get_db()
    db.execute('''
        INSERT OR REPLACE INTO unavailable_dates (date, reason)
        VALUES (?, ?)
    ''', (date, reason or ''))
    db.commit()

    return get_unavailable_date(date)


def delete_unavailable_date(date: str) -> bool:
    """
    Remove a blackout date. Deleting a date that is not blocked is a no-op.

    Args:
        date: Date to unblock (YYYY-MM-DD)

    Returns:
        bool: True if a record was deleted
    """
    db = get_db()
    cursor = db.execute('DELETE FROM unavailable_dates WHERE date = ?', (date,))
    db.commit()
    return cursor.rowcount > 0


def get_unavailable_date(date: str, db=None) -> Optional[dict]:
    """
    Get the blackout record for a date.

    Returns:
        dict or None: {'date', 'reason', 'created_at'} if blocked
    """
    db = db or get_db()
    row = db.execute('''
        SELECT date, reason, created_at FROM unavailable_dates WHERE date = ?
    ''', (date,)).fetchone()
    return dict(row) if row else None


def is_date_unavailable(date: str, db=None) -> bool:
    """True if the date is blocked, whatever its reason text."""
    return get_unavailable_date(date, db=db) is not None


def get_unavailable_dates(start_date: str = None, end_date: str = None) -> list:
    """
    List blackout dates in a half-open range.

    Args:
        start_date: Inclusive lower bound (optional)
        end_date: Exclusive upper bound (optional)

    Returns:
        list: [{'date', 'reason'}] ordered by date
    """
    db = get_db()
    query = 'SELECT date, reason FROM unavailable_dates WHERE 1=1'
    params = []

    if start_date:
        query += ' AND date >= ?'
        params.append(start_date)

    if end_date:
        query += ' AND date < ?'
        params.append(end_date)

    query += ' ORDER BY date'

    return [dict(row) for row in db.execute(query, params).fetchall()]
