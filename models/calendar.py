"""
Calendar read model.
Monthly availability views for the booking page and the admin calendar.
All functions are read-only.
"""

from datetime import date

from database import get_db
from utils.errors import ValidationError
from utils.messages import get_message
from .reservation_rules import CANCELLED_STATUS, DAILY_CAPACITY, TIME_SLOTS, count_active_on_date
from .unavailable_date import get_unavailable_date, get_unavailable_dates


def get_month_range(year, month) -> tuple:
    """
    Half-open date range covering one month.

    Args:
        year: Year (int or numeric string)
        month: Month 1-12 (int or numeric string)

    Returns:
        tuple: (first day of month, first day of next month) as YYYY-MM-DD

    Raises:
        ValidationError: If year/month are missing or out of range
    """
    if year in (None, '') or month in (None, ''):
        raise ValidationError(get_message('year_month_required'))

    try:
        year = int(year)
        month = int(month)
        start = date(year, month, 1)
    except (TypeError, ValueError):
        raise ValidationError(get_message('invalid_year_month'))

    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)

    return start.isoformat(), end.isoformat()


def get_public_calendar(year, month) -> list:
    """
    Per-day booking counts for the public booking calendar.

    Args:
        year: Year
        month: Month 1-12

    Returns:
        list: [{'reservation_date', 'count', 'times'}] ordered by date,
            times being the occupied slot start times joined with ","
    """
    start_date, end_date = get_month_range(year, month)
    db = get_db()

    rows = db.execute('''
        SELECT reservation_date, reservation_time
        FROM reservations
        WHERE reservation_date >= ? AND reservation_date < ?
          AND status != ?
        ORDER BY reservation_date, reservation_time
    ''', (start_date, end_date, CANCELLED_STATUS)).fetchall()

    days = {}
    for row in rows:
        days.setdefault(row['reservation_date'], []).append(row['reservation_time'])

    return [
        {'reservation_date': day, 'count': len(times), 'times': ','.join(times)}
        for day, times in days.items()
    ]


def get_admin_calendar(year, month) -> dict:
    """
    Per-slot booking counts plus blackout dates for the admin calendar.

    Args:
        year: Year
        month: Month 1-12

    Returns:
        dict: {
            'reservations': [{'reservation_date', 'reservation_time', 'count'}],
            'unavailableDates': [{'date', 'reason'}]
        }
    """
    start_date, end_date = get_month_range(year, month)
    db = get_db()

    rows = db.execute('''
        SELECT reservation_date, reservation_time, COUNT(*) as count
        FROM reservations
        WHERE reservation_date >= ? AND reservation_date < ?
          AND status != ?
        GROUP BY reservation_date, reservation_time
        ORDER BY reservation_date, reservation_time
    ''', (start_date, end_date, CANCELLED_STATUS)).fetchall()

    return {
        'reservations': [dict(row) for row in rows],
        'unavailableDates': get_unavailable_dates(start_date, end_date),
    }


def get_day_availability(target_date: str) -> dict:
    """
    Slot-by-slot availability for a single day.

    Args:
        target_date: Date (YYYY-MM-DD)

    Returns:
        dict: {
            'date': str,
            'unavailable': bool,
            'reason': str or None,
            'day_full': bool,
            'slots': [{'time': str, 'available': bool}]
        }
    """
    db = get_db()
    blackout = get_unavailable_date(target_date)

    booked = {
        row['reservation_time'] for row in db.execute('''
            SELECT reservation_time FROM reservations
            WHERE reservation_date = ? AND status != ?
        ''', (target_date, CANCELLED_STATUS)).fetchall()
    }
    day_full = count_active_on_date(target_date) >= DAILY_CAPACITY

    slots = [
        {'time': slot, 'available': blackout is None and not day_full and slot not in booked}
        for slot in TIME_SLOTS
    ]

    return {
        'date': target_date,
        'unavailable': blackout is not None,
        'reason': blackout['reason'] if blackout else None,
        'day_full': day_full,
        'slots': slots,
    }
