"""
Reservation CRUD operations.
Handles create, read, update, delete for reservations.
"""

import logging
import sqlite3
from typing import Optional

from database import get_db, immediate_transaction
from utils.errors import BusinessRuleViolation, NotFoundError, ValidationError
from utils.messages import get_message
from utils.notifications import send_reservation_confirmation
from utils.validators import is_scalar, sanitize_input, validate_date_format
from .reservation_rules import (
    CANCELLED_STATUS, RESERVATION_STATUSES, TIME_SLOTS,
    check_capacity, evaluate_reservation
)

logger = logging.getLogger(__name__)

_UNSET = object()

# Columns a customer may supply on create
CREATE_FIELDS = (
    'customer_name',
    'customer_email',
    'customer_phone',
    'customer_postal_code',
    'customer_address',
    'reservation_date',
    'reservation_time',
    'item_category',
    'item_description',
    'estimated_quantity',
    'customer_notes',
    'has_parking',
    'has_elevator',
)

OPTIONAL_FIELDS = ('customer_postal_code', 'customer_notes')


# =============================================================================
# NORMALIZATION
# =============================================================================

def normalize_reservation_data(data: dict) -> dict:
    """
    Build a candidate from raw request data.

    Strings are trimmed, a list of item categories is joined with ", ",
    empty optional fields become None and unknown keys are dropped.

    Args:
        data: Raw request body

    Returns:
        dict: Candidate with every CREATE_FIELDS key present

    Raises:
        ValidationError: If a field holds a list or object
    """
    candidate = {}

    for field in CREATE_FIELDS:
        value = data.get(field)

        if field == 'item_category' and isinstance(value, (list, tuple)):
            if not all(isinstance(v, str) for v in value):
                raise ValidationError(get_message('invalid_field', field=field))
            value = ', '.join(sanitize_input(v) for v in value if sanitize_input(v))

        if not is_scalar(value):
            raise ValidationError(get_message('invalid_field', field=field))

        if isinstance(value, str):
            value = sanitize_input(value)

        if field in OPTIONAL_FIELDS and not value:
            value = None

        candidate[field] = value

    return candidate


# =============================================================================
# CREATE
# =============================================================================

def create_reservation(data: dict) -> dict:
    """
    Admit and store a new reservation.

    The admission rules and the insert share one write-locked transaction,
    and the active-slot unique index turns any double booking that still
    slips through into the slot-full refusal.

    Args:
        data: Reservation fields from the booking form

    Returns:
        dict: Stored reservation (status 'pending')

    Raises:
        ValidationError: Missing or malformed fields
        BusinessRuleViolation: Admission refused
    """
    candidate = normalize_reservation_data(data)
    db = get_db()

    try:
        with immediate_transaction(db):
            evaluate_reservation(candidate, db=db)

            cursor = db.execute('''
                INSERT INTO reservations (
                    customer_name, customer_email, customer_phone,
                    customer_postal_code, customer_address,
                    reservation_date, reservation_time,
                    item_category, item_description, estimated_quantity,
                    customer_notes, has_parking, has_elevator, status
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 'pending')
            ''', (
                candidate['customer_name'], candidate['customer_email'], candidate['customer_phone'],
                candidate['customer_postal_code'], candidate['customer_address'],
                candidate['reservation_date'], candidate['reservation_time'],
                candidate['item_category'], candidate['item_description'], candidate['estimated_quantity'],
                candidate['customer_notes'], candidate['has_parking'], candidate['has_elevator']
            ))
            reservation_id = cursor.lastrowid
    except sqlite3.IntegrityError:
        logger.info(
            'Reservation refused (slot_full, unique index) for %s %s',
            candidate['reservation_date'], candidate['reservation_time']
        )
        raise BusinessRuleViolation(get_message('slot_full'), rule='slot_full')

    reservation = get_reservation_by_id(reservation_id)
    logger.info(
        'Reservation %s created for %s %s',
        reservation_id, reservation['reservation_date'], reservation['reservation_time']
    )
    send_reservation_confirmation(reservation)
    return reservation


# =============================================================================
# READ
# =============================================================================

def get_reservation_by_id(reservation_id: int) -> Optional[dict]:
    """
    Get reservation by ID.

    Args:
        reservation_id: Reservation ID

    Returns:
        dict or None: Reservation row
    """
    db = get_db()
    row = db.execute('SELECT * FROM reservations WHERE id = ?', (reservation_id,)).fetchone()
    return dict(row) if row else None


def get_reservations(
    status: str = None,
    reservation_date: str = None,
    limit: int = 50,
    offset: int = 0
) -> list:
    """
    List reservations, newest visit first.

    Args:
        status: Filter by status (optional)
        reservation_date: Filter by date YYYY-MM-DD (optional)
        limit: Page size
        offset: Rows to skip

    Returns:
        list: Reservation rows ordered by date DESC, time DESC, id
    """
    if limit < 0 or offset < 0:
        raise ValidationError(get_message('invalid_pagination'))

    db = get_db()
    query = 'SELECT * FROM reservations WHERE 1=1'
    params = []

    if status:
        query += ' AND status = ?'
        params.append(status)

    if reservation_date:
        query += ' AND reservation_date = ?'
        params.append(reservation_date)

    query += ' ORDER BY reservation_date DESC, reservation_time DESC, id ASC LIMIT ? OFFSET ?'
    params.extend([limit, offset])

    return [dict(row) for row in db.execute(query, params).fetchall()]


# =============================================================================
# UPDATE
# =============================================================================

def update_reservation(
    reservation_id: int,
    status: str = None,
    notes=_UNSET,
    reservation_date: str = None,
    reservation_time: str = None
) -> dict:
    """
    Partially update a reservation. updated_at is refreshed on every call.

    Moving a booking to another date or slot, or re-activating a cancelled
    one, re-checks slot and daily capacity against the other bookings.
    Blackout dates and the service area are not re-checked: staff may
    place a visit wherever they agreed with the customer.

    Args:
        reservation_id: Reservation ID
        status: New status (pending, confirmed, completed, cancelled)
        notes: Admin notes; None or '' clears them, omit to keep
        reservation_date: New date YYYY-MM-DD
        reservation_time: New slot start time

    Returns:
        dict: Updated reservation

    Raises:
        ValidationError: Invalid status, date or time
        NotFoundError: Unknown reservation
        BusinessRuleViolation: Target slot or day is full
    """
    if status and (not isinstance(status, str) or status not in RESERVATION_STATUSES):
        raise ValidationError(get_message('invalid_status'))
    if reservation_date and not validate_date_format(reservation_date):
        raise ValidationError(get_message('invalid_date'))
    if reservation_time and (not isinstance(reservation_time, str) or reservation_time not in TIME_SLOTS):
        raise ValidationError(get_message('invalid_time'))
    if notes is not _UNSET and not is_scalar(notes):
        raise ValidationError(get_message('invalid_field', field='notes'))

    changed = {}
    if status:
        changed['status'] = status
    if notes is not _UNSET:
        changed['notes'] = notes
    if reservation_date:
        changed['reservation_date'] = reservation_date
    if reservation_time:
        changed['reservation_time'] = reservation_time

    updates = ['updated_at = CURRENT_TIMESTAMP'] + [f'{column} = ?' for column in changed]
    params = list(changed.values()) + [reservation_id]
    db = get_db()

    try:
        with immediate_transaction(db):
            current = db.execute(
                'SELECT reservation_date, reservation_time, status FROM reservations WHERE id = ?',
                (reservation_id,)
            ).fetchone()
            if current is None:
                raise NotFoundError(get_message('reservation_not_found'))

            new_date = reservation_date or current['reservation_date']
            new_time = reservation_time or current['reservation_time']
            new_status = status or current['status']

            moved = (new_date, new_time) != (current['reservation_date'], current['reservation_time'])
            reactivated = current['status'] == CANCELLED_STATUS and new_status != CANCELLED_STATUS

            if new_status != CANCELLED_STATUS and (moved or reactivated):
                check_capacity(new_date, new_time, exclude_reservation_id=reservation_id, db=db)

            db.execute(f'''
                UPDATE reservations
                SET {', '.join(updates)}
                WHERE id = ?
            ''', params)
    except sqlite3.IntegrityError:
        raise BusinessRuleViolation(get_message('slot_full'), rule='slot_full')

    logger.info('Reservation %s updated (%s)', reservation_id, ', '.join(changed) or 'updated_at')
    return get_reservation_by_id(reservation_id)


# =============================================================================
# DELETE
# =============================================================================

def delete_reservation(reservation_id: int) -> bool:
    """
    Hard delete a reservation. Deleting an unknown ID is a no-op.

    Args:
        reservation_id: Reservation ID

    Returns:
        bool: True if a row was deleted
    """
    db = get_db()
    cursor = db.execute('DELETE FROM reservations WHERE id = ?', (reservation_id,))
    db.commit()

    if cursor.rowcount:
        logger.info('Reservation %s deleted', reservation_id)
    return cursor.rowcount > 0
