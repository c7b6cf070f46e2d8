"""
Reservation admission rules.

Decides whether a reservation candidate may be booked. Checks run in a
fixed order and the first failure is the only one reported:

1. Required fields and field formats
2. Booking cut-off (earliest bookable date)
3. Service area (postal code + address)
4. Blackout dates
5. Slot capacity (one active reservation per date and slot)
6. Daily capacity (four active reservations per date)

Cancelled reservations never count toward capacity.
"""

import logging
import re
from datetime import timedelta

from flask import current_app

from database import get_db
from utils.datetime_helpers import get_today, parse_date
from utils.errors import BusinessRuleViolation, ValidationError
from utils.messages import get_message
from utils.validators import is_blank, validate_date_format, validate_email
from .unavailable_date import is_date_unavailable

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Slot start times; each visit window is two hours long
TIME_SLOTS = ('10:00', '12:00', '14:00', '16:00')

SLOT_CAPACITY = 1
DAILY_CAPACITY = len(TIME_SLOTS)

RESERVATION_STATUSES = ('pending', 'confirmed', 'completed', 'cancelled')
CANCELLED_STATUS = 'cancelled'

LOGISTICS_CHOICES = ('あり', 'なし')

REQUIRED_FIELDS = (
    'customer_name',
    'customer_email',
    'customer_phone',
    'customer_address',
    'reservation_date',
    'reservation_time',
    'item_category',
    'item_description',
    'estimated_quantity',
    'has_parking',
    'has_elevator',
)

# Serviced regions: postal prefix pattern and the token the address must contain
SERVICE_AREAS = {
    'tokyo': {
        'name': '東京都内',
        'postal_pattern': re.compile(r'^(1[0-9]{2}|20[0-9])-\d{4}$'),
        'address_token': '東京都',
    },
    'yokohama': {
        'name': '横浜市',
        'postal_pattern': re.compile(r'^(22[0-9]|23[0-9]|24[0-7])-\d{4}$'),
        'address_token': '横浜市',
    },
}


# =============================================================================
# AREA ELIGIBILITY
# =============================================================================

def find_service_area(postal_code: str, address: str):
    """
    Find the serviced region matching a postal code and address.

    Args:
        postal_code: Postal code (NNN-NNNN)
        address: Free-text address

    Returns:
        str or None: Area key ('tokyo', 'yokohama') or None if outside
    """
    postal_code = str(postal_code or '').strip()
    address = address if isinstance(address, str) else ''

    for key, area in SERVICE_AREAS.items():
        if area['postal_pattern'].match(postal_code) and area['address_token'] in address:
            return key
    return None


def is_valid_area(postal_code: str, address: str) -> bool:
    """True if the postal code and address fall in one serviced region."""
    return find_service_area(postal_code, address) is not None


# =============================================================================
# CAPACITY QUERIES
# =============================================================================

def count_active_in_slot(reservation_date: str, reservation_time: str,
                         exclude_reservation_id: int = None, db=None) -> int:
    """
    Count non-cancelled reservations occupying a date and slot.

    Args:
        reservation_date: Date (YYYY-MM-DD)
        reservation_time: Slot start time
        exclude_reservation_id: Reservation to leave out (for updates)
        db: Connection (default: request connection)

    Returns:
        int: Number of active reservations
    """
    db = db or get_db()
    query = '''
        SELECT COUNT(*) as count FROM reservations
        WHERE reservation_date = ? AND reservation_time = ?
          AND status != ?
    '''
    params = [reservation_date, reservation_time, CANCELLED_STATUS]

    if exclude_reservation_id:
        query += ' AND id != ?'
        params.append(exclude_reservation_id)

    return db.execute(query, params).fetchone()['count']


def count_active_on_date(reservation_date: str, exclude_reservation_id: int = None, db=None) -> int:
    """Count non-cancelled reservations on a date."""
    db = db or get_db()
    query = '''
        SELECT COUNT(*) as count FROM reservations
        WHERE reservation_date = ? AND status != ?
    '''
    params = [reservation_date, CANCELLED_STATUS]

    if exclude_reservation_id:
        query += ' AND id != ?'
        params.append(exclude_reservation_id)

    return db.execute(query, params).fetchone()['count']


# =============================================================================
# INDIVIDUAL RULES
# =============================================================================

def validate_candidate_fields(candidate: dict) -> None:
    """
    Check required fields and field formats.

    Raises:
        ValidationError: On the first missing or malformed field
    """
    if any(is_blank(candidate.get(field)) for field in REQUIRED_FIELDS):
        raise ValidationError(get_message('required_fields'))

    if not validate_date_format(candidate['reservation_date']):
        raise ValidationError(get_message('invalid_date'))

    if candidate['reservation_time'] not in TIME_SLOTS:
        raise ValidationError(get_message('invalid_time'))

    for field in ('has_parking', 'has_elevator'):
        if candidate[field] not in LOGISTICS_CHOICES:
            raise ValidationError(get_message('invalid_logistics', field=get_message(field)))

    if not validate_email(candidate['customer_email']):
        raise ValidationError(get_message('invalid_email'))


def get_earliest_bookable_date():
    """Today in the configured timezone plus the configured lead days."""
    lead_days = current_app.config.get('RESERVATION_LEAD_DAYS', 0)
    return get_today() + timedelta(days=lead_days)


def check_cutoff(reservation_date: str) -> None:
    """
    Refuse dates before the earliest bookable date.

    Raises:
        BusinessRuleViolation: rule='cutoff'
    """
    if not current_app.config.get('RESERVATION_CUTOFF_ENABLED', True):
        return

    earliest = get_earliest_bookable_date()
    if parse_date(reservation_date) < earliest:
        raise BusinessRuleViolation(
            get_message('date_past', min_date=earliest.isoformat()), rule='cutoff'
        )


def check_area(postal_code: str, address: str) -> None:
    """
    Refuse addresses outside the serviced regions.

    Raises:
        BusinessRuleViolation: rule='area'
    """
    if not current_app.config.get('AREA_CHECK_ENABLED', True):
        return

    if not is_valid_area(postal_code, address):
        raise BusinessRuleViolation(get_message('area_invalid'), rule='area')


def check_unavailable_date(reservation_date: str, db=None) -> None:
    """
    Refuse blacked-out dates. Row presence decides, whatever the reason text.

    Raises:
        BusinessRuleViolation: rule='unavailable_date'
    """
    if is_date_unavailable(reservation_date, db=db):
        raise BusinessRuleViolation(get_message('date_unavailable'), rule='unavailable_date')


def check_capacity(reservation_date: str, reservation_time: str,
                   exclude_reservation_id: int = None, db=None) -> None:
    """
    Refuse full slots, then full days.

    Raises:
        BusinessRuleViolation: rule='slot_full' or rule='day_full'
    """
    if count_active_in_slot(reservation_date, reservation_time,
                            exclude_reservation_id, db=db) >= SLOT_CAPACITY:
        raise BusinessRuleViolation(get_message('slot_full'), rule='slot_full')

    if count_active_on_date(reservation_date, exclude_reservation_id, db=db) >= DAILY_CAPACITY:
        raise BusinessRuleViolation(get_message('day_full'), rule='day_full')


# =============================================================================
# ADMISSION
# =============================================================================

def evaluate_reservation(candidate: dict, db=None) -> None:
    """
    Run every admission rule against a candidate, in order.

    Call inside immediate_transaction() when the result gates an insert,
    so the capacity counts cannot go stale before the write.

    Args:
        candidate: Reservation fields (see REQUIRED_FIELDS)
        db: Connection (default: request connection)

    Raises:
        ValidationError: Missing or malformed fields
        BusinessRuleViolation: First admission rule that failed
    """
    validate_candidate_fields(candidate)

    try:
        check_cutoff(candidate['reservation_date'])
        check_area(candidate.get('customer_postal_code'), candidate['customer_address'])
        check_unavailable_date(candidate['reservation_date'], db=db)
        check_capacity(candidate['reservation_date'], candidate['reservation_time'], db=db)
    except BusinessRuleViolation as e:
        logger.info(
            'Reservation refused (%s) for %s %s',
            e.rule, candidate['reservation_date'], candidate['reservation_time']
        )
        raise


def check_admission(candidate: dict, db=None) -> tuple:
    """
    Admit/deny form of evaluate_reservation().

    Returns:
        tuple: (admitted: bool, reason: str or None)
    """
    try:
        evaluate_reservation(candidate, db=db)
    except (ValidationError, BusinessRuleViolation) as e:
        return False, e.message
    return True, None
