"""
Public API routes for JSON endpoints.
Booking form, reservation management and availability calendar.
"""

from flask import jsonify, request, Blueprint, current_app

from models.calendar import get_public_calendar, get_day_availability
from models.reservation import (
    create_reservation, get_reservation_by_id, get_reservations,
    update_reservation, delete_reservation, is_valid_area
)
from utils.api_response import api_success, api_error, json_body
from utils.messages import get_message
from utils.validators import validate_date_format

api_bp = Blueprint('api', __name__)

UPDATABLE_FIELDS = ('status', 'notes', 'reservation_date', 'reservation_time')


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint.

    Returns:
        JSON with status and version
    """
    return jsonify({
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME', 'KaitoriBooking')
    })


# =============================================================================
# RESERVATIONS
# =============================================================================

@api_bp.route('/reservations')
def list_reservations():
    """
    List reservations.

    Query params:
        status: Filter by status (optional)
        date: Filter by reservation date YYYY-MM-DD (optional)
        limit: Page size (default: 50)
        offset: Rows to skip (default: 0)

    Returns:
        JSON with reservations and count
    """
    default_limit = current_app.config.get('DEFAULT_PAGE_SIZE', 50)
    max_limit = current_app.config.get('MAX_PAGE_SIZE', 500)

    status = request.args.get('status') or None
    reservation_date = request.args.get('date') or None
    limit = min(request.args.get('limit', default_limit, type=int), max_limit)
    offset = request.args.get('offset', 0, type=int)

    reservations = get_reservations(
        status=status,
        reservation_date=reservation_date,
        limit=limit,
        offset=offset
    )

    return api_success(data=reservations, count=len(reservations))


@api_bp.route('/reservations/<int:reservation_id>')
def reservation_detail(reservation_id):
    """Get a single reservation."""
    reservation = get_reservation_by_id(reservation_id)
    if not reservation:
        return api_error(get_message('reservation_not_found'), status=404)

    return api_success(data=reservation)


@api_bp.route('/reservations', methods=['POST'])
def create_reservation_route():
    """
    Book a visit.

    Request body:
        customer_name, customer_email, customer_phone, customer_address,
        customer_postal_code (optional), reservation_date, reservation_time,
        item_category (string or list), item_description, estimated_quantity,
        has_parking, has_elevator, customer_notes (optional)

    Returns:
        201 JSON with the stored reservation, or 400 with the refusal reason
    """
    reservation = create_reservation(json_body())
    return api_success(data=reservation, message=get_message('reservation_created'), status=201)


@api_bp.route('/reservations/<int:reservation_id>', methods=['PUT'])
def update_reservation_route(reservation_id):
    """
    Update status, admin notes, date or time of a reservation.

    Request body:
        Any subset of status, notes, reservation_date, reservation_time

    Returns:
        JSON with success message
    """
    data = json_body()
    changes = {field: data[field] for field in UPDATABLE_FIELDS if field in data}

    update_reservation(reservation_id, **changes)
    return api_success(message=get_message('reservation_updated'))


@api_bp.route('/reservations/<int:reservation_id>', methods=['DELETE'])
def delete_reservation_route(reservation_id):
    """Delete a reservation (no error if it does not exist)."""
    delete_reservation(reservation_id)
    return api_success(message=get_message('reservation_deleted'))


# =============================================================================
# CALENDAR / AVAILABILITY
# =============================================================================

@api_bp.route('/calendar')
def calendar():
    """
    Per-day booking counts for a month.

    Query params:
        year: Year (required)
        month: Month 1-12 (required)

    Returns:
        JSON list of {reservation_date, count, times}
    """
    days = get_public_calendar(request.args.get('year'), request.args.get('month'))
    return api_success(data=days)


@api_bp.route('/availability')
def availability():
    """
    Slot availability for one day.

    Query params:
        date: Date YYYY-MM-DD (required)

    Returns:
        JSON with per-slot availability
    """
    date_str = request.args.get('date')
    if not date_str:
        return api_error(get_message('date_required'))
    if not validate_date_format(date_str):
        return api_error(get_message('invalid_date'))

    return api_success(data=get_day_availability(date_str))


@api_bp.route('/check-area', methods=['POST'])
def check_area():
    """
    Tell the booking form whether an address is inside the service area.

    Request body:
        postal_code: Postal code NNN-NNNN
        address: Address text

    Returns:
        JSON with isValid and a message
    """
    data = json_body()
    is_valid = is_valid_area(data.get('postal_code'), data.get('address'))

    return api_success(
        message=get_message('area_valid') if is_valid else get_message('area_invalid'),
        isValid=is_valid
    )
