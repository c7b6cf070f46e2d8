"""
Reservation data access functions.

This module re-exports the reservation functions from the split modules:
- reservation_rules.py: Admission rules, slots, statuses, service areas
- reservation_crud.py: Create, read, update, delete operations
"""

# =============================================================================
# RE-EXPORTS
# =============================================================================

# Admission rules
from .reservation_rules import (
    # Constants
    TIME_SLOTS,
    SLOT_CAPACITY,
    DAILY_CAPACITY,
    RESERVATION_STATUSES,
    LOGISTICS_CHOICES,
    REQUIRED_FIELDS,
    SERVICE_AREAS,
    # Area
    find_service_area,
    is_valid_area,
    # Admission
    evaluate_reservation,
    check_admission,
    count_active_in_slot,
    count_active_on_date,
)

# CRUD operations
from .reservation_crud import (
    normalize_reservation_data,
    create_reservation,
    get_reservation_by_id,
    get_reservations,
    update_reservation,
    delete_reservation,
)

__all__ = [
    'TIME_SLOTS',
    'SLOT_CAPACITY',
    'DAILY_CAPACITY',
    'RESERVATION_STATUSES',
    'LOGISTICS_CHOICES',
    'REQUIRED_FIELDS',
    'SERVICE_AREAS',
    'find_service_area',
    'is_valid_area',
    'evaluate_reservation',
    'check_admission',
    'count_active_in_slot',
    'count_active_on_date',
    'normalize_reservation_data',
    'create_reservation',
    'get_reservation_by_id',
    'get_reservations',
    'update_reservation',
    'delete_reservation',
]
