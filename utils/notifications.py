"""
Reservation confirmation notices.

Delivery is not wired to any channel; the rendered notice is written to
the application log so staff can follow up by phone or email.
"""

import logging

from utils.messages import get_message

logger = logging.getLogger(__name__)

SLOT_LABELS = {
    '10:00': '10:00〜12:00',
    '12:00': '12:00〜14:00',
    '14:00': '14:00〜16:00',
    '16:00': '16:00〜18:00',
}


def render_confirmation(reservation: dict) -> str:
    """
    Render the plain-text confirmation summary for a reservation.

    Args:
        reservation: Stored reservation row

    Returns:
        str: Multi-line summary
    """
    time_label = SLOT_LABELS.get(reservation['reservation_time'], reservation['reservation_time'])
    status_label = get_message(f"status_{reservation.get('status', 'pending')}")

    address_parts = (reservation.get('customer_postal_code'), reservation['customer_address'])

    lines = [
        f"{reservation['customer_name']} 様",
        '出張買取のご予約を受け付けました。',
        f"予約番号: {reservation['id']}",
        f"訪問日時: {reservation['reservation_date']} {time_label}",
        'ご住所: ' + ' '.join(filter(None, address_parts)),
        f"買取品目: {reservation['item_category']}",
        f"ステータス: {status_label}",
    ]
    return '\n'.join(lines)


def send_reservation_confirmation(reservation: dict) -> str:
    """
    Emit the confirmation notice for a newly admitted reservation.

    Args:
        reservation: Stored reservation row

    Returns:
        str: The rendered notice
    """
    notice = render_confirmation(reservation)
    logger.info(
        'Confirmation notice for reservation %s to %s:\n%s',
        reservation['id'], reservation['customer_email'], notice
    )
    return notice
