"""
Tests for the calendar read model.
"""

import pytest

from models.calendar import (
    get_admin_calendar, get_day_availability, get_month_range, get_public_calendar
)
from models.reservation import create_reservation, update_reservation
from models.unavailable_date import set_unavailable_date
from utils.errors import ValidationError
from utils.messages import get_message


class TestMonthRange:
    """Tests for get_month_range."""

    def test_regular_month(self):
        assert get_month_range(2025, 3) == ('2025-03-01', '2025-04-01')

    def test_string_arguments(self):
        assert get_month_range('2025', '02') == ('2025-02-01', '2025-03-01')

    def test_december_rolls_over(self):
        assert get_month_range(2025, 12) == ('2025-12-01', '2026-01-01')

    @pytest.mark.parametrize('year,month', [(None, 3), (2025, None), ('', '3')])
    def test_missing_values(self, year, month):
        with pytest.raises(ValidationError) as exc:
            get_month_range(year, month)
        assert exc.value.message == get_message('year_month_required')

    @pytest.mark.parametrize('year,month', [(2025, 13), (2025, 0), ('abc', 3), (2025, 'x')])
    def test_invalid_values(self, year, month):
        with pytest.raises(ValidationError) as exc:
            get_month_range(year, month)
        assert exc.value.message == get_message('invalid_year_month')


class TestPublicCalendar:
    """Tests for the public per-day view."""

    def test_counts_and_times(self, app, reservation_payload):
        create_reservation(reservation_payload(reservation_date='2025-03-10', reservation_time='14:00'))
        create_reservation(reservation_payload(reservation_date='2025-03-10', reservation_time='10:00'))
        create_reservation(reservation_payload(reservation_date='2025-03-15', reservation_time='16:00'))

        days = get_public_calendar(2025, 3)

        assert days == [
            {'reservation_date': '2025-03-10', 'count': 2, 'times': '10:00,14:00'},
            {'reservation_date': '2025-03-15', 'count': 1, 'times': '16:00'},
        ]

    def test_cancelled_excluded(self, app, reservation_payload):
        reservation = create_reservation(reservation_payload())
        update_reservation(reservation['id'], status='cancelled')

        assert get_public_calendar(2025, 3) == []

    def test_other_months_excluded(self, app, reservation_payload):
        create_reservation(reservation_payload(reservation_date='2025-02-28'))
        create_reservation(reservation_payload(reservation_date='2025-04-01'))
        create_reservation(reservation_payload(reservation_date='2025-03-31'))

        days = get_public_calendar(2025, 3)

        assert [d['reservation_date'] for d in days] == ['2025-03-31']

    def test_december_includes_last_day(self, app, reservation_payload):
        create_reservation(reservation_payload(reservation_date='2025-12-31'))
        create_reservation(reservation_payload(reservation_date='2026-01-01'))

        days = get_public_calendar(2025, 12)

        assert [d['reservation_date'] for d in days] == ['2025-12-31']


class TestAdminCalendar:
    """Tests for the admin per-slot view."""

    def test_per_slot_rows_and_blackouts(self, app, reservation_payload):
        create_reservation(reservation_payload(reservation_date='2025-03-10', reservation_time='10:00'))
        create_reservation(reservation_payload(reservation_date='2025-03-10', reservation_time='12:00'))
        set_unavailable_date('2025-03-20', '設備点検')
        set_unavailable_date('2025-04-01', 'next month')

        calendar = get_admin_calendar(2025, 3)

        assert calendar['reservations'] == [
            {'reservation_date': '2025-03-10', 'reservation_time': '10:00', 'count': 1},
            {'reservation_date': '2025-03-10', 'reservation_time': '12:00', 'count': 1},
        ]
        assert calendar['unavailableDates'] == [{'date': '2025-03-20', 'reason': '設備点検'}]

    def test_per_slot_sums_match_per_day_counts(self, app, reservation_payload, insert_raw_reservation):
        create_reservation(reservation_payload(reservation_date='2025-03-10', reservation_time='10:00'))
        create_reservation(reservation_payload(reservation_date='2025-03-11', reservation_time='14:00'))
        insert_raw_reservation('2025-03-11', '09:00')
        insert_raw_reservation('2025-03-11', '11:00', status='cancelled')

        public = {d['reservation_date']: d['count'] for d in get_public_calendar(2025, 3)}
        admin = {}
        for row in get_admin_calendar(2025, 3)['reservations']:
            admin[row['reservation_date']] = admin.get(row['reservation_date'], 0) + row['count']

        assert public == admin == {'2025-03-10': 1, '2025-03-11': 2}


class TestDayAvailability:
    """Tests for get_day_availability."""

    def test_open_day(self, app):
        day = get_day_availability('2025-03-10')

        assert day['unavailable'] is False
        assert day['day_full'] is False
        assert all(slot['available'] for slot in day['slots'])
        assert [slot['time'] for slot in day['slots']] == ['10:00', '12:00', '14:00', '16:00']

    def test_booked_slot(self, app, reservation_payload):
        create_reservation(reservation_payload(reservation_time='12:00'))

        day = get_day_availability('2025-03-10')

        assert {s['time']: s['available'] for s in day['slots']} == {
            '10:00': True, '12:00': False, '14:00': True, '16:00': True
        }

    def test_blackout_day(self, app):
        set_unavailable_date('2025-03-10', '臨時休業')

        day = get_day_availability('2025-03-10')

        assert day['unavailable'] is True
        assert day['reason'] == '臨時休業'
        assert not any(slot['available'] for slot in day['slots'])

    def test_full_day(self, app, insert_raw_reservation):
        for legacy_time in ('09:00', '11:00', '13:00', '15:00'):
            insert_raw_reservation('2025-03-10', legacy_time)

        day = get_day_availability('2025-03-10')

        assert day['day_full'] is True
        assert not any(slot['available'] for slot in day['slots'])
