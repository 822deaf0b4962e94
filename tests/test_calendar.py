"""
Tests for monthly calendar aggregation.
"""

import sqlite3

import pytest

from blueprints.halls.services import decide, monthly_calendar
from models import reservation_availability
from models.reservation import (
    generate_candidate_slots, get_month_status, hall_has_free_slot,
    DAY_AVAILABLE, DAY_FULLY_BOOKED, ValidationError
)


class TestCandidateSlots:
    """Tests for candidate slot generation."""

    def test_default_grid(self, app):
        """Test hourly slots from 09:00 to 17:00."""
        slots = generate_candidate_slots()

        assert len(slots) == 8
        assert slots[0] == ('09:00', '10:00')
        assert slots[-1] == ('16:00', '17:00')

    def test_custom_grid(self, app):
        slots = generate_candidate_slots(open_hour=10, close_hour=12, slot_minutes=30)

        assert slots == [('10:00', '10:30'), ('10:30', '11:00'),
                         ('11:00', '11:30'), ('11:30', '12:00')]

    def test_hall_has_free_slot(self, app):
        slots = generate_candidate_slots()
        busy = [{'start_time': '09:00', 'end_time': '17:00'}]

        assert hall_has_free_slot([], slots, 60) is True
        assert hall_has_free_slot(busy, slots, 60) is False


class TestMonthStatus:
    """Tests for get_month_status()."""

    def test_every_day_present(self, app):
        """Test every day of the month is mapped, in order."""
        status = get_month_status(['Main Hall'], 2024, 6)

        assert len(status) == 30
        assert list(status)[0] == '2024-06-01'
        assert list(status)[-1] == '2024-06-30'
        assert set(status.values()) == {DAY_AVAILABLE}

    def test_leap_february(self, app):
        assert len(get_month_status(['Main Hall'], 2024, 2)) == 29

    def test_fully_booked_day(self, app, make_reservation):
        make_reservation('09:00', '17:00')

        status = get_month_status(['Main Hall'], 2024, 6)

        assert status['2024-06-10'] == DAY_FULLY_BOOKED
        assert status['2024-06-11'] == DAY_AVAILABLE

    def test_buffers_exhaust_day(self, app, make_reservation):
        """Test a day whose gaps are all shorter than slot plus buffers is fully booked."""
        make_reservation('09:00', '11:00')
        make_reservation('12:30', '14:30', requester_id='bob', requester_email='bob@example.com')
        make_reservation('16:00', '17:00', requester_id='eve', requester_email='eve@example.com')

        status = get_month_status(['Main Hall'], 2024, 6)

        assert status['2024-06-10'] == DAY_FULLY_BOOKED

    def test_partially_booked_day_available(self, app, make_reservation):
        make_reservation('09:00', '10:00')

        status = get_month_status(['Main Hall'], 2024, 6)

        assert status['2024-06-10'] == DAY_AVAILABLE

    def test_any_hall_free_makes_day_available(self, app, make_reservation):
        make_reservation('09:00', '17:00')

        status = get_month_status(['Main Hall', 'Seminar Room A'], 2024, 6)

        assert status['2024-06-10'] == DAY_AVAILABLE

    def test_rejected_reservation_frees_day(self, app, make_reservation):
        reservation = make_reservation('09:00', '17:00')
        decide(reservation['token'], 'rejected', 'Not approved')

        status = get_month_status(['Main Hall'], 2024, 6)

        assert status['2024-06-10'] == DAY_AVAILABLE

    def test_empty_halls_uses_defaults(self, app, make_reservation):
        """Test an empty hall list falls back to DEFAULT_HALLS."""
        app.config['DEFAULT_HALLS'] = ['Main Hall']
        make_reservation('09:00', '17:00')

        status = get_month_status([], 2024, 6)

        assert status['2024-06-10'] == DAY_FULLY_BOOKED

    @pytest.mark.parametrize('year,month', [(2024, 0), (2024, 13), (10000, 1), (0, 6)])
    def test_invalid_month(self, app, year, month):
        with pytest.raises(ValidationError):
            get_month_status(['Main Hall'], year, month)

    def test_single_fetch_per_hall_day(self, app, monkeypatch):
        """Test active reservations are read once per hall and day."""
        calls = []
        original = reservation_availability.get_reservations_by_hall_and_day

        def counting(hall, day):
            calls.append((hall, day))
            return original(hall, day)

        monkeypatch.setattr(reservation_availability, 'get_reservations_by_hall_and_day', counting)

        get_month_status(['Main Hall'], 2024, 6)

        assert len(calls) == 30
        assert len(set(calls)) == 30

    def test_store_failure_reports_available(self, app, make_reservation, monkeypatch):
        """Test store failures degrade to an all-available month."""
        make_reservation('09:00', '17:00')

        def broken():
            raise sqlite3.OperationalError('disk I/O error')

        monkeypatch.setattr('models.reservation_crud.get_db', broken)

        status = get_month_status(['Main Hall'], 2024, 6)

        assert set(status.values()) == {DAY_AVAILABLE}

    def test_monthly_calendar_service(self, app, make_reservation):
        make_reservation('09:00', '17:00')

        assert monthly_calendar(['Main Hall'], 2024, 6)['2024-06-10'] == DAY_FULLY_BOOKED
