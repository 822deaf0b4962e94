"""
Tests for buffered interval conflict detection.
"""

from datetime import time

import pytest

from models.reservation_conflicts import conflicts, find_conflicts, format_minutes, to_minutes


class TestToMinutes:
    """Tests for time-of-day conversion."""

    def test_string_and_time_agree(self):
        """Test 'HH:MM' strings and time objects convert identically."""
        assert to_minutes('09:30') == 570
        assert to_minutes(time(9, 30)) == 570

    def test_midnight_bounds(self):
        assert to_minutes('00:00') == 0
        assert to_minutes('24:00') == 1440

    def test_invalid_values(self):
        """Test malformed times raise ValueError."""
        for value in ('25:00', '10:60', '24:30', 'noon'):
            with pytest.raises(ValueError):
                to_minutes(value)

    def test_format_minutes(self):
        assert format_minutes(570) == '09:30'
        assert format_minutes(1020) == '17:00'


class TestConflicts:
    """Tests for the conflicts() predicate."""

    def test_gap_shorter_than_buffer_conflicts(self):
        """Test 09:00-10:00 existing blocks 10:30-11:30 with a 60-minute buffer."""
        assert conflicts(('09:00', '10:00'), ('10:30', '11:30')) is True

    def test_boundary_at_buffer_end_is_free(self):
        """Test a candidate starting exactly at existing end + buffer does not conflict."""
        assert conflicts(('09:00', '10:00'), ('11:00', '12:00')) is False

    def test_boundary_at_buffer_start_is_free(self):
        """Test a candidate ending exactly at existing start - buffer does not conflict."""
        assert conflicts(('13:00', '14:00'), ('11:00', '12:00')) is False

    def test_gap_before_existing_conflicts(self):
        assert conflicts(('13:00', '14:00'), ('11:00', '12:30')) is True

    def test_direct_overlap(self):
        assert conflicts(('10:00', '12:00'), ('11:00', '11:30')) is True
        assert conflicts(('11:00', '11:30'), ('10:00', '12:00')) is True

    def test_zero_buffer_allows_back_to_back(self):
        """Test adjacent intervals only conflict when a buffer is applied."""
        assert conflicts(('09:00', '10:00'), ('10:00', '11:00'), buffer_minutes=0) is False
        assert conflicts(('09:00', '10:00'), ('10:00', '11:00')) is True

    def test_custom_buffer(self):
        assert conflicts(('09:00', '10:00'), ('10:30', '11:30'), buffer_minutes=30) is False
        assert conflicts(('09:00', '10:00'), ('10:15', '11:30'), buffer_minutes=30) is True

    def test_accepts_time_objects(self):
        assert conflicts((time(9), time(10)), (time(10, 30), time(11, 30))) is True


class TestFindConflicts:
    """Tests for find_conflicts()."""

    def test_returns_only_conflicting(self):
        """Test that only buffered overlaps are returned, in input order."""
        reservations = [
            {'id': 1, 'start_time': '09:00', 'end_time': '10:00'},
            {'id': 2, 'start_time': '14:00', 'end_time': '15:00'},
            {'id': 3, 'start_time': '12:00', 'end_time': '13:00'},
        ]

        found = find_conflicts(reservations, ('10:30', '11:30'))

        assert [r['id'] for r in found] == [1, 3]

    def test_empty_input(self):
        assert find_conflicts([], ('10:00', '11:00')) == []
