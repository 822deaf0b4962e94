"""
Tests for input validation utilities.
"""

from utils.validators import (
    validate_email,
    validate_date_format,
    validate_time_format,
    validate_time_range,
    validate_within_hours,
    validate_time_step,
    sanitize_input
)


class TestValidateEmail:
    """Tests for email validation."""

    def test_valid_email(self):
        """Test valid email formats."""
        assert validate_email('user@example.com') is True
        assert validate_email('user.name@example.com') is True
        assert validate_email('user+tag@example.co.uk') is True

    def test_invalid_email(self):
        """Test invalid email formats."""
        assert validate_email('') is False
        assert validate_email(None) is False
        assert validate_email('invalid') is False
        assert validate_email('missing@domain') is False
        assert validate_email('@nodomain.com') is False


class TestValidateDateFormat:
    """Tests for date format validation."""

    def test_valid_date_format(self):
        assert validate_date_format('2024-06-10') is True
        assert validate_date_format('2024-02-29') is True  # Leap year

    def test_invalid_date_format(self):
        assert validate_date_format('10-06-2024') is False
        assert validate_date_format('2024/06/10') is False
        assert validate_date_format('') is False
        assert validate_date_format(None) is False
        assert validate_date_format('2023-02-29') is False


class TestValidateTimeFormat:
    """Tests for HH:MM validation."""

    def test_valid_times(self):
        assert validate_time_format('00:00') is True
        assert validate_time_format('09:30') is True
        assert validate_time_format('23:59') is True

    def test_invalid_times(self):
        """Test unpadded, out-of-range and empty values."""
        assert validate_time_format('9:30') is False
        assert validate_time_format('24:00') is False
        assert validate_time_format('12:60') is False
        assert validate_time_format('') is False
        assert validate_time_format(None) is False

    def test_non_string_times(self):
        """Test numbers from a JSON body are rejected, not matched."""
        assert validate_time_format(900) is False
        assert validate_time_format(9.5) is False
        assert validate_time_format(['09:00']) is False


class TestValidateTimeRange:
    """Tests for end-after-start validation."""

    def test_valid_range(self):
        assert validate_time_range('09:00', '09:30') is True

    def test_empty_or_reversed(self):
        assert validate_time_range('10:00', '10:00') is False
        assert validate_time_range('11:00', '10:00') is False
        assert validate_time_range('bad', '10:00') is False


class TestValidateWithinHours:
    """Tests for operational-hours validation."""

    def test_inside(self):
        assert validate_within_hours('09:00', '17:00', 9, 17) is True
        assert validate_within_hours('12:00', '13:30', 9, 17) is True

    def test_outside(self):
        assert validate_within_hours('08:30', '10:00', 9, 17) is False
        assert validate_within_hours('16:00', '17:30', 9, 17) is False


class TestValidateTimeStep:
    """Tests for booking grid validation."""

    def test_on_grid(self):
        assert validate_time_step('09:00', 30) is True
        assert validate_time_step('09:30', 30) is True

    def test_off_grid(self):
        assert validate_time_step('09:15', 30) is False

    def test_no_step(self):
        assert validate_time_step('09:17', 0) is True
        assert validate_time_step('09:17', None) is True


class TestSanitizeInput:
    """Tests for input sanitization."""

    def test_trim_whitespace(self):
        assert sanitize_input('  hello  ') == 'hello'
        assert sanitize_input('\n\ttext\n') == 'text'

    def test_limit_length(self):
        assert sanitize_input('hello world', max_length=5) == 'hello'

    def test_empty_input(self):
        assert sanitize_input('') == ''
        assert sanitize_input(None) == ''
