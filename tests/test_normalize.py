"""
Test suite for the field normalization helpers.
"""

import os
import sys
import unittest
from datetime import date, datetime

from hypothesis import given, strategies as st

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from src.normalize import (  # pylint: disable=wrong-import-position,import-error
    date_key_to_display,
    format_timestamp,
    normalize_string,
    parse_day_date,
    parse_number,
    parse_timestamp,
    to_date_key,
    to_display_date,
)


class TestNormalizeString(unittest.TestCase):
    """Tests for normalize_string."""

    def test_none_is_empty(self):
        self.assertEqual(normalize_string(None), "")

    def test_trims(self):
        self.assertEqual(normalize_string("  Central \t"), "Central")

    def test_non_string(self):
        self.assertEqual(normalize_string(12), "12")


class TestParseNumber(unittest.TestCase):
    """Tests for parse_number."""

    def test_decimal_comma(self):
        """A decimal comma is read as a decimal point."""
        self.assertEqual(parse_number("3,5"), 3.5)
        self.assertEqual(parse_number("-2,25"), -2.25)

    def test_empty_and_missing(self):
        self.assertEqual(parse_number(""), 0)
        self.assertEqual(parse_number(None), 0)
        self.assertEqual(parse_number("   "), 0)

    def test_garbage(self):
        self.assertEqual(parse_number("abc"), 0)
        self.assertEqual(parse_number("12abc"), 0)

    def test_only_first_comma_replaced(self):
        """No thousands handling: "1,234,5" is not a number."""
        self.assertEqual(parse_number("1,234,5"), 0)

    def test_plain_numbers(self):
        self.assertEqual(parse_number("2"), 2.0)
        self.assertEqual(parse_number(" 7 "), 7.0)
        self.assertEqual(parse_number("1e3"), 1000.0)
        self.assertEqual(parse_number(4), 4.0)

    def test_non_finite_is_zero(self):
        self.assertEqual(parse_number("Infinity"), 0)
        self.assertEqual(parse_number("nan"), 0)
        self.assertEqual(parse_number("1e400"), 0)

    def test_underscores_rejected(self):
        self.assertEqual(parse_number("1_000"), 0)


class TestParseDayDate(unittest.TestCase):
    """Tests for parse_day_date."""

    def test_valid_date(self):
        self.assertEqual(parse_day_date("15/06/2024"), date(2024, 6, 15))

    def test_surrounding_whitespace(self):
        self.assertEqual(parse_day_date(" 5 / 1 / 2025 "), date(2025, 1, 5))

    def test_invalid_calendar_date(self):
        """Impossible dates are rejected instead of rolling over."""
        self.assertIsNone(parse_day_date("31/02/2024"))
        self.assertIsNone(parse_day_date("00/01/2024"))
        self.assertIsNone(parse_day_date("10/13/2024"))

    def test_leap_day(self):
        self.assertEqual(parse_day_date("29/02/2024"), date(2024, 2, 29))
        self.assertIsNone(parse_day_date("29/02/2023"))

    def test_wrong_number_of_parts(self):
        self.assertIsNone(parse_day_date("2024-06-15"))
        self.assertIsNone(parse_day_date("15/06"))
        self.assertIsNone(parse_day_date("1/2/3/4"))

    def test_non_numeric_parts(self):
        self.assertIsNone(parse_day_date("aa/bb/cccc"))
        self.assertIsNone(parse_day_date("15//2024"))

    def test_empty_or_missing(self):
        self.assertIsNone(parse_day_date(""))
        self.assertIsNone(parse_day_date(None))

    def test_trailing_text_after_digits_is_ignored(self):
        self.assertEqual(parse_day_date("15/06/2024x"), date(2024, 6, 15))

    def test_two_digit_year(self):
        self.assertEqual(parse_day_date("01/01/24"), date(1924, 1, 1))


class TestParseTimestamp(unittest.TestCase):
    """Tests for parse_timestamp."""

    def test_full_timestamp(self):
        self.assertEqual(
            parse_timestamp("15/06/2024 10:20:30"), datetime(2024, 6, 15, 10, 20, 30)
        )

    def test_date_only(self):
        self.assertEqual(parse_timestamp("15/06/2024"), datetime(2024, 6, 15))

    def test_incomplete_time_keeps_midnight(self):
        self.assertEqual(parse_timestamp("15/06/2024 10:20"), datetime(2024, 6, 15))
        self.assertEqual(parse_timestamp("15/06/2024 aa:bb:cc"), datetime(2024, 6, 15))

    def test_out_of_range_time_rolls_over(self):
        self.assertEqual(
            parse_timestamp("15/06/2024 25:00:00"), datetime(2024, 6, 16, 1, 0, 0)
        )

    def test_invalid_date_part(self):
        self.assertIsNone(parse_timestamp("31/02/2024 10:00:00"))
        self.assertIsNone(parse_timestamp(""))
        self.assertIsNone(parse_timestamp(None))


class TestFormatting(unittest.TestCase):
    """Tests for date keys and display formats."""

    def test_round_trip_example(self):
        parsed = parse_day_date("05/01/2025")
        self.assertEqual(to_date_key(parsed), "2025-01-05")
        self.assertEqual(to_display_date(parsed), "05/01/2025")

    def test_missing_dates(self):
        self.assertIsNone(to_date_key(None))
        self.assertEqual(to_display_date(None), "")

    def test_date_key_to_display(self):
        self.assertEqual(date_key_to_display("2024-01-02"), "02/01/2024")

    def test_format_timestamp(self):
        self.assertEqual(
            format_timestamp(datetime(2024, 3, 4, 5, 6, 7)), "04/03/2024 05:06:07"
        )
        self.assertEqual(format_timestamp(None, "garbled"), "garbled")


@given(st.dates(min_value=date(1000, 1, 1), max_value=date(9999, 12, 31)))
def test_display_date_parses_back(value):
    """Formatting a date for display and parsing it again is lossless."""
    parsed = parse_day_date(to_display_date(value))
    assert parsed == value
    assert to_date_key(parsed) == value.isoformat()


if __name__ == "__main__":
    unittest.main()
