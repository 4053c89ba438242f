#!/usr/bin/env python3
"""Tests for operator input parsing."""

from fleet import CalendarDate
from fleet.validation import (
    Invalid,
    Valid,
    parse_code,
    parse_date,
    parse_driver_name,
    parse_float,
    parse_int,
)


class TestParseInt:
    """Tests for parse_int."""

    def test_valid(self):
        assert parse_int(" 42 ", 1, 100) == Valid(42)

    def test_signed(self):
        assert parse_int("-5", -10, 10) == Valid(-5)

    def test_rejects_letters(self):
        result = parse_int("12a", 1, 100)
        assert isinstance(result, Invalid)
        assert not result.ok
        assert "digits only" in result.reason

    def test_rejects_decimal(self):
        assert isinstance(parse_int("1.5", 0, 10), Invalid)

    def test_out_of_range(self):
        result = parse_int("0", 1, 9999999)
        assert isinstance(result, Invalid)
        assert "between 1 and 9999999" in result.reason


class TestParseFloat:
    """Tests for parse_float."""

    def test_valid(self):
        result = parse_float("9600.5", 0.0, 100000.0)
        assert result.ok
        assert result.value == 9600.5

    def test_exponent_rejected(self):
        assert isinstance(parse_float("1e3", 0.0, 5000.0), Invalid)

    def test_digit_separator_rejected(self):
        assert isinstance(parse_float("1_000", 0.0, 5000.0), Invalid)

    def test_plain_decimal_forms(self):
        assert parse_float(" 12. ", 0.0, 100.0) == Valid(12.0)
        assert parse_float(".5", 0.0, 100.0) == Valid(0.5)

    def test_rejects_text(self):
        assert isinstance(parse_float("abc", 0.0, 1.0), Invalid)

    def test_rejects_non_finite(self):
        assert isinstance(parse_float("nan", 0.0, 1.0), Invalid)
        assert isinstance(parse_float("inf", 0.0, 1.0), Invalid)

    def test_interval_minimum(self):
        assert isinstance(parse_float("0.5", 1.0, 100000.0), Invalid)


class TestParseDate:
    """Tests for parse_date."""

    def test_valid(self):
        assert parse_date("15/06/2025") == Valid(CalendarDate(15, 6, 2025))

    def test_spaces_allowed(self):
        assert parse_date(" 1 / 2 / 2025 ") == Valid(CalendarDate(1, 2, 2025))

    def test_month_length_not_checked(self):
        assert parse_date("31/02/2025").ok

    def test_wrong_separator(self):
        assert isinstance(parse_date("15-06-2025"), Invalid)

    def test_out_of_range(self):
        assert isinstance(parse_date("32/01/2025"), Invalid)
        assert isinstance(parse_date("01/13/2025"), Invalid)
        assert isinstance(parse_date("01/01/0"), Invalid)


class TestParseCode:
    """Tests for parse_code."""

    def test_upper_cased(self):
        assert parse_code("chd-101a") == Valid("CHD-101A")

    def test_empty(self):
        assert isinstance(parse_code("   "), Invalid)

    def test_separator_rejected(self):
        assert isinstance(parse_code("A|B"), Invalid)

    def test_truncated(self):
        assert parse_code("a" * 25) == Valid("A" * 19)


class TestParseDriverName:
    """Tests for parse_driver_name."""

    def test_valid(self):
        assert parse_driver_name("  Ravi Kumar ") == Valid("Ravi Kumar")

    def test_digits_with_letters_allowed(self):
        assert parse_driver_name("Agent 007").ok

    def test_only_digits_rejected(self):
        result = parse_driver_name("12345")
        assert isinstance(result, Invalid)
        assert "only numbers" in result.reason
        assert isinstance(parse_driver_name("123 456"), Invalid)
        assert isinstance(parse_driver_name(" 1 2\t3 "), Invalid)

    def test_empty_rejected(self):
        assert isinstance(parse_driver_name(""), Invalid)

    def test_separator_rejected(self):
        assert isinstance(parse_driver_name("Ravi|Kumar"), Invalid)

    def test_line_break_rejected(self):
        result = parse_driver_name("Ravi\nKumar")
        assert result == Invalid("Name cannot contain line breaks.")

    def test_truncated(self):
        assert len(parse_driver_name("B" * 80).value) == 49
