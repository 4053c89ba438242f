#!/usr/bin/env python3
"""Tests for calculation helper functions."""

import pytest

from fleet import (
    CalendarDate,
    DUE_SOON_KM,
    Status,
    calc_due_mileage,
    calc_health_score,
    calc_next_due_date,
    check_date_overdue,
    check_mileage_status,
)


class TestCalcDueMileage:
    """Tests for calc_due_mileage."""

    def test_last_plus_interval(self):
        assert calc_due_mileage(50000, 10000) == 60000

    def test_zero_last_service(self):
        assert calc_due_mileage(0, 7500) == 7500


class TestCheckMileageStatus:
    """Tests for check_mileage_status."""

    def test_threshold_constant(self):
        assert DUE_SOON_KM == 500

    def test_overdue(self):
        """OVERDUE when current >= due."""
        assert check_mileage_status(10000, 10000) == Status.OVERDUE
        assert check_mileage_status(10001, 10000) == Status.OVERDUE

    def test_due_soon(self):
        """DUE_SOON when no more than 500 km remain."""
        assert check_mileage_status(9999, 10000) == Status.DUE_SOON
        assert check_mileage_status(9500, 10000) == Status.DUE_SOON

    def test_ok(self):
        assert check_mileage_status(9499, 10000) == Status.OK
        assert check_mileage_status(0, 10000) == Status.OK

    def test_custom_threshold(self):
        assert check_mileage_status(90, 100, soon_threshold=10) == Status.DUE_SOON
        assert check_mileage_status(89, 100, soon_threshold=10) == Status.OK


class TestCalcNextDueDate:
    """Tests for calc_next_due_date."""

    def test_shifts_by_interval(self):
        assert calc_next_due_date(CalendarDate(1, 1, 2025), 180) == CalendarDate(1, 7, 2025)

    def test_disabled_interval(self):
        assert calc_next_due_date(CalendarDate(1, 1, 2025), 0) is None

    def test_invalid_last_service(self):
        assert calc_next_due_date(CalendarDate(), 180) is None


class TestCheckDateOverdue:
    """Tests for check_date_overdue."""

    def test_exactly_at_interval(self):
        assert check_date_overdue(CalendarDate(1, 1, 2025), CalendarDate(1, 7, 2025), 180)

    def test_one_day_before(self):
        assert not check_date_overdue(CalendarDate(1, 1, 2025), CalendarDate(30, 6, 2025), 180)

    def test_disabled_interval(self):
        assert not check_date_overdue(CalendarDate(1, 1, 2020), CalendarDate(1, 1, 2025), 0)

    def test_invalid_reference(self):
        assert not check_date_overdue(CalendarDate(1, 1, 2020), CalendarDate(), 180)


class TestCalcHealthScore:
    """Tests for calc_health_score."""

    def test_fresh_service(self):
        assert calc_health_score(10000, 10000, 10000) == 100

    def test_negative_usage_clamped(self):
        assert calc_health_score(9600, 10000, 10000) == 100

    def test_linear_midpoint(self):
        """96% of interval used -> round(0.54 / 1.5 * 100) = 36."""
        assert calc_health_score(9600, 0, 10000) == 36

    def test_full_interval(self):
        """100% used -> round(33.3) = 33."""
        assert calc_health_score(20000, 10000, 10000) == 33

    def test_zero_at_one_and_a_half_intervals(self):
        assert calc_health_score(15000, 0, 10000) == 0
        assert calc_health_score(50000, 0, 10000) == 0

    def test_non_positive_interval_fallback(self):
        assert calc_health_score(5000, 0, 0) == 50

    @pytest.mark.parametrize("current", [0, 2500, 7000, 12000, 14999, 1_000_000])
    def test_always_in_range(self, current):
        assert 0 <= calc_health_score(current, 0, 10000) <= 100
