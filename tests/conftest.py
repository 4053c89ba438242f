"""Shared fixtures for fleet tests."""

import pytest

from fleet import CalendarDate, Vehicle


@pytest.fixture
def make_vehicle():
    """Factory for vehicles with sensible defaults; override any field."""

    def _make(**overrides):
        fields = dict(
            code="chd-101a",
            driver_name="Ravi Kumar",
            vehicle_id=101,
            last_service=CalendarDate(15, 1, 2025),
            current_mileage=5000.0,
            last_service_mileage=0.0,
            service_interval_km=10000.0,
            service_interval_days=0,
            service_history_count=3,
            avg_daily_km=120.0,
            fuel_efficiency=4.5,
        )
        fields.update(overrides)
        return Vehicle(**fields)

    return _make
