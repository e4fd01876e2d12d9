"""
Pytest fixtures shared by the drivescore tests.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable

import pytest

from drivescore.core.models import FuelType, TripTelemetry, VehicleBaseline
from drivescore.infra.logging import LOGGER_NAMESPACE


@pytest.fixture
def scenario_trip() -> TripTelemetry:
    """The reference city trip: 20.1 km in 45 min on 1.3 L."""
    return TripTelemetry(
          distance_km=20.1
        , duration_min=45
        , fuel_used_liters=1.3
        , avg_speed_kmh=45
        , max_speed_kmh=105
        , harsh_acceleration_count=2
        , harsh_braking_count=1
        , over_speeding_seconds=45
        , idling_seconds=180
        , over_revving_seconds=15
        , trip_id="scenario"
    )


@pytest.fixture
def scenario_baseline() -> VehicleBaseline:
    return VehicleBaseline(
          claimed_mileage_km_per_liter=15.5
        , speed_threshold_kmh=80
        , fuel_type=FuelType.PETROL
    )


@pytest.fixture
def clean_trip() -> TripTelemetry:
    """15 km, 30 min, no events at all, exactly the default claimed 15 km/L."""
    return TripTelemetry(
          distance_km=15.0
        , duration_min=30.0
        , fuel_used_liters=1.0
        , avg_speed_kmh=30.0
        , max_speed_kmh=60.0
    )


@pytest.fixture
def make_trip(clean_trip: TripTelemetry) -> Callable[..., TripTelemetry]:
    """Factory: the clean trip with some fields replaced."""

    def _make(**changes: Any) -> TripTelemetry:
        return replace(clean_trip, **changes)

    return _make


@pytest.fixture(autouse=True)
def restore_logging():
    """Scripts reconfigure the drivescore logger; put it back after each test."""
    logger = logging.getLogger(LOGGER_NAMESPACE)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
