# drivescore/scoring/validation.py
# -*- coding: utf-8 -*-
"""
Input validation and record parsing.

The engine assumes finite, non-negative numbers; this module is where that
assumption is enforced. Callers (batch runner, CLI) validate here and let
the engine stay free of checks.

Provider records arrive with camelCase keys (`distance`, `fuelUsed`,
`harshBraking`, ...) or with the canonical snake_case field names. Missing
or blank numeric fields are read as 0: sensor dropout is routine and the
engine has a defined answer for it. Text that is not a number, NaN and
infinities are rejected.
"""

from __future__ import annotations

import math
from dataclasses import fields
from typing import Any, Dict, List, Optional, Tuple

from drivescore.core.models import TripTelemetry, VehicleBaseline
from drivescore.core.types import AnyMapping, Number, TripRecord
from drivescore.infra.logging import get_logger

_log = get_logger(__name__)


class TelemetryValidationError(ValueError):
    """
    Raised when trip or baseline input cannot be scored.

    Attributes
    ----------
    fields : list of str
        Names of the offending fields.
    """

    def __init__(self, message: str, fields: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])


# ────────────────────────────────────────────────────────────────────────────────
# Field aliases (provider camelCase → canonical)
# ────────────────────────────────────────────────────────────────────────────────

TRIP_FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
      "distance_km": ("distance_km", "distance", "distanceKm")
    , "duration_min": ("duration_min", "duration", "durationMin")
    , "fuel_used_liters": ("fuel_used_liters", "fuelUsed", "fuel_used", "fuelConsumption", "fuelUsedLiters")
    , "avg_speed_kmh": ("avg_speed_kmh", "avgSpeed", "avg_speed", "avgSpeedKmh")
    , "max_speed_kmh": ("max_speed_kmh", "maxSpeed", "max_speed", "maxSpeedKmh")
    , "harsh_acceleration_count": ("harsh_acceleration_count", "harshAcceleration", "harsh_acceleration", "harshAccelerationCount")
    , "harsh_braking_count": ("harsh_braking_count", "harshBraking", "harsh_braking", "harshBrakingCount")
    , "over_speeding_seconds": ("over_speeding_seconds", "overSpeeding", "over_speeding", "overSpeedingSeconds")
    , "idling_seconds": ("idling_seconds", "idling", "idlingSeconds")
    , "over_revving_seconds": ("over_revving_seconds", "overRevving", "over_revving", "overRevvingSeconds")
}

_COUNT_FIELDS = ("harsh_acceleration_count", "harsh_braking_count")
TRIP_ID_KEYS = ("trip_id", "tripId", "id")
AUTHORITATIVE_SCORE_KEYS = ("calculated_score", "calculatedScore")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        # pandas hands over empty CSV cells as NaN
        return True
    return isinstance(value, str) and value.strip() == ""


def _lookup(record: AnyMapping, keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in record and not _is_blank(record[key]):
            return record[key]
    return None


def _to_number(name: str, value: Any) -> Number:
    if isinstance(value, bool):
        raise TelemetryValidationError(f"Field '{name}' must be numeric, got a boolean.", [name])
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise TelemetryValidationError(f"Field '{name}' is not a number: {value!r}", [name]) from e
    if number.is_integer():
        return int(number)
    return number


# ────────────────────────────────────────────────────────────────────────────────
# Record parsing
# ────────────────────────────────────────────────────────────────────────────────

def trip_from_record(record: TripRecord) -> TripTelemetry:
    """
    Build a `TripTelemetry` from a provider record.

    Parameters
    ----------
    record : Mapping[str, Any]
        One trip as a dict (JSON object, DataFrame row, ...).

    Returns
    -------
    TripTelemetry
        Missing/blank numeric fields are 0. The trip is *not* validated;
        call `validate_trip` before scoring.

    Raises
    ------
    TelemetryValidationError
        If a field holds non-numeric text, or a harsh-event count is not a
        whole number.
    """
    values: Dict[str, Any] = {}
    missing: List[str] = []

    for name, keys in TRIP_FIELD_ALIASES.items():
        raw = _lookup(record, keys)
        if raw is None:
            missing.append(name)
            values[name] = 0
            continue
        number = _to_number(name, raw)
        if name in _COUNT_FIELDS and not isinstance(number, int) and math.isfinite(number):
            raise TelemetryValidationError(
                f"Field '{name}' must be a whole number of events, got {raw!r}.", [name]
            )
        values[name] = number

    trip_id = _lookup(record, TRIP_ID_KEYS)
    values["trip_id"] = str(trip_id) if trip_id is not None else None

    if missing:
        _log.debug(f"trip_from_record: trip={values['trip_id'] or '-'} missing {missing} → read as 0")

    return TripTelemetry(**values)


def authoritative_score_from_record(record: TripRecord) -> Optional[float]:
    """
    Return the externally computed overall score carried by a record, or
    None when the record has none.

    Raises
    ------
    TelemetryValidationError
        If the score is present but not a finite number.
    """
    raw = _lookup(record, AUTHORITATIVE_SCORE_KEYS)
    if raw is None:
        return None
    number = float(_to_number("calculated_score", raw))
    if not math.isfinite(number):
        raise TelemetryValidationError(
            f"Field 'calculated_score' must be finite, got {raw!r}.", ["calculated_score"]
        )
    return number


# ────────────────────────────────────────────────────────────────────────────────
# Validation
# ────────────────────────────────────────────────────────────────────────────────

def validate_trip(trip: TripTelemetry) -> TripTelemetry:
    """
    Reject non-finite or negative numeric fields.

    Zero distance, duration and fuel are accepted: the engine has defined
    fallbacks for them.

    Returns
    -------
    TripTelemetry
        The same trip, for chaining.

    Raises
    ------
    TelemetryValidationError
        Listing every offending field.
    """
    bad: List[str] = []
    for f in fields(trip):
        if f.name == "trip_id":
            continue
        value = getattr(trip, f.name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            bad.append(f.name)
        elif not math.isfinite(value) or value < 0:
            bad.append(f.name)

    if bad:
        details = ", ".join(f"{name}={getattr(trip, name)!r}" for name in bad)
        _log.debug(f"validate_trip: trip={trip.trip_id or '-'} rejected: {details}")
        raise TelemetryValidationError(
            f"Trip {trip.trip_id or '<unnamed>'} has invalid telemetry: {details}", bad
        )
    return trip


def validate_baseline(baseline: VehicleBaseline) -> VehicleBaseline:
    """
    Claimed mileage and speed threshold must be finite and > 0.

    Raises
    ------
    TelemetryValidationError
        Listing every offending field.
    """
    bad: List[str] = []
    for name in ("claimed_mileage_km_per_liter", "speed_threshold_kmh"):
        value = getattr(baseline, name)
        if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
            bad.append(name)

    if bad:
        details = ", ".join(f"{name}={getattr(baseline, name)!r}" for name in bad)
        raise TelemetryValidationError(f"Vehicle baseline is invalid: {details}", bad)
    return baseline
