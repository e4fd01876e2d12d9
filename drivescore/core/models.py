# drivescore/core/models.py
# -*- coding: utf-8 -*-

"""
Core domain models (pure dataclasses).

These are small, shared structures used across the project:
    - FuelType: Petrol / Diesel / Electric
    - TripTelemetry: raw per-trip measurements from the telemetry provider
    - VehicleBaseline: claimed mileage, speed limit and fuel type
    - Penalties / Bonuses: point ledger attached to a score
    - Insight: one natural-language observation about a trip
    - ScoreBreakdown: engine output for a single trip

This module deliberately has:
    - no logging or file I/O
    - no pandas imports
    - no scoring logic

It is safe to import from anywhere.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from drivescore.core.config import get_baseline_defaults


# ────────────────────────────────────────────────────────────────────────────────
# Fuel type
# ────────────────────────────────────────────────────────────────────────────────

class FuelType(str, Enum):
    PETROL = "Petrol"
    DIESEL = "Diesel"
    ELECTRIC = "Electric"

    @classmethod
    def parse(cls, value: Any) -> "FuelType":
        """
        Case-insensitive lookup by value ('petrol', 'Diesel', ...).

        Raises
        ------
        KeyError
            If `value` names no known fuel type.
        """
        if isinstance(value, FuelType):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise KeyError(f"Unknown fuel type '{value}'.")


# ────────────────────────────────────────────────────────────────────────────────
# Inputs
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TripTelemetry:
    """
    Raw telemetry for one trip.

    Attributes
    ----------
    distance_km : float
        Distance driven in kilometers.
    duration_min : float
        Trip duration in minutes.
    fuel_used_liters : float
        Fuel burned in liters. Zero for electric vehicles or sensor dropout.
    avg_speed_kmh, max_speed_kmh : float
        Average and peak speed in km/h.
    harsh_acceleration_count, harsh_braking_count : int
        Number of harsh events detected by the OBD unit.
    over_speeding_seconds, idling_seconds, over_revving_seconds : int
        Time spent above the speed limit, idling, and above the rev limit.
    trip_id : Optional[str]
        Provider identifier, carried through for reporting only.
    """

    distance_km: float
    duration_min: float
    fuel_used_liters: float = 0.0
    avg_speed_kmh: float = 0.0
    max_speed_kmh: float = 0.0
    harsh_acceleration_count: int = 0
    harsh_braking_count: int = 0
    over_speeding_seconds: int = 0
    idling_seconds: int = 0
    over_revving_seconds: int = 0
    trip_id: Optional[str] = None

    @property
    def harsh_event_count(self) -> int:
        return self.harsh_acceleration_count + self.harsh_braking_count


@dataclass(frozen=True)
class VehicleBaseline:
    """
    Vehicle configuration the score is measured against.

    Attributes
    ----------
    claimed_mileage_km_per_liter : float
        Manufacturer- or user-declared fuel economy.
    speed_threshold_kmh : float
        Speed limit for the trip context.
    fuel_type : FuelType
        Petrol, Diesel or Electric.
    """

    claimed_mileage_km_per_liter: float = field(
        default_factory=lambda: get_baseline_defaults().claimed_mileage_km_per_liter
    )
    speed_threshold_kmh: float = field(
        default_factory=lambda: get_baseline_defaults().speed_threshold_kmh
    )
    fuel_type: FuelType = field(
        default_factory=lambda: FuelType.parse(get_baseline_defaults().fuel_type)
    )

    def __post_init__(self) -> None:
        # accept plain strings ('Diesel', 'petrol'); unknown names raise KeyError
        if not isinstance(self.fuel_type, FuelType):
            object.__setattr__(self, "fuel_type", FuelType.parse(self.fuel_type))

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]]) -> "VehicleBaseline":
        """
        Build a baseline from the settings provider's vehicle section.

        The provider stores values as strings ('15.5', '80', 'Petrol') under
        camelCase keys; snake_case keys are accepted too. Missing or blank
        values fall back to `BaselineDefaults`.

        Raises
        ------
        ValueError
            If a numeric setting is present but not a number.
        KeyError
            If the fuel type is not Petrol/Diesel/Electric.
        """
        defaults = get_baseline_defaults()
        settings = settings or {}

        def _pick(*keys: str) -> Any:
            for key in keys:
                value = settings.get(key)
                if value is not None and str(value).strip() != "":
                    return value
            return None

        mileage = _pick("averageMileage", "claimed_mileage_km_per_liter", "claimedMileage")
        threshold = _pick("speedThreshold", "speed_threshold_kmh")
        fuel = _pick("fuelType", "fuel_type")

        try:
            mileage_f = float(mileage) if mileage is not None else defaults.claimed_mileage_km_per_liter
            threshold_f = float(threshold) if threshold is not None else defaults.speed_threshold_kmh
        except (TypeError, ValueError) as e:
            raise ValueError(
                f"Vehicle settings hold a non-numeric mileage/threshold: "
                f"averageMileage={mileage!r}, speedThreshold={threshold!r}"
            ) from e

        return cls(
              claimed_mileage_km_per_liter=mileage_f
            , speed_threshold_kmh=threshold_f
            , fuel_type=FuelType.parse(fuel if fuel is not None else defaults.fuel_type)
        )


# ────────────────────────────────────────────────────────────────────────────────
# Outputs
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Penalties:
    """Point deductions reported alongside a score."""

    speeding_penalty: int = 0
    harsh_events_penalty: int = 0
    idling_penalty: int = 0


@dataclass(frozen=True)
class Bonuses:
    """
    Point additions. The engine never populates them; they stay at zero
    so downstream consumers reading the ledger keep working.
    """

    fuel_efficiency_bonus: int = 0
    smoothness_bonus: int = 0


class InsightKind(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"
    TIP = "tip"


@dataclass(frozen=True)
class Insight:
    kind: InsightKind
    message: str


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Engine output for a single trip.

    Attributes
    ----------
    overall : int
        Weighted overall score, or the authoritative external score when
        one was supplied (see `score_source`).
    safety, efficiency, smoothness, environmental : int
        Sub-scores, each in [0, 100].
    penalties : Penalties
        Speeding, harsh-event and idling deductions.
    bonuses : Bonuses
        Always zero for now.
    insights : list of Insight
        Filled by `generate_insights`; empty straight out of
        `compute_breakdown`.
    score_source : str
        "computed" or "external".
    """

    overall: int
    safety: int
    efficiency: int
    smoothness: int
    environmental: int
    penalties: Penalties = field(default_factory=Penalties)
    bonuses: Bonuses = field(default_factory=Bonuses)
    insights: List[Insight] = field(default_factory=list)
    score_source: str = "computed"

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-friendly representation (enums flattened to their values).
        """
        data = asdict(self)
        data["insights"] = [
            {"kind": insight.kind.value, "message": insight.message}
            for insight in self.insights
        ]
        return data
