# drivescore/core/config.py
# -*- coding: utf-8 -*-

"""
Scoring configuration models and globals.

Every threshold used by the score engine lives here, so tuning a tier
never requires touching the scoring code itself.

It is meant to be safe to import from anywhere (no I/O, no logging setup).

Current contents
----------------
- ScoringWeights: sub-score weights used for the overall score
- EfficiencyTier / PenaltyTier: staircase entries
- PenaltyTables: speeding, harsh-event, idling and smoothness tiers
- InsightThresholds: trigger points for the insight rules
- PeriodInsightThresholds: trigger points for the period-over-period insights
- BaselineDefaults: fallback vehicle baseline (15 km/l, 80 km/h, Petrol)
- FuelCostDefaults: fuel price per liter by fuel type (period stats)
- ScoringConfig: everything above bundled together
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


# ────────────────────────────────────────────────────────────────────────────────
# Weights
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScoringWeights:
    """
    Weights of each sub-score in the overall score. They sum to 1.0.
    """

    safety: float = 0.35
    efficiency: float = 0.25
    smoothness: float = 0.25
    environmental: float = 0.15


# ────────────────────────────────────────────────────────────────────────────────
# Tier tables
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EfficiencyTier:
    """
    One step of the efficiency staircase.

    Attributes
    ----------
    min_ratio : float
        Lowest actual/claimed mileage ratio that still earns `score`.
    score : float
        Efficiency score awarded at or above `min_ratio`.
    """

    min_ratio: float
    score: float


@dataclass(frozen=True)
class PenaltyTier:
    """
    One step of a penalty table: values up to and including `upper`
    cost `points`.
    """

    upper: float
    points: float


@dataclass(frozen=True)
class PenaltyTables:
    """
    Tier tables for the shared penalty sub-calculations.

    Attributes
    ----------
    speeding : tuple of PenaltyTier
        Over-speeding share of the trip (%) → points. Above the last tier
        the penalty is `min(speeding_cap, pct × speeding_slope)`.
    harsh_events : tuple of PenaltyTier
        Harsh events per km → points. Above the last tier the penalty is
        `harsh_events_max`.
    idling : tuple of PenaltyTier
        Idling share of the trip (%) → points. Above the last tier the
        penalty is `min(idling_cap, pct)`.
    smoothness : tuple of PenaltyTier
        Harsh events per km → smoothness deduction, checked from the top:
        the first tier whose `upper` is strictly exceeded applies.
    over_revving_points_per_minute / over_revving_cap : float
        Environmental deduction for time spent above the rev threshold.
    efficiency_bonus_per_kmpl / efficiency_bonus_cap : float
        Environmental bonus for beating the claimed mileage.
    """

    speeding: Tuple[PenaltyTier, ...] = (
          PenaltyTier(upper=5.0, points=5.0)
        , PenaltyTier(upper=10.0, points=15.0)
    )
    speeding_slope: float = 2.0
    speeding_cap: float = 30.0

    harsh_events: Tuple[PenaltyTier, ...] = (
          PenaltyTier(upper=0.1, points=0.0)
        , PenaltyTier(upper=0.3, points=5.0)
        , PenaltyTier(upper=0.5, points=15.0)
        , PenaltyTier(upper=1.0, points=25.0)
    )
    harsh_events_max: float = 35.0

    idling: Tuple[PenaltyTier, ...] = (
          PenaltyTier(upper=5.0, points=0.0)
        , PenaltyTier(upper=10.0, points=5.0)
        , PenaltyTier(upper=20.0, points=15.0)
    )
    idling_cap: float = 30.0

    smoothness: Tuple[PenaltyTier, ...] = (
          PenaltyTier(upper=1.0, points=40.0)
        , PenaltyTier(upper=0.5, points=25.0)
        , PenaltyTier(upper=0.3, points=15.0)
        , PenaltyTier(upper=0.1, points=5.0)
    )

    over_revving_points_per_minute: float = 5.0
    over_revving_cap: float = 25.0

    efficiency_bonus_per_kmpl: float = 2.0
    efficiency_bonus_cap: float = 15.0


@dataclass(frozen=True)
class InsightThresholds:
    """
    Trigger points for the insight rules.

    Attributes
    ----------
    excellent_score / good_score : int
        Overall score bands for the first insight.
    idling_seconds : float
        Idling strictly above this produces a tip (2 minutes).
    low_avg_speed_kmh : float
        Average speed strictly below this produces a route-planning tip.
    """

    excellent_score: int = 90
    good_score: int = 80
    idling_seconds: float = 120.0
    low_avg_speed_kmh: float = 30.0


@dataclass(frozen=True)
class PeriodInsightThresholds:
    """
    Trigger points for the period-over-period insights.

    Attributes
    ----------
    efficiency_change_pct : float
        Fuel efficiency moving strictly more than this (either way) is reported.
    harsh_drop_pct / harsh_rise_pct : float
        Harsh events falling by more than `harsh_drop_pct` is praised,
        rising by more than `harsh_rise_pct` is flagged.
    idling_minutes_per_trip / idling_growth_factor : float
        Idling per trip above the minutes *and* above factor × the previous
        period produces a tip.
    steady_speed_pct : float
        Average speed moving less than this counts as consistent.
    """

    efficiency_change_pct: float = 10.0
    harsh_drop_pct: float = 30.0
    harsh_rise_pct: float = 50.0
    idling_minutes_per_trip: float = 3.0
    idling_growth_factor: float = 1.2
    steady_speed_pct: float = 5.0


# ────────────────────────────────────────────────────────────────────────────────
# Baseline / cost defaults
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BaselineDefaults:
    """
    Vehicle baseline used when the configuration provider has nothing set.
    """

    claimed_mileage_km_per_liter: float = 15.0
    speed_threshold_kmh: float = 80.0
    fuel_type: str = "Petrol"


@dataclass(frozen=True)
class FuelCostDefaults:
    """
    Fuel price per liter (₹) by fuel type, used by the period stats.
    """

    per_liter: Dict[str, float] = field(
        default_factory=lambda: {
              "Petrol": 102.0
            , "Diesel": 89.0
            , "Electric": 0.0
        }
    )

    def for_fuel(self, fuel_type: str) -> float:
        """
        Return the price for `fuel_type` (case-insensitive).

        Raises
        ------
        KeyError
            If the fuel type has no configured price.
        """
        for name, price in self.per_liter.items():
            if name.lower() == str(fuel_type).strip().lower():
                return float(price)
        raise KeyError(f"No fuel cost configured for fuel type '{fuel_type}'.")


# ────────────────────────────────────────────────────────────────────────────────
# Bundle
# ────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScoringConfig:
    """
    Full engine configuration.

    Attributes
    ----------
    efficiency_tiers : tuple of EfficiencyTier
        Ordered from the highest ratio down; the first tier met wins.
    efficiency_floor / efficiency_floor_slope : float
        Below the last tier the score is `max(floor, ratio × slope)`.
    neutral_score : float
        Returned for efficiency when a ratio cannot be formed.
    """

    weights: ScoringWeights = field(default_factory=ScoringWeights)
    penalties: PenaltyTables = field(default_factory=PenaltyTables)
    insights: InsightThresholds = field(default_factory=InsightThresholds)
    period_insights: PeriodInsightThresholds = field(default_factory=PeriodInsightThresholds)

    efficiency_tiers: Tuple[EfficiencyTier, ...] = (
          EfficiencyTier(min_ratio=1.20, score=100.0)
        , EfficiencyTier(min_ratio=1.10, score=90.0)
        , EfficiencyTier(min_ratio=1.05, score=80.0)
        , EfficiencyTier(min_ratio=0.95, score=70.0)
        , EfficiencyTier(min_ratio=0.90, score=60.0)
        , EfficiencyTier(min_ratio=0.80, score=50.0)
    )
    efficiency_floor: float = 30.0
    efficiency_floor_slope: float = 50.0

    neutral_score: float = 50.0
    min_score: float = 0.0
    max_score: float = 100.0


# ────────────────────────────────────────────────────────────────────────────────
# Singleton-style instances
# ────────────────────────────────────────────────────────────────────────────────

SCORING_CONFIG = ScoringConfig()
BASELINE_DEFAULTS = BaselineDefaults()
FUEL_COST_DEFAULTS = FuelCostDefaults()


def get_scoring_config() -> ScoringConfig:
    """
    Return the default scoring configuration.

    Callers that need different thresholds build their own `ScoringConfig`
    and pass it explicitly to the engine.
    """
    return SCORING_CONFIG


def get_baseline_defaults() -> BaselineDefaults:
    """
    Return the default vehicle baseline values.
    """
    return BASELINE_DEFAULTS


def get_fuel_cost_defaults() -> FuelCostDefaults:
    """
    Return the default fuel prices per liter.
    """
    return FUEL_COST_DEFAULTS
