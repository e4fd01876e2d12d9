# drivescore/scoring/engine.py
# -*- coding: utf-8 -*-
"""
Driving score engine
====================

Purpose
-------
Deterministically turn one trip's raw telemetry plus the vehicle baseline
into a 0–100 score with four sub-scores:

- **safety** (35%)        100 − speeding penalty − harsh-events penalty
- **efficiency** (25%)    staircase on actual/claimed km/L
- **smoothness** (25%)    100 − tiered deduction on harsh events per km
- **environmental** (15%) 100 − idling − over-revving + beat-the-claim bonus

Design notes
------------
- **Insufficient data is not an error**: zero fuel or zero distance yields
  the neutral efficiency score (50) instead of raising.
- **Authoritative score wins**: an overall score supplied by the external
  system replaces the weighted estimate outright (never blended).
- **Rounding**: sub-scores are clamped then rounded half-up once, at the
  end; the overall is weighted from the unrounded sub-scores.
- No state is kept between calls; every call allocates a fresh result.

Public API
----------
- compute_breakdown(trip, baseline, *, authoritative_score=None, config=None) -> ScoreBreakdown
- actual_efficiency_km_per_liter(trip) -> Optional[float]
- safety_score / efficiency_score / smoothness_score / environmental_score
- round_half_up(value) -> int
"""

from __future__ import annotations

import math
from typing import Optional

from drivescore.core.config import ScoringConfig, get_scoring_config
from drivescore.core.models import (
      Bonuses
    , Penalties
    , ScoreBreakdown
    , TripTelemetry
    , VehicleBaseline
)
from drivescore.core.types import Number
from drivescore.infra.logging import get_logger
from drivescore.scoring.penalties import (
      harsh_events_penalty
    , idling_penalty
    , over_revving_penalty
    , smoothness_deduction
    , speeding_penalty
)

_log = get_logger(__name__)


# ────────────────────────────────────────────────────────────────────────────────
# Small helpers
# ────────────────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: Number) -> int:
    """
    Round to the nearest integer with halves going up (86.5 → 87).

    Python's built-in `round` sends halves to the even neighbour, which
    would make 86.5 score 86.
    """
    return int(math.floor(float(value) + 0.5))


def actual_efficiency_km_per_liter(trip: TripTelemetry) -> Optional[float]:
    """
    Distance over fuel burned, or None when either is ≤ 0.
    """
    if trip.fuel_used_liters <= 0 or trip.distance_km <= 0:
        return None
    return trip.distance_km / trip.fuel_used_liters


# ────────────────────────────────────────────────────────────────────────────────
# Sub-scores (unrounded, clamped)
# ────────────────────────────────────────────────────────────────────────────────

def safety_score(trip: TripTelemetry, config: Optional[ScoringConfig] = None) -> float:
    cfg = config or get_scoring_config()
    score = cfg.max_score - speeding_penalty(trip, cfg) - harsh_events_penalty(trip, cfg)
    return _clamp(score, cfg.min_score, cfg.max_score)


def efficiency_score(
      trip: TripTelemetry
    , baseline: VehicleBaseline
    , config: Optional[ScoringConfig] = None
) -> float:
    """
    Staircase on the ratio of actual to claimed mileage.

    Small shortfalls near the claim are barely punished (conditions vary);
    large ones drop fast. Below the last tier the score is
    `max(30, ratio × 50)`.
    """
    cfg = config or get_scoring_config()
    actual = actual_efficiency_km_per_liter(trip)
    claimed = baseline.claimed_mileage_km_per_liter

    if actual is None or claimed <= 0:
        _log.debug(
            "efficiency_score: insufficient data "
            f"(fuel={trip.fuel_used_liters}, distance={trip.distance_km}, claimed={claimed}) "
            f"→ neutral {cfg.neutral_score}"
        )
        return cfg.neutral_score

    ratio = actual / claimed
    score: Optional[float] = None
    for tier in cfg.efficiency_tiers:
        if ratio >= tier.min_ratio:
            score = tier.score
            break
    if score is None:
        score = max(cfg.efficiency_floor, ratio * cfg.efficiency_floor_slope)

    _log.debug(
        f"efficiency_score: actual={actual:.4f} km/L, claimed={claimed:.4f} km/L, "
        f"ratio={ratio:.4f} → {score:.2f}"
    )
    return _clamp(score, cfg.min_score, cfg.max_score)


def smoothness_score(trip: TripTelemetry, config: Optional[ScoringConfig] = None) -> float:
    cfg = config or get_scoring_config()
    score = cfg.max_score - smoothness_deduction(trip, cfg)
    return _clamp(score, cfg.min_score, cfg.max_score)


def environmental_score(
      trip: TripTelemetry
    , baseline: VehicleBaseline
    , config: Optional[ScoringConfig] = None
) -> float:
    cfg = config or get_scoring_config()
    score = cfg.max_score
    score -= idling_penalty(trip, cfg)
    score -= over_revving_penalty(trip, cfg)

    actual = actual_efficiency_km_per_liter(trip)
    claimed = baseline.claimed_mileage_km_per_liter
    if actual is not None and actual > claimed:
        bonus = min(
              cfg.penalties.efficiency_bonus_cap
            , (actual - claimed) * cfg.penalties.efficiency_bonus_per_kmpl
        )
        _log.debug(f"environmental_score: beat claimed mileage by {actual - claimed:.3f} km/L → +{bonus:.3f}")
        score += bonus

    return _clamp(score, cfg.min_score, cfg.max_score)


# ────────────────────────────────────────────────────────────────────────────────
# Main entry point
# ────────────────────────────────────────────────────────────────────────────────

def compute_breakdown(
      trip: TripTelemetry
    , baseline: VehicleBaseline
    , *
    , authoritative_score: Optional[Number] = None
    , config: Optional[ScoringConfig] = None
) -> ScoreBreakdown:
    """
    Score a single trip.

    Parameters
    ----------
    trip : TripTelemetry
        Raw telemetry. Numeric fields are expected finite; see
        `drivescore.scoring.validation` for the boundary checks.
    baseline : VehicleBaseline
        Claimed mileage, speed threshold and fuel type.
    authoritative_score : Optional[Number]
        Overall score already computed by the external system. When given
        it replaces the weighted estimate (rounded and clamped).
    config : Optional[ScoringConfig]
        Threshold tables; defaults to `get_scoring_config()`.

    Returns
    -------
    ScoreBreakdown
        Sub-scores, overall, penalty ledger and zeroed bonuses. `insights`
        is empty; see `generate_insights`.
    """
    cfg = config or get_scoring_config()
    w = cfg.weights

    safety = safety_score(trip, cfg)
    efficiency = efficiency_score(trip, baseline, cfg)
    smoothness = smoothness_score(trip, cfg)
    environmental = environmental_score(trip, baseline, cfg)

    estimate = (
          safety * w.safety
        + efficiency * w.efficiency
        + smoothness * w.smoothness
        + environmental * w.environmental
    )

    if authoritative_score is not None:
        overall_raw = float(authoritative_score)
        source = "external"
    else:
        overall_raw = estimate
        source = "computed"

    overall = round_half_up(_clamp(overall_raw, cfg.min_score, cfg.max_score))

    penalties = Penalties(
          speeding_penalty=round_half_up(speeding_penalty(trip, cfg))
        , harsh_events_penalty=round_half_up(harsh_events_penalty(trip, cfg))
        , idling_penalty=round_half_up(idling_penalty(trip, cfg))
    )

    breakdown = ScoreBreakdown(
          overall=overall
        , safety=round_half_up(safety)
        , efficiency=round_half_up(efficiency)
        , smoothness=round_half_up(smoothness)
        , environmental=round_half_up(environmental)
        , penalties=penalties
        , bonuses=Bonuses()
        , score_source=source
    )

    _log.debug(
        "compute_breakdown.result: "
        f"trip={trip.trip_id or '-'}, estimate={estimate:.4f}, overall={overall} ({source}), "
        f"safety={breakdown.safety}, efficiency={breakdown.efficiency}, "
        f"smoothness={breakdown.smoothness}, environmental={breakdown.environmental}, "
        f"penalties={penalties}"
    )
    return breakdown
