# drivescore/scoring/penalties.py
# -*- coding: utf-8 -*-
"""
Penalty sub-calculations
========================

Point deductions shared by the safety and environmental sub-scores:

- speeding_penalty(trip)       share of the trip spent over the limit
- harsh_events_penalty(trip)   harsh accelerations + brakings per km
- idling_penalty(trip)         share of the trip spent idling
- smoothness_deduction(trip)   harsh events per km, smoothness flavour
- over_revving_penalty(trip)   5 points per minute above the rev limit, capped

All functions return *unrounded* floats; rounding happens once in the
engine. A trip with no distance (or no duration, for the time shares) has
no ratio to penalize and scores 0 here.
"""

from __future__ import annotations

from typing import Optional, Sequence

from drivescore.core.config import PenaltyTier, ScoringConfig, get_scoring_config
from drivescore.core.models import TripTelemetry
from drivescore.infra.logging import get_logger

_log = get_logger(__name__)


# ────────────────────────────────────────────────────────────────────────────────
# Ratios
# ────────────────────────────────────────────────────────────────────────────────

def events_per_km(trip: TripTelemetry) -> float:
    """
    Harsh accelerations plus harsh brakings per kilometer (0 when distance ≤ 0).
    """
    if trip.distance_km <= 0:
        return 0.0
    return trip.harsh_event_count / trip.distance_km


def _share_of_trip_pct(seconds: float, duration_min: float) -> Optional[float]:
    if duration_min <= 0:
        return None
    return (seconds / 60.0) / duration_min * 100.0


def _first_tier_at_or_below(value: float, tiers: Sequence[PenaltyTier]) -> Optional[float]:
    for tier in tiers:
        if value <= tier.upper:
            return tier.points
    return None


# ────────────────────────────────────────────────────────────────────────────────
# Penalties
# ────────────────────────────────────────────────────────────────────────────────

def speeding_penalty(trip: TripTelemetry, config: Optional[ScoringConfig] = None) -> float:
    """
    Progressive penalty on the share of the trip spent over the speed limit.

    ≤5% → 5, ≤10% → 15, above that `min(30, pct × 2)`.
    """
    cfg = (config or get_scoring_config()).penalties
    if trip.over_speeding_seconds == 0:
        return 0.0

    pct = _share_of_trip_pct(trip.over_speeding_seconds, trip.duration_min)
    if pct is None:
        _log.debug("speeding_penalty: duration ≤ 0 → no share to penalize.")
        return 0.0

    points = _first_tier_at_or_below(pct, cfg.speeding)
    if points is None:
        points = min(cfg.speeding_cap, pct * cfg.speeding_slope)

    _log.debug(f"speeding_penalty: pct={pct:.3f}% → {points:.3f}")
    return float(points)


def harsh_events_penalty(trip: TripTelemetry, config: Optional[ScoringConfig] = None) -> float:
    """
    Penalty on harsh events per km.

    ≤0.1 → 0, ≤0.3 → 5, ≤0.5 → 15, ≤1.0 → 25, else 35.
    """
    cfg = (config or get_scoring_config()).penalties
    per_km = events_per_km(trip)

    points = _first_tier_at_or_below(per_km, cfg.harsh_events)
    if points is None:
        points = cfg.harsh_events_max

    _log.debug(f"harsh_events_penalty: events_per_km={per_km:.4f} → {points:.1f}")
    return float(points)


def idling_penalty(trip: TripTelemetry, config: Optional[ScoringConfig] = None) -> float:
    """
    Penalty on the share of the trip spent idling.

    ≤5% → 0, ≤10% → 5, ≤20% → 15, above that `min(30, pct)`.
    """
    cfg = (config or get_scoring_config()).penalties
    if trip.idling_seconds == 0:
        return 0.0

    pct = _share_of_trip_pct(trip.idling_seconds, trip.duration_min)
    if pct is None:
        _log.debug("idling_penalty: duration ≤ 0 → no share to penalize.")
        return 0.0

    points = _first_tier_at_or_below(pct, cfg.idling)
    if points is None:
        points = min(cfg.idling_cap, pct)

    _log.debug(f"idling_penalty: pct={pct:.3f}% → {points:.3f}")
    return float(points)


def smoothness_deduction(trip: TripTelemetry, config: Optional[ScoringConfig] = None) -> float:
    """
    Deduction from the smoothness score.

    Tiers are strict: >1.0 → 40, >0.5 → 25, >0.3 → 15, >0.1 → 5, else 0.
    """
    cfg = (config or get_scoring_config()).penalties
    per_km = events_per_km(trip)
    for tier in cfg.smoothness:
        if per_km > tier.upper:
            return float(tier.points)
    return 0.0


def over_revving_penalty(trip: TripTelemetry, config: Optional[ScoringConfig] = None) -> float:
    cfg = (config or get_scoring_config()).penalties
    minutes = trip.over_revving_seconds / 60.0
    return float(min(cfg.over_revving_cap, minutes * cfg.over_revving_points_per_minute))
