# drivescore/history/safety_rating.py
# -*- coding: utf-8 -*-
"""
Safety rating over a driver's recent trips
==========================================

Purpose
-------
Summarize the `safety` sub-scores of recent trips into one rating, a
trend and a risk level.

Method
------
- **Rating**: weighted mean of `safety`, weight `1.1 ** index`. Trips are
  expected oldest first, so the latest trips weigh the most.
- **Trend**: with at least 3 trips, the mean of the last 3 is compared to
  the mean of the (up to) 3 before them. More than 5 points up is
  "improving", more than 5 down is "declining", anything else "stable".
- **Risk**: rating ≥ 85 → "low", ≤ 60 → "high", otherwise "medium".

No trips at all gives rating 50, "stable", "medium".
"""

from __future__ import annotations

from dataclasses import dataclass
from statistics import mean
from typing import Sequence

from drivescore.core.models import ScoreBreakdown
from drivescore.infra.logging import get_logger
from drivescore.scoring.engine import round_half_up

_log = get_logger(__name__)

RECENCY_WEIGHT_BASE = 1.1
TREND_WINDOW = 3
TREND_MARGIN = 5.0
LOW_RISK_MIN_RATING = 85
HIGH_RISK_MAX_RATING = 60
EMPTY_HISTORY_RATING = 50


@dataclass(frozen=True)
class SafetyRating:
    rating: int
    trend: str
    risk_level: str


def _trend(safety_scores: Sequence[int]) -> str:
    if len(safety_scores) < TREND_WINDOW:
        return "stable"

    recent = safety_scores[-TREND_WINDOW:]
    older = safety_scores[-2 * TREND_WINDOW:-TREND_WINDOW]
    if not older:
        return "stable"

    recent_avg = mean(recent)
    older_avg = mean(older)
    if recent_avg > older_avg + TREND_MARGIN:
        return "improving"
    if recent_avg < older_avg - TREND_MARGIN:
        return "declining"
    return "stable"


def _risk_level(rating: int) -> str:
    if rating >= LOW_RISK_MIN_RATING:
        return "low"
    if rating <= HIGH_RISK_MAX_RATING:
        return "high"
    return "medium"


def compute_safety_rating(breakdowns: Sequence[ScoreBreakdown]) -> SafetyRating:
    """
    Rate a sequence of scored trips, oldest first.
    """
    if not breakdowns:
        _log.debug("compute_safety_rating: empty history → neutral rating.")
        return SafetyRating(rating=EMPTY_HISTORY_RATING, trend="stable", risk_level="medium")

    weighted_sum = 0.0
    total_weight = 0.0
    for index, breakdown in enumerate(breakdowns):
        weight = RECENCY_WEIGHT_BASE ** index
        weighted_sum += breakdown.safety * weight
        total_weight += weight

    rating = round_half_up(weighted_sum / total_weight)
    safety_scores = [b.safety for b in breakdowns]
    result = SafetyRating(
          rating=rating
        , trend=_trend(safety_scores)
        , risk_level=_risk_level(rating)
    )

    _log.debug(f"compute_safety_rating: trips={len(breakdowns)} → {result}")
    return result
