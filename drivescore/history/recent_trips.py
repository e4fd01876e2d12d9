# drivescore/history/recent_trips.py
# -*- coding: utf-8 -*-
"""
Aggregate view over a driver's recent trips: how many, how far, how much
fuel, and the average overall score.

Scores come from the canonical engine (`ScoreBreakdown.overall`, external
scores included); this module only averages them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from drivescore.core.models import ScoreBreakdown, TripTelemetry
from drivescore.infra.logging import get_logger
from drivescore.scoring.engine import round_half_up

_log = get_logger(__name__)


@dataclass(frozen=True)
class RecentTripsSummary:
    """
    Attributes
    ----------
    trip_count : int
        Number of trips summarized.
    total_distance_km / total_fuel_liters : float
        Sums, rounded to one decimal.
    average_score : int
        Mean overall score, 0 when no trip was scored.
    """

    trip_count: int
    total_distance_km: float
    total_fuel_liters: float
    average_score: int


def average_score(breakdowns: Sequence[ScoreBreakdown]) -> int:
    """
    Mean `overall` of the given breakdowns, rounded half-up; 0 for none.
    """
    if not breakdowns:
        return 0
    return round_half_up(sum(b.overall for b in breakdowns) / len(breakdowns))


def summarize_recent_trips(
      trips: Sequence[TripTelemetry]
    , breakdowns: Sequence[ScoreBreakdown]
) -> RecentTripsSummary:
    """
    Totals over `trips` plus the average of `breakdowns`.

    The two sequences may differ in length: trips that could not be scored
    still count towards distance and fuel.
    """
    summary = RecentTripsSummary(
          trip_count=len(trips)
        , total_distance_km=round_half_up(sum(t.distance_km for t in trips) * 10) / 10
        , total_fuel_liters=round_half_up(sum(t.fuel_used_liters for t in trips) * 10) / 10
        , average_score=average_score(breakdowns)
    )
    _log.debug(f"summarize_recent_trips: {summary}")
    return summary
