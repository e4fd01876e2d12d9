# drivescore/scoring/insights.py
# -*- coding: utf-8 -*-
"""
Trip insights
=============

Natural-language observations derived from one trip and its breakdown.

Rules run in a fixed order and are independent of each other; every rule
whose guard matches appends exactly one insight:

1. overall score band (excellent / good / needs attention)
2. harsh events present
3. idling above the threshold
4. low average speed
5. fuel efficiency against the claimed mileage

The list is rebuilt from scratch on every call.
"""

from __future__ import annotations

import math
from typing import List, Optional

from drivescore.core.config import ScoringConfig, get_scoring_config
from drivescore.core.models import (
      Insight
    , InsightKind
    , ScoreBreakdown
    , TripTelemetry
    , VehicleBaseline
)
from drivescore.infra.logging import get_logger
from drivescore.scoring.engine import actual_efficiency_km_per_liter

_log = get_logger(__name__)


def _score_band_insight(score: int, cfg: ScoringConfig) -> Insight:
    if score >= cfg.insights.excellent_score:
        return Insight(
              InsightKind.POSITIVE
            , f"Excellent driving performance! Your driving score of {score} indicates "
              "very safe and efficient driving habits. Keep up the great work!"
        )
    if score >= cfg.insights.good_score:
        return Insight(
              InsightKind.WARNING
            , f"Good driving with room for improvement. Your score of {score} is good, "
              "but there are opportunities to enhance your driving efficiency and safety."
        )
    return Insight(
          InsightKind.WARNING
        , f"Driving habits need attention. Your score of {score} suggests several "
          "areas for improvement to enhance safety and fuel efficiency."
    )


def generate_insights(
      trip: TripTelemetry
    , baseline: VehicleBaseline
    , breakdown: ScoreBreakdown
    , *
    , config: Optional[ScoringConfig] = None
) -> List[Insight]:
    """
    Evaluate the insight rules for one trip.

    Parameters
    ----------
    trip : TripTelemetry
        The trip that was scored.
    baseline : VehicleBaseline
        Baseline the trip was scored against.
    breakdown : ScoreBreakdown
        Output of `compute_breakdown`; only `overall` is read.
    config : Optional[ScoringConfig]
        Supplies the insight thresholds.

    Returns
    -------
    list of Insight
        Zero or more insights, in rule order.
    """
    cfg = config or get_scoring_config()
    th = cfg.insights
    insights: List[Insight] = []

    insights.append(_score_band_insight(breakdown.overall, cfg))

    if trip.harsh_event_count > 0:
        insights.append(Insight(
              InsightKind.TIP
            , f"You had {trip.harsh_event_count} harsh driving events. Try to accelerate "
              "and brake more gradually to improve fuel efficiency by up to 15% and "
              "reduce wear on your vehicle."
        ))

    if trip.idling_seconds > th.idling_seconds:
        idle_minutes = math.floor(trip.idling_seconds / 60)
        insights.append(Insight(
              InsightKind.TIP
            , f"You idled for {idle_minutes} minutes during this trip. Consider turning "
              "off your engine when stopped for more than 30 seconds to save fuel and "
              "reduce emissions."
        ))

    if trip.avg_speed_kmh < th.low_avg_speed_kmh:
        insights.append(Insight(
              InsightKind.TIP
            , "Your average speed was quite low, suggesting heavy traffic or frequent "
              "stops. Consider using traffic apps to find more efficient routes during "
              "peak hours."
        ))

    actual = actual_efficiency_km_per_liter(trip)
    claimed = baseline.claimed_mileage_km_per_liter
    if actual is not None:
        if actual < claimed:
            # shown actual stays strictly below shown claimed
            shown_actual = math.floor(round(actual * 100, 6)) / 100
            shown_claimed = math.ceil(round(claimed * 100, 6)) / 100
            insights.append(Insight(
                  InsightKind.TIP
                , f"Your fuel efficiency of {shown_actual:.2f} km/l is below your vehicle's "
                  f"claimed {shown_claimed:.2f} km/l. Maintain steady speeds, avoid rapid "
                  "acceleration, and keep your tires properly inflated."
            ))
        else:
            insights.append(Insight(
                  InsightKind.POSITIVE
                , f"Your fuel efficiency of {actual:.2f} km/l meets or beats your "
                  f"vehicle's claimed {claimed:.2f} km/l. Your smooth driving style is "
                  "saving you money and reducing environmental impact."
            ))

    _log.debug(
        f"generate_insights: trip={trip.trip_id or '-'} → "
        f"{[i.kind.value for i in insights]}"
    )
    return insights
