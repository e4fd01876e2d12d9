# drivescore/scoring/pipeline.py
# -*- coding: utf-8 -*-
"""
Single entry point for scoring a trip: validate → compute → insights.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from drivescore.core.config import ScoringConfig
from drivescore.core.models import ScoreBreakdown, TripTelemetry, VehicleBaseline
from drivescore.core.types import Number, TripRecord
from drivescore.infra.logging import get_logger
from drivescore.scoring.engine import compute_breakdown
from drivescore.scoring.insights import generate_insights
from drivescore.scoring.validation import (
      authoritative_score_from_record
    , trip_from_record
    , validate_baseline
    , validate_trip
)

_log = get_logger(__name__)


def score_trip(
      trip: TripTelemetry
    , baseline: VehicleBaseline
    , *
    , authoritative_score: Optional[Number] = None
    , config: Optional[ScoringConfig] = None
) -> ScoreBreakdown:
    """
    Validate the inputs, score the trip and attach its insights.

    Raises
    ------
    TelemetryValidationError
        If the trip or baseline holds non-finite or negative values.
    """
    validate_trip(trip)
    validate_baseline(baseline)

    breakdown = compute_breakdown(
          trip
        , baseline
        , authoritative_score=authoritative_score
        , config=config
    )
    insights = generate_insights(trip, baseline, breakdown, config=config)

    _log.info(
        f"score_trip: trip={trip.trip_id or '-'} overall={breakdown.overall} "
        f"({breakdown.score_source}), insights={len(insights)}"
    )
    return replace(breakdown, insights=insights)


def score_record(
      record: TripRecord
    , baseline: VehicleBaseline
    , *
    , config: Optional[ScoringConfig] = None
) -> ScoreBreakdown:
    """
    Parse a provider record (including any `calculatedScore`) and score it.
    """
    trip = trip_from_record(record)
    return score_trip(
          trip
        , baseline
        , authoritative_score=authoritative_score_from_record(record)
        , config=config
    )
