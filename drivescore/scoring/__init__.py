from __future__ import annotations

# ── engine (pure, stateless) ────────────────────────────────────────────────────
from .engine import (
      compute_breakdown
    , actual_efficiency_km_per_liter
    , round_half_up
)
from .insights import generate_insights
from .penalties import (
      events_per_km
    , speeding_penalty
    , harsh_events_penalty
    , idling_penalty
)

# ── boundary: validation + one-call scoring ─────────────────────────────────────
from .validation import (
      TelemetryValidationError
    , trip_from_record
    , authoritative_score_from_record
    , validate_trip
    , validate_baseline
)
from .pipeline import score_trip, score_record

# ── reading a score ─────────────────────────────────────────────────────────────
from .interpretation import ScoreBand, interpret_score, score_grade, score_color

__all__ = [
    # engine
      "compute_breakdown", "generate_insights",
      "actual_efficiency_km_per_liter", "round_half_up",
      "events_per_km", "speeding_penalty", "harsh_events_penalty", "idling_penalty",
    # boundary
      "TelemetryValidationError", "trip_from_record", "authoritative_score_from_record",
      "validate_trip", "validate_baseline", "score_trip", "score_record",
    # interpretation
      "ScoreBand", "interpret_score", "score_grade", "score_color",
]
