# drivescore/app/batch.py
# -*- coding: utf-8 -*-
"""
Batch trip scoring
==================

Main entry points
-----------------
- load_trips_csv(path) -> pandas.DataFrame
- score_trips_frame(df, baseline, *, config=None) -> BatchResult

CSV expectations
----------------
One trip per row. Column names are case-insensitive and may use either
the canonical names (`distance_km`, `fuel_used_liters`, ...) or the
telemetry provider's names (`distance`, `fuelUsed`, `harshBraking`, ...).
An optional `calculatedScore` column carries the authoritative overall
score; an optional `tripId`/`id` column identifies the trip.

Rows that fail validation do not stop the batch: they come back with
`status="insufficient_data"` and the validation message in `error`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from drivescore.core.config import ScoringConfig
from drivescore.core.models import ScoreBreakdown, VehicleBaseline
from drivescore.core.types import StrPath
from drivescore.infra.logging import get_logger
from drivescore.scoring.interpretation import interpret_score
from drivescore.scoring.pipeline import score_record
from drivescore.scoring.validation import (
      AUTHORITATIVE_SCORE_KEYS
    , TRIP_FIELD_ALIASES
    , TRIP_ID_KEYS
    , TelemetryValidationError
)

_log = get_logger(__name__)

STATUS_OK = "ok"
STATUS_INSUFFICIENT = "insufficient_data"

RESULT_COLUMNS: List[str] = [
      "trip_id"
    , "status"
    , "overall"
    , "safety"
    , "efficiency"
    , "smoothness"
    , "environmental"
    , "speeding_penalty"
    , "harsh_events_penalty"
    , "idling_penalty"
    , "score_source"
    , "band"
    , "grade"
    , "insight_count"
    , "error"
]


@dataclass
class BatchResult:
    """
    Outcome of a batch run.

    Attributes
    ----------
    frame : pd.DataFrame
        One row per input trip, columns as in `RESULT_COLUMNS`.
    breakdowns : list of ScoreBreakdown
        Successful breakdowns in input order (failed rows are skipped).
    """

    frame: pd.DataFrame
    breakdowns: List[ScoreBreakdown] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return int((self.frame["status"] != STATUS_OK).sum()) if not self.frame.empty else 0


# ────────────────────────────────────────────────────────────────────────────────
# Loader
# ────────────────────────────────────────────────────────────────────────────────

def _canonical_column_map(columns: List[str]) -> Tuple[Dict[str, str], List[str]]:
    """
    Map each recognized column to its canonical name.

    Returns the renames plus the columns to drop: when several columns
    land on the same field, a column already carrying the canonical name
    wins, otherwise the leftmost one does.
    """
    lookup: Dict[str, str] = {}
    for canonical, aliases in TRIP_FIELD_ALIASES.items():
        for alias in aliases:
            lookup[alias.lower()] = canonical
    for alias in TRIP_ID_KEYS:
        lookup[alias.lower()] = "trip_id"
    for alias in AUTHORITATIVE_SCORE_KEYS:
        lookup[alias.lower()] = "calculated_score"

    keyed = [(col, str(col).strip().lower()) for col in columns]
    claimed: Dict[str, str] = {}
    for col, key in keyed:
        if key in lookup and key == lookup[key] and lookup[key] not in claimed:
            claimed[lookup[key]] = col
    for col, key in keyed:
        if key in lookup and lookup[key] not in claimed:
            claimed[lookup[key]] = col

    renames = {col: canonical for canonical, col in claimed.items()}
    dropped = [col for col, key in keyed if key in lookup and col not in renames]
    return renames, dropped


def load_trips_csv(path: StrPath) -> pd.DataFrame:
    """
    Load a CSV of trips and normalize its column names.

    Parameters
    ----------
    path : str | Path
        CSV file, one trip per row.

    Returns
    -------
    pd.DataFrame
        Recognized columns renamed to canonical names; unknown columns kept
        as they are. A column that duplicates an already mapped field is
        dropped, so every canonical name appears at most once.

    Raises
    ------
    FileNotFoundError
        If `path` does not exist.
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        _log.error(f"load_trips_csv: CSV not found at '{csv_path}'.")
        raise FileNotFoundError(f"Trips CSV not found: {csv_path}")

    df_raw = pd.read_csv(csv_path)
    renames, dropped = _canonical_column_map(list(df_raw.columns))
    if dropped:
        _log.warning(f"load_trips_csv: ignoring duplicate columns {dropped} in '{csv_path}'.")
    df = df_raw.drop(columns=dropped).rename(columns=renames)

    _log.info(
        "load_trips_csv: loaded %d rows from '%s' (%d columns recognized).",
        len(df),
        csv_path,
        len(renames),
    )
    return df


# ────────────────────────────────────────────────────────────────────────────────
# Scoring
# ────────────────────────────────────────────────────────────────────────────────

def _failed_row(trip_id: Any, message: str) -> Dict[str, Any]:
    row: Dict[str, Any] = {col: None for col in RESULT_COLUMNS}
    row.update(trip_id=trip_id, status=STATUS_INSUFFICIENT, error=message)
    return row


def _scored_row(trip_id: Any, breakdown: ScoreBreakdown) -> Dict[str, Any]:
    band = interpret_score(breakdown.overall)
    return {
          "trip_id": trip_id
        , "status": STATUS_OK
        , "overall": breakdown.overall
        , "safety": breakdown.safety
        , "efficiency": breakdown.efficiency
        , "smoothness": breakdown.smoothness
        , "environmental": breakdown.environmental
        , "speeding_penalty": breakdown.penalties.speeding_penalty
        , "harsh_events_penalty": breakdown.penalties.harsh_events_penalty
        , "idling_penalty": breakdown.penalties.idling_penalty
        , "score_source": breakdown.score_source
        , "band": band.label
        , "grade": band.grade
        , "insight_count": len(breakdown.insights)
        , "error": None
    }


def score_trips_frame(
      df: pd.DataFrame
    , baseline: VehicleBaseline
    , *
    , config: Optional[ScoringConfig] = None
) -> BatchResult:
    """
    Score every row of `df` against one vehicle baseline.

    Parameters
    ----------
    df : pd.DataFrame
        Trips, typically from `load_trips_csv`.
    baseline : VehicleBaseline
        Applied to every trip.
    config : Optional[ScoringConfig]
        Threshold tables for the engine.

    Returns
    -------
    BatchResult
        Result frame plus the successful breakdowns.
    """
    rows: List[Dict[str, Any]] = []
    breakdowns: List[ScoreBreakdown] = []

    for position, (_, series) in enumerate(df.iterrows()):
        record = series.to_dict()
        trip_id = record.get("trip_id")
        if trip_id is None or pd.isna(trip_id):
            trip_id = str(position)
        else:
            trip_id = str(trip_id)
        record["trip_id"] = trip_id

        try:
            breakdown = score_record(record, baseline, config=config)
        except TelemetryValidationError as e:
            _log.warning(f"score_trips_frame: skipping trip={trip_id}: {e}")
            rows.append(_failed_row(trip_id, str(e)))
            continue

        breakdowns.append(breakdown)
        rows.append(_scored_row(trip_id, breakdown))

    result = BatchResult(frame=pd.DataFrame(rows, columns=RESULT_COLUMNS), breakdowns=breakdowns)
    _log.info(
        f"score_trips_frame: scored {len(breakdowns)} of {len(rows)} trips "
        f"({result.failed_count} with insufficient data)."
    )
    return result
