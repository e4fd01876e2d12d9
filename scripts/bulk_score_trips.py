#!/usr/bin/env python3
# scripts/bulk_score_trips.py
# -*- coding: utf-8 -*-

"""
Bulk trip scorer
================

Given:
  - a CSV with one trip per row (provider or canonical column names)
  - a vehicle baseline (settings JSON and/or flags)

This script will:

  1. Load and normalize the CSV.
  2. Score every row; rows with invalid telemetry are kept in the output
     with status "insufficient_data" instead of stopping the run.
  3. Write one result row per trip to the output CSV.
  4. Log the average score and a safety-rating summary over the
     successfully scored trips
     (file order is taken as oldest → newest).

Exit codes
----------
0  all rows processed (some may be insufficient_data)
2  input file or baseline unusable
"""

from __future__ import annotations

# ───────────────────── path bootstrap (must be first) ─────────────────────
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]  # repo root (one level above /scripts)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
# ──────────────────────────────────────────────────────────────────────────

import argparse
import json
from dataclasses import replace
from typing import Any, Dict

from drivescore.app.batch import load_trips_csv, score_trips_frame
from drivescore.core.models import FuelType, VehicleBaseline
from drivescore.history.recent_trips import average_score
from drivescore.history.safety_rating import compute_safety_rating
from drivescore.infra.logging import get_current_log_path, get_logger, init_logging, log_banner
from drivescore.scoring.validation import TelemetryValidationError, validate_baseline

log = get_logger(Path(__file__).stem)


# ───────────────────────────────── parser / CLI ────────────────────────────
def _build_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser for the bulk trip scorer.
    """
    parser = argparse.ArgumentParser(
        description=(
            "Score every trip of a CSV file and write one result row per trip.\n"
            "Rows with unusable telemetry are reported, not fatal."
        )
    )

    parser.add_argument(
          "--trips-csv"
        , type=Path
        , required=True
        , help="CSV with one trip per row."
    )

    parser.add_argument(
          "--out-csv"
        , type=Path
        , required=True
        , help="Where to write the scored trips."
    )

    parser.add_argument(
          "--settings-json"
        , type=Path
        , default=None
        , help="JSON with the vehicle settings (averageMileage, speedThreshold, fuelType)."
    )

    parser.add_argument(
          "--claimed-mileage"
        , type=float
        , default=None
        , help="Claimed fuel economy [km/L]. Overrides the settings file. Default: 15.0"
    )

    parser.add_argument(
          "--speed-threshold"
        , type=float
        , default=None
        , help="Speed limit [km/h]. Overrides the settings file. Default: 80"
    )

    parser.add_argument(
          "--fuel-type"
        , choices=[f.value for f in FuelType]
        , default=None
        , help="Vehicle fuel type. Overrides the settings file. Default: Petrol"
    )

    parser.add_argument(
          "--log-level"
        , default="INFO"
        , choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )

    parser.add_argument(
          "--write-log"
        , action="store_true"
        , help="Also write the run log to logs/."
    )
    return parser


def _read_settings(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise TelemetryValidationError(
            f"{path} must hold a JSON object with the vehicle settings, got {type(data).__name__}."
        )
    return data


def _load_baseline(args: argparse.Namespace) -> VehicleBaseline:
    settings: Dict[str, Any] = {}
    if args.settings_json is not None:
        settings = _read_settings(args.settings_json)
        if isinstance(settings.get("vehicle"), dict):
            settings = settings["vehicle"]

    baseline = VehicleBaseline.from_settings(settings)
    overrides: Dict[str, Any] = {}
    if args.claimed_mileage is not None:
        overrides["claimed_mileage_km_per_liter"] = args.claimed_mileage
    if args.speed_threshold is not None:
        overrides["speed_threshold_kmh"] = args.speed_threshold
    if args.fuel_type is not None:
        overrides["fuel_type"] = FuelType.parse(args.fuel_type)
    if overrides:
        baseline = replace(baseline, **overrides)
    return validate_baseline(baseline)


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    init_logging(level=args.log_level, write_output=args.write_log)
    log_banner(log, "Bulk trip scoring", box=True)

    try:
        baseline = _load_baseline(args)
        trips = load_trips_csv(args.trips_csv)
    except (ValueError, KeyError, OSError) as e:
        log.error(f"Cannot start batch: {e}")
        return 2

    log.info(
        f"Baseline: claimed={baseline.claimed_mileage_km_per_liter:g} km/L, "
        f"speed_threshold={baseline.speed_threshold_kmh:g} km/h, fuel={baseline.fuel_type.value}"
    )

    result = score_trips_frame(trips, baseline)

    args.out_csv.parent.mkdir(parents=True, exist_ok=True)
    result.frame.to_csv(args.out_csv, index=False)

    rating = compute_safety_rating(result.breakdowns)
    log_banner(log, "Summary")
    log.info(f"Trips scored      : {len(result.breakdowns)}")
    log.info(f"Insufficient data : {result.failed_count}")
    log.info(f"Average score     : {average_score(result.breakdowns)}")
    log.info(f"Safety rating     : {rating.rating} ({rating.trend}, {rating.risk_level} risk)")
    log.info(f"Results written → {args.out_csv}")

    log_path = get_current_log_path()
    if log_path is not None:
        log.info(f"Log file → {log_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
