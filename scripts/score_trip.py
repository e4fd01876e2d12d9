#!/usr/bin/env python3
# scripts/score_trip.py
# -*- coding: utf-8 -*-

"""
Score a single trip and print the breakdown as JSON.

The trip comes either from a JSON file (`--trip-json`, provider field names
or canonical names, optional `calculatedScore`) or from individual flags.
The vehicle baseline comes from `--settings-json` (the settings provider's
vehicle section) and/or the baseline flags; flags win.

Exit codes
----------
0  scored
2  invalid input (non-numeric, negative or infinite values, unknown fuel type)
"""

from __future__ import annotations

# --- path bootstrap (must be the first lines of the file) ---
from pathlib import Path
import sys
ROOT = Path(__file__).resolve().parents[1]  # repo root (one level above /scripts)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
# ------------------------------------------------------------

import argparse
import json
from dataclasses import replace
from typing import Any, Dict, Optional

from drivescore.core.models import FuelType, VehicleBaseline
from drivescore.infra.logging import get_logger, init_logging
from drivescore.scoring.interpretation import interpret_score
from drivescore.scoring.pipeline import score_record
from drivescore.scoring.validation import TelemetryValidationError

log = get_logger(Path(__file__).stem)

# flag dest → canonical trip field
_TRIP_FLAGS = {
      "distance_km": "distance_km"
    , "duration_min": "duration_min"
    , "fuel_used": "fuel_used_liters"
    , "avg_speed": "avg_speed_kmh"
    , "max_speed": "max_speed_kmh"
    , "harsh_acceleration": "harsh_acceleration_count"
    , "harsh_braking": "harsh_braking_count"
    , "over_speeding": "over_speeding_seconds"
    , "idling": "idling_seconds"
    , "over_revving": "over_revving_seconds"
}


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Compute the driving score breakdown and insights for one trip and print JSON."
    )

    # ── Trip ───────────────────────────────────────────────────────────────────
    p.add_argument("--trip-json", type=Path, default=None, help="JSON file holding one trip record.")
    p.add_argument("--trip-id", default=None, help="Trip identifier (reporting only).")
    p.add_argument("--distance-km", type=float, default=None, help="Distance driven [km].")
    p.add_argument("--duration-min", type=float, default=None, help="Trip duration [min].")
    p.add_argument("--fuel-used", type=float, default=None, help="Fuel used [L].")
    p.add_argument("--avg-speed", type=float, default=None, help="Average speed [km/h].")
    p.add_argument("--max-speed", type=float, default=None, help="Maximum speed [km/h].")
    p.add_argument("--harsh-acceleration", type=int, default=None, help="Harsh acceleration count.")
    p.add_argument("--harsh-braking", type=int, default=None, help="Harsh braking count.")
    p.add_argument("--over-speeding", type=float, default=None, help="Time over the speed limit [s].")
    p.add_argument("--idling", type=float, default=None, help="Idling time [s].")
    p.add_argument("--over-revving", type=float, default=None, help="Time over the rev limit [s].")
    p.add_argument(
          "--calculated-score"
        , type=float
        , default=None
        , help="Authoritative overall score from the external system (overrides the estimate)."
    )

    # ── Baseline ───────────────────────────────────────────────────────────────
    p.add_argument(
          "--settings-json"
        , type=Path
        , default=None
        , help="JSON file with the vehicle settings (averageMileage, speedThreshold, fuelType)."
    )
    p.add_argument("--claimed-mileage", type=float, default=None, help="Claimed fuel economy [km/L]. Default: 15.0")
    p.add_argument("--speed-threshold", type=float, default=None, help="Speed limit [km/h]. Default: 80")
    p.add_argument(
          "--fuel-type"
        , default=None
        , choices=[f.value for f in FuelType]
        , help="Vehicle fuel type. Default: Petrol"
    )

    # UX
    p.add_argument("--output", type=Path, default=None, help="Write the JSON here instead of stdout.")
    p.add_argument("--pretty", action="store_true", help="Pretty-print JSON.")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def _read_json(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise TelemetryValidationError(f"{path} must hold a JSON object, got {type(data).__name__}.")
    return data


def _build_record(args: argparse.Namespace) -> Dict[str, Any]:
    record: Dict[str, Any] = _read_json(args.trip_json) if args.trip_json else {}
    for dest, field_name in _TRIP_FLAGS.items():
        value = getattr(args, dest)
        if value is not None:
            record[field_name] = value
    if args.trip_id is not None:
        record["trip_id"] = args.trip_id
    if args.calculated_score is not None:
        record["calculated_score"] = args.calculated_score
    return record


def _build_baseline(args: argparse.Namespace) -> VehicleBaseline:
    settings: Optional[Dict[str, Any]] = _read_json(args.settings_json) if args.settings_json else None
    if settings is not None and isinstance(settings.get("vehicle"), dict):
        settings = settings["vehicle"]
    baseline = VehicleBaseline.from_settings(settings)

    overrides: Dict[str, Any] = {}
    if args.claimed_mileage is not None:
        overrides["claimed_mileage_km_per_liter"] = args.claimed_mileage
    if args.speed_threshold is not None:
        overrides["speed_threshold_kmh"] = args.speed_threshold
    if args.fuel_type is not None:
        overrides["fuel_type"] = FuelType.parse(args.fuel_type)
    return replace(baseline, **overrides) if overrides else baseline


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    init_logging(level=args.log_level, write_output=False)

    try:
        record = _build_record(args)
        baseline = _build_baseline(args)
        breakdown = score_record(record, baseline)
    except (ValueError, KeyError, OSError) as e:
        # TelemetryValidationError and JSON decode errors are ValueErrors
        log.error(f"Cannot score trip: {e}")
        return 2

    band = interpret_score(breakdown.overall)
    res = breakdown.to_dict()
    res["trip_id"] = record.get("trip_id") or record.get("tripId") or record.get("id")
    res["interpretation"] = {
          "label": band.label
        , "description": band.description
        , "grade": band.grade
    }

    if args.pretty:
        text = json.dumps(res, ensure_ascii=False, indent=2)
    else:
        text = json.dumps(res, ensure_ascii=False, separators=(",", ":"))

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding="utf-8")
        log.info(f"Breakdown written → {args.output}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
