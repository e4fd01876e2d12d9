"""Tests for the CSV loader and the batch scorer."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from drivescore.app.batch import (
    RESULT_COLUMNS,
    STATUS_INSUFFICIENT,
    STATUS_OK,
    load_trips_csv,
    score_trips_frame,
)
from drivescore.core.models import VehicleBaseline

PROVIDER_CSV = """TripID,Distance,Duration,FuelUsed,AvgSpeed,MaxSpeed,HarshAcceleration,HarshBraking,OverSpeeding,Idling,OverRevving,calculatedScore
T1,20.1,45,1.3,45,105,2,1,45,180,15,
T2,abc,30,1.0,30,60,0,0,0,0,0,
T3,15,30,1.0,30,60,0,0,0,0,0,61
"""


@pytest.fixture
def trips_csv(tmp_path: Path) -> Path:
    path = tmp_path / "trips.csv"
    path.write_text(PROVIDER_CSV, encoding="utf-8")
    return path


class TestLoadTripsCsv:

    def test_columns_are_normalized(self, trips_csv: Path) -> None:
        df = load_trips_csv(trips_csv)
        assert list(df.columns) == [
              "trip_id", "distance_km", "duration_min", "fuel_used_liters", "avg_speed_kmh"
            , "max_speed_kmh", "harsh_acceleration_count", "harsh_braking_count"
            , "over_speeding_seconds", "idling_seconds", "over_revving_seconds", "calculated_score"
        ]
        assert len(df) == 3

    def test_unknown_columns_are_kept(self, tmp_path: Path) -> None:
        path = tmp_path / "extra.csv"
        path.write_text("distance_km,duration_min,driver\n10,20,ana\n", encoding="utf-8")
        assert list(load_trips_csv(path).columns) == ["distance_km", "duration_min", "driver"]

    def test_canonical_column_wins_over_alias(self, tmp_path: Path, caplog) -> None:
        path = tmp_path / "both.csv"
        path.write_text("distance,distance_km,duration\n99,10,20\n", encoding="utf-8")

        df = load_trips_csv(path)

        assert list(df.columns) == ["distance_km", "duration_min"]
        assert df.loc[0, "distance_km"] == 10
        assert "ignoring duplicate columns ['distance']" in caplog.text

    def test_leftmost_alias_wins(self, tmp_path: Path) -> None:
        path = tmp_path / "aliases.csv"
        path.write_text("idling,idlingSeconds,distance,duration\n30,60,10,20\n", encoding="utf-8")

        df = load_trips_csv(path)

        assert list(df.columns) == ["idling_seconds", "distance_km", "duration_min"]
        assert df.loc[0, "idling_seconds"] == 30

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_trips_csv(tmp_path / "nope.csv")


class TestScoreTripsFrame:

    def test_scores_every_row(self, trips_csv: Path, scenario_baseline: VehicleBaseline) -> None:
        result = score_trips_frame(load_trips_csv(trips_csv), scenario_baseline)
        frame = result.frame

        assert list(frame.columns) == RESULT_COLUMNS
        assert list(frame["trip_id"]) == ["T1", "T2", "T3"]
        assert list(frame["status"]) == [STATUS_OK, STATUS_INSUFFICIENT, STATUS_OK]
        assert result.failed_count == 1
        assert len(result.breakdowns) == 2

    def test_scored_row(self, trips_csv: Path, scenario_baseline: VehicleBaseline) -> None:
        row = score_trips_frame(load_trips_csv(trips_csv), scenario_baseline).frame.iloc[0]
        assert row["overall"] == 87
        assert row["band"] == "Good Driver"
        assert row["grade"] == "B"
        assert row["score_source"] == "computed"
        assert row["insight_count"] == 4

    def test_invalid_row_carries_the_reason(self, trips_csv: Path, scenario_baseline: VehicleBaseline) -> None:
        row = score_trips_frame(load_trips_csv(trips_csv), scenario_baseline).frame.iloc[1]
        assert "distance_km" in row["error"]
        assert pd.isna(row["overall"])

    def test_calculated_score_column(self, trips_csv: Path, scenario_baseline: VehicleBaseline) -> None:
        row = score_trips_frame(load_trips_csv(trips_csv), scenario_baseline).frame.iloc[2]
        assert row["overall"] == 61
        assert row["score_source"] == "external"

    def test_position_is_the_default_trip_id(self) -> None:
        df = pd.DataFrame(
            [
                {"distance_km": 15.0, "duration_min": 30.0, "fuel_used_liters": 1.0, "avg_speed_kmh": 30.0},
                {"distance_km": -1.0, "duration_min": 30.0},
            ]
        )
        result = score_trips_frame(df, VehicleBaseline())
        assert list(result.frame["trip_id"]) == ["0", "1"]
        assert list(result.frame["status"]) == [STATUS_OK, STATUS_INSUFFICIENT]

    def test_empty_frame(self) -> None:
        result = score_trips_frame(pd.DataFrame(), VehicleBaseline())
        assert result.frame.empty
        assert result.failed_count == 0
        assert result.breakdowns == []
