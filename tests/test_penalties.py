"""Tests for the penalty sub-calculations.

Tier boundaries are inclusive for the penalties (≤) and strict for the
smoothness deduction (>).
"""

from __future__ import annotations

import pytest

from drivescore.scoring.penalties import (
    events_per_km,
    harsh_events_penalty,
    idling_penalty,
    over_revving_penalty,
    smoothness_deduction,
    speeding_penalty,
)


# ============================================================================
# Speeding
# ============================================================================


class TestSpeedingPenalty:
    """Share of a 45 minute (2700 s) trip spent over the limit."""

    def test_no_speeding_is_free(self, make_trip) -> None:
        assert speeding_penalty(make_trip(duration_min=45, over_speeding_seconds=0)) == 0

    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (45, 5.0),     # 1.7%
            (135, 5.0),    # exactly 5%
            (200, 15.0),   # 7.4%
            (270, 15.0),   # exactly 10%
            (600, 30.0),   # 22.2% → capped
        ],
    )
    def test_tiers(self, make_trip, seconds: int, expected: float) -> None:
        trip = make_trip(duration_min=45, over_speeding_seconds=seconds)
        assert speeding_penalty(trip) == pytest.approx(expected)

    def test_above_ten_percent_is_twice_the_share(self, make_trip) -> None:
        trip = make_trip(duration_min=45, over_speeding_seconds=324)  # 12%
        assert speeding_penalty(trip) == pytest.approx(24.0)

    def test_zero_duration_has_no_share(self, make_trip) -> None:
        assert speeding_penalty(make_trip(duration_min=0, over_speeding_seconds=60)) == 0


# ============================================================================
# Harsh events
# ============================================================================


class TestHarshEventsPenalty:
    """Harsh accelerations + brakings per km on a 20 km trip."""

    @pytest.mark.parametrize(
        "events, expected",
        [
            (0, 0.0),
            (2, 0.0),     # 0.10 /km
            (3, 5.0),     # 0.15
            (6, 5.0),     # 0.30
            (7, 15.0),    # 0.35
            (10, 15.0),   # 0.50
            (20, 25.0),   # 1.00
            (21, 35.0),   # 1.05
        ],
    )
    def test_tiers(self, make_trip, events: int, expected: float) -> None:
        trip = make_trip(distance_km=20.0, harsh_acceleration_count=events)
        assert harsh_events_penalty(trip) == expected

    def test_braking_and_acceleration_both_count(self, make_trip) -> None:
        trip = make_trip(distance_km=20.0, harsh_acceleration_count=2, harsh_braking_count=1)
        assert events_per_km(trip) == pytest.approx(0.15)
        assert harsh_events_penalty(trip) == 5.0

    def test_zero_distance_means_no_rate(self, make_trip) -> None:
        trip = make_trip(distance_km=0.0, harsh_braking_count=4)
        assert events_per_km(trip) == 0.0
        assert harsh_events_penalty(trip) == 0.0


# ============================================================================
# Idling
# ============================================================================


class TestIdlingPenalty:
    """Share of a 45 minute trip spent idling."""

    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0, 0.0),
            (90, 0.0),     # 3.3%
            (135, 0.0),    # exactly 5%
            (180, 5.0),    # 6.7%
            (360, 15.0),   # 13.3%
            (900, 30.0),   # 33.3% → capped
        ],
    )
    def test_tiers(self, make_trip, seconds: int, expected: float) -> None:
        trip = make_trip(duration_min=45, idling_seconds=seconds)
        assert idling_penalty(trip) == pytest.approx(expected)

    def test_above_twenty_percent_is_the_share_itself(self, make_trip) -> None:
        trip = make_trip(duration_min=45, idling_seconds=675)  # 25%
        assert idling_penalty(trip) == pytest.approx(25.0)

    def test_zero_duration_has_no_share(self, make_trip) -> None:
        assert idling_penalty(make_trip(duration_min=0, idling_seconds=300)) == 0


# ============================================================================
# Smoothness / over-revving
# ============================================================================


class TestSmoothnessDeduction:

    @pytest.mark.parametrize(
        "events, expected",
        [
            (2, 0.0),     # 0.10 is not above 0.1
            (3, 5.0),     # 0.15
            (6, 5.0),     # 0.30 is not above 0.3
            (7, 15.0),    # 0.35
            (10, 15.0),   # 0.50
            (12, 25.0),   # 0.60
            (20, 25.0),   # 1.00
            (21, 40.0),   # 1.05
        ],
    )
    def test_tiers_are_strict(self, make_trip, events: int, expected: float) -> None:
        trip = make_trip(distance_km=20.0, harsh_braking_count=events)
        assert smoothness_deduction(trip) == expected


class TestOverRevvingPenalty:

    def test_five_points_per_minute(self, make_trip) -> None:
        assert over_revving_penalty(make_trip(over_revving_seconds=15)) == pytest.approx(1.25)
        assert over_revving_penalty(make_trip(over_revving_seconds=180)) == pytest.approx(15.0)

    def test_capped_at_twenty_five(self, make_trip) -> None:
        assert over_revving_penalty(make_trip(over_revving_seconds=600)) == 25.0
