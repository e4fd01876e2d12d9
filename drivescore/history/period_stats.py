# drivescore/history/period_stats.py
# -*- coding: utf-8 -*-
"""
Period-over-period quick stats.

Totals for a current period of trips, each paired with a change label
against the previous period:

- total distance (km, 1 decimal)
- average speed (mean of per-trip averages, km/h)
- harsh events (accelerations + brakings)
- money saved on fuel versus the claimed mileage

Change labels follow the dashboard convention: "+12%", "-8%", "+0%";
an empty previous period reads "+100%" when there is activity now and
"0%" otherwise.

`compute_period_insights` reads the same two periods and turns the notable
changes (fuel efficiency, harsh events, idling, speed consistency) into
`Insight`s.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from drivescore.core.config import ScoringConfig, get_fuel_cost_defaults, get_scoring_config
from drivescore.core.models import FuelType, Insight, InsightKind, TripTelemetry, VehicleBaseline
from drivescore.core.types import Number
from drivescore.infra.logging import get_logger
from drivescore.scoring.engine import round_half_up

_log = get_logger(__name__)


@dataclass(frozen=True)
class StatChange:
    value: Number
    change: str


@dataclass(frozen=True)
class PeriodStats:
    total_distance: StatChange
    avg_speed: StatChange
    harsh_events: StatChange
    money_saved: StatChange


def percent_change_label(current: float, previous: float) -> str:
    """
    Signed, rounded percentage change of `current` over `previous`.
    """
    if previous == 0:
        return "+100%" if current > 0 else "0%"
    change = (current - previous) / previous * 100.0
    sign = "+" if change >= 0 else ""
    return f"{sign}{round_half_up(change)}%"


def _money_saved(
      trips: Sequence[TripTelemetry]
    , baseline: VehicleBaseline
    , cost_per_liter: float
) -> float:
    claimed = baseline.claimed_mileage_km_per_liter
    if claimed <= 0:
        return 0.0
    distance = sum(t.distance_km for t in trips)
    fuel = sum(t.fuel_used_liters for t in trips)
    expected_fuel = distance / claimed
    return max(0.0, expected_fuel - fuel) * cost_per_liter


def _avg_speed(trips: Sequence[TripTelemetry]) -> float:
    if not trips:
        return 0.0
    return sum(t.avg_speed_kmh for t in trips) / len(trips)


def compute_period_stats(
      current: Sequence[TripTelemetry]
    , previous: Sequence[TripTelemetry]
    , baseline: VehicleBaseline
    , *
    , fuel_cost_per_liter: Optional[float] = None
) -> PeriodStats:
    """
    Compare two periods of trips.

    Parameters
    ----------
    current, previous : sequence of TripTelemetry
        Trips of the reporting period and of the period before it.
    baseline : VehicleBaseline
        Claimed mileage (expected fuel) and fuel type (default price).
    fuel_cost_per_liter : Optional[float]
        Price override; defaults to `FuelCostDefaults` for the fuel type.

    Raises
    ------
    KeyError
        If no price is configured for the baseline's fuel type and no
        override is given.
    """
    cost = (
          float(fuel_cost_per_liter)
        if fuel_cost_per_liter is not None
        else get_fuel_cost_defaults().for_fuel(baseline.fuel_type.value)
    )

    cur_distance = sum(t.distance_km for t in current)
    prev_distance = sum(t.distance_km for t in previous)
    cur_speed = _avg_speed(current)
    prev_speed = _avg_speed(previous)
    cur_events = sum(t.harsh_event_count for t in current)
    prev_events = sum(t.harsh_event_count for t in previous)
    cur_saved = _money_saved(current, baseline, cost)
    prev_saved = _money_saved(previous, baseline, cost)

    stats = PeriodStats(
          total_distance=StatChange(
              value=round_half_up(cur_distance * 10) / 10
            , change=percent_change_label(cur_distance, prev_distance)
        )
        , avg_speed=StatChange(
              value=round_half_up(cur_speed)
            , change=percent_change_label(cur_speed, prev_speed)
        )
        , harsh_events=StatChange(
              value=cur_events
            , change=percent_change_label(cur_events, prev_events)
        )
        , money_saved=StatChange(
              value=round_half_up(cur_saved)
            , change=percent_change_label(cur_saved, prev_saved)
        )
    )

    _log.debug(
        f"compute_period_stats: current={len(current)} trips, previous={len(previous)} trips, "
        f"cost_per_liter={cost:.2f} → {stats}"
    )
    return stats


# ────────────────────────────────────────────────────────────────────────────────
# Period-over-period insights
# ────────────────────────────────────────────────────────────────────────────────

def _period_efficiency(trips: Sequence[TripTelemetry]) -> Optional[float]:
    distance = sum(t.distance_km for t in trips)
    fuel = sum(t.fuel_used_liters for t in trips)
    if distance <= 0 or fuel <= 0:
        return None
    return distance / fuel


def _idling_minutes_per_trip(trips: Sequence[TripTelemetry]) -> float:
    if not trips:
        return 0.0
    return sum(t.idling_seconds for t in trips) / len(trips) / 60.0


def compute_period_insights(
      current: Sequence[TripTelemetry]
    , previous: Sequence[TripTelemetry]
    , baseline: VehicleBaseline
    , *
    , config: Optional[ScoringConfig] = None
) -> List[Insight]:
    """
    Compare two periods of trips and report what changed.

    Rules, each independent and evaluated in this order:

    1. fuel efficiency (total km / total L) up or down by more than 10%
       (skipped for electric vehicles or when either period burned no fuel)
    2. harsh events down by more than 30% or up by more than 50%
       (the previous count is floored at 1)
    3. idling above 3 min per trip and above 1.2× the previous period
    4. average speed within 5% of the previous period with fewer harsh events

    Parameters
    ----------
    current, previous : sequence of TripTelemetry
        Trips of the reporting period and of the period before it.
    baseline : VehicleBaseline
        Vehicle the trips were driven with.
    config : Optional[ScoringConfig]
        Supplies `period_insights` thresholds.

    Returns
    -------
    list of Insight
        Empty when there are no current trips.
    """
    th = (config or get_scoring_config()).period_insights
    insights: List[Insight] = []
    if not current:
        return insights

    cur_eff = _period_efficiency(current)
    prev_eff = _period_efficiency(previous)
    if baseline.fuel_type is not FuelType.ELECTRIC and cur_eff is not None and prev_eff is not None:
        eff_change = (cur_eff - prev_eff) / prev_eff * 100.0
        if eff_change > th.efficiency_change_pct:
            insights.append(Insight(
                  InsightKind.POSITIVE
                , f"Great fuel efficiency improvement! You improved fuel efficiency by "
                  f"{round_half_up(eff_change)}% this period."
            ))
        elif eff_change < -th.efficiency_change_pct:
            insights.append(Insight(
                  InsightKind.WARNING
                , "Fuel efficiency decreased. Try maintaining steady speeds and gentle "
                  "acceleration to improve efficiency."
            ))

    cur_events = sum(t.harsh_event_count for t in current)
    prev_events = sum(t.harsh_event_count for t in previous)
    events_change = (cur_events - prev_events) / max(1, prev_events) * 100.0
    if events_change < -th.harsh_drop_pct:
        insights.append(Insight(
              InsightKind.POSITIVE
            , f"Smooth driving detected. You reduced harsh driving events by "
              f"{abs(round_half_up(events_change))}% this period."
        ))
    elif events_change > th.harsh_rise_pct:
        insights.append(Insight(
              InsightKind.WARNING
            , "More harsh events detected. Try to anticipate stops and accelerate "
              "more gradually."
        ))

    cur_idle = _idling_minutes_per_trip(current)
    prev_idle = _idling_minutes_per_trip(previous)
    if cur_idle > th.idling_minutes_per_trip and cur_idle > prev_idle * th.idling_growth_factor:
        insights.append(Insight(
              InsightKind.TIP
            , f"Reduce idling time. Average idling increased to {round_half_up(cur_idle)} "
              "minutes per trip. Turn off the engine when stopped for more than 30 seconds."
        ))

    prev_speed = _avg_speed(previous)
    if prev_speed > 0:
        speed_change = (_avg_speed(current) - prev_speed) / prev_speed * 100.0
        if abs(speed_change) < th.steady_speed_pct and cur_events < prev_events:
            insights.append(Insight(
                  InsightKind.POSITIVE
                , "Excellent speed control. You maintained consistent speeds with fewer "
                  "harsh events."
            ))

    _log.debug(
        f"compute_period_insights: efficiency={cur_eff} vs {prev_eff}, "
        f"harsh={cur_events} vs {prev_events}, idle/trip={cur_idle:.2f} vs {prev_idle:.2f} min "
        f"→ {[i.kind.value for i in insights]}"
    )
    return insights
