"""Tests for the scoring configuration defaults."""

from __future__ import annotations

import pytest

from drivescore.core.config import (
    FuelCostDefaults,
    get_baseline_defaults,
    get_fuel_cost_defaults,
    get_scoring_config,
)
from drivescore.core.models import FuelType


class TestScoringConfig:

    def test_weights_sum_to_one(self) -> None:
        w = get_scoring_config().weights
        assert w.safety + w.efficiency + w.smoothness + w.environmental == pytest.approx(1.0)

    def test_efficiency_tiers_descend(self) -> None:
        ratios = [t.min_ratio for t in get_scoring_config().efficiency_tiers]
        assert ratios == sorted(ratios, reverse=True)

    def test_smoothness_tiers_descend(self) -> None:
        uppers = [t.upper for t in get_scoring_config().penalties.smoothness]
        assert uppers == sorted(uppers, reverse=True)

    def test_shared_instance(self) -> None:
        assert get_scoring_config() is get_scoring_config()


class TestBaselineDefaults:

    def test_values(self) -> None:
        d = get_baseline_defaults()
        assert (d.claimed_mileage_km_per_liter, d.speed_threshold_kmh, d.fuel_type) == (15.0, 80.0, "Petrol")


class TestFuelCostDefaults:

    @pytest.mark.parametrize("fuel, price", [("Petrol", 102.0), ("diesel", 89.0), (" ELECTRIC ", 0.0)])
    def test_lookup_is_case_insensitive(self, fuel: str, price: float) -> None:
        assert get_fuel_cost_defaults().for_fuel(fuel) == price

    def test_unknown_fuel(self) -> None:
        with pytest.raises(KeyError):
            FuelCostDefaults(per_liter={"Petrol": 100.0}).for_fuel("Diesel")


class TestFuelType:

    def test_parse(self) -> None:
        assert FuelType.parse("petrol") is FuelType.PETROL
        assert FuelType.parse(FuelType.DIESEL) is FuelType.DIESEL

    def test_parse_unknown(self) -> None:
        with pytest.raises(KeyError):
            FuelType.parse("LPG")
