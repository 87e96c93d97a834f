import pytest

from pyparkingprice.models import PricingStrategy, VehicleCategory
from pyparkingprice.util import (
    coerce_positive_number,
    normalize_pricing_strategy,
    normalize_vehicle_category,
    round_price,
    total_minutes,
)


@pytest.mark.parametrize(
    ("value", "default", "expected"),
    [
        (30, 60.0, 30.0),
        ("12.5", 0.0, 12.5),
        (0, 60.0, 60.0),
        (None, None, None),
        ("", 15.0, 15.0),
        ("abc", 1.0, 1.0),
        (True, 5.0, 5.0),
        (-5, 7.0, 7.0),
        (float("nan"), 2.0, 2.0),
        (float("inf"), None, None),
        ([10], 3.0, 3.0),
        (10**400, 5.0, 5.0),
        (-(10**400), 1.0, 1.0),
    ],
)
def test_coerce_positive_number(value, default, expected) -> None:
    assert coerce_positive_number(value, default) == expected


def test_total_minutes() -> None:
    assert total_minutes(1, 30) == 90
    assert total_minutes(2, 0) == 120


def test_total_minutes_floors_at_one_minute() -> None:
    assert total_minutes(0, 0) == 1
    assert total_minutes(-2, 10) == 1
    assert total_minutes(None, None) == 1


def test_total_minutes_with_oversized_values() -> None:
    assert total_minutes(10**400, 0) == 1
    assert total_minutes(0, 10**400) == 1
    assert total_minutes(1e308, 0) == 1


def test_total_minutes_ignores_non_numeric_parts() -> None:
    assert total_minutes("x", 5) == 5
    assert total_minutes("2", "15") == 135


def test_round_price_half_away_from_zero() -> None:
    assert round_price(2.675) == 2.68
    assert round_price(0.125) == 0.13
    assert round_price(-0.125) == -0.13
    assert round_price(1 / 3) == 0.33
    assert round_price(12.0) == 12.0


def test_normalize_vehicle_category() -> None:
    assert normalize_vehicle_category("resident") is VehicleCategory.RESIDENT
    assert normalize_vehicle_category(" Resident ") is VehicleCategory.STANDARD
    assert normalize_vehicle_category(VehicleCategory.DISABLED) is VehicleCategory.DISABLED
    assert normalize_vehicle_category("telAvivResident") is VehicleCategory.STANDARD
    assert normalize_vehicle_category(None) is VehicleCategory.STANDARD
    assert normalize_vehicle_category(3) is VehicleCategory.STANDARD


def test_normalize_pricing_strategy() -> None:
    assert normalize_pricing_strategy("flat_daily") is PricingStrategy.FLAT_DAILY
    assert normalize_pricing_strategy(PricingStrategy.MINUTE_BLOCKS) is PricingStrategy.MINUTE_BLOCKS
    assert normalize_pricing_strategy("FLAT_DAILY") is PricingStrategy.HOURLY_BLOCKS
    assert normalize_pricing_strategy(" progressive ") is PricingStrategy.HOURLY_BLOCKS
    assert normalize_pricing_strategy("progressive") is PricingStrategy.PROGRESSIVE
    assert normalize_pricing_strategy("bogus") is PricingStrategy.HOURLY_BLOCKS
    assert normalize_pricing_strategy("event_based") is PricingStrategy.HOURLY_BLOCKS
    assert normalize_pricing_strategy(None) is PricingStrategy.HOURLY_BLOCKS
