import math

import pytest

from pyparkingprice.models import PricingStrategy, StandardRule
from pyparkingprice.rules import PricingRules
from pyparkingprice.strategy import (
    STRATEGIES,
    flat_daily,
    get_strategy,
    hourly_blocks,
    minute_blocks,
    progressive,
    progressive_factor,
)


def _rule(
    *,
    first_block_duration: float = 60.0,
    first_block_price: float = 10.0,
    additional_block_duration: float = 60.0,
    additional_block_price: float = 5.0,
    max_daily_price: float | None = None,
) -> StandardRule:
    return StandardRule(
        first_block_duration=first_block_duration,
        first_block_price=first_block_price,
        additional_block_duration=additional_block_duration,
        additional_block_price=additional_block_price,
        max_daily_price=max_daily_price,
    )


@pytest.mark.parametrize("minutes", [1, 30, 59, 60])
@pytest.mark.parametrize("strategy", [hourly_blocks, minute_blocks])
def test_block_strategies_charge_first_block_within_first_block(strategy, minutes) -> None:
    rule = _rule(additional_block_duration=7.0, additional_block_price=123.0)
    assert strategy(rule, minutes) == 10.0


def test_hourly_blocks_bills_partial_block_as_full_block() -> None:
    assert hourly_blocks(_rule(), 61) == 15.0
    assert hourly_blocks(_rule(), 120) == 15.0
    assert hourly_blocks(_rule(), 121) == 20.0


def test_hourly_blocks_clamps_to_max_daily_price() -> None:
    rule = _rule(additional_block_price=100.0, max_daily_price=60.0)
    assert hourly_blocks(rule, 600) == 60.0


def test_block_too_small_to_count_is_capped() -> None:
    rule = _rule(additional_block_duration=1e-320, max_daily_price=60.0)
    assert hourly_blocks(rule, 120) == 60.0
    assert minute_blocks(rule, 120) == 60.0


def test_block_too_small_to_count_without_cap() -> None:
    assert hourly_blocks(_rule(additional_block_duration=1e-320), 120) == math.inf
    free_blocks = _rule(additional_block_duration=1e-320, additional_block_price=0.0)
    assert hourly_blocks(free_blocks, 120) == 10.0


def test_minute_blocks_defaults_to_quarter_hours() -> None:
    rule = PricingRules(
        [{"type": "standard", "first_block_price": 10, "additional_block_price": 1}]
    ).standard_rule(PricingStrategy.MINUTE_BLOCKS)
    assert minute_blocks(rule, 90) == 12.0
    assert minute_blocks(rule, 91) == 13.0


def test_flat_daily_ignores_duration() -> None:
    rule = _rule(max_daily_price=40.0)
    assert flat_daily(rule, 1) == flat_daily(rule, 1440) == 40.0


def test_flat_daily_falls_back_to_first_block_price() -> None:
    assert flat_daily(_rule(), 300) == 10.0
    assert flat_daily(_rule(first_block_price=0.0), 300) == 0.0


def test_progressive_discounts_each_hour() -> None:
    rule = _rule()
    assert progressive(rule, 60) == pytest.approx(10.0)
    assert progressive(rule, 61) == pytest.approx(18.0)
    assert progressive(rule, 180) == pytest.approx(25.0)
    assert progressive(rule, 240) == pytest.approx(31.0)
    assert progressive(rule, 300) == pytest.approx(36.0)
    assert progressive(rule, 360) == pytest.approx(41.0)


def test_progressive_factor_floors_at_half() -> None:
    assert progressive_factor(2) == pytest.approx(0.8)
    assert progressive_factor(5) == pytest.approx(0.5)
    assert progressive_factor(10) == 0.5
    assert progressive_factor(24) == 0.5


def test_progressive_is_monotonic() -> None:
    rule = _rule(first_block_price=7.5)
    prices = [progressive(rule, minutes) for minutes in range(1, 3000, 13)]
    assert prices == sorted(prices)


def test_progressive_uses_default_first_hour_price() -> None:
    assert progressive(_rule(first_block_price=0.0), 120) == pytest.approx(18.0)


def test_progressive_clamps_to_max_daily_price() -> None:
    rule = _rule(max_daily_price=50.0)
    assert progressive(rule, 24 * 60) == 50.0
    assert progressive(rule, 10_000_000) == 50.0


def test_get_strategy_falls_back_to_hourly_blocks() -> None:
    assert get_strategy("bogus") is hourly_blocks
    assert get_strategy(None) is hourly_blocks
    assert get_strategy("progressive") is progressive
    assert get_strategy(PricingStrategy.FLAT_DAILY) is flat_daily


def test_strategy_table_covers_every_strategy() -> None:
    assert set(STRATEGIES) == set(PricingStrategy)
    with pytest.raises(TypeError):
        STRATEGIES[PricingStrategy.FLAT_DAILY] = hourly_blocks  # type: ignore[index]
