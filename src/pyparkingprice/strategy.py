"""Pricing strategies.

Each strategy turns a resolved :class:`StandardRule` and a duration in minutes
into a base price, before discounts and rounding.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from .const import (
    PROGRESSIVE_DEFAULT_FIRST_HOUR_PRICE,
    PROGRESSIVE_HOURLY_STEP,
    PROGRESSIVE_MIN_FACTOR,
)
from .models import PricingStrategy, StandardRule
from .util import normalize_pricing_strategy

StrategyFunc = Callable[[StandardRule, float], float]


def _cap(price: float, max_daily_price: float | None) -> float:
    if max_daily_price is None:
        return price
    return min(price, max_daily_price)


def block_price(rule: StandardRule, total_minutes: float) -> float:
    """First block at a flat price, then every started block at the block price."""
    price = rule.first_block_price
    if total_minutes > rule.first_block_duration:
        remaining = total_minutes - rule.first_block_duration
        blocks = remaining / rule.additional_block_duration
        if math.isfinite(blocks):
            price += math.ceil(blocks) * rule.additional_block_price
        elif rule.additional_block_price > 0:
            # Block length too small to count; the daily cap still applies.
            price = math.inf
    return _cap(price, rule.max_daily_price)


def hourly_blocks(rule: StandardRule, total_minutes: float) -> float:
    return block_price(rule, total_minutes)


def minute_blocks(rule: StandardRule, total_minutes: float) -> float:
    # Same billing as hourly_blocks; only the resolved block length differs.
    return block_price(rule, total_minutes)


def flat_daily(rule: StandardRule, total_minutes: float) -> float:
    if rule.max_daily_price is not None:
        return rule.max_daily_price
    return rule.first_block_price


def progressive_factor(hour: int) -> float:
    """Share of the first-hour price charged for the given hour (2 and up)."""
    return max(PROGRESSIVE_MIN_FACTOR, 1 - hour * PROGRESSIVE_HOURLY_STEP)


def progressive(rule: StandardRule, total_minutes: float) -> float:
    hours = math.ceil(total_minutes / 60)
    first_hour_price = rule.first_block_price or PROGRESSIVE_DEFAULT_FIRST_HOUR_PRICE
    price = first_hour_price
    hour = 2
    while hour <= hours:
        factor = progressive_factor(hour)
        if factor <= PROGRESSIVE_MIN_FACTOR:
            # Every remaining hour is billed at the floor factor.
            price += (hours - hour + 1) * first_hour_price * PROGRESSIVE_MIN_FACTOR
            break
        price += first_hour_price * factor
        hour += 1
    return _cap(price, rule.max_daily_price)


STRATEGIES: MappingProxyType[PricingStrategy, StrategyFunc] = MappingProxyType(
    {
        PricingStrategy.HOURLY_BLOCKS: hourly_blocks,
        PricingStrategy.MINUTE_BLOCKS: minute_blocks,
        PricingStrategy.FLAT_DAILY: flat_daily,
        PricingStrategy.PROGRESSIVE: progressive,
    }
)


def get_strategy(value: Any) -> StrategyFunc:
    """Return the strategy for ``value``, falling back to hourly blocks."""
    return STRATEGIES[normalize_pricing_strategy(value)]
