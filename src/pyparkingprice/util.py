"""Shared utilities for normalizing lot data and request parameters."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .const import MINIMUM_DURATION_MINUTES
from .models import PricingStrategy, VehicleCategory

_CENTS = Decimal("0.01")
# Floats at or above 2**53 carry no fractional part.
_MAX_FRACTIONAL_FLOAT = float(2**53)
_VEHICLE_CATEGORIES = {category.value: category for category in VehicleCategory}
_PRICING_STRATEGIES = {strategy.value: strategy for strategy in PricingStrategy}


def _to_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            # Integers beyond the float range.
            return None
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            number = float(stripped)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def coerce_positive_number(value: Any, default: float | None) -> float | None:
    """Return ``value`` as a float when it is a finite number above zero.

    Stored lot data uses zero, blank and missing interchangeably for "unset",
    so all of them resolve to ``default``.
    """
    number = _to_number(value)
    if number is None or number <= 0:
        return default
    return number


def total_minutes(hours: Any, minutes: Any) -> float:
    total = (_to_number(hours) or 0.0) * 60 + (_to_number(minutes) or 0.0)
    if not math.isfinite(total):
        return float(MINIMUM_DURATION_MINUTES)
    return max(float(MINIMUM_DURATION_MINUTES), total)


def round_price(value: float) -> float:
    """Round to cents, halves away from zero.

    The shortest decimal form of the float is rounded, so 2.675 becomes 2.68.
    """
    if not math.isfinite(value) or abs(value) >= _MAX_FRACTIONAL_FLOAT:
        return value
    return float(Decimal(repr(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def normalize_vehicle_category(value: Any) -> VehicleCategory:
    if not isinstance(value, str):
        return VehicleCategory.STANDARD
    return _VEHICLE_CATEGORIES.get(value, VehicleCategory.STANDARD)


def normalize_pricing_strategy(value: Any) -> PricingStrategy:
    """Match the stored tag exactly; any other value prices as hourly blocks."""
    if not isinstance(value, str):
        return PricingStrategy.HOURLY_BLOCKS
    return _PRICING_STRATEGIES.get(value, PricingStrategy.HOURLY_BLOCKS)
