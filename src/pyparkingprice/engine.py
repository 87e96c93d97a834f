"""Price calculation for a single parking lot."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .models import ParkingLot, PriceBreakdown, SpecialRule, VehicleCategory
from .rules import PricingRules
from .strategy import get_strategy
from .util import (
    normalize_pricing_strategy,
    normalize_vehicle_category,
    round_price,
    total_minutes,
)

_LOGGER = logging.getLogger(__name__)


def _lot_pricing_fields(lot: Any) -> tuple[Any, Any]:
    if isinstance(lot, ParkingLot):
        return lot.pricing_strategy, lot.pricing_rules
    if isinstance(lot, Mapping):
        return lot.get("pricing_strategy"), lot.get("pricing_rules")
    return None, None


def select_discount(special_rule: SpecialRule, vehicle_category: Any) -> float:
    """Return the discount fraction for the category.

    Resident is checked before disabled and discounts never stack.
    """
    category = normalize_vehicle_category(vehicle_category)
    if category is VehicleCategory.RESIDENT and special_rule.resident_discount:
        return special_rule.resident_discount
    if category is VehicleCategory.DISABLED and special_rule.disabled_discount:
        return special_rule.disabled_discount
    return 0.0


def apply_discount(price: float, discount: float) -> float:
    if discount >= 1:
        return 0.0
    if discount > 0:
        return price * (1 - discount)
    return price


def compute_price(
    lot: ParkingLot | Mapping[str, Any],
    hours: Any,
    minutes: Any,
    vehicle_category: VehicleCategory | str | None = VehicleCategory.STANDARD,
) -> PriceBreakdown:
    """Price a stay of ``hours`` and ``minutes`` at ``lot``.

    ``lot`` is either a :class:`ParkingLot` or a raw lot document. Any shape of
    input yields a breakdown: unknown strategies price as hourly blocks, unknown
    categories get no discount and missing rule fields take their defaults.
    Rounding to cents happens once, after the discount.
    """
    duration = total_minutes(hours, minutes)
    raw_strategy, raw_rules = _lot_pricing_fields(lot)
    strategy = normalize_pricing_strategy(raw_strategy)
    rules = PricingRules(raw_rules)

    if len(rules):
        base_price = get_strategy(strategy)(rules.standard_rule(strategy), duration)
    else:
        # A lot without any pricing rules has nothing to charge.
        base_price = 0.0
    discount = select_discount(rules.special_rule(), vehicle_category)
    price = round_price(apply_discount(base_price, discount))

    _LOGGER.debug(
        "Priced %s minutes with strategy %s: base=%s discount=%s price=%s",
        duration,
        strategy.value,
        base_price,
        discount,
        price,
    )
    return PriceBreakdown(
        day_price=price,
        night_price=price,
        single_entrance_price=None,
        reset_time=None,
    )
