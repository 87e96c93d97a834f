"""Batch pricing and filtering of search results."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

from .const import OWNERSHIP_ALL, PRICE_UNLIMITED
from .engine import compute_price
from .exceptions import ValidationError
from .models import ParkingLot, PricedLot, VehicleCategory


def price_lots(
    lots: Iterable[ParkingLot],
    hours: Any,
    minutes: Any,
    vehicle_category: VehicleCategory | str | None = VehicleCategory.STANDARD,
) -> list[PricedLot]:
    """Price every lot for the same stay, keeping the input order."""
    return [
        PricedLot(lot=lot, prices=compute_price(lot, hours, minutes, vehicle_category))
        for lot in lots
    ]


def _normalize_max_price(max_price: Any) -> float | None:
    if max_price is None or max_price == PRICE_UNLIMITED:
        return None
    if isinstance(max_price, bool):
        raise ValidationError("max_price must be a number.")
    try:
        value = float(max_price)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValidationError("max_price must be a number.") from exc
    if math.isnan(value) or value < 0:
        raise ValidationError("max_price must be zero or greater.")
    return value


def filter_priced_lots(
    priced_lots: Iterable[PricedLot],
    *,
    ownership_type: str | None = None,
    max_price: float | str | None = None,
) -> list[PricedLot]:
    limit = _normalize_max_price(max_price)
    results: list[PricedLot] = []
    for priced in priced_lots:
        if ownership_type not in (None, OWNERSHIP_ALL) and (
            priced.lot.ownership_type != ownership_type
        ):
            continue
        if limit is not None and priced.prices.day_price > limit:
            continue
        results.append(priced)
    return results
