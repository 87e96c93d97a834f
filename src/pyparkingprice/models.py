"""Public data models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class PricingStrategy(StrEnum):
    HOURLY_BLOCKS = "hourly_blocks"
    MINUTE_BLOCKS = "minute_blocks"
    FLAT_DAILY = "flat_daily"
    PROGRESSIVE = "progressive"


class VehicleCategory(StrEnum):
    STANDARD = "standard"
    RESIDENT = "resident"
    DISABLED = "disabled"


@dataclass(frozen=True, slots=True)
class StandardRule:
    """Block pricing with every field resolved.

    Durations are in minutes. ``max_daily_price`` of ``None`` means the price is
    not capped.
    """

    first_block_duration: float
    first_block_price: float
    additional_block_duration: float
    additional_block_price: float
    max_daily_price: float | None = None


@dataclass(frozen=True, slots=True)
class SpecialRule:
    resident_discount: float = 0.0
    disabled_discount: float = 0.0


@dataclass(frozen=True, slots=True)
class PriceBreakdown:
    day_price: float
    night_price: float
    single_entrance_price: float | None = None
    reset_time: str | None = None


@dataclass(frozen=True, slots=True)
class ParkingLot:
    id: str
    street_name: str
    address: str
    latitude: float | None
    longitude: float | None
    operating_hours: str
    total_spots: int
    ownership_type: str
    pricing_strategy: str
    pricing_rules: tuple[Mapping[str, Any], ...]
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class PricedLot:
    lot: ParkingLot
    prices: PriceBreakdown
