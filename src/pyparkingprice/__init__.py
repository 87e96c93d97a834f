"""pyParkingPrice package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .client import Client
from .engine import compute_price
from .exceptions import (
    ApiError,
    NetworkError,
    NotFoundError,
    PyParkingPriceError,
    RateLimitError,
    ValidationError,
)
from .models import (
    ParkingLot,
    PricedLot,
    PriceBreakdown,
    PricingStrategy,
    SpecialRule,
    StandardRule,
    VehicleCategory,
)
from .rules import PricingRules
from .search import filter_priced_lots, price_lots

try:
    __version__ = version("pyparkingprice")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "ApiError",
    "Client",
    "NetworkError",
    "NotFoundError",
    "ParkingLot",
    "PriceBreakdown",
    "PricedLot",
    "PricingRules",
    "PricingStrategy",
    "PyParkingPriceError",
    "RateLimitError",
    "SpecialRule",
    "StandardRule",
    "ValidationError",
    "VehicleCategory",
    "__version__",
    "compute_price",
    "filter_priced_lots",
    "price_lots",
]
