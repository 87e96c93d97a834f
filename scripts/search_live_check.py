"""Manual live check for a parking-lot API.

Run from the repository root with:
  PYTHONPATH=src PARKING_BASE_URL=http://localhost:5000 \
  python scripts/search_live_check.py --lat 32.0853 --lng 34.7818 --radius 1000

Optional environment variables:
  PARKING_BASE_URL
  PARKING_API_URI

Pricing options:
  --hours/--minutes set the requested stay (default 1 hour).
  --vehicle-category is one of standard, resident or disabled.
  --ownership filters on Public/Private, --max-price drops pricier lots.
  --debug enables debug logging for the library.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from pyparkingprice import Client, PyParkingPriceError, VehicleCategory
from pyparkingprice.models import PricedLot

_LOGGER = logging.getLogger(__name__)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search and price parking lots.")
    parser.add_argument("--base-url", dest="base_url", help="Parking-lot API base URL.")
    parser.add_argument("--api-uri", dest="api_uri", help="Parking-lot API URI.")
    parser.add_argument("--lat", type=float, required=True, help="Search latitude.")
    parser.add_argument("--lng", type=float, required=True, help="Search longitude.")
    parser.add_argument("--radius", type=int, default=1000, help="Search radius in metres.")
    parser.add_argument("--hours", type=int, default=1, help="Requested hours.")
    parser.add_argument("--minutes", type=int, default=0, help="Requested minutes (0-59).")
    parser.add_argument(
        "--vehicle-category",
        dest="vehicle_category",
        choices=[category.value for category in VehicleCategory],
        default=VehicleCategory.STANDARD.value,
        help="Vehicle category used to select a discount.",
    )
    parser.add_argument(
        "--ownership",
        dest="ownership_type",
        choices=["All", "Public", "Private"],
        default="All",
        help="Only show lots with this ownership type.",
    )
    parser.add_argument(
        "--max-price",
        dest="max_price",
        type=float,
        help="Only show lots priced at or below this amount.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args()


def _format_priced_lot(priced: PricedLot) -> str:
    lot = priced.lot
    return (
        f"{lot.id} | {lot.street_name or '-'} | {lot.ownership_type} | "
        f"{lot.pricing_strategy} | {priced.prices.day_price:.2f}"
    )


async def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    base_url = args.base_url or os.getenv("PARKING_BASE_URL")
    if not base_url:
        print("Missing --base-url or PARKING_BASE_URL.", file=sys.stderr)
        return 2
    api_uri = args.api_uri or os.getenv("PARKING_API_URI") or "/api"

    try:
        async with Client(base_url=base_url, api_uri=api_uri) as client:
            results = await client.search(
                args.lat,
                args.lng,
                args.radius,
                hours=args.hours,
                minutes=args.minutes,
                vehicle_category=args.vehicle_category,
                ownership_type=args.ownership_type,
                max_price=args.max_price,
            )
    except PyParkingPriceError as exc:
        _LOGGER.debug("Search failed", exc_info=True)
        print(f"Error: {exc.__class__.__name__}: {exc}", file=sys.stderr)
        return 1

    print(f"Lots: {len(results)}")
    for priced in results:
        print(f"- {_format_priced_lot(priced)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
