"""Async client for the parking-lot API."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Mapping
from typing import Any

import aiohttp

from .const import (
    DEFAULT_API_URI,
    DEFAULT_HEADERS,
    DEFAULT_OPERATING_HOURS,
    DEFAULT_OWNERSHIP_TYPE,
    PARKING_LOT_ENDPOINT,
    PARKING_LOTS_ENDPOINT,
    RETRY_AFTER_HEADER,
)
from .exceptions import ApiError, NetworkError, NotFoundError, RateLimitError, ValidationError
from .models import ParkingLot, PricedLot, PricingStrategy, VehicleCategory
from .search import filter_priced_lots, price_lots

_LOGGER = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)


class Client:
    """Read-only access to parking lots, with search-time pricing."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        base_url: str | None = None,
        api_uri: str | None = DEFAULT_API_URI,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._base_url = self._normalize_base_url(base_url)
        self._api_uri = self._normalize_api_uri(api_uri)
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def list_lots(
        self,
        lat: float | None = None,
        lng: float | None = None,
        radius: int | None = None,
    ) -> list[ParkingLot]:
        """Return all lots, or the lots within ``radius`` metres of a point.

        The API returns radius results nearest first; that order is kept.
        """
        params = self._build_search_params(lat, lng, radius)
        _LOGGER.debug("list_lots started with params %s", params)
        data = await self._request_json("GET", PARKING_LOTS_ENDPOINT, params=params)
        lots = self._map_lot_list(data)
        _LOGGER.debug("list_lots completed with %s lots", len(lots))
        return lots

    async def get_lot(self, lot_id: str) -> ParkingLot:
        if not isinstance(lot_id, str) or not lot_id.strip():
            raise ValidationError("lot_id must be a non-empty string.")
        _LOGGER.debug("get_lot started for %s", lot_id)
        data = await self._request_json(
            "GET",
            PARKING_LOT_ENDPOINT.format(lot_id=lot_id.strip()),
        )
        lot = self._map_lot(data)
        _LOGGER.debug("get_lot completed for %s", lot_id)
        return lot

    async def search(
        self,
        lat: float,
        lng: float,
        radius: int,
        *,
        hours: int,
        minutes: int,
        vehicle_category: VehicleCategory | str | None = VehicleCategory.STANDARD,
        ownership_type: str | None = None,
        max_price: float | str | None = None,
    ) -> list[PricedLot]:
        """Fetch lots around a point and price them for the requested stay."""
        if lat is None or lng is None or radius is None:
            raise ValidationError("lat, lng and radius are required.")
        lots = await self.list_lots(lat, lng, radius)
        priced = price_lots(lots, hours, minutes, vehicle_category)
        return filter_priced_lots(priced, ownership_type=ownership_type, max_price=max_price)

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    def _build_search_params(
        self,
        lat: float | None,
        lng: float | None,
        radius: int | None,
    ) -> dict[str, str] | None:
        if lat is None and lng is None and radius is None:
            return None
        if lat is None or lng is None or radius is None:
            raise ValidationError("lat, lng and radius must be provided together.")
        lat_value = self._require_number(lat, "lat")
        lng_value = self._require_number(lng, "lng")
        if not -90 <= lat_value <= 90:
            raise ValidationError("lat must be between -90 and 90.")
        if not -180 <= lng_value <= 180:
            raise ValidationError("lng must be between -180 and 180.")
        if isinstance(radius, bool) or not isinstance(radius, int) or radius <= 0:
            raise ValidationError("radius must be a positive integer in metres.")
        return {"lat": str(lat_value), "lng": str(lng_value), "radius": str(radius)}

    def _require_number(self, value: Any, field: str) -> float:
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise ValidationError(f"{field} must be a number.")
        try:
            number = float(value)
        except OverflowError as exc:
            raise ValidationError(f"{field} must be a finite number.") from exc
        if not math.isfinite(number):
            raise ValidationError(f"{field} must be a finite number.")
        return number

    def _build_url(self, path: str) -> str:
        if self._base_url is None:
            raise ValidationError("base_url is required to build API requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{self._api_uri}{normalized_path}"

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._build_url(path)
        session = self._ensure_session()
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        for attempt in range(attempts):
            try:
                async with session.request(
                    method,
                    url,
                    headers=DEFAULT_HEADERS,
                    timeout=self._timeout,
                    **kwargs,
                ) as response:
                    if response.status == 429:
                        await self._handle_rate_limit(response, method, attempt, attempts)
                        continue
                    self._raise_for_status(response)
                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as exc:
                        raise ApiError("Response did not contain valid JSON.") from exc
            except (aiohttp.ClientError, TimeoutError) as exc:
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
                _LOGGER.debug("Retrying %s %s after %s", method, url, exc.__class__.__name__)
        raise NetworkError("Network request failed.")

    async def _handle_rate_limit(
        self,
        response: aiohttp.ClientResponse,
        method: str,
        attempt: int,
        attempts: int,
    ) -> None:
        if method.upper() != "GET" or attempt >= attempts - 1:
            raise RateLimitError("Parking-lot API rate limit exceeded.")
        retry_after = response.headers.get(RETRY_AFTER_HEADER)
        if retry_after:
            try:
                delay = int(retry_after)
            except ValueError:
                delay = 0
            if delay > 0:
                await asyncio.sleep(delay)

    def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        if response.status == 404:
            raise NotFoundError("Parking lot not found.")
        if response.status == 400:
            raise ValidationError("Parking-lot API rejected the request parameters.")
        raise ApiError(f"Parking-lot API request failed with status {response.status}.")

    def _normalize_base_url(self, base_url: str | None) -> str | None:
        if base_url is None:
            return None
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValidationError("base_url must be a non-empty string.")
        return base_url.strip().rstrip("/")

    def _normalize_api_uri(self, api_uri: str | None) -> str:
        if api_uri is None:
            return ""
        if not isinstance(api_uri, str):
            raise ValidationError("api_uri must be a string.")
        normalized = api_uri.strip().strip("/")
        if not normalized:
            return ""
        return f"/{normalized}"

    def _map_lot_list(self, data: Any) -> list[ParkingLot]:
        if not isinstance(data, list):
            raise ApiError("Parking lot list must be a JSON array.")
        return [self._map_lot(item) for item in data]

    def _map_lot(self, data: Any) -> ParkingLot:
        if not isinstance(data, Mapping):
            raise ApiError("Parking lot payload must be a JSON object.")
        latitude, longitude = self._map_coordinates(data)
        rules = data.get("pricing_rules")
        strategy = data.get("pricing_strategy")
        notes = data.get("notes")
        return ParkingLot(
            id=self._coerce_id(data.get("_id", data.get("id"))),
            street_name=self._coerce_text(data.get("street_name")),
            address=self._coerce_text(data.get("address")),
            latitude=latitude,
            longitude=longitude,
            operating_hours=self._coerce_text(data.get("operating_hours"))
            or DEFAULT_OPERATING_HOURS,
            total_spots=self._parse_int(data.get("total_spots")),
            ownership_type=self._coerce_text(data.get("ownership_type")) or DEFAULT_OWNERSHIP_TYPE,
            pricing_strategy=strategy
            if isinstance(strategy, str) and strategy
            else PricingStrategy.HOURLY_BLOCKS.value,
            pricing_rules=tuple(rule for rule in rules if isinstance(rule, Mapping))
            if isinstance(rules, list)
            else (),
            notes=notes if isinstance(notes, str) else None,
        )

    def _map_coordinates(self, data: Mapping[str, Any]) -> tuple[float | None, float | None]:
        # GeoJSON points store [longitude, latitude].
        location = data.get("location")
        if isinstance(location, Mapping):
            coordinates = location.get("coordinates")
            if isinstance(coordinates, list) and len(coordinates) == 2:
                longitude = self._parse_float(coordinates[0])
                latitude = self._parse_float(coordinates[1])
                if latitude is not None and longitude is not None:
                    return latitude, longitude
        return self._parse_float(data.get("latitude")), self._parse_float(data.get("longitude"))

    def _coerce_id(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, Mapping) and "$oid" in value:
            return str(value["$oid"])
        return str(value)

    def _coerce_text(self, value: Any) -> str:
        if not isinstance(value, str):
            return ""
        return value.strip()

    def _parse_float(self, value: Any) -> float | None:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return None
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None

    def _parse_int(self, value: Any) -> int:
        if value is None or isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value
        if isinstance(value, float) and math.isfinite(value):
            return int(value)
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return 0
            try:
                return int(stripped)
            except ValueError:
                return 0
        return 0
