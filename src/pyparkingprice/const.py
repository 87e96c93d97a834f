"""Constants for pricing defaults and the parking-lot API."""

RULE_TYPE_STANDARD = "standard"
RULE_TYPE_SPECIAL = "special"

DEFAULT_FIRST_BLOCK_DURATION = 60
DEFAULT_FIRST_BLOCK_PRICE = 0.0
DEFAULT_ADDITIONAL_BLOCK_PRICE = 0.0
HOURLY_ADDITIONAL_BLOCK_DURATION = 60
MINUTE_ADDITIONAL_BLOCK_DURATION = 15

PROGRESSIVE_DEFAULT_FIRST_HOUR_PRICE = 10.0
PROGRESSIVE_HOURLY_STEP = 0.1
PROGRESSIVE_MIN_FACTOR = 0.5

MINIMUM_DURATION_MINUTES = 1

DEFAULT_API_URI = "/api"
PARKING_LOTS_ENDPOINT = "/parking-lots"
PARKING_LOT_ENDPOINT = "/parking-lots/{lot_id}"

RETRY_AFTER_HEADER = "Retry-After"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pyparkingprice",
}

DEFAULT_OPERATING_HOURS = "24/7"
DEFAULT_OWNERSHIP_TYPE = "Public"
OWNERSHIP_ALL = "All"
PRICE_UNLIMITED = "Unlimited"
