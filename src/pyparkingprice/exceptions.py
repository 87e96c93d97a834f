"""Library exceptions."""


class PyParkingPriceError(Exception):
    """Base exception for the library."""


class ValidationError(PyParkingPriceError):
    """Raised when inputs fail validation."""


class NetworkError(PyParkingPriceError):
    """Raised when network communication fails."""


class ApiError(PyParkingPriceError):
    """Raised when the parking-lot API returns an error or an unexpected payload."""


class NotFoundError(ApiError):
    """Raised when a parking lot does not exist."""


class RateLimitError(ApiError):
    """Raised when the parking-lot API keeps rejecting requests as rate limited."""
