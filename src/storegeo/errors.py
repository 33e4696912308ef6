"""Error types raised by the location services."""

from __future__ import annotations


class StoreGeoError(Exception):
    """Base class for every error raised by this package."""

    default_message = "Store location operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class LocationError(StoreGeoError):
    """Device location could not be determined."""

    default_message = "Unable to retrieve your location"


class PermissionDenied(LocationError):
    default_message = "Location permission denied. Please enable location access in your browser settings."


class PositionUnavailable(LocationError):
    default_message = "Location information is unavailable."


class LocationTimeout(LocationError):
    default_message = "Location request timed out."


class LocationUnsupported(LocationError):
    default_message = "Geolocation is not supported by your browser"


class GeocodingFailed(StoreGeoError):
    """Reverse geocoding could not produce an address.

    The underlying cause is available both as ``__cause__`` and ``cause``.
    """

    default_message = "Failed to get address from location"

    def __init__(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidCoordinate(StoreGeoError, ValueError):
    default_message = "Coordinate is out of range"


class ResolutionFailed(StoreGeoError):
    """The batched store location lookup failed as a whole."""

    default_message = "Failed to resolve store locations"

    def __init__(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StoreNotFound(StoreGeoError):
    """No store with the given id is owned by the caller."""

    default_message = "Store not found"


class NotAuthenticated(StoreGeoError):
    default_message = "Sign in to continue"
