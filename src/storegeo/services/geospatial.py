"""Geospatial helper functions."""

from __future__ import annotations

import math

from ..errors import InvalidCoordinate
from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # rounding can push antipodal points just past 1
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def validate_coordinate(latitude: float, longitude: float) -> Coordinate:
    """Build a Coordinate, rejecting non-finite or out-of-range values."""

    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinate(f"Coordinate is not numeric: ({latitude!r}, {longitude!r})") from exc
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinate(f"Coordinate is not finite: ({lat}, {lon})")
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinate(f"Latitude {lat} outside [-90, 90]")
    if not -180.0 <= lon <= 180.0:
        raise InvalidCoordinate(f"Longitude {lon} outside [-180, 180]")
    return Coordinate(latitude=lat, longitude=lon)


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in kilometres."""

    validate_coordinate(a.latitude, a.longitude)
    validate_coordinate(b.latitude, b.longitude)
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
