"""Geographic utility functions for geotargeting.

Pure geographic computations — no I/O, no external calls. Functions taking a
Coordinate assume it was validated at the input boundary.
"""

from __future__ import annotations

import math
from typing import Tuple

from config.defaults import EARTH_RADIUS_KM
from geotargeting.models.targeting import Coordinate


def to_radians(degrees: float) -> float:
    """Convert decimal degrees to radians."""
    return degrees * (math.pi / 180.0)


def to_degrees(radians: float) -> float:
    """Convert radians to decimal degrees."""
    return radians * (180.0 / math.pi)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great-circle distance between two points using the Haversine formula.

    Args:
        lat1: Latitude of first point in decimal degrees.
        lon1: Longitude of first point in decimal degrees.
        lat2: Latitude of second point in decimal degrees.
        lon2: Longitude of second point in decimal degrees.

    Returns:
        Distance in kilometres.
    """
    phi1 = to_radians(lat1)
    phi2 = to_radians(lat2)
    d_phi = to_radians(lat2 - lat1)
    d_lambda = to_radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # Rounding can push a fractionally above 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in kilometres.

    Symmetric, and exactly 0.0 for identical points.
    """
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def is_valid_coordinate(coordinate: Coordinate) -> bool:
    """Return True if latitude is in [-90, 90] and longitude in [-180, 180].

    NaN and infinite values are invalid. Non-numeric fields are invalid.
    """
    lat = coordinate.latitude
    lng = coordinate.longitude
    if isinstance(lat, bool) or isinstance(lng, bool):
        return False
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        return False
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def format_coordinates(coordinate: Coordinate) -> str:
    """Format a coordinate for display as ``"lat, lng"`` with six decimals."""
    return f"{coordinate.latitude:.6f}, {coordinate.longitude:.6f}"


def bbox_contains(lat: float, lon: float, bbox: Tuple[float, float, float, float]) -> bool:
    """Check whether a point falls within a bounding box.

    Args:
        lat: Point latitude.
        lon: Point longitude.
        bbox: (min_lat, min_lon, max_lat, max_lon) bounding box.

    Returns:
        True if the point is within the bounding box (inclusive).
    """
    min_lat, min_lon, max_lat, max_lon = bbox
    return min_lat <= lat <= max_lat and min_lon <= lon <= max_lon
