"""Campaign targeting record adapter for geotargeting.

Converts a stored campaign targeting row into a TargetingShape and the
centre used by the density heuristic. Field names follow the campaign
table: location_type, radius_km, center_latitude, center_longitude,
polygon_coordinates, cities, states. No persistence happens here.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

from geotargeting.models.targeting import (
    CityListShape,
    Coordinate,
    PolygonShape,
    RadiusShape,
    StateListShape,
    TargetingShape,
)
from geotargeting.utils.validation import (
    InvalidCoordinateError,
    InvalidShapeError,
    validate_coordinate,
    validate_shape,
)

logger = logging.getLogger(__name__)

LOCATION_RADIUS = "radius"
LOCATION_POLYGON = "polygon"
LOCATION_CITY = "city"
LOCATION_STATE = "state"


def _to_float(value: Any, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidShapeError(f"{field_name} must be numeric, got {value!r}") from None


def _vertex(raw: Any) -> Coordinate:
    """Accept a [lat, lng] pair or a {"lat": .., "lng": ..} mapping."""
    if isinstance(raw, Mapping):
        lat = raw.get("lat", raw.get("latitude"))
        lng = raw.get("lng", raw.get("lon", raw.get("longitude")))
    elif isinstance(raw, Sequence) and not isinstance(raw, str) and len(raw) == 2:
        lat, lng = raw
    else:
        raise InvalidShapeError(f"Unrecognized polygon vertex: {raw!r}")
    try:
        return Coordinate(float(lat), float(lng))
    except (TypeError, ValueError):
        raise InvalidCoordinateError(f"Non-numeric polygon vertex: {raw!r}") from None


def _record_center(record: Mapping[str, Any]) -> Optional[Coordinate]:
    lat = record.get("center_latitude")
    lng = record.get("center_longitude")
    if lat is None or lng is None:
        return None
    center = Coordinate(_to_float(lat, "center_latitude"), _to_float(lng, "center_longitude"))
    return validate_coordinate(center)


def polygon_centroid(vertices: Sequence[Coordinate]) -> Optional[Coordinate]:
    """Arithmetic mean of the vertices, ignoring a repeated closing vertex."""
    points = list(vertices)
    if len(points) > 1 and points[0] == points[-1]:
        points = points[:-1]
    if not points:
        return None
    return Coordinate(
        sum(p.latitude for p in points) / len(points),
        sum(p.longitude for p in points) / len(points),
    )


def shape_from_record(
    record: Mapping[str, Any],
) -> Tuple[TargetingShape, Optional[Coordinate]]:
    """Build a validated targeting shape and density centre from a campaign row.

    Args:
        record: Campaign targeting fields.

    Returns:
        (shape, center). Radius rows use their centre; polygon rows use the
        stored centre if present, otherwise the vertex centroid; list rows
        have no centre unless one is stored.

    Raises:
        InvalidShapeError: Unknown location type or missing / malformed fields.
        InvalidCoordinateError: Out-of-range centre or vertex.
    """
    location_type = str(record.get("location_type") or "").strip().lower()

    if location_type == LOCATION_RADIUS:
        if record.get("radius_km") is None:
            raise InvalidShapeError("Radius targeting requires radius_km")
        center = _record_center(record)
        if center is None:
            raise InvalidShapeError("Radius targeting requires center_latitude/center_longitude")
        shape: TargetingShape = RadiusShape(
            center=center, radius_km=_to_float(record["radius_km"], "radius_km")
        )
        return validate_shape(shape), center

    if location_type == LOCATION_POLYGON:
        raw_vertices = record.get("polygon_coordinates") or []
        if isinstance(raw_vertices, (str, bytes)) or not isinstance(raw_vertices, Sequence):
            raise InvalidShapeError("polygon_coordinates must be a list of vertices")
        shape = PolygonShape(vertices=tuple(_vertex(v) for v in raw_vertices))
        validate_shape(shape)
        center = _record_center(record) or polygon_centroid(shape.vertices)
        return shape, center

    if location_type == LOCATION_CITY:
        shape = CityListShape(cities=frozenset(c.strip() for c in record.get("cities") or []))
        return validate_shape(shape), _record_center(record)

    if location_type == LOCATION_STATE:
        shape = StateListShape(
            states=frozenset(s.strip().upper() for s in record.get("states") or [])
        )
        return validate_shape(shape), _record_center(record)

    logger.debug("Rejecting targeting record with location_type=%r", location_type)
    raise InvalidShapeError(f"Unknown location_type: {location_type or '<missing>'!r}")
