"""Input boundary validation for geotargeting.

Geometry and estimation functions assume validated input and never re-check.
Callers validate once, here, and get a ValueError subclass on bad input.
"""

from __future__ import annotations

import math

from geotargeting.models.targeting import (
    CityListShape,
    Coordinate,
    PolygonShape,
    RadiusShape,
    StateListShape,
    TargetingShape,
)
from geotargeting.utils.geo_utils import is_valid_coordinate


class InvalidCoordinateError(ValueError):
    """Latitude/longitude out of range or not finite."""


class InvalidShapeError(ValueError):
    """Targeting shape that cannot describe an area."""


def validate_coordinate(coordinate: Coordinate) -> Coordinate:
    """Return the coordinate unchanged, or raise InvalidCoordinateError."""
    if not isinstance(coordinate, Coordinate):
        raise InvalidCoordinateError(f"Expected Coordinate, got {type(coordinate).__name__}")
    if not is_valid_coordinate(coordinate):
        raise InvalidCoordinateError(
            f"Invalid coordinate ({coordinate.latitude!r}, {coordinate.longitude!r}); "
            "latitude must be in [-90, 90] and longitude in [-180, 180]"
        )
    return coordinate


def validate_shape(shape: TargetingShape) -> TargetingShape:
    """Return the shape unchanged, or raise InvalidShapeError / InvalidCoordinateError.

    Rules:
        - RadiusShape: valid centre, finite radius > 0.
        - PolygonShape: at least 3 vertices, all valid.
        - CityListShape / StateListShape: at least one non-blank entry.
    """
    if isinstance(shape, RadiusShape):
        validate_coordinate(shape.center)
        radius = shape.radius_km
        if isinstance(radius, bool) or not isinstance(radius, (int, float)):
            raise InvalidShapeError(f"radius_km must be a number, got {radius!r}")
        if not math.isfinite(radius) or radius <= 0:
            raise InvalidShapeError(f"radius_km must be a finite value > 0, got {radius!r}")
        return shape

    if isinstance(shape, PolygonShape):
        if len(shape.vertices) < 3:
            raise InvalidShapeError(
                f"Polygon needs at least 3 vertices, got {len(shape.vertices)}"
            )
        for vertex in shape.vertices:
            validate_coordinate(vertex)
        return shape

    if isinstance(shape, CityListShape):
        if not any(city.strip() for city in shape.cities):
            raise InvalidShapeError("City list targeting needs at least one city")
        return shape

    if isinstance(shape, StateListShape):
        if not any(state.strip() for state in shape.states):
            raise InvalidShapeError("State list targeting needs at least one state")
        return shape

    raise InvalidShapeError(f"Unrecognized targeting shape: {type(shape).__name__}")
