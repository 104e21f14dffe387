"""Targeting area computation for geotargeting.

Polygon areas use the shoelace formula directly on (lat, lng) degrees scaled
by a constant km-per-degree factor. Precision degrades for polygons spanning
more than roughly 100 km and for rings crossing the equator or antimeridian.
City and state lists use fixed per-item stand-in areas, not boundary data.
"""

from __future__ import annotations

import math
from typing import Sequence

from config.defaults import CITY_AREA_KM2, KM_PER_DEGREE, STATE_AREA_KM2
from geotargeting.models.targeting import (
    CityListShape,
    Coordinate,
    PolygonShape,
    RadiusShape,
    StateListShape,
    TargetingShape,
    unsupported_shape,
)


def circle_area_km2(radius_km: float) -> float:
    """Area of a circle of the given radius, in km²."""
    return math.pi * radius_km * radius_km


def polygon_area_km2(vertices: Sequence[Coordinate]) -> float:
    """Planar shoelace area of a simple polygon, in km².

    Winding order does not matter. Fewer than 3 vertices yields 0.0.
    """
    n = len(vertices)
    if n < 3:
        return 0.0

    twice_area = 0.0
    for i in range(n):
        j = (i + 1) % n
        twice_area += vertices[i].latitude * vertices[j].longitude
        twice_area -= vertices[j].latitude * vertices[i].longitude

    return abs(twice_area) * 0.5 * KM_PER_DEGREE * KM_PER_DEGREE


def shape_area_km2(shape: TargetingShape) -> float:
    """Covered area for any targeting shape, in km²."""
    if isinstance(shape, RadiusShape):
        return circle_area_km2(shape.radius_km)
    if isinstance(shape, PolygonShape):
        return polygon_area_km2(shape.vertices)
    if isinstance(shape, CityListShape):
        return len(shape.cities) * CITY_AREA_KM2
    if isinstance(shape, StateListShape):
        return len(shape.states) * STATE_AREA_KM2
    unsupported_shape(shape)
