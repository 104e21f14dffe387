"""Point containment tests for geotargeting.

Answers "is this vehicle position inside targeting area X?". Radius and
polygon tests are pure and synchronous. City and state lists need the
position's place name, which comes from a reverse lookup through the geocode
gateway; those variants perform I/O.

Polygon containment treats (latitude, longitude) as a flat plane. This is
adequate at city and regional scale and is not valid near the poles or across
the antimeridian.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from geotargeting.models.targeting import (
    CityListShape,
    Coordinate,
    PolygonShape,
    RadiusShape,
    StateListShape,
    TargetingShape,
    unsupported_shape,
)
from geotargeting.utils.geo_utils import distance_km
from geotargeting.utils.regions import state_code_for

if TYPE_CHECKING:
    from geotargeting.geocode_gateway import GeocodeGateway

logger = logging.getLogger(__name__)


def point_in_radius(point: Coordinate, center: Coordinate, radius_km: float) -> bool:
    """Return True if point lies within radius_km of center (boundary inclusive)."""
    return distance_km(point, center) <= radius_km


def point_in_polygon(point: Coordinate, vertices: Sequence[Coordinate]) -> bool:
    """Ray-casting containment test over (lat, lng) treated as a 2D plane.

    The ring is implicitly closed; a repeated closing vertex adds a
    zero-length edge that never counts as a crossing. Points exactly on an
    edge or vertex get a deterministic answer decided by the strict
    comparisons below; no inside/outside convention is promised for them.

    Args:
        point: Position to test.
        vertices: Ordered polygon vertices.

    Returns:
        True if the point is inside. Always False for fewer than 3 vertices.
    """
    n = len(vertices)
    if n < 3:
        return False

    x = point.latitude
    y = point.longitude
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = vertices[i].latitude, vertices[i].longitude
        xj, yj = vertices[j].latitude, vertices[j].longitude
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def _resolve_place(point: Coordinate, gateway: Optional["GeocodeGateway"]):
    if gateway is None:
        logger.warning("List-based containment needs a geocode gateway; treating point as outside")
        return None
    result = gateway.reverse_geocode(point)
    if not result.found:
        logger.info(
            "Reverse lookup for (%.5f, %.5f) returned %s; treating point as outside",
            point.latitude, point.longitude, result.status,
        )
        return None
    return result.address


def point_in_shape(
    point: Coordinate,
    shape: TargetingShape,
    gateway: Optional["GeocodeGateway"] = None,
) -> bool:
    """Dispatch a containment test on the shape variant.

    Args:
        point: Vehicle position (already validated).
        shape: Targeting shape (already validated).
        gateway: Reverse geocoder; required only for city and state lists.

    Returns:
        True if the point is inside the shape. List-based shapes return False
        when the position cannot be resolved to a place.
    """
    if isinstance(shape, RadiusShape):
        return point_in_radius(point, shape.center, shape.radius_km)

    if isinstance(shape, PolygonShape):
        return point_in_polygon(point, shape.vertices)

    if isinstance(shape, CityListShape):
        address = _resolve_place(point, gateway)
        if address is None:
            return False
        return address.city_key() in shape.cities

    if isinstance(shape, StateListShape):
        address = _resolve_place(point, gateway)
        if address is None:
            return False
        code = address.state_code or state_code_for(address.state)
        targeted = {state_code_for(s) or s for s in shape.states}
        return code in targeted

    unsupported_shape(shape)


def points_in_shape(
    points: Iterable[Coordinate],
    shape: TargetingShape,
    gateway: Optional["GeocodeGateway"] = None,
) -> List[bool]:
    """Evaluate point_in_shape for a batch of positions against one shape."""
    return [point_in_shape(p, shape, gateway) for p in points]
