"""geotargeting utilities package.

Stateless helpers: geographic math, boundary validation, regional reference
tables and logging setup.
"""

from geotargeting.utils.geo_utils import (
    distance_km,
    format_coordinates,
    haversine_km,
    is_valid_coordinate,
    to_degrees,
    to_radians,
)
from geotargeting.utils.regions import list_states, search_cities, state_code_for
from geotargeting.utils.validation import (
    InvalidCoordinateError,
    InvalidShapeError,
    validate_coordinate,
    validate_shape,
)

__all__ = [
    "distance_km",
    "format_coordinates",
    "haversine_km",
    "is_valid_coordinate",
    "to_degrees",
    "to_radians",
    "list_states",
    "search_cities",
    "state_code_for",
    "InvalidCoordinateError",
    "InvalidShapeError",
    "validate_coordinate",
    "validate_shape",
]
