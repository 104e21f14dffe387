"""Targeting geometry data models for geotargeting.

Defines the Coordinate value type and the closed set of targeting shapes.
A targeting configuration holds exactly one shape; consumers dispatch on the
concrete shape class and treat anything else as a programming error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, NoReturn, Tuple, Union


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point in decimal degrees.

    Range and finiteness are checked at input boundaries via
    utils.validation.validate_coordinate, not on construction.
    """

    latitude: float
    longitude: float

    def as_tuple(self) -> Tuple[float, float]:
        """Return the (latitude, longitude) pair."""
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class RadiusShape:
    """Circular targeting area around a centre point."""

    center: Coordinate
    radius_km: float


@dataclass(frozen=True)
class PolygonShape:
    """Drawn targeting area.

    Vertices are ordered; the ring is implicitly closed (the last vertex
    connects to the first). A repeated closing vertex is tolerated.
    """

    vertices: Tuple[Coordinate, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", tuple(self.vertices))


@dataclass(frozen=True)
class CityListShape:
    """Targeting by named cities, each written as "City, StateCode"."""

    cities: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cities", frozenset(self.cities))


@dataclass(frozen=True)
class StateListShape:
    """Targeting by state codes (e.g. "SP", "RJ")."""

    states: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "states", frozenset(self.states))


TargetingShape = Union[RadiusShape, PolygonShape, CityListShape, StateListShape]

SHAPE_TYPES = (RadiusShape, PolygonShape, CityListShape, StateListShape)


def unsupported_shape(shape: object) -> NoReturn:
    """Raise for an object outside the closed TargetingShape union.

    Every shape dispatch ends with this call so a new shape kind fails loudly
    until each consumer handles it.
    """
    raise TypeError(f"Unsupported targeting shape: {type(shape).__name__}")


def polygon_from_pairs(pairs: Iterable[Tuple[float, float]]) -> PolygonShape:
    """Build a PolygonShape from (latitude, longitude) pairs."""
    return PolygonShape(vertices=tuple(Coordinate(float(lat), float(lng)) for lat, lng in pairs))
