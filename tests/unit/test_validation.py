"""Unit tests for geotargeting.utils.validation and the targeting models."""

from __future__ import annotations

import pytest

from geotargeting.models.targeting import (
    CityListShape,
    Coordinate,
    PolygonShape,
    RadiusShape,
    StateListShape,
    polygon_from_pairs,
)
from geotargeting.utils.validation import (
    InvalidCoordinateError,
    InvalidShapeError,
    validate_coordinate,
    validate_shape,
)


class TestValidateCoordinate:
    def test_valid_coordinate_is_returned(self, sao_paulo):
        assert validate_coordinate(sao_paulo) is sao_paulo

    @pytest.mark.parametrize("lat,lng", [
        (91.0, 0.0), (0.0, -180.01), (float("nan"), 0.0), (0.0, float("inf")),
    ])
    def test_invalid_raises(self, lat, lng):
        with pytest.raises(InvalidCoordinateError):
            validate_coordinate(Coordinate(lat, lng))

    def test_wrong_type_raises(self):
        with pytest.raises(InvalidCoordinateError, match="Expected Coordinate"):
            validate_coordinate((-23.5, -46.6))

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            validate_coordinate(Coordinate(100.0, 0.0))


class TestValidateShape:
    def test_valid_radius(self, campinas_radius):
        assert validate_shape(campinas_radius) is campinas_radius

    @pytest.mark.parametrize("radius", [0, -1.0, float("nan"), float("inf"), "5", True])
    def test_bad_radius(self, sao_paulo, radius):
        with pytest.raises(InvalidShapeError):
            validate_shape(RadiusShape(center=sao_paulo, radius_km=radius))

    def test_radius_with_bad_center(self):
        with pytest.raises(InvalidCoordinateError):
            validate_shape(RadiusShape(center=Coordinate(0.0, 200.0), radius_km=1.0))

    def test_polygon_needs_three_vertices(self):
        with pytest.raises(InvalidShapeError, match="at least 3"):
            validate_shape(PolygonShape(vertices=(Coordinate(0, 0), Coordinate(1, 1))))

    def test_polygon_with_bad_vertex(self):
        shape = polygon_from_pairs([(0, 0), (0, 1), (95, 1)])
        with pytest.raises(InvalidCoordinateError):
            validate_shape(shape)

    def test_empty_lists_are_rejected(self):
        with pytest.raises(InvalidShapeError):
            validate_shape(CityListShape(cities=set()))
        with pytest.raises(InvalidShapeError):
            validate_shape(StateListShape(states={"  "}))

    def test_non_empty_lists_are_accepted(self):
        validate_shape(CityListShape(cities={"Campinas, SP"}))
        validate_shape(StateListShape(states={"SP"}))

    def test_unknown_shape(self):
        with pytest.raises(InvalidShapeError, match="Unrecognized"):
            validate_shape({"type": "circle"})


class TestTargetingModels:
    def test_shapes_are_hashable_and_comparable(self, sao_paulo):
        a = RadiusShape(center=sao_paulo, radius_km=5.0)
        b = RadiusShape(center=Coordinate(-23.5505, -46.6333), radius_km=5.0)
        assert a == b
        assert hash(a) == hash(b)

    def test_polygon_vertices_become_tuple(self):
        shape = PolygonShape(vertices=[Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 1)])
        assert isinstance(shape.vertices, tuple)

    def test_lists_become_frozensets(self):
        assert CityListShape(cities=["A, SP", "A, SP"]).cities == frozenset({"A, SP"})
        assert isinstance(StateListShape(states=["SP"]).states, frozenset)

    def test_polygon_from_pairs(self):
        shape = polygon_from_pairs([("-23.5", "-46.6"), (-23.6, -46.7), (-23.4, -46.8)])
        assert shape.vertices[0] == Coordinate(-23.5, -46.6)
        assert len(shape.vertices) == 3

    def test_coordinate_as_tuple(self, sao_paulo):
        assert sao_paulo.as_tuple() == (-23.5505, -46.6333)
