"""
Unit tests for the geometry value model.

Tests construction, validation, discriminated parsing and traversal helpers.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from georecord import (
    Geometry,
    GeometryCollection,
    GeometryKind,
    InconsistentDimension,
    LineString,
    MalformedLineString,
    MalformedRing,
    MultiPoint,
    Point,
    Polygon,
)
from georecord.models import check_line_string, check_ring, coord_dimension, iter_coords


# =============================================================================
# Construction Tests
# =============================================================================


class TestGeometryConstruction:
    """Test geometry model construction and validation."""

    def test_point_coordinates(self):
        """Test that a point keeps its coordinate as a float tuple."""
        point = Point(coord=(13.4, 52.5))
        assert point.coord == (13.4, 52.5)
        assert point.kind is GeometryKind.POINT

    def test_point_rejects_wrong_component_count(self):
        """Test that coordinates must have 2 or 3 components."""
        with pytest.raises(ValidationError, match="2 or 3 components"):
            Point(coord=(1.0,))
        with pytest.raises(ValidationError, match="2 or 3 components"):
            Point(coord=(1.0, 2.0, 3.0, 4.0))

    def test_line_string_requires_two_points(self):
        """Test that a one-point LineString is rejected."""
        with pytest.raises(ValidationError, match="at least 2"):
            LineString(coords=[(0.0, 0.0)])

    def test_polygon_with_hole(self, square_ring, hole_ring):
        """Test that exterior and interior rings are exposed."""
        polygon = Polygon(rings=[square_ring, hole_ring])
        assert polygon.exterior == tuple(square_ring)
        assert polygon.interiors == (tuple(hole_ring),)

    def test_polygon_rejects_open_ring(self):
        """Test that an unclosed ring is rejected at construction."""
        with pytest.raises(ValidationError, match="not closed"):
            Polygon(rings=[[(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]])

    def test_empty_polygon_allowed(self):
        """Test that a polygon without rings is an empty polygon."""
        polygon = Polygon()
        assert polygon.rings == ()
        assert polygon.exterior is None

    def test_geometries_are_immutable(self):
        """Test that geometry models are frozen."""
        point = Point(coord=(1.0, 2.0))
        with pytest.raises(ValidationError):
            point.coord = (3.0, 4.0)

    def test_structural_equality(self, square_ring):
        """Test that equal structures compare equal."""
        assert Polygon(rings=[square_ring]) == Polygon(rings=[list(square_ring)])
        assert MultiPoint() == MultiPoint(points=[])
        assert Point(coord=(1.0, 2.0)) != Point(coord=(2.0, 1.0))


# =============================================================================
# Discriminated Union Tests
# =============================================================================


class TestGeometryUnion:
    """Test parsing of the Geometry union from plain data."""

    def test_parses_by_type_tag(self):
        """Test that the type field selects the geometry model."""
        adapter = TypeAdapter(Geometry)
        geometry = adapter.validate_python(
            {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Point", "coord": [1, 2]},
                    {"type": "LineString", "coords": [[0, 0], [1, 1]]},
                ],
            }
        )
        assert isinstance(geometry, GeometryCollection)
        assert geometry.geometries[0] == Point(coord=(1.0, 2.0))
        assert isinstance(geometry.geometries[1], LineString)

    def test_unknown_type_tag_rejected(self):
        """Test that an unknown type tag fails validation."""
        with pytest.raises(ValidationError):
            TypeAdapter(Geometry).validate_python({"type": "CircularString", "coords": []})


# =============================================================================
# Helper Tests
# =============================================================================


class TestGeometryHelpers:
    """Test ring checks, coordinate iteration and dimension derivation."""

    def test_check_ring_too_short(self):
        """Test that a 3-point ring is malformed."""
        with pytest.raises(MalformedRing, match="3 coordinates"):
            check_ring([(0.0, 0.0), (1.0, 0.0), (0.0, 0.0)])

    def test_check_ring_not_closed(self):
        """Test that a 4-point ring with first != last is malformed."""
        with pytest.raises(MalformedRing, match="not closed"):
            check_ring([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])

    def test_check_line_string(self):
        """Test that line strings need 2 coordinates."""
        check_line_string([(0.0, 0.0), (1.0, 1.0)])
        with pytest.raises(MalformedLineString):
            check_line_string([])

    def test_iter_coords_depth_first(self, square_ring):
        """Test that coordinates are yielded in traversal order."""
        collection = GeometryCollection(
            geometries=[Point(coord=(9.0, 9.0)), Polygon(rings=[square_ring])]
        )
        assert list(iter_coords(collection)) == [(9.0, 9.0)] + square_ring

    def test_coord_dimension(self):
        """Test dimension derivation for 2D, 3D and empty geometries."""
        assert coord_dimension(Point(coord=(1.0, 2.0))) == 2
        assert coord_dimension(Point(coord=(1.0, 2.0, 3.0))) == 3
        assert coord_dimension(MultiPoint()) is None

    def test_coord_dimension_mixed(self):
        """Test that mixing 2D and 3D coordinates is detected."""
        line = LineString(coords=[(0.0, 0.0), (1.0, 1.0, 1.0)])
        with pytest.raises(InconsistentDimension):
            coord_dimension(line)
