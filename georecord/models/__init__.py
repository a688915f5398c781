# =============================================================================
# Data Models
# =============================================================================
# Geometry values, property values and features.
# =============================================================================

"""
Data models for georecord.

This package provides:
- Geometry value model: Point, LineString, Polygon, Multi*, GeometryCollection
- Property values: the closed PropertyValue union and its normalization
- Feature: geometry plus ordered properties
"""

from .geometry import (
    GEOMETRY_TYPES,
    Coord,
    Geometry,
    GeometryCollection,
    GeometryKind,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    check_line_string,
    check_ring,
    coord_dimension,
    iter_coords,
)
from .properties import (
    PropertyKind,
    PropertyValue,
    is_integral,
    normalize_property_value,
    property_kind,
)
from .feature import Feature

__all__ = [
    # Geometry
    "GEOMETRY_TYPES",
    "Coord",
    "Geometry",
    "GeometryCollection",
    "GeometryKind",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "check_line_string",
    "check_ring",
    "coord_dimension",
    "iter_coords",
    # Properties
    "PropertyKind",
    "PropertyValue",
    "is_integral",
    "normalize_property_value",
    "property_kind",
    # Feature
    "Feature",
]
