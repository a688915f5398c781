"""
Shared pytest fixtures for georecord tests.

Provides reusable geometries, features, record types and schemas.
"""

from typing import Optional

import pytest
from pydantic import BaseModel, Field

from georecord import (
    CodecSettings,
    Feature,
    FieldKind,
    FieldSpec,
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    RecordSchema,
)


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def settings(monkeypatch):
    """Codec settings isolated from the host environment."""
    for var in (
        "GEORECORD_GEOMETRY_FIELD",
        "GEORECORD_DEFAULT_DIMENSION",
        "GEORECORD_WARN_ON_DUPLICATE_PROPERTIES",
    ):
        monkeypatch.delenv(var, raising=False)
    return CodecSettings(_env_file=None)


# =============================================================================
# Geometry Fixtures
# =============================================================================

@pytest.fixture
def square_ring():
    """Closed unit square ring."""
    return [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0)]


@pytest.fixture
def hole_ring():
    """Closed ring inside the unit square."""
    return [(0.2, 0.2), (0.4, 0.2), (0.4, 0.4), (0.2, 0.2)]


@pytest.fixture
def square(square_ring):
    return Polygon(rings=[square_ring])


@pytest.fixture
def all_geometries(square_ring, hole_ring):
    """One geometry of every kind, including empty and nested ones."""
    polygon = Polygon(rings=[square_ring, hole_ring])
    line = LineString(coords=[(0.0, 0.0), (2.0, 1.0), (3.0, 5.0)])
    return [
        Point(coord=(13.4, 52.5)),
        Point(coord=(1.0, 2.0, 3.0)),
        line,
        polygon,
        Polygon(),
        MultiPoint(points=[Point(coord=(0.0, 0.0)), Point(coord=(1.0, 1.0))]),
        MultiPoint(),
        MultiLineString(line_strings=[line, LineString(coords=[(5.0, 5.0), (6.0, 6.0)])]),
        MultiPolygon(polygons=[polygon, Polygon(rings=[square_ring])]),
        GeometryCollection(
            geometries=[
                Point(coord=(9.0, 9.0)),
                line,
                GeometryCollection(geometries=[polygon]),
                GeometryCollection(),
            ]
        ),
        LineString(coords=[(0.0, 0.0, 1.0), (1.0, 1.0, 2.0)]),
    ]


# =============================================================================
# Feature Fixtures
# =============================================================================

@pytest.fixture
def berlin_feature():
    """Feature for Berlin with name and population."""
    return Feature(
        geometry=Point(coord=(13.4, 52.5)),
        properties={"name": "Berlin", "population": 3669495},
    )


# =============================================================================
# Record Fixtures
# =============================================================================

class City(BaseModel):
    geometry: Point
    name: str
    population: int


class Location(BaseModel):
    geometry: Optional[Geometry] = None
    name: str
    value: int


class Titled(BaseModel):
    """Record whose attribute differs from its property name."""
    geometry: Geometry
    title: str = Field(alias="name")
    value: int


@pytest.fixture
def city_schema(settings):
    return RecordSchema.from_type(City, settings=settings)


@pytest.fixture
def location_schema(settings):
    return RecordSchema.from_type(Location, settings=settings)


@pytest.fixture
def titled_schema(settings):
    return RecordSchema.from_type(Titled, settings=settings)


@pytest.fixture
def explicit_schema():
    """Hand-written schema producing plain dict records."""
    return RecordSchema(
        fields=(
            FieldSpec(name="geometry", kind=FieldKind.GEOMETRY),
            FieldSpec(name="name", kind=FieldKind.STRING),
            FieldSpec(name="population", kind=FieldKind.INTEGER),
            FieldSpec(name="area", kind=FieldKind.FLOAT, required=False),
            FieldSpec(name="tags", kind=FieldKind.ARRAY, required=False, default=[]),
        )
    )
