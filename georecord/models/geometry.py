# =============================================================================
# Geometry Value Model
# =============================================================================
# Immutable tagged representation of the seven geometry kinds:
# - Point, LineString, Polygon
# - MultiPoint, MultiLineString, MultiPolygon
# - GeometryCollection
# The "type" literal discriminates the Geometry union.
# =============================================================================

from enum import Enum
from typing import Annotated, Iterator, Literal, Optional, Sequence, Tuple, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from ..errors import GeometryError, InconsistentDimension, MalformedLineString, MalformedRing

__all__ = [
    "GeometryKind",
    "Coord",
    "Point",
    "LineString",
    "Polygon",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
    "GeometryCollection",
    "Geometry",
    "GEOMETRY_TYPES",
    "iter_coords",
    "coord_dimension",
    "check_ring",
    "check_line_string",
]


# =============================================================================
# Enums
# =============================================================================

class GeometryKind(str, Enum):
    """The fixed set of geometry kinds."""
    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"
    MULTI_POINT = "MultiPoint"
    MULTI_LINE_STRING = "MultiLineString"
    MULTI_POLYGON = "MultiPolygon"
    GEOMETRY_COLLECTION = "GeometryCollection"


# =============================================================================
# Coordinates
# =============================================================================

def _validate_coord(value: Tuple[float, ...]) -> Tuple[float, ...]:
    if len(value) not in (2, 3):
        raise ValueError(f"Coordinate must have 2 or 3 components, got {len(value)}")
    return value


Coord = Annotated[Tuple[float, ...], AfterValidator(_validate_coord)]
"""An (x, y) or (x, y, z) coordinate tuple."""


def check_ring(ring: Sequence[Sequence[float]], path: Tuple[int, ...] = ()) -> None:
    """
    Validate that a polygon ring is closed and has at least 4 coordinates.

    Args:
        ring: Coordinates of the ring
        path: Part indices locating the ring (for error messages)

    Raises:
        MalformedRing: If the ring is too short or not closed
    """
    if len(ring) < 4:
        raise MalformedRing(f"Ring has {len(ring)} coordinates, at least 4 required", path=path)
    if tuple(ring[0]) != tuple(ring[-1]):
        raise MalformedRing(
            f"Ring is not closed: first {tuple(ring[0])} != last {tuple(ring[-1])}",
            path=path,
        )


def check_line_string(coords: Sequence[Sequence[float]], path: Tuple[int, ...] = ()) -> None:
    """
    Validate that a line string has at least 2 coordinates.

    Raises:
        MalformedLineString: If fewer than 2 coordinates are given
    """
    if len(coords) < 2:
        raise MalformedLineString(
            f"LineString has {len(coords)} coordinates, at least 2 required", path=path
        )


# =============================================================================
# Geometry Models
# =============================================================================

class _GeometryBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def kind(self) -> GeometryKind:
        return GeometryKind(self.type)


class Point(_GeometryBase):
    """A single coordinate."""

    type: Literal["Point"] = "Point"
    coord: Coord


class LineString(_GeometryBase):
    """An ordered sequence of at least 2 coordinates."""

    type: Literal["LineString"] = "LineString"
    coords: Tuple[Coord, ...]

    @field_validator("coords")
    @classmethod
    def validate_coords(cls, v: Tuple[Tuple[float, ...], ...]) -> Tuple[Tuple[float, ...], ...]:
        try:
            check_line_string(v)
        except GeometryError as e:
            raise ValueError(str(e))
        return v


class Polygon(_GeometryBase):
    """
    A polygon made of closed rings.

    The first ring is the exterior, subsequent rings are holes. Every ring
    has at least 4 coordinates and its first coordinate equals its last.
    A polygon without rings is an empty polygon.
    """

    type: Literal["Polygon"] = "Polygon"
    rings: Tuple[Tuple[Coord, ...], ...] = ()

    @field_validator("rings")
    @classmethod
    def validate_rings(cls, v: Tuple[Tuple[Tuple[float, ...], ...], ...]):
        for index, ring in enumerate(v):
            try:
                check_ring(ring, path=(index,))
            except GeometryError as e:
                raise ValueError(str(e))
        return v

    @property
    def exterior(self) -> Optional[Tuple[Tuple[float, ...], ...]]:
        return self.rings[0] if self.rings else None

    @property
    def interiors(self) -> Tuple[Tuple[Tuple[float, ...], ...], ...]:
        return self.rings[1:]


class MultiPoint(_GeometryBase):
    type: Literal["MultiPoint"] = "MultiPoint"
    points: Tuple[Point, ...] = ()


class MultiLineString(_GeometryBase):
    type: Literal["MultiLineString"] = "MultiLineString"
    line_strings: Tuple[LineString, ...] = ()


class MultiPolygon(_GeometryBase):
    type: Literal["MultiPolygon"] = "MultiPolygon"
    polygons: Tuple[Polygon, ...] = ()


class GeometryCollection(_GeometryBase):
    """A heterogeneous, possibly nested, collection of geometries."""

    type: Literal["GeometryCollection"] = "GeometryCollection"
    geometries: Tuple["Geometry", ...] = ()


Geometry = Annotated[
    Union[
        Point,
        LineString,
        Polygon,
        MultiPoint,
        MultiLineString,
        MultiPolygon,
        GeometryCollection,
    ],
    Field(discriminator="type"),
]
"""
Any geometry value.

Examples:
    >>> Point(coord=(13.4, 52.5))
    >>> LineString(coords=[(0, 0), (1, 1)])
    >>> Polygon(rings=[[(0, 0), (1, 0), (1, 1), (0, 0)]])
"""

GeometryCollection.model_rebuild()

GEOMETRY_TYPES = (
    Point,
    LineString,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection,
)


# =============================================================================
# Traversal Helpers
# =============================================================================

def iter_coords(geometry) -> Iterator[Tuple[float, ...]]:
    """Yield every coordinate of a geometry, depth-first."""
    if isinstance(geometry, Point):
        yield geometry.coord
    elif isinstance(geometry, LineString):
        yield from geometry.coords
    elif isinstance(geometry, Polygon):
        for ring in geometry.rings:
            yield from ring
    elif isinstance(geometry, MultiPoint):
        for point in geometry.points:
            yield point.coord
    elif isinstance(geometry, MultiLineString):
        for line in geometry.line_strings:
            yield from line.coords
    elif isinstance(geometry, MultiPolygon):
        for polygon in geometry.polygons:
            yield from iter_coords(polygon)
    elif isinstance(geometry, GeometryCollection):
        for part in geometry.geometries:
            yield from iter_coords(part)


def coord_dimension(geometry) -> Optional[int]:
    """
    Derive the coordinate dimension of a geometry.

    Args:
        geometry: Any geometry value

    Returns:
        2 or 3, or None if the geometry holds no coordinates

    Raises:
        InconsistentDimension: If coordinates mix 2- and 3-component tuples
    """
    dimension = None
    for index, coord in enumerate(iter_coords(geometry)):
        if dimension is None:
            dimension = len(coord)
        elif len(coord) != dimension:
            raise InconsistentDimension(
                f"Coordinate {index} has {len(coord)} components, "
                f"expected {dimension} like the preceding coordinates"
            )
    return dimension
