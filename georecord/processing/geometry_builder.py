# =============================================================================
# Geometry Builder
# =============================================================================
# Rebuilds geometry values from a flat begin/coordinate/end event stream
# using an explicit stack of partially built parts.
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..errors import (
    GeoRecordError,
    InconsistentDimension,
    NestingMismatch,
    UnsupportedGeometryKind,
)
from ..models.geometry import (
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
)
from .base import GeometryProcessor

__all__ = ["GeometryBuilder"]

logger = logging.getLogger(__name__)

# Child kinds accepted inside each container kind
_ALLOWED_CHILDREN = {
    GeometryKind.POLYGON: {GeometryKind.LINE_STRING},
    GeometryKind.MULTI_POINT: {GeometryKind.POINT},
    GeometryKind.MULTI_LINE_STRING: {GeometryKind.LINE_STRING},
    GeometryKind.MULTI_POLYGON: {GeometryKind.POLYGON},
    GeometryKind.GEOMETRY_COLLECTION: set(GeometryKind),
}

_COORDINATE_KINDS = {GeometryKind.POINT, GeometryKind.LINE_STRING}


@dataclass
class _Frame:
    """A geometry under construction."""
    kind: GeometryKind
    expected: int
    dimension: int
    ring: bool = False
    items: list = field(default_factory=list)


class GeometryBuilder(GeometryProcessor):
    """
    Event consumer producing one geometry value per top-level sequence.

    Each begin_geometry pushes a frame; each end_geometry pops it, checks
    the declared count, finalizes the value and appends it to the parent
    frame. When the stack empties the finished geometry is held until
    take_geometry() is called.

    Any error clears the builder so that a failed traversal leaves no
    partial state behind.

    Example:
        >>> builder = GeometryBuilder()
        >>> builder.begin_geometry(GeometryKind.POINT, 1, 2)
        >>> builder.coordinate(13.4, 52.5)
        >>> builder.end_geometry()
        >>> builder.take_geometry()
        Point(type='Point', coord=(13.4, 52.5))
    """

    def __init__(self):
        self._stack: List[_Frame] = []
        self._geometry = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def in_progress(self) -> bool:
        """True while a geometry is open."""
        return bool(self._stack)

    @property
    def has_geometry(self) -> bool:
        return self._geometry is not None

    def take_geometry(self):
        """Return the completed geometry (or None) and forget it."""
        geometry, self._geometry = self._geometry, None
        return geometry

    def reset(self) -> None:
        self._stack.clear()
        self._geometry = None

    def _path(self) -> Tuple[int, ...]:
        return tuple(len(frame.items) for frame in self._stack)

    def _fail(self, error: GeoRecordError) -> GeoRecordError:
        logger.debug(f"Aborting geometry at depth {len(self._stack)}: {error.message}")
        self.reset()
        return error

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def begin_geometry(self, kind, part_count: int, dimension: int = 2) -> None:
        path = self._path()
        try:
            kind = GeometryKind(kind)
        except ValueError:
            raise self._fail(UnsupportedGeometryKind(kind, path=path))

        if dimension not in (2, 3):
            raise self._fail(
                InconsistentDimension(f"Dimension must be 2 or 3, got {dimension}", path=path)
            )
        if not isinstance(part_count, int) or isinstance(part_count, bool):
            raise self._fail(
                NestingMismatch(f"Part count must be an integer, got {part_count!r}", path=path)
            )
        if part_count < 0:
            raise self._fail(NestingMismatch(f"Negative part count {part_count}", path=path))
        if kind is GeometryKind.POINT and part_count != 1:
            raise self._fail(
                NestingMismatch(f"Point declares {part_count} coordinates, expected 1", path=path)
            )

        ring = False
        if self._stack:
            parent = self._stack[-1]
            allowed = _ALLOWED_CHILDREN.get(parent.kind, set())
            if parent.ring or kind not in allowed:
                raise self._fail(
                    NestingMismatch(
                        f"{kind.value} cannot be nested in {parent.kind.value}", path=path
                    )
                )
            if len(parent.items) >= parent.expected:
                raise self._fail(
                    NestingMismatch(
                        f"{parent.kind.value} declared {parent.expected} parts, got more",
                        path=path,
                    )
                )
            if dimension != parent.dimension:
                raise self._fail(
                    InconsistentDimension(
                        f"Part dimension {dimension} differs from "
                        f"{parent.kind.value} dimension {parent.dimension}",
                        path=path,
                    )
                )
            ring = parent.kind is GeometryKind.POLYGON
        elif self._geometry is not None:
            raise self._fail(
                NestingMismatch("A completed geometry has not been taken yet")
            )

        self._stack.append(_Frame(kind=kind, expected=part_count, dimension=dimension, ring=ring))

    def coordinate(self, x: float, y: float, z: Optional[float] = None) -> None:
        if not self._stack:
            raise self._fail(NestingMismatch("Coordinate outside of any geometry"))

        top = self._stack[-1]
        path = self._path()
        if top.kind not in _COORDINATE_KINDS:
            raise self._fail(
                NestingMismatch(f"Coordinate directly inside {top.kind.value}", path=path)
            )
        components = 2 if z is None else 3
        if components != top.dimension:
            raise self._fail(
                InconsistentDimension(
                    f"Coordinate has {components} components, "
                    f"{top.kind.value} declared dimension {top.dimension}",
                    path=path,
                )
            )
        if len(top.items) >= top.expected:
            raise self._fail(
                NestingMismatch(
                    f"{top.kind.value} declared {top.expected} coordinates, got more",
                    path=path,
                )
            )

        coord = (float(x), float(y)) if z is None else (float(x), float(y), float(z))
        top.items.append(coord)

    def end_geometry(self) -> None:
        if not self._stack:
            raise self._fail(NestingMismatch("end_geometry without matching begin_geometry"))

        path = self._path()
        frame = self._stack.pop()
        if len(frame.items) != frame.expected:
            raise self._fail(
                NestingMismatch(
                    f"{frame.kind.value} declared {frame.expected} parts, "
                    f"got {len(frame.items)}",
                    path=path,
                )
            )

        try:
            value = self._finalize(frame, path[:-1])
        except GeoRecordError as e:
            raise self._fail(e)

        if self._stack:
            self._stack[-1].items.append(value)
        else:
            self._geometry = value

    # -------------------------------------------------------------------------
    # Finalization
    # -------------------------------------------------------------------------

    @staticmethod
    def _finalize(frame: _Frame, path: Tuple[int, ...]):
        kind = frame.kind
        if kind is GeometryKind.POINT:
            return Point(coord=frame.items[0])
        if kind is GeometryKind.LINE_STRING:
            if frame.ring:
                check_ring(frame.items, path=path)
                return tuple(frame.items)
            check_line_string(frame.items, path=path)
            return LineString(coords=frame.items)
        if kind is GeometryKind.POLYGON:
            return Polygon(rings=frame.items)
        if kind is GeometryKind.MULTI_POINT:
            return MultiPoint(points=frame.items)
        if kind is GeometryKind.MULTI_LINE_STRING:
            return MultiLineString(line_strings=frame.items)
        if kind is GeometryKind.MULTI_POLYGON:
            return MultiPolygon(polygons=frame.items)
        return GeometryCollection(geometries=frame.items)
