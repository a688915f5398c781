# =============================================================================
# Geometry Emitter
# =============================================================================
# Inverse of the geometry builder: walks a geometry value depth-first and
# drives begin/coordinate/end events into a GeometryProcessor.
# =============================================================================

from typing import Optional

from ..config import CodecSettings, get_settings
from ..errors import UnsupportedGeometryKind
from ..models.geometry import (
    GeometryCollection,
    GeometryKind,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    coord_dimension,
)
from .base import GeometryProcessor

__all__ = ["GeometryEmitter", "process_geometry"]


class GeometryEmitter:
    """
    Event producer for geometry values.

    The coordinate dimension is derived once per geometry from the
    coordinates present and announced on every begin event. Geometries
    without any coordinate use the configured default dimension.

    Args:
        processor: Receiver of the events
        settings: Codec settings (default: cached environment settings)
    """

    def __init__(self, processor: GeometryProcessor, settings: Optional[CodecSettings] = None):
        self.processor = processor
        self.settings = settings or get_settings()

    def emit(self, geometry) -> None:
        """
        Emit the full event sequence for one geometry.

        The dimension check runs before the first event so an inconsistent
        geometry leaves nothing half-emitted in the processor.

        Raises:
            InconsistentDimension: If coordinates mix 2 and 3 components
            UnsupportedGeometryKind: If the value is not a geometry model
        """
        dimension = coord_dimension(geometry) or self.settings.default_dimension
        self._emit(geometry, dimension)

    def _emit(self, geometry, dimension: int) -> None:
        proc = self.processor

        if isinstance(geometry, Point):
            proc.begin_geometry(GeometryKind.POINT, 1, dimension)
            proc.coordinate(*geometry.coord)
            proc.end_geometry()
        elif isinstance(geometry, LineString):
            self._emit_line(GeometryKind.LINE_STRING, geometry.coords, dimension)
        elif isinstance(geometry, Polygon):
            proc.begin_geometry(GeometryKind.POLYGON, len(geometry.rings), dimension)
            for ring in geometry.rings:
                self._emit_line(GeometryKind.LINE_STRING, ring, dimension)
            proc.end_geometry()
        elif isinstance(geometry, MultiPoint):
            self._emit_parts(GeometryKind.MULTI_POINT, geometry.points, dimension)
        elif isinstance(geometry, MultiLineString):
            self._emit_parts(GeometryKind.MULTI_LINE_STRING, geometry.line_strings, dimension)
        elif isinstance(geometry, MultiPolygon):
            self._emit_parts(GeometryKind.MULTI_POLYGON, geometry.polygons, dimension)
        elif isinstance(geometry, GeometryCollection):
            self._emit_parts(GeometryKind.GEOMETRY_COLLECTION, geometry.geometries, dimension)
        else:
            raise UnsupportedGeometryKind(type(geometry).__name__)

    def _emit_line(self, kind: GeometryKind, coords, dimension: int) -> None:
        self.processor.begin_geometry(kind, len(coords), dimension)
        for coord in coords:
            self.processor.coordinate(*coord)
        self.processor.end_geometry()

    def _emit_parts(self, kind: GeometryKind, parts, dimension: int) -> None:
        self.processor.begin_geometry(kind, len(parts), dimension)
        for part in parts:
            self._emit(part, dimension)
        self.processor.end_geometry()


def process_geometry(
    geometry,
    processor: GeometryProcessor,
    settings: Optional[CodecSettings] = None,
) -> None:
    """Drive the events of one geometry into a processor."""
    GeometryEmitter(processor, settings=settings).emit(geometry)
