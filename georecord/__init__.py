# =============================================================================
# georecord
# =============================================================================
# Bridge between the streaming geometry/feature event protocol of geospatial
# I/O engines and caller-defined record types.
# =============================================================================

"""
georecord: typed records from geometry event streams, and back.

Sub-packages:
- models: Geometry values, property values, Feature
- processing: Event protocol, geometry builder/emitter, feature collector
- codec: Record schemas, decoder and encoder

Example:
    >>> from pydantic import BaseModel
    >>> from georecord import Point, RecordSchema, decode_all
    >>>
    >>> class City(BaseModel):
    ...     geometry: Point
    ...     name: str
    ...     population: int
    >>>
    >>> cities = decode_all(source, RecordSchema.from_type(City))
"""

__version__ = "0.1.0"

from .errors import (
    GeoRecordError,
    GeometryError,
    GeometryRequired,
    InconsistentDimension,
    MalformedLineString,
    MalformedRing,
    MissingField,
    MissingGeometry,
    NestingMismatch,
    RecordError,
    TypeMismatch,
    UnknownPropertyKind,
    UnsupportedGeometryKind,
)
from .config import CodecSettings, get_settings
from .models import (
    Feature,
    Geometry,
    GeometryCollection,
    GeometryKind,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    PropertyKind,
    PropertyValue,
)
from .processing import (
    Datasource,
    EventRecorder,
    EventStream,
    FeatureCollector,
    FeatureProcessor,
    GeometryBuilder,
    GeometryEmitter,
    GeometryProcessor,
    collect_features,
    iter_features,
    process_geometry,
)
from .codec import (
    FieldKind,
    FieldSpec,
    RecordDecoder,
    RecordSchema,
    decode_all,
    decode_feature,
    decode_one,
    encode_all,
    encode_record,
    iter_records,
    to_features,
)

__all__ = [
    # Errors
    "GeoRecordError",
    "GeometryError",
    "GeometryRequired",
    "InconsistentDimension",
    "MalformedLineString",
    "MalformedRing",
    "MissingField",
    "MissingGeometry",
    "NestingMismatch",
    "RecordError",
    "TypeMismatch",
    "UnknownPropertyKind",
    "UnsupportedGeometryKind",
    # Configuration
    "CodecSettings",
    "get_settings",
    # Models
    "Feature",
    "Geometry",
    "GeometryCollection",
    "GeometryKind",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "PropertyKind",
    "PropertyValue",
    # Processing
    "Datasource",
    "EventRecorder",
    "EventStream",
    "FeatureCollector",
    "FeatureProcessor",
    "GeometryBuilder",
    "GeometryEmitter",
    "GeometryProcessor",
    "collect_features",
    "iter_features",
    "process_geometry",
    # Codec
    "FieldKind",
    "FieldSpec",
    "RecordDecoder",
    "RecordSchema",
    "decode_all",
    "decode_feature",
    "decode_one",
    "encode_all",
    "encode_record",
    "iter_records",
    "to_features",
]
