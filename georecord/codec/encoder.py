# =============================================================================
# Record Encoder
# =============================================================================
# Drives records (or Features) into a FeatureProcessor sink as
# begin_feature / property / geometry / end_feature events.
# =============================================================================

import dataclasses
import logging
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from pydantic import BaseModel

from ..config import CodecSettings
from ..errors import GeoRecordError, GeometryRequired, MissingField, TypeMismatch
from ..models.feature import Feature
from ..models.geometry import GEOMETRY_TYPES, coord_dimension
from ..models.properties import PropertyValue, is_integral, normalize_property_value
from ..processing.base import FeatureProcessor
from ..processing.feature_collector import FeatureCollector
from ..processing.geometry_emitter import GeometryEmitter
from .schema import FieldKind, FieldSpec, RecordSchema

__all__ = [
    "export_value",
    "encode_record",
    "encode_feature",
    "encode_all",
    "to_features",
]

logger = logging.getLogger(__name__)


def export_value(spec: FieldSpec, value: Any) -> PropertyValue:
    """
    Convert a record value to a property value (inverse of coerce_value).

    Args:
        spec: Field descriptor
        value: Non-null record value

    Returns:
        Property value

    Raises:
        TypeMismatch: If the value does not fit the field's kind
    """
    kind = spec.kind
    if kind is FieldKind.ANY:
        return value

    if isinstance(value, Enum):
        value = value.value
    actual = type(value).__name__

    if kind is FieldKind.BOOLEAN and isinstance(value, bool):
        return value
    if kind is FieldKind.INTEGER and not isinstance(value, bool):
        if isinstance(value, int):
            return value
        if isinstance(value, float) and is_integral(value):
            return int(value)
    if kind is FieldKind.FLOAT and not isinstance(value, bool):
        if isinstance(value, float):
            return value
        if isinstance(value, int):
            try:
                converted = float(value)
            except OverflowError:
                converted = None
            if converted is not None and converted == value:
                return converted
    if kind is FieldKind.STRING and isinstance(value, str):
        return str(value)
    if kind is FieldKind.ARRAY and isinstance(value, (list, tuple, set, frozenset)):
        return normalize_property_value(list(value), spec.name)
    if kind is FieldKind.OBJECT:
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json")
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return normalize_property_value(dataclasses.asdict(value), spec.name)
        if isinstance(value, dict):
            return normalize_property_value(value, spec.name)

    raise TypeMismatch(spec.name, kind, actual)


def _prepare_record(record: Any, schema: RecordSchema) -> Tuple[List[Tuple[str, Any]], Any]:
    properties = []
    for spec in schema.property_fields:
        value = spec.read(record)
        if value is None:
            # An optional field still at its None default was absent
            if not spec.required and spec.default is None:
                continue
            if spec.kind is FieldKind.ANY or spec.nullable:
                properties.append((spec.name, None))
            elif spec.required:
                raise MissingField(spec.name)
            continue
        properties.append((spec.name, export_value(spec, value)))

    geometry = None
    geometry_spec = schema.geometry_field
    if geometry_spec is not None:
        geometry = geometry_spec.read(record)
        if geometry is None:
            if geometry_spec.required and not geometry_spec.nullable:
                raise GeometryRequired(geometry_spec.name)
        elif not isinstance(geometry, GEOMETRY_TYPES):
            raise TypeMismatch(geometry_spec.name, FieldKind.GEOMETRY, type(geometry).__name__)
        else:
            coord_dimension(geometry)

    return properties, geometry


def _emit(
    sink: FeatureProcessor,
    properties: Iterable[Tuple[str, Any]],
    geometry: Any,
    settings: Optional[CodecSettings],
) -> None:
    sink.begin_feature()
    for name, value in properties:
        sink.property(name, value)
    if geometry is not None:
        GeometryEmitter(sink, settings=settings).emit(geometry)
    sink.end_feature()


def encode_record(
    record: Any,
    schema: RecordSchema,
    sink: FeatureProcessor,
    settings: Optional[CodecSettings] = None,
) -> None:
    """
    Emit one record as a feature.

    Properties follow the schema's field order and precede the geometry
    sub-stream. Every value is converted before the first event, so a
    failing record emits nothing.

    Raises:
        GeometryRequired: Required geometry field is empty
        MissingField: Required field is empty
        TypeMismatch: Value does not fit its field
        InconsistentDimension: Geometry mixes 2D and 3D coordinates
    """
    properties, geometry = _prepare_record(record, schema)
    _emit(sink, properties, geometry, settings)


def encode_feature(
    feature: Feature,
    sink: FeatureProcessor,
    settings: Optional[CodecSettings] = None,
) -> None:
    """Emit a Feature, properties in insertion order."""
    if feature.geometry is not None:
        coord_dimension(feature.geometry)
    _emit(sink, feature.properties.items(), feature.geometry, settings)


def encode_all(
    records: Iterable[Any],
    sink: FeatureProcessor,
    schema: Optional[RecordSchema] = None,
    settings: Optional[CodecSettings] = None,
) -> None:
    """
    Emit every record (or Feature) into a sink, in input order.

    Args:
        records: Records described by schema, or Features
        sink: Receiver of the events
        schema: Record schema (may be omitted when every item is a Feature)
        settings: Codec settings

    Raises:
        GeoRecordError: On the first failing record; feature_index
            identifies it
        TypeError: If a non-Feature item is given without a schema
    """
    count = 0
    for index, record in enumerate(records):
        try:
            if isinstance(record, Feature):
                encode_feature(record, sink, settings=settings)
            elif schema is None:
                raise TypeError(
                    f"Item {index} is a {type(record).__name__}, not a Feature; "
                    f"a schema is required to encode records"
                )
            else:
                encode_record(record, schema, sink, settings=settings)
        except GeoRecordError as e:
            raise e.at_feature(index)
        count += 1
    logger.debug(f"Encoded {count} features")


def to_features(
    records: Iterable[Any],
    schema: Optional[RecordSchema] = None,
    settings: Optional[CodecSettings] = None,
) -> List[Feature]:
    """Encode records straight into Features."""
    collector = FeatureCollector(settings=settings)
    encode_all(records, collector, schema=schema, settings=settings)
    return collector.features
