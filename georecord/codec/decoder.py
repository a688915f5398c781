# =============================================================================
# Record Decoder
# =============================================================================
# Maps Features onto caller-defined records field by field, coercing each
# property value to the kind its field declares. Decoding is all-or-nothing
# per feature.
# =============================================================================

import logging
from typing import Any, Iterable, Iterator, List, Optional, Union

from pydantic import ValidationError

from ..config import CodecSettings
from ..errors import GeoRecordError, MissingField, MissingGeometry, NestingMismatch, TypeMismatch
from ..models.feature import Feature
from ..models.properties import PropertyKind, is_integral, property_kind
from ..processing.base import Datasource
from ..processing.events import Event, drive
from ..processing.feature_collector import FeatureCollector, iter_features
from .schema import FieldKind, FieldSpec, RecordSchema

__all__ = [
    "coerce_value",
    "decode_feature",
    "RecordDecoder",
    "decode_all",
    "decode_features",
    "decode_one",
    "iter_records",
]

logger = logging.getLogger(__name__)


def coerce_value(spec: FieldSpec, value: Any) -> Any:
    """
    Coerce a property value to the kind declared by a field.

    Numeric coercion is lossless-only: a Number with a fractional part never
    becomes an integer, and an integer too large to be represented exactly
    never becomes a float. Bools are not numbers.

    Args:
        spec: Target field descriptor
        value: Property value (non-null)

    Returns:
        Coerced value

    Raises:
        TypeMismatch: If the value cannot be coerced without loss
        UnknownPropertyKind: If the value is outside the PropertyValue union
    """
    kind = spec.kind
    if kind is FieldKind.ANY:
        return value

    actual = property_kind(value)

    if kind is FieldKind.BOOLEAN and actual is PropertyKind.BOOL:
        return value
    if kind is FieldKind.INTEGER and actual is PropertyKind.NUMBER:
        if isinstance(value, int):
            return value
        if is_integral(value):
            return int(value)
        raise TypeMismatch(spec.name, kind, actual, detail=f"{value!r} has a fractional part")
    if kind is FieldKind.FLOAT and actual is PropertyKind.NUMBER:
        if isinstance(value, float):
            return value
        try:
            converted = float(value)
        except OverflowError:
            converted = None
        if converted is None or converted != value:
            raise TypeMismatch(spec.name, kind, actual, detail=f"{value!r} is not exactly representable")
        return converted
    if kind is FieldKind.STRING and actual is PropertyKind.STRING:
        return value
    if kind is FieldKind.ARRAY and actual is PropertyKind.ARRAY:
        return list(value)
    if kind is FieldKind.OBJECT and actual is PropertyKind.OBJECT:
        return dict(value)

    raise TypeMismatch(spec.name, kind, actual)


def decode_feature(feature: Feature, schema: RecordSchema) -> Any:
    """
    Decode one Feature into a record.

    - The geometry field is filled from feature.geometry
    - Every other field is looked up by exact property name
    - Properties without a matching field are ignored

    Args:
        feature: Feature to decode
        schema: Target record schema

    Returns:
        A new record built by the schema's factory

    Raises:
        MissingGeometry: Geometry required but absent
        MissingField: Required property absent
        TypeMismatch: Property value incompatible with its field
    """
    values = {}

    geometry_spec = schema.geometry_field
    if geometry_spec is not None:
        if feature.geometry is not None:
            values[geometry_spec.attr] = feature.geometry
        elif geometry_spec.required and not geometry_spec.nullable:
            raise MissingGeometry(geometry_spec.name)
        else:
            values[geometry_spec.attr] = geometry_spec.make_default()

    for spec in schema.property_fields:
        if spec.name not in feature.properties:
            if spec.required:
                raise MissingField(spec.name)
            values[spec.attr] = spec.make_default()
            continue

        value = feature.properties[spec.name]
        if value is None and spec.kind is not FieldKind.ANY:
            if spec.nullable:
                values[spec.attr] = None
            elif not spec.required:
                values[spec.attr] = spec.make_default()
            else:
                raise TypeMismatch(spec.name, spec.kind, PropertyKind.NULL)
            continue

        values[spec.attr] = coerce_value(spec, value)

    try:
        return schema.build(values)
    except ValidationError as e:
        error = e.errors()[0]
        key = str(error["loc"][0]) if error["loc"] else "<record>"
        spec = schema.field_for(key)
        raise TypeMismatch(
            spec.name if spec else key,
            spec.kind if spec else FieldKind.ANY,
            error["type"],
            detail=error["msg"],
        )


class RecordDecoder(FeatureCollector):
    """
    Push-based decoder: a FeatureProcessor that turns each completed
    feature straight into a record.

    Args:
        schema: Target record schema
        on_record: Callback receiving each record (default: append to records)
        settings: Codec settings (default: cached environment settings)
    """

    def __init__(
        self,
        schema: RecordSchema,
        on_record=None,
        settings: Optional[CodecSettings] = None,
    ):
        super().__init__(on_feature=self._decode, settings=settings)
        self.schema = schema
        self.records: List[Any] = []
        self.on_record = on_record or self.records.append

    def _decode(self, feature: Feature) -> None:
        self.on_record(decode_feature(feature, self.schema))


def decode_all(
    source: Union[Datasource, Iterable[Event]],
    schema: RecordSchema,
    settings: Optional[CodecSettings] = None,
) -> List[Any]:
    """
    Decode every feature of a source into records.

    Args:
        source: Datasource or iterable of events
        schema: Target record schema
        settings: Codec settings

    Returns:
        Records in source order

    Raises:
        GeoRecordError: On the first failing feature; feature_index
            identifies it
    """
    decoder = RecordDecoder(schema, settings=settings)
    drive(source, decoder)
    decoder.finish()
    logger.debug(f"Decoded {len(decoder.records)} records")
    return decoder.records


def iter_records(
    events: Iterable[Event],
    schema: RecordSchema,
    settings: Optional[CodecSettings] = None,
) -> Iterator[Any]:
    """Lazily decode records from an event iterable."""
    for index, feature in enumerate(iter_features(events, settings=settings)):
        try:
            record = decode_feature(feature, schema)
        except GeoRecordError as e:
            raise e.at_feature(index)
        yield record


def decode_features(features: Iterable[Feature], schema: RecordSchema) -> List[Any]:
    """Decode already collected Features into records."""
    records = []
    for index, feature in enumerate(features):
        try:
            records.append(decode_feature(feature, schema))
        except GeoRecordError as e:
            raise e.at_feature(index)
    return records


def decode_one(
    source: Union[Datasource, Iterable[Event]],
    schema: RecordSchema,
    settings: Optional[CodecSettings] = None,
) -> Any:
    """
    Decode a source that holds exactly one feature.

    Raises:
        NestingMismatch: If the source holds no feature or several
    """
    records = decode_all(source, schema, settings=settings)
    if len(records) != 1:
        raise NestingMismatch(f"Expected exactly one feature, got {len(records)}")
    return records[0]
