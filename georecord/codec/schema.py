# =============================================================================
# Record Schema
# =============================================================================
# Field descriptors used to convert between Features and caller-defined
# record types. Schemas are built explicitly or derived once, at
# registration time, from a pydantic model or a dataclass.
# =============================================================================

import copy
import dataclasses
import types
import typing
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Annotated, Any, Callable, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..config import CodecSettings, get_settings
from ..errors import TypeMismatch
from ..models.geometry import GEOMETRY_TYPES

__all__ = ["FieldKind", "FieldSpec", "RecordSchema"]


class FieldKind(str, Enum):
    """Semantic kind expected by a record field."""
    GEOMETRY = "geometry"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    ANY = "any"


class FieldSpec(BaseModel):
    """
    Descriptor of one record field.

    Attributes:
        name: Property name in the Feature (exact, case-sensitive)
        kind: Expected semantic kind
        required: Whether the property must be present
        nullable: Whether an explicit null is an acceptable value
        default: Value used when an optional property is absent
        attribute: Record attribute holding the value (defaults to name)
        accessor: Callable reading the value from a record (defaults to
            attribute/key lookup)
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Property name")
    kind: FieldKind = Field(FieldKind.ANY, description="Expected semantic kind")
    required: bool = Field(True, description="Property must be present")
    nullable: bool = Field(False, description="Null is an acceptable value")
    default: Any = Field(None, description="Value for absent optional properties")
    attribute: Optional[str] = Field(None, description="Record attribute name")
    accessor: Optional[Callable[[Any], Any]] = Field(None, description="Value reader")

    @property
    def attr(self) -> str:
        return self.attribute or self.name

    def make_default(self) -> Any:
        """Return a fresh copy of the default value."""
        return copy.deepcopy(self.default)

    def read(self, record: Any) -> Any:
        """Read this field's value from a record, None when absent."""
        if self.accessor is not None:
            return self.accessor(record)
        if isinstance(record, Mapping):
            return record.get(self.attr)
        return getattr(record, self.attr, None)


class RecordSchema(BaseModel):
    """
    Ordered set of field descriptors for one record type.

    Field order is the property emission order when encoding. At most one
    field is a geometry field.

    Attributes:
        fields: Field descriptors in declaration order
        factory: Callable turning a dict keyed by attribute name into a
            record; records are plain dicts when omitted
    """

    model_config = ConfigDict(frozen=True)

    fields: Tuple[FieldSpec, ...] = Field(..., description="Field descriptors")
    factory: Optional[Callable[[Dict[str, Any]], Any]] = Field(
        None, description="Record constructor"
    )

    @model_validator(mode="after")
    def validate_fields(self) -> "RecordSchema":
        names = [spec.name for spec in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate property names in schema: {names}")

        attrs = [spec.attr for spec in self.fields]
        if len(attrs) != len(set(attrs)):
            raise ValueError(f"Duplicate attribute names in schema: {attrs}")

        geometry_fields = [s.name for s in self.fields if s.kind is FieldKind.GEOMETRY]
        if len(geometry_fields) > 1:
            raise ValueError(f"Schema has more than one geometry field: {geometry_fields}")
        return self

    @property
    def geometry_field(self) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.kind is FieldKind.GEOMETRY:
                return spec
        return None

    @property
    def property_fields(self) -> Tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.kind is not FieldKind.GEOMETRY)

    def field_for(self, key: str) -> Optional[FieldSpec]:
        """Find a field by property name or attribute name."""
        for spec in self.fields:
            if key in (spec.name, spec.attr):
                return spec
        return None

    def build(self, values: Dict[str, Any]) -> Any:
        """Construct a record from values keyed by attribute name."""
        if self.factory is None:
            return dict(values)
        return self.factory(values)

    # -------------------------------------------------------------------------
    # Derivation
    # -------------------------------------------------------------------------

    @classmethod
    def from_type(cls, record_type: type, settings: Optional[CodecSettings] = None) -> "RecordSchema":
        """
        Derive a schema from a pydantic model or a dataclass.

        Field kinds follow the annotations; Optional[...] marks a field
        nullable. Pydantic aliases become property names, so
        ``title: str = Field(alias="name")`` reads the "name" property.

        Args:
            record_type: Pydantic model class or dataclass type
            settings: Codec settings (default: cached environment settings)

        Returns:
            RecordSchema whose factory constructs record_type instances

        Raises:
            TypeError: If record_type is neither a pydantic model nor a dataclass
        """
        settings = settings or get_settings()

        if isinstance(record_type, type) and issubclass(record_type, BaseModel):
            specs = _model_fields(record_type)
            factory = _model_factory(record_type, specs)
        elif dataclasses.is_dataclass(record_type) and isinstance(record_type, type):
            specs = _dataclass_fields(record_type)
            factory = _dataclass_factory(record_type)
        else:
            raise TypeError(
                f"Cannot derive a schema from {record_type!r}: "
                f"expected a pydantic model or a dataclass"
            )

        if not any(spec.kind is FieldKind.GEOMETRY for spec in specs):
            specs = [
                spec.model_copy(update={"kind": FieldKind.GEOMETRY})
                if spec.attr == settings.geometry_field and spec.kind is FieldKind.ANY
                else spec
                for spec in specs
            ]

        return cls(fields=tuple(specs), factory=factory)


# =============================================================================
# Annotation Mapping
# =============================================================================

_NONE_TYPE = type(None)
_UNION_TYPES = (Union, types.UnionType)


def _strip_annotated(annotation: Any) -> Any:
    while typing.get_origin(annotation) is Annotated:
        annotation = typing.get_args(annotation)[0]
    return annotation


def _is_geometry_type(annotation: Any) -> bool:
    annotation = _strip_annotated(annotation)
    if typing.get_origin(annotation) in _UNION_TYPES:
        args = [a for a in typing.get_args(annotation) if a is not _NONE_TYPE]
        return bool(args) and all(_is_geometry_type(a) for a in args)
    return isinstance(annotation, type) and issubclass(annotation, GEOMETRY_TYPES)


def _annotation_kind(annotation: Any) -> Tuple[FieldKind, bool]:
    """
    Map a type annotation to a field kind.

    Returns:
        Tuple of (kind, nullable)
    """
    annotation = _strip_annotated(annotation)
    origin = typing.get_origin(annotation)

    if origin in _UNION_TYPES:
        args = typing.get_args(annotation)
        nullable = _NONE_TYPE in args
        non_null = [a for a in args if a is not _NONE_TYPE]
        if non_null and all(_is_geometry_type(a) for a in non_null):
            return FieldKind.GEOMETRY, nullable
        if len(non_null) == 1:
            kind, _ = _annotation_kind(non_null[0])
            return kind, nullable
        return FieldKind.ANY, nullable

    if annotation is Any:
        return FieldKind.ANY, True

    if origin is not None:
        if isinstance(origin, type) and issubclass(origin, Mapping):
            return FieldKind.OBJECT, False
        if isinstance(origin, type) and issubclass(origin, (Sequence, set, frozenset)) \
                and not issubclass(origin, str):
            return FieldKind.ARRAY, False
        return FieldKind.ANY, False

    if not isinstance(annotation, type):
        return FieldKind.ANY, False
    if _is_geometry_type(annotation):
        return FieldKind.GEOMETRY, False
    if issubclass(annotation, bool):
        return FieldKind.BOOLEAN, False
    if issubclass(annotation, int):
        return FieldKind.INTEGER, False
    if issubclass(annotation, float):
        return FieldKind.FLOAT, False
    if issubclass(annotation, str):
        return FieldKind.STRING, False
    if issubclass(annotation, (list, tuple, set, frozenset)):
        return FieldKind.ARRAY, False
    if issubclass(annotation, (dict, BaseModel)) or dataclasses.is_dataclass(annotation):
        return FieldKind.OBJECT, False
    return FieldKind.ANY, False


def _model_fields(model: type) -> list:
    specs = []
    for attr, info in model.model_fields.items():
        kind, nullable = _annotation_kind(info.annotation)
        required = info.is_required()
        specs.append(
            FieldSpec(
                name=info.alias or attr,
                kind=kind,
                required=required,
                nullable=nullable,
                default=None if required else info.get_default(call_default_factory=True),
                attribute=attr,
            )
        )
    return specs


def _model_factory(model: type, specs: list) -> Callable[[Dict[str, Any]], Any]:
    # model_validate expects aliases, which are the property names
    names = {spec.attr: spec.name for spec in specs}

    def factory(values: Dict[str, Any]) -> Any:
        return model.model_validate({names.get(k, k): v for k, v in values.items()})

    return factory


def _dataclass_fields(record_type: type) -> list:
    hints = typing.get_type_hints(record_type, include_extras=True)
    specs = []
    for f in dataclasses.fields(record_type):
        if not f.init:
            continue
        kind, nullable = _annotation_kind(hints.get(f.name, Any))
        if f.default is not dataclasses.MISSING:
            required, default = False, f.default
        elif f.default_factory is not dataclasses.MISSING:
            required, default = False, f.default_factory()
        else:
            required, default = True, None
        specs.append(
            FieldSpec(
                name=f.name,
                kind=kind,
                required=required,
                nullable=nullable,
                default=default,
            )
        )
    return specs


def _dataclass_factory(record_type: type) -> Callable[[Dict[str, Any]], Any]:
    def factory(values: Dict[str, Any]) -> Any:
        try:
            return record_type(**values)
        except (TypeError, ValueError) as e:
            raise TypeMismatch(
                record_type.__name__, FieldKind.OBJECT, type(e).__name__, detail=str(e)
            )

    return factory
