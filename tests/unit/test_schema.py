"""
Unit tests for record schemas.

Tests explicit schemas and derivation from pydantic models and dataclasses.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest
from pydantic import BaseModel, Field, ValidationError

from georecord import (
    CodecSettings,
    FieldKind,
    FieldSpec,
    Geometry,
    Point,
    Polygon,
    RecordSchema,
)


class TestExplicitSchema:
    """Test hand-written schemas."""

    def test_geometry_and_property_fields(self, explicit_schema):
        """Test that the geometry field is split from property fields."""
        assert explicit_schema.geometry_field.name == "geometry"
        assert [s.name for s in explicit_schema.property_fields] == [
            "name",
            "population",
            "area",
            "tags",
        ]

    def test_duplicate_names_rejected(self):
        """Test that property names must be unique."""
        with pytest.raises(ValidationError, match="Duplicate property names"):
            RecordSchema(fields=(FieldSpec(name="a"), FieldSpec(name="a")))

    def test_two_geometry_fields_rejected(self):
        """Test that at most one field carries the geometry."""
        with pytest.raises(ValidationError, match="more than one geometry"):
            RecordSchema(
                fields=(
                    FieldSpec(name="a", kind=FieldKind.GEOMETRY),
                    FieldSpec(name="b", kind=FieldKind.GEOMETRY),
                )
            )

    def test_build_without_factory_returns_dict(self, explicit_schema):
        """Test that schemas without a factory produce plain dicts."""
        assert explicit_schema.build({"name": "x"}) == {"name": "x"}

    def test_defaults_are_copied(self, explicit_schema):
        """Test that mutable defaults are not shared between records."""
        tags = explicit_schema.field_for("tags")
        first = tags.make_default()
        first.append("x")
        assert tags.make_default() == []

    def test_read_from_mapping_and_object(self):
        """Test that values are read by key or by attribute."""
        spec = FieldSpec(name="name")

        class Obj:
            name = "attr"

        assert spec.read({"name": "key"}) == "key"
        assert spec.read(Obj()) == "attr"
        assert spec.read({}) is None

    def test_accessor(self):
        """Test that a custom accessor overrides attribute lookup."""
        spec = FieldSpec(name="upper", accessor=lambda r: r["name"].upper())
        assert spec.read({"name": "berlin"}) == "BERLIN"


class TestModelDerivation:
    """Test schema derivation from pydantic models."""

    def test_field_kinds(self, city_schema):
        """Test that annotations map onto field kinds."""
        kinds = {spec.name: spec.kind for spec in city_schema.fields}
        assert kinds == {
            "geometry": FieldKind.GEOMETRY,
            "name": FieldKind.STRING,
            "population": FieldKind.INTEGER,
        }
        assert all(spec.required for spec in city_schema.fields)

    def test_optional_geometry(self, location_schema):
        """Test that Optional[Geometry] with a default is nullable and optional."""
        spec = location_schema.geometry_field
        assert spec.kind is FieldKind.GEOMETRY
        assert spec.nullable
        assert not spec.required

    def test_alias_becomes_property_name(self, titled_schema):
        """Test that an alias names the property while the attribute keeps its name."""
        spec = titled_schema.field_for("title")
        assert spec.name == "name"
        assert spec.attr == "title"

    def test_factory_builds_model(self, titled_schema):
        """Test that the factory maps attribute names back to aliases."""
        record = titled_schema.build(
            {"geometry": Point(coord=(1.0, 2.0)), "title": "A", "value": 1}
        )
        assert record.title == "A"

    def test_container_and_nested_kinds(self, settings):
        """Test kinds for lists, dicts, nested models, bools and floats."""

        class Address(BaseModel):
            street: str

        class Record(BaseModel):
            shape: Polygon
            tags: List[str] = Field(default_factory=list)
            attrs: Dict[str, Any] = Field(default_factory=dict)
            address: Optional[Address] = None
            active: bool = True
            score: float = 0.0
            extra: Any = None

        schema = RecordSchema.from_type(Record, settings=settings)
        kinds = {spec.name: spec.kind for spec in schema.fields}
        assert kinds == {
            "shape": FieldKind.GEOMETRY,
            "tags": FieldKind.ARRAY,
            "attrs": FieldKind.OBJECT,
            "address": FieldKind.OBJECT,
            "active": FieldKind.BOOLEAN,
            "score": FieldKind.FLOAT,
            "extra": FieldKind.ANY,
        }
        assert schema.field_for("tags").default == []
        assert schema.field_for("address").nullable


class TestDataclassDerivation:
    """Test schema derivation from dataclasses."""

    def test_dataclass_fields(self, settings):
        """Test required and optional dataclass fields."""

        @dataclass
        class Station:
            geometry: Geometry
            name: str
            elevation: Optional[float] = None
            lines: List[str] = field(default_factory=list)

        schema = RecordSchema.from_type(Station, settings=settings)
        specs = {spec.name: spec for spec in schema.fields}

        assert specs["geometry"].kind is FieldKind.GEOMETRY
        assert specs["name"].required
        assert specs["elevation"].nullable
        assert not specs["elevation"].required
        assert specs["lines"].default == []

        station = schema.build({"geometry": Point(coord=(0.0, 0.0)), "name": "Hbf"})
        assert isinstance(station, Station)

    def test_geometry_field_fallback(self, monkeypatch):
        """Test that an untyped field named like the settings is the geometry field."""
        monkeypatch.setenv("GEORECORD_GEOMETRY_FIELD", "geom")

        @dataclass
        class Loose:
            geom: Any
            label: str

        schema = RecordSchema.from_type(Loose, settings=CodecSettings(_env_file=None))
        assert schema.geometry_field.name == "geom"

    def test_unsupported_type(self, settings):
        """Test that plain classes cannot be derived."""

        class Plain:
            pass

        with pytest.raises(TypeError, match="pydantic model or a dataclass"):
            RecordSchema.from_type(Plain, settings=settings)
