# =============================================================================
# Error Hierarchy
# =============================================================================
# Every failure raised while consuming or producing feature streams.
# All errors are terminal for the traversal that raised them.
# =============================================================================

"""Error types for geometry event processing and the record codec."""

from typing import Any, Dict, Optional, Tuple

__all__ = [
    "GeoRecordError",
    "GeometryError",
    "NestingMismatch",
    "UnsupportedGeometryKind",
    "MalformedRing",
    "MalformedLineString",
    "InconsistentDimension",
    "RecordError",
    "MissingField",
    "MissingGeometry",
    "GeometryRequired",
    "TypeMismatch",
    "UnknownPropertyKind",
]


class GeoRecordError(Exception):
    """
    Base class for all georecord errors.

    Attributes:
        message: Human-readable description of the failure
        feature_index: Zero-based index of the feature being processed when
            the error was raised (None when raised outside a feature stream)
        context: Extra diagnostic details (field name, geometry path, ...)
    """

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.feature_index: Optional[int] = None
        self.context: Dict[str, Any] = context

    def at_feature(self, index: int) -> "GeoRecordError":
        """Record the feature index unless an inner traversal already did."""
        if self.feature_index is None:
            self.feature_index = index
        return self

    def __str__(self) -> str:
        if self.feature_index is None:
            return self.message
        return f"feature {self.feature_index}: {self.message}"


# =============================================================================
# Geometry Errors
# =============================================================================

class GeometryError(GeoRecordError):
    """Structural error in a geometry or its event stream."""

    def __init__(self, message: str, path: Tuple[int, ...] = (), **context: Any):
        if path:
            message = f"{message} (at part {'/'.join(str(p) for p in path)})"
        super().__init__(message, path=path, **context)
        self.path = path


class NestingMismatch(GeometryError):
    """Begin/end events or part counts do not line up."""


class UnsupportedGeometryKind(GeometryError):
    """Geometry kind outside Point/LineString/Polygon/Multi*/GeometryCollection."""

    def __init__(self, kind: Any, path: Tuple[int, ...] = ()):
        super().__init__(f"Unsupported geometry kind: {kind!r}", path=path, kind=kind)
        self.kind = kind


class MalformedRing(GeometryError):
    """Polygon ring with fewer than 4 points or not closed."""


class MalformedLineString(GeometryError):
    """LineString with fewer than 2 points."""


class InconsistentDimension(GeometryError):
    """Coordinates mix 2- and 3-component tuples, or disagree with the declared dimension."""


# =============================================================================
# Record Errors
# =============================================================================

class RecordError(GeoRecordError):
    """Error mapping between a Feature and a record type."""

    def __init__(self, message: str, field: Optional[str] = None, **context: Any):
        super().__init__(message, field=field, **context)
        self.field = field


class MissingField(RecordError):
    """A required field has no matching property."""

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field!r}", field=field)


class MissingGeometry(RecordError):
    """The schema requires a geometry but the feature has none."""

    def __init__(self, field: str):
        super().__init__(f"Feature has no geometry for required field {field!r}", field=field)


class GeometryRequired(RecordError):
    """A record to be encoded has no geometry but the schema requires one."""

    def __init__(self, field: str):
        super().__init__(f"Record has no geometry in required field {field!r}", field=field)


class TypeMismatch(RecordError):
    """A value cannot be coerced to the field's declared kind."""

    def __init__(self, field: str, expected: Any, actual: Any, detail: Optional[str] = None):
        expected_name = getattr(expected, "value", expected)
        actual_name = getattr(actual, "value", actual)
        message = f"Field {field!r} expects {expected_name}, got {actual_name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, field=field, expected=expected, actual=actual)
        self.expected = expected
        self.actual = actual


# =============================================================================
# Property Errors
# =============================================================================

class UnknownPropertyKind(GeoRecordError):
    """A property value does not belong to the closed PropertyValue union."""

    def __init__(self, value: Any, name: Optional[str] = None):
        where = f" for property {name!r}" if name else ""
        super().__init__(
            f"Unsupported property value type {type(value).__name__}{where}",
            name=name,
        )
        self.value = value
        self.name = name
