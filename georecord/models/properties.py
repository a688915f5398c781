# =============================================================================
# Property Values
# =============================================================================
# Closed union of feature property values (Null, Bool, Number, String,
# Array, Object) and normalization of engine column values onto it.
# =============================================================================

import datetime as dt
import math
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, JsonValue

from ..errors import UnknownPropertyKind

__all__ = [
    "PropertyValue",
    "PropertyKind",
    "property_kind",
    "normalize_property_value",
    "is_integral",
]

PropertyValue = JsonValue
"""A JSON-compatible value: None, bool, int, float, str, list or dict."""


class PropertyKind(str, Enum):
    """Variants of the PropertyValue union."""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def property_kind(value: Any) -> PropertyKind:
    """
    Classify a property value.

    Bools are checked before numbers since bool is an int subclass.

    Raises:
        UnknownPropertyKind: If the value is outside the PropertyValue union
    """
    if value is None:
        return PropertyKind.NULL
    if isinstance(value, bool):
        return PropertyKind.BOOL
    if isinstance(value, (int, float)):
        return PropertyKind.NUMBER
    if isinstance(value, str):
        return PropertyKind.STRING
    if isinstance(value, list):
        return PropertyKind.ARRAY
    if isinstance(value, dict):
        return PropertyKind.OBJECT
    raise UnknownPropertyKind(value)


def normalize_property_value(value: Any, name: Optional[str] = None) -> PropertyValue:
    """
    Map an engine column value onto the PropertyValue union.

    - None, bool, int, float, str: unchanged
    - datetime/date/time: ISO-8601 string
    - bytes/bytearray: list of byte values
    - Decimal: int when integral, float otherwise
    - tuple/list: array, items normalized recursively
    - dict: object, keys must be strings, values normalized recursively
    - pydantic model: object from its JSON-mode dump

    Args:
        value: Raw value delivered by the engine or read from a record
        name: Property name (for error messages)

    Returns:
        Normalized property value

    Raises:
        UnknownPropertyKind: If the value cannot be represented
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, (list, tuple)):
        return [normalize_property_value(item, name) for item in value]
    if isinstance(value, dict):
        normalized = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnknownPropertyKind(key, name)
            normalized[key] = normalize_property_value(item, name)
        return normalized
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise UnknownPropertyKind(value, name)


def is_integral(value: float) -> bool:
    """True for finite floats without a fractional part."""
    return math.isfinite(value) and value.is_integer()
