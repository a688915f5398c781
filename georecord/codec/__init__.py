# =============================================================================
# Record Codec
# =============================================================================
# Schema-driven conversion between Features and caller-defined records.
# =============================================================================

"""
Record codec for georecord.

This package provides:
- RecordSchema / FieldSpec / FieldKind: record schema descriptors
- decode_all / decode_feature / RecordDecoder: Features -> records
- encode_all / encode_record / to_features: records -> feature events
"""

from .schema import FieldKind, FieldSpec, RecordSchema
from .decoder import (
    RecordDecoder,
    coerce_value,
    decode_all,
    decode_feature,
    decode_features,
    decode_one,
    iter_records,
)
from .encoder import encode_all, encode_feature, encode_record, export_value, to_features

__all__ = [
    # Schema
    "FieldKind",
    "FieldSpec",
    "RecordSchema",
    # Decoding
    "RecordDecoder",
    "coerce_value",
    "decode_all",
    "decode_feature",
    "decode_features",
    "decode_one",
    "iter_records",
    # Encoding
    "encode_all",
    "encode_feature",
    "encode_record",
    "export_value",
    "to_features",
]
