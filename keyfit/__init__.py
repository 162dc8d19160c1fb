"""keyfit - reconcile string-keyed maps with the fields of a record type"""

from ._version import version as __version__
from .api import (
    load_record,
    load_record_or_raise,
    map_to_record,
    map_to_record_or_raise,
    normalize_keys_to_text,
    record_to_mapping,
    record_to_record,
    record_to_record_or_raise,
    residual_or_raise,
)
from .errors import ConversionError, ConversionFailed
from .identifiers import Identifier
from .reconcile import RESIDUAL_FIELD, RestMode, Transformation, to_snake_case
from .records import RecordAdapter, RecordRegistry, default_registry, record
from .resolver import RECORD_KEY, FieldResolver
from .result import Conversion


__all__ = [
    "RECORD_KEY",
    "RESIDUAL_FIELD",
    "Conversion",
    "ConversionError",
    "ConversionFailed",
    "FieldResolver",
    "Identifier",
    "RecordAdapter",
    "RecordRegistry",
    "RestMode",
    "Transformation",
    "__version__",
    "default_registry",
    "load_record",
    "load_record_or_raise",
    "map_to_record",
    "map_to_record_or_raise",
    "normalize_keys_to_text",
    "record",
    "record_to_mapping",
    "record_to_record",
    "record_to_record_or_raise",
    "residual_or_raise",
    "to_snake_case",
]
