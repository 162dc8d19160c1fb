"""Record adapters and the registry of known record types."""

from .dataclass import DataclassAdapter
from .named_tuple import NamedTupleAdapter
from .protocol import RecordAdapter
from .pydantic_model import PydanticModelAdapter
from .registry import RecordRegistry, default_registry, record


__all__ = [
    "DataclassAdapter",
    "NamedTupleAdapter",
    "PydanticModelAdapter",
    "RecordAdapter",
    "RecordRegistry",
    "default_registry",
    "record",
]
