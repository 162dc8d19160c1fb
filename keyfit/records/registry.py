"""Registry of known record types and the adapters that handle them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from keyfit.identifiers import IdentifierTable

from .dataclass import DataclassAdapter
from .named_tuple import NamedTupleAdapter
from .pydantic_model import PydanticModelAdapter


if TYPE_CHECKING:
    from collections.abc import Sequence

    from .protocol import RecordAdapter


logger = logging.getLogger(__name__)

_T = TypeVar("_T", bound=type)

DEFAULT_ADAPTER_KINDS: tuple[type[RecordAdapter], ...] = (
    DataclassAdapter,
    NamedTupleAdapter,
    PydanticModelAdapter,
)


class RecordRegistry:
    """Map record types to adapters and track which types count as loaded.

    Registering a type makes it resolvable by name and adds its field names to
    the identifier table. Conversions only read from the registry.
    """

    def __init__(self, adapter_kinds: Sequence[type[RecordAdapter]] = DEFAULT_ADAPTER_KINDS) -> None:
        super().__init__()
        self._adapter_kinds = tuple(adapter_kinds)
        self._adapters: dict[type, RecordAdapter] = {}
        self._by_name: dict[str, type] = {}
        self._identifiers: set[str] = set()

    def register(self, record_type: _T, adapter: RecordAdapter | None = None) -> _T:
        """Register ``record_type``, optionally with a custom adapter."""
        if adapter is None:
            adapter = self._build_adapter(record_type)
        if adapter is None:
            msg = f"no adapter can handle record type: {record_type!r}"
            raise TypeError(msg)

        self._adapters[record_type] = adapter
        self._by_name[adapter.qualified_name] = record_type
        self._identifiers.update(adapter.field_names())
        logger.debug("registered record type %s with fields %s", adapter.qualified_name, sorted(adapter.field_names()))
        return record_type

    def record(self, record_type: _T) -> _T:
        """Class decorator form of ``register``."""
        return self.register(record_type)

    def adapter_for(self, record_type: object) -> RecordAdapter | None:
        """Return the adapter for ``record_type`` or None when it isn't a record type."""
        if not isinstance(record_type, type):
            return None
        registered = self._adapters.get(record_type)
        if registered is not None:
            return registered
        return self._build_adapter(record_type)

    def lookup(self, name: str) -> type | None:
        """Return the registered type with qualified name ``name``."""
        return self._by_name.get(name.replace(":", "."))

    @property
    def identifiers(self) -> IdentifierTable:
        """Read-only view of every identifier declared by a registered type."""
        return IdentifierTable(lambda: self._identifiers)

    def _build_adapter(self, record_type: type) -> RecordAdapter | None:
        for kind in self._adapter_kinds:
            if kind.accepts(record_type):
                return kind(record_type)
        return None


default_registry = RecordRegistry()


def record(record_type: _T) -> _T:
    """Register ``record_type`` with the default registry."""
    return default_registry.register(record_type)

