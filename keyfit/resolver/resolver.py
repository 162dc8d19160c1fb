"""Resolve untrusted text to known record types and fields without creating identifiers."""

from __future__ import annotations

import logging
import re
import sys
from typing import TYPE_CHECKING, Any

from keyfit.errors import (
    BadTypeName,
    ConversionError,
    MissingTypeKey,
    NotARecordType,
    TextKeyRequired,
    UnknownIdentifierText,
    UnknownRecordField,
    UnknownType,
)
from keyfit.identifiers import Identifier
from keyfit.records import default_registry


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from keyfit.identifiers import IdentifierTable
    from keyfit.records import RecordAdapter, RecordRegistry


logger = logging.getLogger(__name__)

RECORD_KEY = "__record__"

_TYPE_NAME_PATTERN = re.compile(r"^[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*[.:][A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*$")


class FieldResolver:
    """Bridge untrusted text to validated record types and field identifiers.

    Lookups only query the registry, already-imported modules, and the
    identifier table; nothing is imported or registered as a side effect.

    Parameters
    ----------
    registry
        Registry used for type lookup and as the identifier table source.
        Defaults to the process-wide registry.
    loaded
        Adapters of record types already in hand for this call; their field
        names count as existing identifiers.
    """

    def __init__(self, registry: RecordRegistry | None = None, loaded: Iterable[RecordAdapter] = ()) -> None:
        super().__init__()
        self.registry = registry if registry is not None else default_registry
        identifiers = self.registry.identifiers
        for adapter in loaded:
            identifiers = identifiers.with_names(adapter.field_names())
        self.identifiers: IdentifierTable = identifiers

    def resolve_type(self, text: object) -> type | ConversionError:
        """Return the already-known type named by ``text``."""
        if not isinstance(text, str) or not _TYPE_NAME_PATTERN.match(text):
            return BadTypeName(text)

        registered = self.registry.lookup(text)
        if registered is not None:
            return registered

        if ":" in text:
            module_name, _, attr_path = text.partition(":")
            found = self._find_loaded(module_name, attr_path)
        else:
            found = self._find_loaded_dotted(text)
        if found is None:
            logger.debug("type %r is neither registered nor loaded", text)
            return UnknownType(text)
        return found

    def ensure_is_record_type(self, record_type: object) -> RecordAdapter | ConversionError:
        """Return the adapter for ``record_type`` or ``NotARecordType``."""
        adapter = self.registry.adapter_for(record_type)
        if adapter is None:
            return NotARecordType(record_type)
        return adapter

    def resolve_field(
        self,
        adapter: RecordAdapter,
        key: str,
        field_names: frozenset[str] | None = None,
    ) -> Identifier | None:
        """Return the identifier for ``key`` when it is a declared field of the type.

        ``field_names`` may carry the adapter's field names when the caller
        already has them.
        """
        if field_names is None:
            field_names = adapter.field_names()
        if key in field_names:
            return Identifier(key)
        return None

    def lookup_identifier(self, text: str) -> Identifier | None:
        """Return the identifier spelled ``text`` when it already exists anywhere."""
        return self.identifiers.lookup(text)

    def build_record(
        self,
        adapter: RecordAdapter,
        fields: Mapping[str, Any],
        *,
        strict: bool = False,
        field_names: frozenset[str] | None = None,
    ) -> tuple[Any, dict[str, Any]] | ConversionError:
        """Build an instance from ``fields`` and collect unmatched entries.

        Returns ``(instance, residual)``. In strict mode the first key that is
        not a field of the type fails the whole build instead of going to the
        residual map.
        """
        values: dict[str, Any] = {}
        residual: dict[str, Any] = {}
        if field_names is None:
            field_names = adapter.field_names()
        for key, value in fields.items():
            identifier = self.resolve_field(adapter, key, field_names) if isinstance(key, str) else None
            if identifier is not None:
                values[identifier.name] = value
                continue
            if strict:
                return self._strict_error(adapter, key)
            residual[key] = value

        return adapter.build(values), residual

    def split_dump(self, dump: Mapping[str, Any]) -> tuple[RecordAdapter, dict[str, Any]] | ConversionError:
        """Resolve the type named under ``RECORD_KEY`` and return it with the remaining fields."""
        if RECORD_KEY not in dump:
            return MissingTypeKey(RECORD_KEY)
        for key in dump:
            if not isinstance(key, str):
                return TextKeyRequired(key)
        fields = dict(dump)
        record_type = self.resolve_type(fields.pop(RECORD_KEY))
        if isinstance(record_type, ConversionError):
            return record_type
        adapter = self.ensure_is_record_type(record_type)
        if isinstance(adapter, ConversionError):
            return adapter
        return adapter, fields

    def _strict_error(self, adapter: RecordAdapter, key: Any) -> ConversionError:
        if key not in self.identifiers:
            return UnknownIdentifierText(key)
        return UnknownRecordField(adapter.record_type, key)

    @staticmethod
    def _find_loaded(module_name: str, attr_path: str) -> type | None:
        module = sys.modules.get(module_name)
        if module is None:
            return None
        found: Any = module
        for part in attr_path.split("."):
            found = getattr(found, part, None)
            if found is None:
                return None
        return found if isinstance(found, type) else None

    @classmethod
    def _find_loaded_dotted(cls, text: str) -> type | None:
        """Try each split of ``pkg.module.Outer.Inner``, longest module name first."""
        parts = text.split(".")
        for split_at in range(len(parts) - 1, 0, -1):
            found = cls._find_loaded(".".join(parts[:split_at]), ".".join(parts[split_at:]))
            if found is not None:
                return found
        return None
