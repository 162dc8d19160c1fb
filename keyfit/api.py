"""Public conversion entry points.

The plain functions return a ``Conversion`` and never raise for bad data;
the ``*_or_raise`` variants unwrap it and raise ``ConversionFailed``.
Invalid options raise immediately in both forms.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .errors import (
    ConversionError,
    ConversionFailed,
    NonTextNonIdentifierKey,
    ResidualFieldUnavailable,
    UnknownIdentifierText,
)
from .identifiers import Identifier
from .reconcile import RESIDUAL_FIELD, KeyReconciler, ReconcileOptions, RestMode
from .resolver import FieldResolver
from .result import Conversion


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .records import RecordAdapter, RecordRegistry


def _resolve_adapter(resolver: FieldResolver, record_type: type | str) -> RecordAdapter | ConversionError:
    if isinstance(record_type, str):
        resolved = resolver.resolve_type(record_type)
        if isinstance(resolved, ConversionError):
            return resolved
        record_type = resolved
    return resolver.ensure_is_record_type(record_type)


def map_to_record(
    source: Mapping[str, Any],
    record_type: type | str,
    *,
    transformations: Iterable[str] = (),
    rest: RestMode | str = RestMode.DISCARD,
    registry: RecordRegistry | None = None,
) -> Conversion:
    """Convert a text-keyed map to an instance of ``record_type``.

    Parameters
    ----------
    source
        Map with ``str`` keys only; any other key kind fails the call.
    record_type
        Record class, or the name of an already registered or imported one.
    transformations
        Key transformations tried on keys that match no field, e.g.
        ``["snake_case"]``. Empty means exact matches only.
    rest
        ``"discard"`` drops unmatched entries, ``"separate"`` returns them in
        ``Conversion.residual`` and ``"merge"`` stores them on the record under
        the ``keyfit`` attribute.
    registry
        Registry to resolve types against. Defaults to the process-wide one.
    """
    options = ReconcileOptions.parse(transformations, rest)
    resolver = FieldResolver(registry)
    adapter = _resolve_adapter(resolver, record_type)
    if isinstance(adapter, ConversionError):
        return Conversion.failure(adapter)
    return KeyReconciler(resolver, options).reconcile(source, adapter)


def map_to_record_or_raise(
    source: Mapping[str, Any],
    record_type: type | str,
    *,
    transformations: Iterable[str] = (),
    rest: RestMode | str = RestMode.DISCARD,
    registry: RecordRegistry | None = None,
) -> Any:
    """Same as ``map_to_record`` but returns the record (or ``(record, residual)``) and raises on error."""
    conversion = map_to_record(source, record_type, transformations=transformations, rest=rest, registry=registry)
    return conversion.unwrap()


def normalize_keys_to_text(mapping: Mapping[Any, Any]) -> Conversion:
    """Convert a map keyed by identifiers and/or text into a text-keyed map.

    The converted map is returned as ``Conversion.record``.
    """
    normalized: dict[str, Any] = {}
    for key, value in mapping.items():
        if isinstance(key, Identifier):
            normalized[key.name] = value
        elif isinstance(key, str):
            normalized[key] = value
        else:
            return Conversion.failure(NonTextNonIdentifierKey(key))
    return Conversion(record=normalized)


def record_to_mapping(instance: Any, *, registry: RecordRegistry | None = None) -> dict[Identifier, Any]:
    """Return the fields of a record instance keyed by identifier."""
    adapter = FieldResolver(registry).ensure_is_record_type(type(instance))
    if isinstance(adapter, ConversionError):
        raise ConversionFailed(adapter)
    return adapter.to_mapping(instance)


def record_to_record(
    source_record: Any,
    record_type: type | str,
    *,
    rest: RestMode | str = RestMode.DISCARD,
    registry: RecordRegistry | None = None,
) -> Conversion:
    """Convert one record into another record type by field name.

    Residual keys come back as identifiers, each re-checked against the
    known identifiers rather than against either type's field set.
    """
    options = ReconcileOptions.parse(rest=rest)
    lookup = FieldResolver(registry)
    source_adapter = lookup.ensure_is_record_type(type(source_record))
    if isinstance(source_adapter, ConversionError):
        return Conversion.failure(source_adapter)
    adapter = _resolve_adapter(lookup, record_type)
    if isinstance(adapter, ConversionError):
        return Conversion.failure(adapter)

    normalized = normalize_keys_to_text(source_adapter.to_mapping(source_record))
    if not normalized.ok:
        return normalized

    resolver = FieldResolver(registry, loaded=(source_adapter, adapter))
    wanted = RestMode.DISCARD if options.rest is RestMode.DISCARD else RestMode.SEPARATE
    conversion = KeyReconciler(resolver, ReconcileOptions(rest=wanted)).reconcile(normalized.record, adapter)
    if not conversion.ok or conversion.residual is None:
        return conversion

    residual: dict[Identifier, Any] = {}
    for key, value in conversion.residual.items():
        identifier = resolver.lookup_identifier(key)
        if identifier is None:
            return Conversion.failure(UnknownIdentifierText(key))
        residual[identifier] = value

    if options.rest is RestMode.MERGE:
        if not adapter.can_hold(RESIDUAL_FIELD):
            return Conversion.failure(ResidualFieldUnavailable(adapter.record_type, RESIDUAL_FIELD))
        return Conversion(record=adapter.attach(conversion.record, RESIDUAL_FIELD, residual))
    return Conversion(record=conversion.record, residual=residual)


def record_to_record_or_raise(
    source_record: Any,
    record_type: type | str,
    *,
    rest: RestMode | str = RestMode.DISCARD,
    registry: RecordRegistry | None = None,
) -> Any:
    """Same as ``record_to_record`` but returns the record (or ``(record, residual)``) and raises on error."""
    return record_to_record(source_record, record_type, rest=rest, registry=registry).unwrap()


def load_record(
    dump: Mapping[str, Any],
    *,
    strict: bool = False,
    registry: RecordRegistry | None = None,
) -> Conversion:
    """Rebuild a record from a dump naming its type under ``"__record__"``.

    Keys are matched exactly. Non-strict loads return unmatched entries in
    ``Conversion.residual``; strict loads fail on the first unknown key.
    """
    resolver = FieldResolver(registry)
    split = resolver.split_dump(dump)
    if isinstance(split, ConversionError):
        return Conversion.failure(split)
    adapter, fields = split

    built = resolver.build_record(adapter, fields, strict=strict)
    if isinstance(built, ConversionError):
        return Conversion.failure(built)
    instance, residual = built
    if strict:
        return Conversion(record=instance)
    return Conversion(record=instance, residual=residual)


def load_record_or_raise(
    dump: Mapping[str, Any],
    *,
    strict: bool = False,
    registry: RecordRegistry | None = None,
) -> Any:
    """Same as ``load_record`` but returns the record (or ``(record, residual)``) and raises on error."""
    return load_record(dump, strict=strict, registry=registry).unwrap()


def residual_or_raise(
    record_type: type | str,
    fields: Mapping[str, Any],
    *,
    registry: RecordRegistry | None = None,
) -> dict[str, Any]:
    """Return only the entries of ``fields`` that match no field of ``record_type``."""
    _, residual = map_to_record_or_raise(fields, record_type, rest=RestMode.SEPARATE, registry=registry)
    return residual
