"""Key reconciliation between a text-keyed map and a record type's fields."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from keyfit.errors import ConversionError, ResidualFieldUnavailable, TextKeyRequired
from keyfit.result import Conversion

from .options import RESIDUAL_FIELD, ReconcileOptions, RestMode
from .transforms import TRANSFORMATIONS


if TYPE_CHECKING:
    from collections.abc import Mapping

    from keyfit.records import RecordAdapter
    from keyfit.resolver import FieldResolver


logger = logging.getLogger(__name__)


def partition_keys(source: Mapping[str, Any], field_names: frozenset[str]) -> tuple[list[str], list[str]]:
    """Split source keys into those naming a field verbatim and the rest."""
    matching = [key for key in source if key in field_names]
    non_matching = [key for key in source if key not in field_names]
    return matching, non_matching


class KeyReconciler:
    """Match source map keys to record fields, with optional key transformations.

    The reconciler holds no per-call state; one instance can serve any number
    of conversions.
    """

    def __init__(self, resolver: FieldResolver, options: ReconcileOptions | None = None) -> None:
        super().__init__()
        self.resolver = resolver
        self.options = options if options is not None else ReconcileOptions()

    def reconcile(self, source: Mapping[str, Any], adapter: RecordAdapter) -> Conversion:
        """Build a record of ``adapter``'s type from ``source``."""
        for key in source:
            if not isinstance(key, str):
                return Conversion.failure(TextKeyRequired(key))

        field_names = adapter.field_names()
        matching, non_matching = partition_keys(source, field_names)
        logger.debug(
            "%s: %d matching keys, %d non-matching keys",
            adapter.qualified_name,
            len(matching),
            len(non_matching),
        )

        if not non_matching or not self.options.transformations:
            built = self.resolver.build_record(adapter, source, field_names=field_names)
            if isinstance(built, ConversionError):
                return Conversion.failure(built)
            instance, residual = built
            return self._dispatch_rest(adapter, instance, residual)

        trace = self._trace_keys(source, non_matching)
        merged, owners, displaced = self._merge(source, trace)
        built = self.resolver.build_record(adapter, merged, field_names=field_names)
        if isinstance(built, ConversionError):
            return Conversion.failure(built)
        instance, residual = built
        residual = _restore_original_keys(residual, owners)
        residual.update(displaced)
        return self._dispatch_rest(adapter, instance, residual)

    def _trace_keys(self, source: Mapping[str, Any], non_matching: list[str]) -> dict[str, str]:
        trace = {key: key for key in source}
        for name in self.options.transformations:
            transform = TRANSFORMATIONS[name]
            for key in non_matching:
                trace[key] = transform(trace[key])
        return trace

    @staticmethod
    def _merge(source: Mapping[str, Any], trace: dict[str, str]) -> tuple[dict[str, Any], dict[str, str], dict[str, Any]]:
        """Lay transformed entries over untouched ones.

        Returns the merged map, the original key owning each merged key, and
        the displaced entries.

        Transformed keys are applied in sorted order of their original keys;
        an entry pushed out by a later one lands in the returned displaced map
        under its original key.
        """
        merged: dict[str, Any] = {}
        owners: dict[str, str] = {}
        for key, used in trace.items():
            if key == used:
                merged[key] = source[key]
                owners[key] = key

        displaced: dict[str, Any] = {}
        for key in sorted(key for key, used in trace.items() if key != used):
            used = trace[key]
            if used in owners:
                previous = owners[used]
                displaced[previous] = source[previous]
                logger.debug("transformed key %r replaces entry %r", key, previous)
            merged[used] = source[key]
            owners[used] = key
        return merged, owners, displaced

    def _dispatch_rest(self, adapter: RecordAdapter, instance: Any, residual: dict[str, Any]) -> Conversion:
        rest = self.options.rest
        if rest is RestMode.SEPARATE:
            return Conversion(record=instance, residual=residual)
        if rest is RestMode.MERGE:
            if not adapter.can_hold(RESIDUAL_FIELD):
                return Conversion.failure(ResidualFieldUnavailable(adapter.record_type, RESIDUAL_FIELD))
            return Conversion(record=adapter.attach(instance, RESIDUAL_FIELD, residual))
        return Conversion(record=instance)


def _restore_original_keys(residual: dict[str, Any], owners: dict[str, str]) -> dict[str, Any]:
    """Re-key residual entries that reached the resolver under a transformed spelling."""
    return {owners.get(key, key): value for key, value in residual.items()}
