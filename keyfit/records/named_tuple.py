"""Adapter for ``typing.NamedTuple`` and ``collections.namedtuple`` types."""

from __future__ import annotations

from typing import Any, override

from keyfit.identifiers import Identifier

from .protocol import RecordAdapter


class NamedTupleAdapter(RecordAdapter):
    """Named tuples are immutable, so ``attach`` only replaces declared fields."""

    @override
    @classmethod
    def accepts(cls, record_type: type) -> bool:
        return issubclass(record_type, tuple) and hasattr(record_type, "_fields")

    @override
    def field_names(self) -> frozenset[str]:
        return frozenset(self.record_type._fields)

    @override
    def defaults(self) -> dict[str, Any]:
        declared: dict[str, Any] = getattr(self.record_type, "_field_defaults", {})
        return {name: declared.get(name) for name in self.record_type._fields}

    @override
    def build(self, values: dict[str, Any]) -> Any:
        merged = self.defaults()
        merged.update((name, value) for name, value in values.items() if name in merged)
        return self.record_type(**merged)

    @override
    def to_mapping(self, instance: Any) -> dict[Identifier, Any]:
        return {Identifier(name): value for name, value in instance._asdict().items()}

    @override
    def can_hold(self, name: str) -> bool:
        return name in self.field_names()

    @override
    def attach(self, instance: Any, name: str, value: Any) -> Any:
        return instance._replace(**{name: value})
