"""Adapter for ``dataclasses`` record types."""

from __future__ import annotations

import dataclasses
import inspect
from typing import Any, override

from keyfit.identifiers import Identifier

from .protocol import RecordAdapter


def _field_default(field: dataclasses.Field[Any]) -> Any:
    if field.default is not dataclasses.MISSING:
        return field.default
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return None


class DataclassAdapter(RecordAdapter):
    """Build and introspect dataclass instances without running validation."""

    @override
    @classmethod
    def accepts(cls, record_type: type) -> bool:
        return dataclasses.is_dataclass(record_type)

    def _fields(self) -> tuple[dataclasses.Field[Any], ...]:
        return dataclasses.fields(self.record_type)

    @override
    def field_names(self) -> frozenset[str]:
        return frozenset(field.name for field in self._fields())

    @override
    def defaults(self) -> dict[str, Any]:
        return {field.name: _field_default(field) for field in self._fields()}

    @override
    def build(self, values: dict[str, Any]) -> Any:
        init_values: dict[str, Any] = {}
        late_values: dict[str, Any] = {}
        for field in self._fields():
            if field.name in values:
                value = values[field.name]
            elif not field.init:
                continue
            else:
                value = _field_default(field)
            if field.init:
                init_values[field.name] = value
            else:
                late_values[field.name] = value

        # InitVar pseudo-fields are not fields; required ones take None like any other missing value
        for name, parameter in inspect.signature(self.record_type).parameters.items():
            if name not in init_values and parameter.default is inspect.Parameter.empty:
                init_values[name] = None

        instance = self.record_type(**init_values)
        for name, value in late_values.items():
            object.__setattr__(instance, name, value)
        return instance

    @override
    def to_mapping(self, instance: Any) -> dict[Identifier, Any]:
        return {Identifier(field.name): getattr(instance, field.name) for field in self._fields()}

    @override
    def can_hold(self, name: str) -> bool:
        if name in self.field_names():
            return True
        # slotted classes without a __dict__ only accept declared attributes
        return "__slots__" not in vars(self.record_type)

    @override
    def attach(self, instance: Any, name: str, value: Any) -> Any:
        object.__setattr__(instance, name, value)
        return instance
