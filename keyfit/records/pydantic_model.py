"""Adapter for pydantic ``BaseModel`` record types."""

from __future__ import annotations

from typing import Any, override


try:
    import pydantic as pydantic_module
except ImportError:  # pragma: no cover - exercised when dependency is absent
    pydantic_module = None

from keyfit.identifiers import Identifier

from .protocol import RecordAdapter


def _field_default(info: Any) -> Any:
    if info.is_required():
        return None
    return info.get_default(call_default_factory=True)


class PydanticModelAdapter(RecordAdapter):
    """Pydantic models built with ``model_construct`` so values pass through unvalidated.

    Models with ``extra="allow"`` can hold the residual map without declaring
    a field for it.
    """

    def __init__(self, record_type: type) -> None:
        if pydantic_module is None:
            msg = "pydantic dependency is required for PydanticModelAdapter; install with `pip install keyfit[pydantic]`"
            raise RuntimeError(msg)
        super().__init__(record_type)

    @override
    @classmethod
    def accepts(cls, record_type: type) -> bool:
        if pydantic_module is None:
            return False
        return issubclass(record_type, pydantic_module.BaseModel)

    @override
    def field_names(self) -> frozenset[str]:
        return frozenset(self.record_type.model_fields)

    @override
    def defaults(self) -> dict[str, Any]:
        return {name: _field_default(info) for name, info in self.record_type.model_fields.items()}

    @override
    def build(self, values: dict[str, Any]) -> Any:
        merged = {
            name: values[name] if name in values else _field_default(info)
            for name, info in self.record_type.model_fields.items()
        }
        return self.record_type.model_construct(**merged)

    @override
    def to_mapping(self, instance: Any) -> dict[Identifier, Any]:
        return {Identifier(name): getattr(instance, name) for name in self.record_type.model_fields}

    @override
    def can_hold(self, name: str) -> bool:
        if name in self.field_names():
            return True
        config = self.record_type.model_config
        return config.get("extra") == "allow" and not config.get("frozen", False)

    @override
    def attach(self, instance: Any, name: str, value: Any) -> Any:
        if name in self.field_names():
            object.__setattr__(instance, name, value)
        else:
            setattr(instance, name, value)
        return instance
