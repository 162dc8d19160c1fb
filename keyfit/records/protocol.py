"""Record adapter interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from keyfit.identifiers import Identifier


class RecordAdapter(ABC):
    """Field enumeration and construction for one record type."""

    def __init__(self, record_type: type) -> None:
        super().__init__()
        self.record_type = record_type

    @property
    def qualified_name(self) -> str:
        """Return ``module.QualName`` for the adapted type."""
        return f"{self.record_type.__module__}.{self.record_type.__qualname__}"

    @classmethod
    @abstractmethod
    def accepts(cls, record_type: type) -> bool:
        """Return True when this adapter kind can handle ``record_type``."""

    @abstractmethod
    def field_names(self) -> frozenset[str]:
        """Return the declared field names without computing any defaults."""

    @abstractmethod
    def defaults(self) -> dict[str, Any]:
        """Return every field name mapped to its default value."""

    @abstractmethod
    def build(self, values: dict[str, Any]) -> Any:
        """Create an instance from field values; missing fields take defaults."""

    @abstractmethod
    def to_mapping(self, instance: Any) -> dict[Identifier, Any]:
        """Return the instance's fields keyed by identifier."""

    @abstractmethod
    def can_hold(self, name: str) -> bool:
        """Return True when ``attach`` can store a value under ``name``."""

    @abstractmethod
    def attach(self, instance: Any, name: str, value: Any) -> Any:
        """Store ``value`` under ``name`` and return the resulting instance."""
