"""Conversion error kinds and the exception raised by the ``*_or_raise`` API."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


def _type_label(record_type: Any) -> str:
    if isinstance(record_type, type):
        return f"{record_type.__module__}.{record_type.__qualname__}"
    return repr(record_type)


@dataclass(frozen=True)
class ConversionError(ABC):
    """Base class for every error a conversion can report."""

    @abstractmethod
    def message(self) -> str:
        """Return the human-readable message for this error."""


@dataclass(frozen=True)
class MissingTypeKey(ConversionError):
    key: str = "__record__"

    def message(self) -> str:
        return f"the given map doesn't contain a {self.key!r} key"


@dataclass(frozen=True)
class BadTypeName(ConversionError):
    name: Any

    def message(self) -> str:
        return f"not a record type name: {self.name!r}"


@dataclass(frozen=True)
class UnknownType(ConversionError):
    name: str

    def message(self) -> str:
        return f"type doesn't exist: {self.name!r}"


@dataclass(frozen=True)
class NotARecordType(ConversionError):
    record_type: Any

    def message(self) -> str:
        return f"type is not a record type: {_type_label(self.record_type)}"


@dataclass(frozen=True)
class UnknownIdentifierText(ConversionError):
    text: str

    def message(self) -> str:
        return f"identifier doesn't exist: {self.text!r}"


@dataclass(frozen=True)
class UnknownRecordField(ConversionError):
    record_type: Any
    field: str

    def message(self) -> str:
        return f"unknown field {self.field!r} for record type {_type_label(self.record_type)}"


@dataclass(frozen=True)
class TextKeyRequired(ConversionError):
    key: Any

    def message(self) -> str:
        return f"the map contains a non-text key which is not expected: {self.key!r}"


@dataclass(frozen=True)
class NonTextNonIdentifierKey(ConversionError):
    key: Any

    def message(self) -> str:
        return f"the key is neither an identifier nor text: {self.key!r}"


@dataclass(frozen=True)
class UnknownTransformationName(ConversionError):
    names: tuple[Any, ...]
    allowed: tuple[str, ...]

    def message(self) -> str:
        return f"unknown transformation in {list(self.names)!r}, allowed transformations: {list(self.allowed)!r}"


@dataclass(frozen=True)
class ResidualFieldUnavailable(ConversionError):
    record_type: Any
    field: str

    def message(self) -> str:
        return f"record type {_type_label(self.record_type)} cannot hold the residual map under {self.field!r}"


class ConversionFailed(ValueError):
    """Raised by the raising API variants and for invalid conversion options."""

    def __init__(self, error: ConversionError) -> None:
        super().__init__(error.message())
        self.error = error
