"""Result value returned by the non-raising conversion API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import ConversionError, ConversionFailed


@dataclass(frozen=True)
class Conversion:
    """Outcome of one conversion call.

    Exactly one of ``record`` and ``error`` is meaningful: a failed call never
    carries a partially built record. ``residual`` is ``None`` unless the call
    asked for the unmatched entries to be returned separately.
    """

    record: Any = None
    residual: dict[Any, Any] | None = None
    error: ConversionError | None = None

    @classmethod
    def failure(cls, error: ConversionError) -> Conversion:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the record, or ``(record, residual)`` when a residual was requested.

        Raises ``ConversionFailed`` carrying the error message when the call failed.
        """
        if self.error is not None:
            raise ConversionFailed(self.error)
        if self.residual is None:
            return self.record
        return self.record, self.residual
