"""Per-call reconciliation options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from keyfit.errors import ConversionFailed, UnknownTransformationName

from .transforms import TRANSFORMATIONS, Transformation


if TYPE_CHECKING:
    from collections.abc import Iterable


RESIDUAL_FIELD = "keyfit"


class RestMode(StrEnum):
    """How entries that match no field are surfaced."""

    DISCARD = "discard"
    SEPARATE = "separate"
    MERGE = "merge"


@dataclass(frozen=True)
class ReconcileOptions:
    transformations: tuple[Transformation, ...] = ()
    rest: RestMode = RestMode.DISCARD

    @classmethod
    def parse(cls, transformations: Iterable[Any] = (), rest: Any = RestMode.DISCARD) -> ReconcileOptions:
        """Validate caller options, raising before any data is looked at."""
        requested = tuple(transformations)
        allowed = tuple(str(name) for name in TRANSFORMATIONS)
        if any(name not in allowed for name in requested):
            raise ConversionFailed(UnknownTransformationName(requested, allowed))

        try:
            rest_mode = RestMode(rest)
        except ValueError:
            msg = f"rest must be one of {[str(mode) for mode in RestMode]}, got {rest!r}"
            raise ValueError(msg) from None

        return cls(transformations=tuple(Transformation(name) for name in requested), rest=rest_mode)
