"""Fallback key transformations applied to keys that don't match a field."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable


_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[-\s]+")


class Transformation(StrEnum):
    SNAKE_CASE = "snake_case"


def to_snake_case(text: str) -> str:
    """Rewrite ``text`` in lower snake case.

    ``"FirstName"`` becomes ``"first_name"``, ``"HTTPServer"`` becomes
    ``"http_server"`` and ``"user-id"`` becomes ``"user_id"``.
    """
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    text = _CASE_BOUNDARY.sub(r"\1_\2", text)
    return _SEPARATORS.sub("_", text).lower()


TRANSFORMATIONS: dict[Transformation, Callable[[str], str]] = {
    Transformation.SNAKE_CASE: to_snake_case,
}
