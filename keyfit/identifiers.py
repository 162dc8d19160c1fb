"""Field identifiers and the read-only table used to check them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Iterable


@dataclass(frozen=True, order=True)
class Identifier:
    """Canonical name of a record field, kept distinct from plain text keys."""

    name: str

    def __str__(self) -> str:
        return self.name


class IdentifierTable:
    """Answer whether a text is an already-known identifier.

    The table is a view: it never stores the texts it is asked about. Known
    identifiers come from the ``sources`` callables (usually the registry's
    registered record types) and from the field names of types already loaded
    for the current call.
    """

    def __init__(self, *sources: Callable[[], Collection[str]]) -> None:
        super().__init__()
        self._sources = sources

    def with_names(self, names: Iterable[str]) -> IdentifierTable:
        """Return a new table that also knows ``names``."""
        frozen = frozenset(names)
        return IdentifierTable(*self._sources, lambda: frozen)

    def __contains__(self, text: object) -> bool:
        if not isinstance(text, str):
            return False
        return any(text in names for names in (source() for source in self._sources))

    def lookup(self, text: str) -> Identifier | None:
        """Return the identifier spelled ``text`` if it already exists."""
        if text in self:
            return Identifier(text)
        return None
