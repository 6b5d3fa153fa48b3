"""The locals used by the functions of a module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .arena import Id, TombstoneArena
from .ty import ValType


@dataclass
class Local:
    """A local variable of some function."""

    id: Id
    ty: ValType
    name: str | None = None


class ModuleLocals:
    """The set of locals of every function in a module."""

    def __init__(self) -> None:
        self._arena: TombstoneArena[Local] = TombstoneArena()

    def add(self, ty: ValType) -> Id:
        """Create a new local of type ``ty`` and return its id."""
        return self._arena.alloc_with_id(lambda id: Local(id, ValType.parse(ty)))

    def get(self, id: Id) -> Local:
        """Return the local with ``id``."""
        return self._arena[id]

    def __iter__(self) -> Iterator[Local]:
        return iter(self._arena)

    def __len__(self) -> int:
        return len(self._arena)