"""The named items a module imports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .arena import Id, Tombstone, TombstoneArena


class ImportKind(Enum):
    """The kind of item being imported, valued by its binary kind code."""

    FUNCTION = 0x00
    TABLE = 0x01
    MEMORY = 0x02
    GLOBAL = 0x03


@dataclass
class Import(Tombstone):
    """A named item imported into the module."""

    id: Id
    module: str
    name: str
    kind: ImportKind
    item: Id

    def on_delete(self) -> None:
        self.module = ""
        self.name = ""


class ModuleImports:
    """The set of imports in a module."""

    def __init__(self) -> None:
        self._arena: TombstoneArena[Import] = TombstoneArena()

    def get(self, id: Id) -> Import:
        """Return the import with ``id``."""
        return self._arena[id]

    def delete(self, id: Id) -> None:
        """Remove an import; references to it elsewhere are the caller's concern."""
        self._arena.delete(id)

    def __iter__(self) -> Iterator[Import]:
        return iter(self._arena)

    def __len__(self) -> int:
        return len(self._arena)

    def add(self, module: str, name: str, kind: ImportKind, item: Id) -> Id:
        """Add an import of ``item`` under ``module``/``name`` and return its id."""
        kind = ImportKind(kind)
        return self._arena.alloc_with_id(
            lambda id: Import(id, module, name, kind, item)
        )

    def next_id(self) -> Id:
        """Return the id the next added import will receive."""
        return self._arena.next_id()

    def find(self, module: str, name: str) -> Id | None:
        """Return the id of the import with this module and name, if any."""
        return next(
            (
                id
                for id, imp in self._arena.items()
                if imp.name == name and imp.module == module
            ),
            None,
        )