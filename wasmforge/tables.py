"""Tables of a module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .arena import Id, Tombstone, TombstoneArena
from .ty import ValType, encode_u32

_TABLE_SECTION = 4


@dataclass
class Table(Tombstone):
    """A table in the module."""

    id: Id
    initial: int
    maximum: int | None
    element_ty: ValType
    import_id: Id | None = None
    elem_segments: set[Id] = field(default_factory=set)

    def encode(self) -> bytes:
        """Return the binary encoding of this table's type and limits."""
        out = self.element_ty.encode()
        out += bytes([int(self.maximum is not None)])
        out += encode_u32(self.initial)
        if self.maximum is not None:
            out += encode_u32(self.maximum)
        return out


class ModuleTables:
    """The set of tables in a module."""

    def __init__(self) -> None:
        self._arena: TombstoneArena[Table] = TombstoneArena()

    def add_import(
        self, initial: int, maximum: int | None, element_ty: ValType, import_id: Id
    ) -> Id:
        """Add a table provided by the import ``import_id``."""
        return self._arena.alloc_with_id(
            lambda id: Table(id, initial, maximum, element_ty, import_id)
        )

    def add_local(self, initial: int, maximum: int | None, element_ty: ValType) -> Id:
        """Add a table defined by the module itself."""
        return self._arena.alloc_with_id(
            lambda id: Table(id, initial, maximum, element_ty)
        )

    def get(self, id: Id) -> Table:
        """Return the table with ``id``."""
        return self._arena[id]

    def delete(self, id: Id) -> None:
        """Remove a table; references to it elsewhere are the caller's concern."""
        self._arena.delete(id)

    def __iter__(self) -> Iterator[Table]:
        return iter(self._arena)

    def main_function_table(self) -> Id | None:
        """Return the module's single function table, or None if it has none.

        Raises ValueError if there is more than one function table.
        """
        funcs = [t for t in self._arena if t.element_ty == ValType.Funcref]
        if not funcs:
            return None
        if len(funcs) > 1:
            raise ValueError("module contains more than one function table")
        return funcs[0].id

    def emit(self, indices: dict[Id, int]) -> bytes:
        """Encode the table section.

        Imported tables belong to the import section and are skipped.
        ``indices`` maps table ids to table indices; each emitted table is
        given the next one. Returns no bytes when there is nothing to emit.
        """
        local = [t for t in self._arena if t.import_id is None]
        if not local:
            return b""
        parts = [encode_u32(len(local))]
        for table in local:
            indices[table.id] = len(indices)
            parts.append(table.encode())
        payload = b"".join(parts)
        return bytes([_TABLE_SECTION]) + encode_u32(len(payload)) + payload