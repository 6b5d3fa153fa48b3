"""The de-duplicated set of function types in a module."""

from __future__ import annotations

from typing import Iterable, Iterator

from .arena import Id, TombstoneArena
from .ty import Type, ValType, encode_u32

_TYPE_SECTION = 1


class ModuleTypes:
    """The set of de-duplicated types within a module."""

    def __init__(self) -> None:
        self._arena: TombstoneArena[Type] = TombstoneArena()
        self._ids: dict[Type, Id] = {}

    def _insert(self, ty: Type) -> Id:
        existing = self._ids.get(ty)
        if existing is not None:
            return existing
        id = self._arena.alloc(ty)
        self._ids[ty] = id
        return id

    def get(self, id: Id) -> Type:
        """Return the type with ``id``."""
        return self._arena[id]

    def params_results(self, id: Id) -> tuple[tuple[ValType, ...], tuple[ValType, ...]]:
        """Return the parameters and results of the type with ``id``."""
        ty = self.get(id)
        return ty.params, ty.results

    def params(self, id: Id) -> tuple[ValType, ...]:
        """Return the parameters of the type with ``id``."""
        return self.get(id).params

    def results(self, id: Id) -> tuple[ValType, ...]:
        """Return the results of the type with ``id``."""
        return self.get(id).results

    def by_name(self, name: str) -> Id | None:
        """Return the id of the first type carrying ``name``, if any."""
        return next((id for id, ty in self._arena.items() if ty.name == name), None)

    def __iter__(self) -> Iterator[Type]:
        return iter(self._arena)

    def delete(self, id: Id) -> None:
        """Remove a type; references to it elsewhere are the caller's concern."""
        ty = self._arena[id]
        if self._ids.get(ty) == id:
            del self._ids[ty]
        self._arena.delete(id)

    def add(self, params: Iterable[ValType], results: Iterable[ValType]) -> Id:
        """Add a function type, returning the existing id for a duplicate."""
        return self._insert(Type(self._arena.next_id(), tuple(params), tuple(results)))

    def add_entry_ty(self, results: Iterable[ValType]) -> Id:
        """Add a type for a multi-value function entry block."""
        return self._insert(Type.for_function_entry(self._arena.next_id(), results))

    def find(self, params: Iterable[ValType], results: Iterable[ValType]) -> Id | None:
        """Return the id of the function type with this signature, if any."""
        params, results = tuple(params), tuple(results)
        return next(
            (
                id
                for id, ty in self._arena.items()
                if not ty.is_for_function_entry
                and ty.params == params
                and ty.results == results
            ),
            None,
        )

    def find_for_function_entry(self, results: Iterable[ValType]) -> Id | None:
        """Return the id of the entry block type with these results, if any."""
        results = tuple(results)
        return next(
            (
                id
                for id, ty in self._arena.items()
                if ty.is_for_function_entry and not ty.params and ty.results == results
            ),
            None,
        )

    def emit(self, indices: dict[Id, int]) -> bytes:
        """Encode the type section.

        Types are written sorted by signature; each emitted type id is given
        the next index in ``indices``. Returns no bytes when there is nothing
        to emit.
        """
        tys = sorted(
            (ty for ty in self._arena if not ty.is_for_function_entry),
            key=Type.sort_key,
        )
        if not tys:
            return b""
        parts = [encode_u32(len(tys))]
        for ty in tys:
            indices[ty.id] = len(indices)
            parts.append(ty.encode())
        payload = b"".join(parts)
        return bytes([_TYPE_SECTION]) + encode_u32(len(payload)) + payload