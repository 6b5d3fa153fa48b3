"""Mapping from indices in a parsed binary to the ids of the items they name."""

from __future__ import annotations

from .arena import Id


class IndexOutOfBoundsError(LookupError):
    """Raised when an index was not present in the parsed binary."""


def _push(ids: list[Id], id: Id) -> int:
    ids.append(id)
    return len(ids) - 1


def _get(ids: list[Id], index: int, what: str) -> Id:
    if not 0 <= index < len(ids):
        raise IndexOutOfBoundsError(f"index `{index}` is out of bounds for {what}")
    return ids[index]


class IndicesToIds:
    """Maps indices of a parsed binary to the ids of the module's items.

    Items built after parsing have no such index and are not recorded here.
    """

    def __init__(self) -> None:
        self._tables: list[Id] = []
        self._types: list[Id] = []
        self._funcs: list[Id] = []
        self._globals: list[Id] = []
        self._memories: list[Id] = []
        self._elements: list[Id] = []
        self._data: list[Id] = []
        self._locals: dict[Id, list[Id]] = {}

    def push_table(self, id: Id) -> int:
        """Record the next table index and return it."""
        return _push(self._tables, id)

    def get_table(self, index: int) -> Id:
        """Return the id of the table at ``index``."""
        return _get(self._tables, index, "tables")

    def push_type(self, id: Id) -> int:
        """Record the next type index and return it."""
        return _push(self._types, id)

    def get_type(self, index: int) -> Id:
        """Return the id of the type at ``index``."""
        return _get(self._types, index, "types")

    def push_func(self, id: Id) -> int:
        """Record the next function index and return it."""
        return _push(self._funcs, id)

    def get_func(self, index: int) -> Id:
        """Return the id of the function at ``index``."""
        return _get(self._funcs, index, "funcs")

    def push_global(self, id: Id) -> int:
        """Record the next global index and return it."""
        return _push(self._globals, id)

    def get_global(self, index: int) -> Id:
        """Return the id of the global at ``index``."""
        return _get(self._globals, index, "globals")

    def push_memory(self, id: Id) -> int:
        """Record the next memory index and return it."""
        return _push(self._memories, id)

    def get_memory(self, index: int) -> Id:
        """Return the id of the memory at ``index``."""
        return _get(self._memories, index, "memories")

    def push_element(self, id: Id) -> int:
        """Record the next element segment index and return it."""
        return _push(self._elements, id)

    def get_element(self, index: int) -> Id:
        """Return the id of the element segment at ``index``."""
        return _get(self._elements, index, "elements")

    def push_data(self, id: Id) -> int:
        """Record the next data segment index and return it."""
        return _push(self._data, id)

    def get_data(self, index: int) -> Id:
        """Return the id of the data segment at ``index``."""
        return _get(self._data, index, "data")

    def push_local(self, function: Id, id: Id) -> int:
        """Record the next local index of ``function`` and return it."""
        return _push(self._locals.setdefault(function, []), id)

    def get_local(self, function: Id, index: int) -> Id:
        """Return the id of local ``index`` in ``function``."""
        locals_ = self._locals.get(function)
        if locals_ is None:
            raise IndexOutOfBoundsError(
                f"function index `{function.index}` is out of bounds for local"
            )
        if not 0 <= index < len(locals_):
            raise IndexOutOfBoundsError(
                f"index `{index}` in function `{function.index}` is out of bounds for local"
            )
        return locals_[index]