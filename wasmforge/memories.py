"""Linear memories of a module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .arena import Id, Tombstone, TombstoneArena
from .ty import encode_u32

_MEMORY_SECTION = 5


@dataclass
class Memory(Tombstone):
    """A memory in the module."""

    id: Id
    shared: bool
    initial: int
    maximum: int | None = None
    import_id: Id | None = None
    data_segments: set[Id] = field(default_factory=set)

    def on_delete(self) -> None:
        self.data_segments = set()

    def encode(self) -> bytes:
        """Return the binary encoding of this memory's limits."""
        if self.maximum is not None:
            flag = 0x03 if self.shared else 0x01
            return bytes([flag]) + encode_u32(self.initial) + encode_u32(self.maximum)
        return b"\x00" + encode_u32(self.initial)


class ModuleMemories:
    """The set of memories in a module."""

    def __init__(self) -> None:
        self._arena: TombstoneArena[Memory] = TombstoneArena()

    def add_import(
        self, shared: bool, initial: int, maximum: int | None, import_id: Id
    ) -> Id:
        """Add a memory provided by the import ``import_id``."""
        return self._arena.alloc_with_id(
            lambda id: Memory(id, shared, initial, maximum, import_id)
        )

    def add_local(self, shared: bool, initial: int, maximum: int | None) -> Id:
        """Add a memory defined by the module itself."""
        return self._arena.alloc_with_id(
            lambda id: Memory(id, shared, initial, maximum)
        )

    def get(self, id: Id) -> Memory:
        """Return the memory with ``id``."""
        return self._arena[id]

    def delete(self, id: Id) -> None:
        """Remove a memory; references to it elsewhere are the caller's concern."""
        self._arena.delete(id)

    def __iter__(self) -> Iterator[Memory]:
        return iter(self._arena)

    def emit(self, indices: dict[Id, int]) -> bytes:
        """Encode the memory section.

        Imported memories belong to the import section and are skipped.
        ``indices`` maps memory ids to memory indices; each emitted memory
        is given the next one. Returns no bytes when there is nothing to emit.
        """
        local = [m for m in self._arena if m.import_id is None]
        if not local:
            return b""
        parts = [encode_u32(len(local))]
        for memory in local:
            indices[memory.id] = len(indices)
            parts.append(memory.encode())
        payload = b"".join(parts)
        return bytes([_MEMORY_SECTION]) + encode_u32(len(payload)) + payload