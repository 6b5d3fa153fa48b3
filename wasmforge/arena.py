"""An arena of items addressed by ids, with support for deleting items."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")

_arena_ids = itertools.count()


@dataclass(frozen=True, order=True)
class Id:
    """Identifier of an item allocated in a particular arena."""

    arena_id: int
    index: int


class Tombstone:
    """Base for items that release resources when deleted from an arena.

    The item stays a valid object after ``on_delete``; this only gives it the
    chance to drop whatever it holds.
    """

    tombstoned: bool = False

    def on_delete(self) -> None:
        """Release resources held by a deleted item; by default only marks it."""
        self.tombstoned = True


class TombstoneArena(Generic[T]):
    """An append-only arena in which items can be marked as deleted."""

    def __init__(self) -> None:
        self._arena_id = next(_arena_ids)
        self._items: list[T] = []
        self._dead: set[Id] = set()

    def _owns(self, id: object) -> bool:
        return (
            isinstance(id, Id)
            and id.arena_id == self._arena_id
            and 0 <= id.index < len(self._items)
        )

    def alloc(self, value: T) -> Id:
        """Store ``value`` and return its new id."""
        id = self.next_id()
        self._items.append(value)
        return id

    def alloc_with_id(self, factory: Callable[[Id], T]) -> Id:
        """Build an item from the id it will receive and store it."""
        return self.alloc(factory(self.next_id()))

    def delete(self, id: Id) -> None:
        """Mark the item with ``id`` as deleted and let it release resources."""
        if id not in self:
            raise KeyError(id)
        self._dead.add(id)
        on_delete = getattr(self._items[id.index], "on_delete", None)
        if callable(on_delete):
            on_delete()

    def get(self, id: Id) -> T | None:
        """Return the live item with ``id``, or None."""
        if id in self:
            return self._items[id.index]
        return None

    def next_id(self) -> Id:
        """Return the id the next allocated item will receive."""
        return Id(self._arena_id, len(self._items))

    def items(self) -> Iterator[tuple[Id, T]]:
        """Yield ``(id, item)`` pairs for every live item, in allocation order."""
        for index, value in enumerate(self._items):
            id = Id(self._arena_id, index)
            if id not in self._dead:
                yield id, value

    def __len__(self) -> int:
        return len(self._items) - len(self._dead)

    def __contains__(self, id: object) -> bool:
        return self._owns(id) and id not in self._dead

    def __iter__(self) -> Iterator[T]:
        for _, value in self.items():
            yield value

    def __getitem__(self, id: Id) -> T:
        if id not in self:
            raise KeyError(id)
        return self._items[id.index]