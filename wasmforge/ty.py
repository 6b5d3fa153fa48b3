"""WebAssembly function and value types, and their binary encoding."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from enum import Enum

from .arena import Id, Tombstone

_U32_MAX = 0xFFFF_FFFF


def encode_u32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer as unsigned LEB128."""
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{value} does not fit in an unsigned 32-bit integer")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def encode_str(text: str) -> bytes:
    """Encode a string as its UTF-8 length followed by its UTF-8 bytes."""
    data = text.encode("utf-8")
    return encode_u32(len(data)) + data


@functools.total_ordering
class ValType(Enum):
    """A value type."""

    I32 = "i32"
    I64 = "i64"
    F32 = "f32"
    F64 = "f64"
    V128 = "v128"
    Externref = "externref"
    Funcref = "funcref"

    @classmethod
    def parse(cls, name: str | ValType) -> ValType:
        """Return the value type with the given text name."""
        try:
            return cls(name)
        except ValueError:
            raise ValueError("not a value type") from None

    def encode(self) -> bytes:
        """Return the one-byte binary encoding of this type."""
        return bytes([_CODES[self]])

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ValType):
            return NotImplemented
        return _ORDER[self] < _ORDER[other]

    def __str__(self) -> str:
        return self.value


_ORDER = {ty: position for position, ty in enumerate(ValType)}

_CODES = {
    ValType.I32: 0x7F,
    ValType.I64: 0x7E,
    ValType.F32: 0x7D,
    ValType.F64: 0x7C,
    ValType.V128: 0x7B,
    ValType.Funcref: 0x70,
    ValType.Externref: 0x6F,
}


@dataclass(eq=True, unsafe_hash=True)
class Type(Tombstone):
    """A function type.

    Equality and hashing ignore the id and the name. Types made for
    multi-value function entry blocks are internal and are never emitted.
    """

    id: Id = field(compare=False)
    params: tuple[ValType, ...] = ()
    results: tuple[ValType, ...] = ()
    is_for_function_entry: bool = False
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self.params = tuple(self.params)
        self.results = tuple(self.results)

    @classmethod
    def for_function_entry(cls, id: Id, results) -> Type:
        """Build the type of a function entry block returning ``results``."""
        return cls(id, (), tuple(results), True)

    def on_delete(self) -> None:
        self.params = ()
        self.results = ()

    def encode(self) -> bytes:
        """Return the binary encoding of this function type."""
        if self.is_for_function_entry:
            raise ValueError("function entry block types are not emitted")
        return b"".join(
            [
                b"\x60",
                encode_u32(len(self.params)),
                *(p.encode() for p in self.params),
                encode_u32(len(self.results)),
                *(r.encode() for r in self.results),
            ]
        )

    def sort_key(self) -> tuple[tuple[ValType, ...], tuple[ValType, ...]]:
        """Key ordering types by parameters, then results."""
        return (self.params, self.results)