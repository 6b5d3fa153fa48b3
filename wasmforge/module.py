"""A whole module: its sections, imports and binary emission."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from .arena import Id
from .imports import ImportKind, ModuleImports
from .locals import ModuleLocals
from .memories import ModuleMemories
from .producers import ModuleProducers
from .tables import ModuleTables
from .ty import ValType, encode_str, encode_u32
from .types import ModuleTypes

log = logging.getLogger(__name__)

_MAGIC = b"\x00asm"
_VERSION = b"\x01\x00\x00\x00"

_CUSTOM_SECTION = 0
_IMPORT_SECTION = 2


def _section(section_id: int, payload: bytes) -> bytes:
    return bytes([section_id]) + encode_u32(len(payload)) + payload


def _custom_section(name: str, payload: bytes) -> bytes:
    return _section(_CUSTOM_SECTION, encode_str(name) + payload)


@dataclass
class Module:
    """A module under construction or transformation.

    ``customs`` holds raw custom sections as ``(name, data)`` pairs, emitted
    after all other sections. Custom sections whose name starts with
    ``.debug`` are dropped unless ``generate_dwarf`` is set.
    """

    imports: ModuleImports = field(default_factory=ModuleImports)
    tables: ModuleTables = field(default_factory=ModuleTables)
    types: ModuleTypes = field(default_factory=ModuleTypes)
    locals: ModuleLocals = field(default_factory=ModuleLocals)
    memories: ModuleMemories = field(default_factory=ModuleMemories)
    producers: ModuleProducers = field(default_factory=ModuleProducers)
    customs: list[tuple[str, bytes]] = field(default_factory=list)
    name: str | None = None
    skip_name_section: bool = False
    skip_producers_section: bool = False
    generate_dwarf: bool = False

    def add_import_memory(
        self,
        module: str,
        name: str,
        shared: bool,
        initial: int,
        maximum: int | None,
    ) -> tuple[Id, Id]:
        """Import a memory; return ``(memory_id, import_id)``."""
        import_id = self.imports.next_id()
        memory = self.memories.add_import(shared, initial, maximum, import_id)
        self.imports.add(module, name, ImportKind.MEMORY, memory)
        return memory, import_id

    def add_import_table(
        self,
        module: str,
        name: str,
        initial: int,
        maximum: int | None,
        ty: ValType,
    ) -> tuple[Id, Id]:
        """Import a table; return ``(table_id, import_id)``."""
        import_id = self.imports.next_id()
        table = self.tables.add_import(initial, maximum, ValType.parse(ty), import_id)
        self.imports.add(module, name, ImportKind.TABLE, table)
        return table, import_id

    def _emit_imports(
        self, table_indices: dict[Id, int], memory_indices: dict[Id, int]
    ) -> bytes:
        imports = list(self.imports)
        if not imports:
            return b""
        parts = [encode_u32(len(imports))]
        for imp in imports:
            parts.append(encode_str(imp.module))
            parts.append(encode_str(imp.name))
            parts.append(bytes([imp.kind.value]))
            if imp.kind is ImportKind.TABLE:
                table_indices[imp.item] = len(table_indices)
                parts.append(self.tables.get(imp.item).encode())
            elif imp.kind is ImportKind.MEMORY:
                memory_indices[imp.item] = len(memory_indices)
                parts.append(self.memories.get(imp.item).encode())
            else:
                raise ValueError(
                    f"cannot emit {imp.kind.name.lower()} import "
                    f"`{imp.module}`.`{imp.name}`"
                )
        return _section(_IMPORT_SECTION, b"".join(parts))

    def _emit_name_section(self) -> bytes:
        if self.name is None:
            return b""
        module_name = encode_str(self.name)
        subsection = b"\x00" + encode_u32(len(module_name)) + module_name
        return _custom_section("name", subsection)

    def emit_wasm(self) -> bytes:
        """Encode the module as a binary."""
        log.debug("start emit")
        type_indices: dict[Id, int] = {}
        table_indices: dict[Id, int] = {}
        memory_indices: dict[Id, int] = {}

        out = [_MAGIC, _VERSION]
        out.append(self.types.emit(type_indices))
        out.append(self._emit_imports(table_indices, memory_indices))
        out.append(self.tables.emit(table_indices))
        out.append(self.memories.emit(memory_indices))

        if not self.skip_name_section:
            out.append(self._emit_name_section())
        if not self.skip_producers_section:
            out.append(self.producers.emit())

        for section_name, data in self.customs:
            if not self.generate_dwarf and section_name.startswith(".debug"):
                log.debug("skipping DWARF custom section %s", section_name)
                continue
            log.debug("emitting custom section %s", section_name)
            out.append(_custom_section(section_name, bytes(data)))

        log.debug("emission finished")
        return b"".join(out)

    def emit_wasm_file(self, path: str | os.PathLike[str]) -> None:
        """Encode the module and write it to ``path``."""
        data = self.emit_wasm()
        try:
            with open(path, "wb") as handle:
                handle.write(data)
        except OSError as exc:
            raise OSError(f"failed to write wasm module: {exc}") from exc