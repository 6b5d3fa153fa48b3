# wasmforge

A small library for building WebAssembly modules in memory and writing them
out as `.wasm` binaries.

Every item in a module (types, imports, tables, memories, locals) lives in an
arena and is referred to by a stable `Id`. Deleting an item leaves a
tombstone: the id stays unique, lookups of it raise `KeyError`, and it is no
longer iterated or emitted.

## Installing

```
pip install wasmforge
```

## Building a module

```python
from wasmforge.module import Module
from wasmforge.ty import ValType

module = Module(name="demo")

# A function type (i32, i32) -> i32; adding the same signature again
# returns the same id.
add_ty = module.types.add([ValType.I32, ValType.I32], [ValType.I32])

# Imported memory and table; each call returns (item_id, import_id).
memory_id, memory_import = module.add_import_memory("env", "memory", False, 1, None)
table_id, table_import = module.add_import_table("env", "table", 4, None, ValType.Funcref)

# Memories and tables defined by the module itself.
module.memories.add_local(False, 2, 16)
module.tables.add_local(1, None, ValType.Externref)

module.producers.add_language("Rust", "1.70")
module.customs.append(("my-section", b"\x01\x02"))

wasm = module.emit_wasm()
module.emit_wasm_file("out.wasm")
```

`Module.emit_wasm()` writes the magic number and version, then the type
section, the import section, the table and memory sections for items that are
not imported, a `name` section carrying the module name (when `name` is set
and `skip_name_section` is false), the `producers` section (unless
`skip_producers_section` is set), and finally each entry of `customs`.
Custom sections whose name starts with `.debug` are dropped unless
`generate_dwarf` is true. Sections with nothing in them are left out.

Types are sorted by parameters and then results before they are written, so
the output does not depend on the order in which types were added. Types made
with `ModuleTypes.add_entry_ty` are for internal use and are never written.

## Pieces you can use on their own

- `wasmforge.arena`: `Id`, `Tombstone` and `TombstoneArena`. The arena
  supports `alloc`, `alloc_with_id`, `next_id`, `get` (returns `None` for a
  missing or deleted id), indexing (raises `KeyError`), `delete`, `items()`,
  `len()`, `in` and iteration. Deleting an item calls its `on_delete`
  method, if it has one.
- `wasmforge.indices.IndicesToIds`: maps indices in a binary to ids, with
  `push_*` and `get_*` methods for tables, types, functions, globals,
  memories, element and data segments, and per-function locals. An unknown
  index raises `IndexOutOfBoundsError`.
- `wasmforge.ty`: `ValType` (`I32`, `I64`, `F32`, `F64`, `V128`,
  `Externref`, `Funcref`; `ValType.parse("i32")`, `encode()`, `str()`),
  `Type` (a function type whose equality ignores its id and name, with
  `encode()` and `sort_key()`), and the helpers `encode_u32` (unsigned
  LEB128) and `encode_str` (length-prefixed UTF-8).
- `wasmforge.types.ModuleTypes`: `add`, `find`, `by_name`, `get`,
  `params`, `results`, `params_results`, `delete` and `emit`.
- `wasmforge.imports.ModuleImports` with `Import` and `ImportKind`
  (`FUNCTION`, `TABLE`, `MEMORY`, `GLOBAL`): `add`, `find`, `get`,
  `delete`, `next_id`.
- `wasmforge.memories.ModuleMemories` and `wasmforge.tables.ModuleTables`:
  `add_import`, `add_local`, `get`, `delete`, `emit`.
  `ModuleTables.main_function_table()` returns the id of the single
  `funcref` table, or `None`, and raises `ValueError` if there is more than
  one.
- `wasmforge.locals.ModuleLocals`: `add`, `get`, iteration and `len()`.
- `wasmforge.producers.ModuleProducers`: the `producers` custom section,
  with `add_language`, `add_processed_by`, `add_sdk`, `clear`, `fields()`,
  `parse_section(data)` (raises `ValueError` on a malformed payload) and
  `emit()`.

## What it does not do

- It does not read `.wasm` binaries into a `Module`; modules are built in
  code. Only a `producers` section payload can be parsed.
- It has no functions, code, globals, exports, start function, element
  segments or data segments. Imports of kind `FUNCTION` or `GLOBAL` can be
  recorded in `ModuleImports`, but `emit_wasm()` raises `ValueError` when it
  meets one.
- Locals are kept, but not written out, and the `name` section holds only
  the module name.
- There is no pass that removes unused items.
- There is no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```