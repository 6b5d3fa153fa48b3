import pytest

from wasmforge.arena import TombstoneArena
from wasmforge.tables import ModuleTables
from wasmforge.ty import ValType, encode_u32


@pytest.fixture
def import_id():
    return TombstoneArena().alloc("import")


def test_add_local_fields():
    tables = ModuleTables()
    id = tables.add_local(1, None, ValType.Funcref)
    t = tables.get(id)
    assert t.id == id
    assert (t.initial, t.maximum, t.element_ty, t.import_id) == (1, None, ValType.Funcref, None)
    assert t.elem_segments == set()


def test_add_import(import_id):
    tables = ModuleTables()
    id = tables.add_import(2, 5, ValType.Externref, import_id)
    assert tables.get(id).import_id == import_id
    assert tables.get(id).maximum == 5


def test_encode_without_maximum():
    tables = ModuleTables()
    t = tables.get(tables.add_local(1, None, ValType.Funcref))
    assert t.encode() == b"\x70\x00\x01"


def test_encode_with_maximum():
    tables = ModuleTables()
    t = tables.get(tables.add_local(1, 2, ValType.Externref))
    assert t.encode() == b"\x6f\x01\x01\x02"


def test_main_function_table_none():
    tables = ModuleTables()
    tables.add_local(1, None, ValType.Externref)
    assert tables.main_function_table() is None


def test_main_function_table_single():
    tables = ModuleTables()
    tables.add_local(1, None, ValType.Externref)
    f = tables.add_local(1, None, ValType.Funcref)
    assert tables.main_function_table() == f


def test_main_function_table_multiple_raises():
    tables = ModuleTables()
    tables.add_local(1, None, ValType.Funcref)
    tables.add_local(1, None, ValType.Funcref)
    with pytest.raises(ValueError, match="more than one function table"):
        tables.main_function_table()


def test_main_function_table_after_delete():
    tables = ModuleTables()
    a = tables.add_local(1, None, ValType.Funcref)
    b = tables.add_local(1, None, ValType.Funcref)
    tables.delete(a)
    assert tables.main_function_table() == b
    assert [t.id for t in tables] == [b]
    with pytest.raises(KeyError):
        tables.get(a)


def test_emit_empty_when_only_imports(import_id):
    tables = ModuleTables()
    tables.add_import(1, None, ValType.Funcref, import_id)
    indices = {}
    assert tables.emit(indices) == b""
    assert indices == {}


def test_emit_skips_imports_and_assigns_indices(import_id):
    tables = ModuleTables()
    imported = tables.add_import(1, None, ValType.Funcref, import_id)
    a = tables.add_local(1, 3, ValType.Funcref)
    indices = {imported: 0}
    section = tables.emit(indices)
    payload = encode_u32(1) + tables.get(a).encode()
    assert section[1:] == encode_u32(len(payload)) + payload
    assert section[0] == 4
    assert indices == {imported: 0, a: 1}