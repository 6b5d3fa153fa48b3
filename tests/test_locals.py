import pytest

from wasmforge.locals import Local, ModuleLocals
from wasmforge.ty import ValType


def test_add_and_get():
    locals_ = ModuleLocals()
    id = locals_.add(ValType.I32)
    local = locals_.get(id)
    assert local.id == id
    assert local.ty is ValType.I32
    assert local.name is None


def test_add_accepts_text_name():
    locals_ = ModuleLocals()
    id = locals_.add("f64")
    assert locals_.get(id).ty is ValType.F64


def test_add_rejects_unknown_type():
    locals_ = ModuleLocals()
    with pytest.raises(ValueError):
        locals_.add("i16")
    assert len(locals_) == 0


def test_ids_are_distinct_and_iteration_in_order():
    locals_ = ModuleLocals()
    tys = [ValType.I32, ValType.I64, ValType.F32, ValType.V128]
    ids = [locals_.add(ty) for ty in tys]
    assert len(set(ids)) == len(ids)
    assert len(locals_) == len(tys)
    assert [local.ty for local in locals_] == tys
    assert [local.id for local in locals_] == ids


def test_name_can_be_set():
    locals_ = ModuleLocals()
    id = locals_.add(ValType.I64)
    locals_.get(id).name = "counter"
    assert locals_.get(id).name == "counter"
    assert [local.name for local in locals_] == ["counter"]


def test_foreign_id_is_rejected():
    first = ModuleLocals()
    second = ModuleLocals()
    id = first.add(ValType.I32)
    with pytest.raises(KeyError):
        second.get(id)


def test_local_equality_uses_fields():
    locals_ = ModuleLocals()
    id = locals_.add(ValType.Funcref)
    assert locals_.get(id) == Local(id, ValType.Funcref)