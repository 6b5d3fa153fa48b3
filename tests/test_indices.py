import pytest

from wasmforge.arena import Id
from wasmforge.indices import IndexOutOfBoundsError, IndicesToIds


KINDS = ["table", "type", "func", "global", "memory", "element", "data"]


@pytest.mark.parametrize("kind", KINDS)
def test_push_then_get(kind):
    ids = IndicesToIds()
    push = getattr(ids, f"push_{kind}")
    get = getattr(ids, f"get_{kind}")
    a, b = Id(0, 7), Id(0, 3)
    assert push(a) == 0
    assert push(b) == 1
    assert get(0) == a
    assert get(1) == b


@pytest.mark.parametrize("kind", KINDS)
def test_get_out_of_bounds(kind):
    ids = IndicesToIds()
    getattr(ids, f"push_{kind}")(Id(0, 0))
    get = getattr(ids, f"get_{kind}")
    with pytest.raises(IndexOutOfBoundsError):
        get(1)
    with pytest.raises(IndexOutOfBoundsError):
        get(-1)


def test_error_message_names_member():
    ids = IndicesToIds()
    with pytest.raises(IndexOutOfBoundsError, match="index `4` is out of bounds for funcs"):
        ids.get_func(4)


def test_kinds_are_independent():
    ids = IndicesToIds()
    ids.push_table(Id(0, 1))
    with pytest.raises(IndexOutOfBoundsError):
        ids.get_memory(0)


def test_locals_per_function():
    ids = IndicesToIds()
    f, g = Id(1, 0), Id(1, 1)
    assert ids.push_local(f, Id(2, 0)) == 0
    assert ids.push_local(f, Id(2, 1)) == 1
    assert ids.push_local(g, Id(2, 2)) == 0
    assert ids.get_local(f, 1) == Id(2, 1)
    assert ids.get_local(g, 0) == Id(2, 2)


def test_local_of_unknown_function():
    ids = IndicesToIds()
    with pytest.raises(IndexOutOfBoundsError, match="function index `9` is out of bounds for local"):
        ids.get_local(Id(1, 9), 0)


def test_local_index_out_of_bounds():
    ids = IndicesToIds()
    f = Id(1, 2)
    ids.push_local(f, Id(2, 0))
    with pytest.raises(IndexOutOfBoundsError, match="index `1` in function `2` is out of bounds for local"):
        ids.get_local(f, 1)