import copy
import types
import pytest
import numpy as np

from fncompose import Unique, UniqueRef, readonly, ValueCategoryError, MoveOnlyError, ConsumedError
from fncompose.values import mutable_ref, take, SequenceView


class TestUnique:

    def test_move(self):
        buffer = bytearray(b"abc")
        u = Unique(buffer)
        assert u
        v = u.move()
        assert not u
        assert v.get() is buffer
        with pytest.raises(ConsumedError):
            u.get()
        with pytest.raises(ConsumedError):
            u.release()
        assert v.release() is buffer
        assert not v
        v.reset(1)
        assert v.get() == 1

    def test_no_copy(self):
        u = Unique([1])
        with pytest.raises(MoveOnlyError):
            copy.copy(u)
        with pytest.raises(MoveOnlyError):
            copy.deepcopy(u)
        with pytest.raises(MoveOnlyError):
            copy.deepcopy({'u': u})
        assert u.get() == [1]

    def test_repr(self):
        u = Unique(1)
        assert repr(u) == "Unique(1)"
        u.release()
        assert repr(u) == "Unique(<moved>)"


class TestUniqueRef:

    def test_writable(self):
        u = Unique(1)
        ref = UniqueRef(u)
        assert ref.get() == 1
        ref.reset(2)
        assert u.get() == 2
        with pytest.raises(ValueCategoryError):
            ref.release()
        with pytest.raises(ValueCategoryError):
            ref.move()
        assert u.get() == 2

    def test_readonly(self):
        u = Unique(1)
        ref = UniqueRef(u, writable=False)
        with pytest.raises(ValueCategoryError):
            ref.reset(2)
        with pytest.raises(MoveOnlyError):
            copy.copy(ref)
        assert ref.get() == 1
        assert "const" in repr(ref)


def test_readonly():
    u = Unique(1)
    ref = readonly(u)
    assert isinstance(ref, UniqueRef) and not ref.writable
    assert readonly(ref) is ref
    assert not readonly(mutable_ref(u)).writable

    d = {'a': 1}
    view = readonly(d)
    assert isinstance(view, types.MappingProxyType)
    d['b'] = 2
    assert view['b'] == 2

    s = {1, 2}
    view = readonly(s)
    assert view == frozenset({1, 2})
    assert not hasattr(view, 'add')
    s.add(3)
    assert 3 in view and len(view) == 3
    assert view | {4} == {1, 2, 3, 4}

    lst = [1]
    view = readonly(lst)
    assert isinstance(view, SequenceView)
    lst.append(2)
    assert view == [1, 2] and view[1:] == (2,)

    assert readonly(bytearray(b"x")).readonly

    arr = np.ones(4)
    view = readonly(arr)
    assert not view.flags.writeable
    assert np.shares_memory(view, arr)

    obj = object()
    assert readonly(obj) is obj


def test_mutable_ref():
    u = Unique(1)
    ref = mutable_ref(u)
    assert isinstance(ref, UniqueRef) and ref.writable
    lst = [1]
    assert mutable_ref(lst) is lst


def test_take():
    lst = [1, 2]
    assert take(lst) == lst and take(lst) is not lst
    u = Unique(3)
    v = take(u)
    assert v.get() == 3 and not u
    with pytest.raises(MoveOnlyError):
        take(UniqueRef(v))
