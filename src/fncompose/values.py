"""
Ownership of values passed through compositions.

Python has only references, so the value categories are expressed by types:
- a `Unique` object is an owned, move-only value (an rvalue when passed on),
- a `UniqueRef` is an lvalue reference to a `Unique`, writable or read-only;
  it gives access to the value but never its ownership.

`readonly`, `mutable_ref` and `take` produce the form of a stored value
returned through the const, mutable and by-value access respectively.
"""
import copy
import types
import functools
import collections.abc

import numpy as np

from .exceptions import ValueCategoryError, MoveOnlyError, ConsumedError


class Unique:
    """
    Move-only box holding a single value.

    u = Unique(buffer)
    v = u.move()        # u is empty now
    buffer = v.release()

    Copying raises MoveOnlyError.
    """
    __slots__ = ('_value', '_empty')

    def __init__(self, value):
        self._value = value
        self._empty = False

    def get(self):
        if self._empty:
            raise ConsumedError("Access to a moved-from Unique.")
        return self._value

    def release(self):
        """
        Take the value out, leaving the box empty.
        """
        value = self.get()
        self._value = None
        self._empty = True
        return value

    def move(self) -> 'Unique':
        return Unique(self.release())

    def reset(self, value):
        self._value = value
        self._empty = False

    def __bool__(self):
        return not self._empty

    def __copy__(self):
        raise MoveOnlyError(f"{self!r} can not be copied, use move().")

    def __deepcopy__(self, memo):
        self.__copy__()

    def __repr__(self):
        if self._empty:
            return "Unique(<moved>)"
        return f"Unique({self._value!r})"


class UniqueRef:
    """
    Lvalue reference to a Unique. Ownership can not be moved out through it.
    """
    __slots__ = ('_target', '_writable')

    def __init__(self, target: Unique, writable: bool = True):
        self._target = target
        self._writable = writable

    @property
    def writable(self):
        return self._writable

    def get(self):
        return self._target.get()

    def reset(self, value):
        if not self._writable:
            raise ValueCategoryError(f"Write through a read-only reference {self!r}.")
        self._target.reset(value)

    def release(self):
        raise ValueCategoryError(
            f"Can not move out of the lvalue reference {self!r}, an owned value is required.")

    def move(self):
        return self.release()

    def __bool__(self):
        return bool(self._target)

    def __copy__(self):
        raise MoveOnlyError(f"{self!r} refers to a move-only value and can not be copied.")

    def __deepcopy__(self, memo):
        self.__copy__()

    def __repr__(self):
        mode = "" if self._writable else "const "
        return f"<{mode}ref to {self._target!r}>"


class SequenceView(collections.abc.Sequence):
    """
    Read-only view of a list, later changes of the list show through.
    """
    __slots__ = ('_target',)

    def __init__(self, target: list):
        self._target = target

    def __getitem__(self, i):
        item = self._target[i]
        if isinstance(i, slice):
            return tuple(item)
        return item

    def __len__(self):
        return len(self._target)

    def __eq__(self, other):
        if isinstance(other, SequenceView):
            other = other._target
        if isinstance(other, (list, tuple)):
            return list(self._target) == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"SequenceView({self._target!r})"


class SetView(collections.abc.Set):
    """
    Read-only view of a set.
    """
    __slots__ = ('_target',)

    def __init__(self, target: set):
        self._target = target

    def __contains__(self, item):
        return item in self._target

    def __iter__(self):
        return iter(self._target)

    def __len__(self):
        return len(self._target)

    @classmethod
    def _from_iterable(cls, it):
        return frozenset(it)

    def __repr__(self):
        return f"SetView({self._target!r})"


@functools.singledispatch
def readonly(value):
    """
    Read-only view of `value`.
    Values without a read-only view type are returned as they are.
    """
    return value


@readonly.register
def _(value: Unique):
    return UniqueRef(value, writable=False)


@readonly.register
def _(value: UniqueRef):
    if value.writable:
        return UniqueRef(value._target, writable=False)
    return value


@readonly.register
def _(value: np.ndarray):
    view = value.view()
    view.flags.writeable = False
    return view


@readonly.register
def _(value: dict):
    return types.MappingProxyType(value)


@readonly.register
def _(value: list):
    return SequenceView(value)


@readonly.register
def _(value: set):
    return SetView(value)


@readonly.register
def _(value: bytearray):
    return memoryview(value).toreadonly()


def mutable_ref(value):
    if isinstance(value, Unique):
        return UniqueRef(value, writable=True)
    return value


@functools.singledispatch
def take(value):
    """
    Fresh value equal to `value`, never the same mutable object.
    """
    return copy.copy(value)


@take.register
def _(value: Unique):
    return value.move()
