"""
Leaf callables used as building blocks and terminators of compositions.
"""
from typing import *

import attrs

from .exceptions import ConsumedError, MoveOnlyError
from .values import Unique, UniqueRef, readonly, mutable_ref, take


def no_op(*args, **kwargs) -> None:
    """
    Does nothing.
    """


def identity(x):
    """
    Return the argument itself, similar to clojure.core/identity.
    """
    return x


def identity_by_value(x):
    """
    Similar to `identity`, but never returns the passed object,
    a fresh equal value is returned instead. A Unique argument is moved.
    """
    return take(x)


@attrs.define(repr=False, eq=False)
class Constant:
    """
    Function object ignoring its arguments and returning the stored value.

    The form of the result depends on the access to the producer:
    c()               - the value itself (writable reference for a move-only value)
    c.call_const()    - read-only view of the value
    c.call_owned()    - the value moved out, the producer is empty afterwards

    copy.copy gives an independent producer of the same value,
    a producer of a move-only value can only be moved (see `move`).
    """
    _value: Any
    _consumed: bool = attrs.field(init=False, default=False)

    def _get(self):
        if self._consumed:
            raise ConsumedError("The value of the constant was already moved out.")
        return self._value

    @property
    def value(self):
        return self._get()

    def __call__(self, *args, **kwargs):
        return mutable_ref(self._get())

    def call_const(self, *args, **kwargs):
        return readonly(self._get())

    def call_owned(self, *args, **kwargs):
        value = self._get()
        self._value = None
        self._consumed = True
        return value

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def move_only(self) -> bool:
        return not self._consumed and isinstance(self._value, (Unique, UniqueRef))

    def move(self) -> 'Constant':
        """
        New producer taking over the state, this one is left empty.
        """
        moved = Constant(self._value)
        moved._consumed = self._consumed
        self._value = None
        self._consumed = True
        return moved

    def __copy__(self):
        if self.move_only:
            raise MoveOnlyError(f"{self!r} holds a move-only value and can not be copied.")
        copied = Constant(self._value)
        copied._consumed = self._consumed
        return copied

    def __repr__(self):
        if self._consumed:
            return "constant(<moved>)"
        return f"constant({self._value!r})"


def constant(value) -> Constant:
    """
    Similar to clojure.core/constantly.
    """
    return Constant(value)
