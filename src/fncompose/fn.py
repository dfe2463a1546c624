"""
Function composition.
"""
import copy
import logging
from typing import *

from .exceptions import EmptyCompositionError, InvocationError, ConsumedError
from .invoke import Access, invoke, is_invocable, check_invocable, accepts_single, signature_target
from .primitives import Constant


def _invoke_composition(functions: tuple, access: Access, args, kwargs):
    # Start by applying the rightmost function with all arguments
    result = invoke(functions[-1], *args, access=access, **kwargs)
    # Then apply the rest in reverse order, each to the result of the previous
    for i in range(len(functions) - 2, -1, -1):
        result = invoke(functions[i], result, access=access)
    return result


class Composed:
    """
    Composition of functions [f1, f2, ..., fN] (N >= 1):

    Composed(f1, ..., fN)(any args)  is equivalent to  f1(f2(...fN(any args)))

    The functions are invoked through `invoke`, so member dispatch entities
    and descriptors can be composed as well. The function tuple is never
    modified; composing with other functions creates a new Composed.

    There are three call forms, each propagating its access mode to the composed functions:
    composed(...)             - mutable access
    composed.call_const(...)  - const access, stored functions are only read
    composed.call_owned(...)  - one shot call, the stored functions may move out their state;
                                the composition is consumed by the call
    """
    __slots__ = ('_functions',)

    def __init__(self, functions: Iterable[Callable]):
        functions = tuple(functions)
        if len(functions) == 0:
            raise EmptyCompositionError("Composition of no functions.")
        for i, f in enumerate(functions):
            check_invocable(f)
            # all but the last one get the single result of the previous step
            if i < len(functions) - 1 and not accepts_single(f):
                raise InvocationError(
                    f"Function {f!r} at position {i} of the composition can not take a single argument.")
        self._functions = functions

    @property
    def functions(self) -> tuple:
        if self._functions is None:
            raise ConsumedError("Use of a composition consumed by call_owned.")
        return self._functions

    @property
    def consumed(self) -> bool:
        return self._functions is None

    def __len__(self):
        return len(self.functions)

    def __bool__(self):
        return not self.consumed

    def __call__(self, *args, **kwargs):
        return _invoke_composition(self.functions, Access.MUTABLE, args, kwargs)

    def call_const(self, *args, **kwargs):
        return _invoke_composition(self.functions, Access.CONST, args, kwargs)

    def call_owned(self, *args, **kwargs):
        functions = self.functions
        self._functions = None
        return _invoke_composition(functions, Access.OWNED, args, kwargs)

    def __or__(self, other):
        if not is_invocable(other):
            return NotImplemented
        return compose(self, other)

    def __ror__(self, other):
        if not is_invocable(other):
            return NotImplemented
        return compose(other, self)

    def __repr__(self):
        if self.consumed:
            return '<%s (consumed)>' % self.__class__.__qualname__
        return '<%s of: %s>' % (
            self.__class__.__qualname__,
            ', '.join(getattr(f, '__name__', None) or repr(f) for f in self._functions),
        )


@signature_target.register
def _(fn: Composed):
    return signature_target(fn.functions[-1])


def _owned(f):
    if isinstance(f, Constant):
        return copy.copy(f)
    return f


def _to_functions(f) -> tuple:
    """
    Function tuple owned by a new composition.
    Constants are copied, so consuming one composition never empties another;
    a constant given directly and holding a move-only value is moved in.
    """
    if isinstance(f, Composed):
        functions = f.functions
        if any(isinstance(fn, Constant) for fn in functions):
            return tuple(_owned(fn) for fn in functions)
        return functions
    if isinstance(f, Constant) and f.move_only:
        return (f,)
    return (_owned(f),)


def compose(*functions) -> Composed:
    """
    Return composition of functions:
    compose(A,B,C)(any args) is equivalent to A(B(C(any args))

    Already composed arguments are flattened, so
    compose(compose(A, B), C) and compose(A, compose(B, C)) both hold the sequence [A, B, C].
    Useful for functional programming and dependency injection.
    """
    if len(functions) == 0:
        raise EmptyCompositionError("compose() requires at least one function.")
    parts = [_to_functions(f) for f in functions]
    combined = sum(parts[1:], parts[0])
    composed = Composed(combined)
    # move-only constants are moved in only after the composition is accepted
    if any(isinstance(f, Constant) and f.move_only for f in combined):
        composed._functions = tuple(
            f.move() if isinstance(f, Constant) and f.move_only else f for f in combined)
    logging.debug(f"compose: {len(functions)} arguments -> {len(combined)} functions")
    return composed
