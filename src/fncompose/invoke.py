"""
Generic invocation of callable entities.

invoke(fn, *args) calls `fn` with `args` whatever kind of callable `fn` is:
a plain function or function object, a member dispatch entity taking its
receiver from args[0], or a raw descriptor (property, staticmethod, classmethod).
The kind is resolved by the type of `fn`, there is no fallback between kinds.

Every call is done in one of three access modes (see `Access`).
A function object may provide `call_const` and `call_owned` methods
used for the CONST and OWNED mode respectively, `__call__` is used otherwise.
"""
import enum
import inspect
import functools
from typing import *

import attrs

from .exceptions import InvocationError


class Access(enum.Enum):
    MUTABLE = 'mutable'
    # mutable lvalue, the plain call
    CONST = 'const'
    # const lvalue, stored state is only read
    OWNED = 'owned'
    # owned rvalue, one shot call, stored state may be moved out

    @property
    def method(self) -> str:
        return _access_methods[self]


_access_methods = {
    Access.MUTABLE: '__call__',
    Access.CONST: 'call_const',
    Access.OWNED: 'call_owned',
}


@attrs.define(frozen=True)
class Member:
    """
    Member dispatch: the first argument is the receiver.

    invoke(Member('append'), lst, 1)  ~  lst.append(1)
    invoke(Member('real'), z)         ~  z.real
    """
    name: str

    def __call__(self, *args, **kwargs):
        return _invoke_member(self, args, kwargs)

    def __repr__(self):
        return f"Member('.{self.name}')"


def _receiver(fn, args) -> Tuple[Any, tuple]:
    if len(args) == 0:
        raise InvocationError(f"Member dispatch {fn!r} called without a receiver.")
    return args[0], args[1:]


def _invoke_member(member: Member, args, kwargs):
    receiver, args = _receiver(member, args)
    try:
        attr = getattr(receiver, member.name)
    except AttributeError:
        raise InvocationError(
            f"{member!r}: receiver of type {type(receiver).__name__} has no member '{member.name}'.")
    if callable(attr):
        return attr(*args, **kwargs)
    if args or kwargs:
        raise InvocationError(f"{member!r}: data member called with arguments.")
    return attr


@functools.singledispatch
def _invoke(fn, access: Access, args, kwargs):
    if not callable(fn):
        raise InvocationError(f"Object {fn!r} of type {type(fn).__name__} is not invocable.")
    if access is not Access.MUTABLE:
        method = getattr(fn, access.method, None)
        if method is not None:
            return method(*args, **kwargs)
    return fn(*args, **kwargs)


@_invoke.register
def _(fn: Member, access, args, kwargs):
    return _invoke_member(fn, args, kwargs)


@_invoke.register
def _(fn: property, access, args, kwargs):
    receiver, args = _receiver(fn, args)
    if args or kwargs:
        raise InvocationError(f"Property {fn!r} called with arguments.")
    if fn.fget is None:
        raise InvocationError(f"Property {fn!r} is not readable.")
    return fn.fget(receiver)


@_invoke.register(staticmethod)
@_invoke.register(classmethod)
def _(fn, access, args, kwargs):
    return fn.__func__(*args, **kwargs)


def invoke(fn, *args, access: Access = Access.MUTABLE, **kwargs):
    """
    Call `fn` with given arguments through the `access` mode.
    """
    return _invoke(fn, access, args, kwargs)


def is_invocable(fn) -> bool:
    return _invoke.dispatch(type(fn)) is not _invoke.dispatch(object) or callable(fn)


def check_invocable(fn):
    if not is_invocable(fn):
        raise InvocationError(f"Object {fn!r} of type {type(fn).__name__} is not invocable.")
    return fn


@functools.singledispatch
def signature_target(fn):
    """
    The function whose signature determines the arguments accepted by `fn`,
    None if it can not be determined.
    Other modules register their own callable types.
    """
    return fn


@signature_target.register
def _(fn: Member):
    return None


@signature_target.register
def _(fn: property):
    # fget takes the receiver
    return fn.fget


@signature_target.register(staticmethod)
@signature_target.register(classmethod)
def _(fn):
    return fn.__func__


def accepts_single(fn) -> bool:
    """
    True if `fn` can be called with a single positional argument,
    i.e. it can take a result of the previous step of a composition.
    Entities without an introspectable signature (some builtins) are accepted.
    """
    target = signature_target(fn)
    if target is None:
        return True
    try:
        sig = inspect.signature(target)
    except (TypeError, ValueError):
        return True
    try:
        sig.bind(None)
    except TypeError:
        return False
    return True
