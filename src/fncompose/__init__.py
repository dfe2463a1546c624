"""
Composition of arbitrary callables.
"""
from .exceptions import (CompositionError, EmptyCompositionError, InvocationError,
                         ValueCategoryError, MoveOnlyError, ConsumedError)
from .invoke import Access, Member, invoke, is_invocable
from .values import Unique, UniqueRef, readonly
from .primitives import no_op, identity, identity_by_value, constant, Constant
from .fn import compose, Composed

__version__ = '0.1.0'
