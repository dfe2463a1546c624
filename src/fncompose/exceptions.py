"""
Errors of the composition core.

All of them derive from TypeError: they report a call form that does not
type-check for the given callable, arguments or access mode.
"""


class CompositionError(TypeError):
    pass


class EmptyCompositionError(CompositionError):
    pass


class InvocationError(CompositionError):
    pass


class ValueCategoryError(CompositionError):
    """
    An operation not permitted through the given access mode,
    e.g. moving out of an lvalue reference.
    """
    pass


class MoveOnlyError(ValueCategoryError):
    pass


class ConsumedError(ValueCategoryError):
    """
    Use of an object whose content was already moved out.
    """
    pass
