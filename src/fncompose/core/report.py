"""
Logging of durations of nested operations.
"""
from contextlib import contextmanager
from functools import wraps
import logging
import time

_depth = 0


@contextmanager
def reporting(title):
    """
    Log 'DONE <title> @ <duration>' when the block finishes without an error.
    Messages of nested blocks are indented by their depth.
    """
    global _depth
    start = time.perf_counter()
    _depth += 1
    try:
        yield
    finally:
        _depth -= 1
    logging.info(f"{'  ' * _depth}DONE {title} @ {time.perf_counter() - start:.4f} s")


def report(fn):
    """
    Decorator reporting every call of `fn`.
    """
    title = f"{fn.__module__}.{fn.__name__}"

    @wraps(fn)
    def reported(*args, **kwargs):
        with reporting(title):
            return fn(*args, **kwargs)
    return reported
