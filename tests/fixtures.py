"""
Common code for tests.
"""
import os
from pathlib import Path

from fncompose import Unique


def sandbox_fname(base_name, ext):
    work_dir = "sandbox"
    Path(work_dir).mkdir(parents=True, exist_ok=True)
    return os.path.join(work_dir, f"{base_name}.{ext}")


def add_1(x):
    return x + 1


def multiply_by_2(x):
    return 2 * x


def square(x):
    return x * x


class Counter:
    """
    Stateful function object counting its calls.
    """
    def __init__(self):
        self.count = 0

    def __call__(self, x):
        self.count += 1
        return x


class Layer:
    """
    Buffer wrapped by a single stage of a move-only pipeline.
    """
    def __init__(self, inner):
        self.inner = inner

    def depth(self):
        d, inner = 1, self.inner
        while isinstance(inner, Layer):
            d, inner = d + 1, inner.inner
        return d


def wrap(buffer):
    """
    Take ownership of the buffer and wrap it into a new layer.
    """
    return Unique(Layer(buffer.release()))
