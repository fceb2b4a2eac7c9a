"""Conversion between multi-indices and flat row-major buffer offsets."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from .exceptions import IndexOutOfBounds
from .shape import Shape, is_integer, product


def strides(shape: Sequence[int]) -> Tuple[int, ...]:
    """Row-major strides: each axis steps over the product of the axes to its right."""
    result: List[int] = []
    step = 1
    for dim in reversed(tuple(shape)):
        result.append(step)
        step *= int(dim)
    return tuple(reversed(result))


def ravel_index(
    index: Sequence[int],
    shape: Sequence[int],
    axis_strides: Optional[Sequence[int]] = None,
) -> int:
    dims = tuple(shape)
    if len(index) != len(dims):
        raise IndexOutOfBounds(
            f"Index {tuple(index)} has {len(index)} entries but the array has rank {len(dims)}"
        )
    if axis_strides is None:
        axis_strides = strides(dims)
    offset = 0
    for axis, (value, dim, stride) in enumerate(zip(index, dims, axis_strides)):
        if not is_integer(value):
            raise IndexOutOfBounds(f"Index entries must be integers, got {value!r} at axis {axis}")
        if value < 0 or value >= dim:
            raise IndexOutOfBounds(f"Index {value} is out of bounds for axis {axis} with size {dim}")
        offset += int(value) * stride
    return offset


def unravel_index(offset: int, shape: Sequence[int]) -> Tuple[int, ...]:
    dims = tuple(shape)
    size = product(dims)
    if not is_integer(offset) or offset < 0 or offset >= size:
        raise IndexOutOfBounds(f"Flat index {offset!r} is out of bounds for size {size}")
    index = []
    remainder = int(offset)
    for stride in strides(dims):
        value, remainder = divmod(remainder, stride)
        index.append(value)
    return tuple(index)


class IndexCursor:
    """
    Explicit cursor over every multi-index of a shape in row-major order.

    The last axis varies fastest. Rank-0 and zero-size shapes produce nothing.
    The cursor supports both ``has_next()``/``next_index()`` and the iterator
    protocol; ``reset()`` rewinds it to the first index.
    """

    def __init__(self, shape: Sequence[int]):
        self.shape: Shape = tuple(int(dim) for dim in shape)
        self._counters: List[int] = [0] * len(self.shape)
        self._exhausted = product(self.shape) == 0

    def reset(self) -> None:
        self._counters = [0] * len(self.shape)
        self._exhausted = product(self.shape) == 0

    def has_next(self) -> bool:
        return not self._exhausted

    def next_index(self) -> Tuple[int, ...]:
        if self._exhausted:
            raise StopIteration
        current = tuple(self._counters)
        axis = len(self.shape) - 1
        while axis >= 0:
            self._counters[axis] += 1
            if self._counters[axis] < self.shape[axis]:
                break
            self._counters[axis] = 0
            axis -= 1
        if axis < 0:
            self._exhausted = True
        return current

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        return self

    def __next__(self) -> Tuple[int, ...]:
        return self.next_index()


def enumerate_indices(shape: Sequence[int]) -> IndexCursor:
    return IndexCursor(shape)
