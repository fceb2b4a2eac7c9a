"""Pure functions over shape descriptors.

A shape is a tuple of non-negative ints, one per axis. By convention the
product of an empty shape is 0 rather than 1, so ``()`` only ever describes an
empty buffer; scalars are represented as ``(1,)``.
"""

from __future__ import annotations

import numbers
from typing import Iterable, Sequence, Tuple, Union

from .exceptions import InvalidShape, ShapeMismatch

Shape = Tuple[int, ...]
ShapeLike = Union[int, Sequence[int]]


def is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def product(shape: Iterable[int]) -> int:
    dims = list(shape)
    if not dims:
        return 0
    result = 1
    for dim in dims:
        result *= int(dim)
    return result


def is_valid_shape(shape: Iterable) -> bool:
    return all(is_integer(dim) and dim >= 0 for dim in shape)


def is_reshapable(old: Sequence[int], new: Sequence[int]) -> bool:
    return is_valid_shape(old) and is_valid_shape(new) and product(old) == product(new)


def normalize_shape(shape: ShapeLike) -> Shape:
    if is_integer(shape):
        shape = (shape,)
    try:
        dims = tuple(shape)
    except TypeError as exc:
        raise InvalidShape(f"Shape must be an int or a sequence of ints, got {shape!r}") from exc
    if not is_valid_shape(dims):
        raise InvalidShape(f"Shape entries must be non-negative integers, got {dims}")
    return tuple(int(dim) for dim in dims)


def promote_rank(shape: Sequence[int], rank: int) -> Shape:
    """Pad ``shape`` with leading length-1 axes until it has ``rank`` axes."""
    dims = tuple(shape)
    if len(dims) >= rank:
        return dims
    return (1,) * (rank - len(dims)) + dims


def broadcast_shapes(a: Sequence[int], b: Sequence[int]) -> Shape:
    if len(a) != len(b):
        raise ShapeMismatch(f"Cannot broadcast shapes of different rank: {tuple(a)} and {tuple(b)}")
    result = []
    for axis, (left, right) in enumerate(zip(a, b)):
        if left != right and left != 1 and right != 1:
            raise ShapeMismatch(
                f"Shapes {tuple(a)} and {tuple(b)} are not broadcast-compatible at axis {axis}"
            )
        # a zero-length axis stays empty when paired with a length-1 axis
        result.append(0 if 0 in (left, right) else max(left, right))
    return tuple(result)
