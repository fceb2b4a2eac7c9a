from __future__ import annotations

import math
from typing import Any, List, Optional, Sequence, Tuple

from .array import NDArray, Number, is_number
from .exceptions import InvalidArgument, InvalidRange
from .shape import ShapeLike, normalize_shape, product


def full(shape: ShapeLike, value: Number) -> NDArray:
    if not is_number(value):
        raise InvalidArgument(f"Fill value must be a real number, got {value!r}")
    dims = normalize_shape(shape)
    return NDArray._from_buffer([value] * product(dims), dims)


def repeat(value: Number, shape: ShapeLike) -> NDArray:
    """Constant fill with the value first, ``repeat(2, [3, 3])``."""
    return full(shape, value)


def zeros(shape: ShapeLike) -> NDArray:
    return full(shape, 0)


def ones(shape: ShapeLike) -> NDArray:
    return full(shape, 1)


def create_array(nested: Any) -> NDArray:
    """
    Build an array from nested lists/tuples of numbers.

    The shape is inferred from the nesting; every sibling at a given depth must
    have the same length and every leaf must be a real number. A bare number
    yields a single-element array of shape ``(1,)``.
    """
    if is_number(nested):
        return NDArray._from_buffer([nested], (1,))
    if isinstance(nested, NDArray):
        return nested.copy()
    shape = _infer_shape(nested)
    buffer: List[Number] = []
    _flatten(nested, shape, 0, buffer)
    return NDArray._from_buffer(buffer, shape)


def _is_nested(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _infer_shape(nested: Any) -> Tuple[int, ...]:
    if not _is_nested(nested):
        raise InvalidArgument(f"Expected a number or nested sequence of numbers, got {nested!r}")
    dims = []
    level = nested
    while _is_nested(level):
        dims.append(len(level))
        if not level:
            break
        level = level[0]
    return tuple(dims)


def _flatten(node: Any, shape: Tuple[int, ...], depth: int, out: List[Number]) -> None:
    if depth == len(shape):
        if not is_number(node):
            raise InvalidArgument(f"Array leaves must be real numbers, got {node!r}")
        out.append(node)
        return
    if not _is_nested(node) or len(node) != shape[depth]:
        raise InvalidArgument(
            f"Irregular nesting at depth {depth}: expected a sequence of length {shape[depth]}, "
            f"got {node!r}"
        )
    for child in node:
        _flatten(child, shape, depth + 1, out)


def arange(start: Number, stop: Optional[Number] = None, step: Number = 1) -> List[Number]:
    """Plain numeric range, ``arange(stop)`` or ``arange(start, stop[, step])``."""
    if stop is None:
        start, stop = 0, start
    for label, value in (("start", start), ("stop", stop)):
        if not is_number(value) or not math.isfinite(value):
            raise InvalidArgument(f"Invalid {label}: {value!r}")
    if not is_number(step) or not math.isfinite(step) or step == 0:
        raise InvalidRange(f"Invalid step: {step!r}")
    values: List[Number] = []
    current = start
    if step > 0:
        while current < stop:
            values.append(current)
            current += step
    else:
        while current > stop:
            values.append(current)
            current += step
    return values


def array_from_range(
    start: Number,
    stop: Optional[Number] = None,
    step: Number = 1,
    *,
    shape: Optional[Sequence[int]] = None,
) -> NDArray:
    values = arange(start, stop, step)
    if shape is None:
        return NDArray._from_buffer(values, (len(values),))
    return NDArray(values, shape)
