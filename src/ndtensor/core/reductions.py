from __future__ import annotations

import builtins
import operator
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .array import NDArray, Number
from .exceptions import InvalidArgument, InvalidAxis
from .indexing import enumerate_indices, strides
from .shape import is_integer, product

AxisSelector = Union[None, int, Sequence[int]]


def normalize_axes(array: NDArray, axes: AxisSelector) -> Tuple[int, ...]:
    rank = array.ndim
    if axes is None:
        return tuple(range(rank))
    if is_integer(axes):
        axes = (axes,)
    selected: List[int] = []
    for axis in axes:
        if not is_integer(axis) or axis < 0 or axis >= rank:
            raise InvalidAxis(f"Axis {axis!r} is out of range for rank {rank}")
        if axis in selected:
            raise InvalidAxis(f"Axis {axis} appears more than once in {tuple(axes)}")
        selected.append(int(axis))
    return tuple(selected)


def _fold(
    array: NDArray,
    axes: AxisSelector,
    combine: Callable[[Number, Number], Number],
    initial: Optional[Number],
) -> NDArray:
    """
    Fold the selected axes with ``combine``.

    ``initial`` seeds each output cell; ``None`` seeds it with the first element
    folded into it instead.
    """
    reduced = normalize_axes(array, axes)
    if not reduced:
        return array.copy()
    remaining = [axis for axis in range(array.ndim) if axis not in reduced]

    if not remaining:
        values: Iterable[Number] = array.data
        if initial is None:
            iterator = iter(values)
            accumulator = next(iterator)
            values = iterator
        else:
            accumulator = initial
        for value in values:
            accumulator = combine(accumulator, value)
        return NDArray._from_buffer([accumulator], (1,))

    result_shape = tuple(array.shape[axis] for axis in remaining)
    result_strides = strides(result_shape)
    buffer: List[Optional[Number]] = [initial] * product(result_shape)
    for offset, index in enumerate(enumerate_indices(array.shape)):
        target = 0
        for axis, stride in zip(remaining, result_strides):
            target += index[axis] * stride
        current = buffer[target]
        value = array.data[offset]
        buffer[target] = value if current is None else combine(current, value)
    return NDArray._from_buffer(buffer, result_shape)


def sum(array: NDArray, axes: AxisSelector = None) -> NDArray:
    """
    Sum over ``axes`` (all axes by default).

    Reducing every axis gives a single-element array of shape ``(1,)``; an empty
    selector returns an unchanged copy.
    """
    return _fold(array, axes, operator.add, 0)


def mean(array: NDArray, axes: AxisSelector = None) -> NDArray:
    total = sum(array, axes)
    if array.size == 0:
        return total
    count = array.size // total.size
    return NDArray._from_buffer([value / count for value in total.data], total.shape)


def _extremum(
    array: NDArray,
    axes: AxisSelector,
    pick: Callable[[Number, Number], Number],
    name: str,
) -> NDArray:
    if array.size == 0:
        raise InvalidArgument(f"{name}() of a zero-size array is undefined")
    return _fold(array, axes, pick, None)


def min(array: NDArray, axes: AxisSelector = None) -> NDArray:
    return _extremum(array, axes, builtins.min, "min")


def max(array: NDArray, axes: AxisSelector = None) -> NDArray:
    return _extremum(array, axes, builtins.max, "max")


def _arg_extremum(array: NDArray, axis: int, better: Callable[[Number, Number], bool]) -> NDArray:
    (axis,) = normalize_axes(array, (axis,))
    length = array.shape[axis]
    if length == 0:
        raise InvalidArgument(f"Cannot search an empty axis {axis}")
    axis_stride = array.strides[axis]
    others = [other for other in range(array.ndim) if other != axis]
    other_shape = tuple(array.shape[other] for other in others)
    other_strides = [array.strides[other] for other in others]

    cells = enumerate_indices(other_shape) if other_shape else [()]
    result: List[int] = []
    for index in cells:
        base = 0
        for value, stride in zip(index, other_strides):
            base += value * stride
        best_position = 0
        best_value = array.data[base]
        for position in range(1, length):
            candidate = array.data[base + position * axis_stride]
            # strict comparison keeps the first position on ties
            if better(candidate, best_value):
                best_position, best_value = position, candidate
        result.append(best_position)
    return NDArray._from_buffer(result, other_shape or (1,))


def argmin(array: NDArray, axis: int) -> NDArray:
    return _arg_extremum(array, axis, operator.lt)


def argmax(array: NDArray, axis: int) -> NDArray:
    return _arg_extremum(array, axis, operator.gt)
