"""Ranged slicing with integer, range, full-axis and new-axis specifiers."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from .array import NDArray
from .exceptions import IndexOutOfBounds, InvalidArgument, InvalidAxis, InvalidRange
from .shape import is_integer


class _Sentinel:
    __slots__ = ("_name",)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name


ALL = _Sentinel("ALL")
NEW_AXIS = _Sentinel("NEW_AXIS")


@dataclass(frozen=True)
class Range:
    """Python-style ``start:end:step`` selection along one axis."""

    start: Optional[int] = None
    end: Optional[int] = None
    step: Optional[int] = None

    def __post_init__(self) -> None:
        for label in ("start", "end", "step"):
            value = getattr(self, label)
            if value is not None and not is_integer(value):
                raise InvalidArgument(f"Range {label} must be an integer or None, got {value!r}")
        if self.step == 0:
            raise InvalidRange("Range step cannot be zero")

    @classmethod
    def from_slice(cls, value: slice) -> "Range":
        return cls(value.start, value.stop, value.step)

    def positions(self, size: int) -> range:
        """Source positions selected along an axis of length ``size``, in traversal order."""
        return range(*slice(self.start, self.end, self.step).indices(size))


def _coerce(spec: Any) -> Any:
    if spec is None or spec is NEW_AXIS:
        return NEW_AXIS
    if spec is ALL or isinstance(spec, Range) or is_integer(spec):
        return spec
    if isinstance(spec, slice):
        if spec.step == 0:
            raise InvalidRange("Slice step cannot be zero")
        return Range.from_slice(spec)
    if isinstance(spec, (list, tuple, range)):
        positions = tuple(spec)
        for position in positions:
            if not is_integer(position):
                raise InvalidArgument(f"Position lists must contain integers, got {position!r}")
        return positions
    raise InvalidArgument(f"Unsupported slice specifier {spec!r}")


def _resolve_position(index: int, axis: int, size: int) -> int:
    position = index + size if index < 0 else index
    if position < 0 or position >= size:
        raise IndexOutOfBounds(f"Index {index} is out of bounds for axis {axis} with size {size}")
    return int(position)


def slice_array(array: NDArray, *specifiers: Any) -> NDArray:
    """
    Extract a sub-array.

    Each specifier addresses one source axis in order, except ``NEW_AXIS``
    (or ``None``) which inserts a length-1 axis without consuming one. An
    integer picks a single position and drops its axis, a ``Range`` or Python
    ``slice`` selects positions, a list of integer positions (e.g. from
    ``arange``) is traversed in the given order, and ``ALL`` keeps the whole
    axis. Axes left unspecified at the end are kept whole.
    """
    specs = [_coerce(spec) for spec in specifiers]
    rank = array.ndim
    if rank == 0 and specs:
        raise InvalidArgument("Cannot slice an array with an empty shape")
    consumed = sum(1 for spec in specs if spec is not NEW_AXIS)
    if consumed > rank:
        raise InvalidAxis(f"Too many slice specifiers ({consumed}) for an array of rank {rank}")
    specs.extend([ALL] * (rank - consumed))

    traversals: List[Sequence[int]] = []
    final_shape: List[int] = []
    identity = True
    axis = 0
    for spec in specs:
        if spec is NEW_AXIS:
            final_shape.append(1)
            identity = False
            continue
        size = array.shape[axis]
        if spec is ALL:
            positions: Sequence[int] = range(size)
            final_shape.append(size)
        elif isinstance(spec, Range):
            positions = spec.positions(size)
            final_shape.append(len(positions))
            identity = identity and positions == range(size)
        elif isinstance(spec, tuple):
            positions = tuple(_resolve_position(value, axis, size) for value in spec)
            final_shape.append(len(positions))
            identity = identity and positions == tuple(range(size))
        else:
            positions = (_resolve_position(spec, axis, size),)
            identity = False
        traversals.append(positions)
        axis += 1

    if identity:
        return array.copy()

    buffer = []
    for index in itertools.product(*traversals):
        offset = 0
        for value, stride in zip(index, array.strides):
            offset += value * stride
        buffer.append(array.data[offset])

    shape = tuple(final_shape) if final_shape else (1,)
    return NDArray._from_buffer(buffer, shape)
