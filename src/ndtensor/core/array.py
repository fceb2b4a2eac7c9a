from __future__ import annotations

import numbers
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from .exceptions import IndexOutOfBounds, InvalidArgument, ShapeMismatch
from .indexing import ravel_index, strides
from .shape import Shape, ShapeLike, is_integer, normalize_shape, product

Number = Union[int, float]
Index = Union[None, int, Sequence[int]]


def is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _check_number(value: Any) -> Number:
    if not is_number(value):
        raise InvalidArgument(f"Array elements must be real numbers, got {value!r}")
    return value


class NDArray:
    """
    Dense row-major array: a flat buffer of real numbers plus a shape.

    The shape is fixed at construction; element values can be changed in place
    through ``set`` and ``update``. Every shape-changing operation returns a new
    array with its own buffer.
    """

    __slots__ = ("data", "shape", "size", "strides")

    def __init__(self, data: Sequence[Number], shape: Optional[ShapeLike] = None):
        buffer = list(data)
        dims = (len(buffer),) if shape is None else normalize_shape(shape)
        if len(buffer) != product(dims):
            raise ShapeMismatch(
                f"Buffer of {len(buffer)} elements does not match shape {dims} "
                f"({product(dims)} elements)"
            )
        for value in buffer:
            _check_number(value)
        self._init(buffer, dims)

    def _init(self, buffer: List[Number], dims: Shape) -> None:
        self.data: List[Number] = buffer
        self.shape: Shape = dims
        self.size: int = product(dims)
        self.strides: Tuple[int, ...] = strides(dims)

    @classmethod
    def _from_buffer(cls, buffer: List[Number], shape: Shape) -> "NDArray":
        # Trusted internal constructor: the caller owns ``buffer`` and has
        # already checked it against ``shape``.
        array = cls.__new__(cls)
        array._init(buffer, shape)
        return array

    @property
    def ndim(self) -> int:
        return len(self.shape)

    # ------------------------------------------------------------ element access
    def _offset(self, index: Index) -> int:
        if index is None:
            index = 0
        if is_integer(index):
            if index < 0 or index >= self.size:
                raise IndexOutOfBounds(f"Flat index {index} is out of bounds for size {self.size}")
            return int(index)
        if isinstance(index, (str, bytes)) or not isinstance(index, Sequence):
            raise IndexOutOfBounds(f"Unsupported index {index!r}")
        return ravel_index(index, self.shape, self.strides)

    def get(self, index: Index = None) -> Number:
        return self.data[self._offset(index)]

    def set(self, index: Index, value: Number) -> None:
        offset = self._offset(index)
        self.data[offset] = _check_number(value)

    def update(self, index: Index, fn: Callable[[Number], Number]) -> None:
        offset = self._offset(index)
        self.data[offset] = _check_number(fn(self.data[offset]))

    def item(self) -> Number:
        if self.size != 1:
            raise InvalidArgument(f"item() requires a single-element array, got shape {self.shape}")
        return self.data[0]

    # ------------------------------------------------------------------ helpers
    def copy(self) -> "NDArray":
        return NDArray._from_buffer(list(self.data), self.shape)

    def tolist(self) -> List[Any]:
        if not self.shape:
            return []

        def build(axis: int, offset: int) -> List[Any]:
            dim = self.shape[axis]
            stride = self.strides[axis]
            if axis == len(self.shape) - 1:
                return self.data[offset : offset + dim]
            return [build(axis + 1, offset + i * stride) for i in range(dim)]

        return build(0, 0)

    def array_equal(self, other: "NDArray") -> bool:
        return isinstance(other, NDArray) and self.shape == other.shape and self.data == other.data

    def __repr__(self) -> str:
        return f"NDArray({self.tolist()!r}, shape={self.shape})"

    # -------------------------------------------------------- shape transforms
    def reshape(self, shape: ShapeLike, *, config=None) -> "NDArray":
        from .transforms import reshape

        return reshape(self, shape, config=config)

    def transpose(self, axes: Optional[Sequence[int]] = None) -> "NDArray":
        from .transforms import transpose

        return transpose(self, axes)

    def swap_axes(self, axis1: int, axis2: int) -> "NDArray":
        from .transforms import swap_axes

        return swap_axes(self, axis1, axis2)

    def slice(self, *specifiers: Any) -> "NDArray":
        from .slicing import slice_array

        return slice_array(self, *specifiers)

    def __getitem__(self, key: Any) -> "NDArray":
        from .slicing import slice_array

        if not isinstance(key, tuple):
            key = (key,)
        return slice_array(self, *key)

    # ----------------------------------------------------------------- reductions
    def sum(self, axes=None) -> "NDArray":
        from .reductions import sum as _sum

        return _sum(self, axes)

    def mean(self, axes=None) -> "NDArray":
        from .reductions import mean

        return mean(self, axes)

    def min(self, axes=None) -> "NDArray":
        from .reductions import min as _min

        return _min(self, axes)

    def max(self, axes=None) -> "NDArray":
        from .reductions import max as _max

        return _max(self, axes)

    def argmin(self, axis: int) -> "NDArray":
        from .reductions import argmin

        return argmin(self, axis)

    def argmax(self, axis: int) -> "NDArray":
        from .reductions import argmax

        return argmax(self, axis)

    def clip(self, lo: Number, hi: Number, out: Optional["NDArray"] = None) -> "NDArray":
        from .broadcast import clip

        return clip(self, lo, hi, out)

    # ----------------------------------------------------------------- operators
    def __add__(self, other):
        from .broadcast import add

        return add(self, other)

    def __radd__(self, other):
        from .broadcast import add

        return add(other, self)

    def __sub__(self, other):
        from .broadcast import sub

        return sub(self, other)

    def __rsub__(self, other):
        from .broadcast import sub

        return sub(other, self)

    def __mul__(self, other):
        from .broadcast import mul

        return mul(self, other)

    def __rmul__(self, other):
        from .broadcast import mul

        return mul(other, self)

    def __truediv__(self, other):
        from .broadcast import div

        return div(self, other)

    def __rtruediv__(self, other):
        from .broadcast import div

        return div(other, self)

    def __pow__(self, other):
        from .broadcast import pow as _pow

        return _pow(self, other)

    def __rpow__(self, other):
        from .broadcast import pow as _pow

        return _pow(other, self)

    def __neg__(self):
        from .broadcast import neg

        return neg(self)

    def __abs__(self):
        from .broadcast import abs as _abs

        return _abs(self)
