from __future__ import annotations

from typing import List, Optional, Sequence

from .array import NDArray
from .config import ExecutionConfig, resolve_config
from .exceptions import InvalidAxis, InvalidShape, ShapeMismatch
from .indexing import enumerate_indices
from .shape import ShapeLike, is_integer, is_reshapable, product

PLACEHOLDER = -1


def reshape(
    array: NDArray,
    shape: ShapeLike,
    *,
    config: Optional[ExecutionConfig] = None,
) -> NDArray:
    """
    Return ``array`` with a new shape and the same row-major element order.

    One entry of ``shape`` may be ``-1``; it is inferred from the element count.
    """
    cfg = resolve_config(config)
    dims = _resolve_placeholder(array, shape)
    if not is_reshapable(array.shape, dims):
        raise ShapeMismatch(f"Cannot reshape array of shape {array.shape} into {tuple(dims)}")
    buffer = list(array.data) if cfg.copy_on_reshape else array.data
    return NDArray._from_buffer(buffer, tuple(dims))


def _resolve_placeholder(array: NDArray, shape: ShapeLike) -> List[int]:
    if is_integer(shape):
        shape = (shape,)
    dims = list(shape)
    for dim in dims:
        if not is_integer(dim) or (dim < 0 and dim != PLACEHOLDER):
            raise InvalidShape(f"Invalid reshape target {tuple(dims)}")
    placeholders = [axis for axis, dim in enumerate(dims) if dim == PLACEHOLDER]
    if len(placeholders) > 1:
        raise InvalidShape(f"Only one placeholder dimension is allowed, got {tuple(dims)}")
    if not placeholders:
        return [int(dim) for dim in dims]

    known = 1
    for dim in dims:
        if dim != PLACEHOLDER:
            known *= int(dim)
    if known == 0 or array.size % known != 0:
        raise ShapeMismatch(f"Cannot infer placeholder for shape {tuple(dims)} from size {array.size}")
    dims[placeholders[0]] = array.size // known
    return [int(dim) for dim in dims]


def _validate_permutation(axes: Sequence[int], rank: int) -> List[int]:
    perm = list(axes)
    if len(perm) != rank:
        raise InvalidAxis(f"Permutation {tuple(perm)} must list exactly {rank} axes")
    seen = set()
    for axis in perm:
        if not is_integer(axis) or axis < 0 or axis >= rank:
            raise InvalidAxis(f"Axis {axis!r} is out of range for rank {rank}")
        if axis in seen:
            raise InvalidAxis(f"Axis {axis} appears more than once in {tuple(perm)}")
        seen.add(axis)
    return [int(axis) for axis in perm]


def transpose(array: NDArray, axes: Optional[Sequence[int]] = None) -> NDArray:
    rank = array.ndim
    if axes is None:
        perm = list(reversed(range(rank)))
    else:
        perm = _validate_permutation(axes, rank)
    new_shape = tuple(array.shape[axis] for axis in perm)
    source_strides = [array.strides[axis] for axis in perm]
    buffer = [0] * product(new_shape)
    # Result offsets follow the enumeration order, so the buffer fills sequentially.
    for offset, index in enumerate(enumerate_indices(new_shape)):
        source = 0
        for value, stride in zip(index, source_strides):
            source += value * stride
        buffer[offset] = array.data[source]
    return NDArray._from_buffer(buffer, new_shape)


def swap_axes(array: NDArray, axis1: int, axis2: int) -> NDArray:
    rank = array.ndim
    for axis in (axis1, axis2):
        if not is_integer(axis) or axis < 0 or axis >= rank:
            raise InvalidAxis(f"Axis {axis!r} is out of range for rank {rank}")
    perm = list(range(rank))
    perm[axis1], perm[axis2] = perm[axis2], perm[axis1]
    return transpose(array, perm)
