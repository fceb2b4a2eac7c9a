"""Conversion helpers between :class:`NDArray` and NumPy arrays."""

from __future__ import annotations

import numpy as np

from .core.array import NDArray
from .core.exceptions import InvalidArgument


def to_numpy(array: NDArray) -> np.ndarray:
    """
    Copy ``array`` into a NumPy array (int64 when every element is an int, else float64).

    The empty shape ``()`` maps to an empty ``(0,)`` array, matching how
    broadcasting reads it.
    """
    if not isinstance(array, NDArray):
        raise InvalidArgument(f"Expected an NDArray, got {array!r}")
    if not array.shape:
        return np.empty((0,), dtype=np.int64)
    dtype = np.int64 if all(isinstance(value, int) for value in array.data) else np.float64
    return np.asarray(array.data, dtype=dtype).reshape(array.shape)


def from_numpy(values) -> NDArray:
    """
    Copy a numeric NumPy array (or anything ``np.asarray`` accepts) into an NDArray.

    Boolean and complex inputs are rejected; 0-d inputs become shape ``(1,)``.
    """
    arr = np.asarray(values)
    if arr.dtype.kind not in "iuf":
        raise InvalidArgument(f"Only integer and real floating dtypes are supported, got {arr.dtype}")
    shape = arr.shape if arr.ndim else (1,)
    return NDArray._from_buffer(arr.reshape(-1).tolist(), tuple(int(dim) for dim in shape))
