from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _load_version

from .core.array import NDArray
from .core.broadcast import (
    abs,
    add,
    apply_binary,
    apply_unary,
    clip,
    div,
    exp,
    mul,
    neg,
    pow,
    sub,
)
from .core.config import ExecutionConfig
from .core.creation import arange, array_from_range, create_array, full, ones, repeat, zeros
from .core.einsum import EinsumPlan, einsum, plan_einsum
from .core.einsum_parser import EinsumSpec, parse_einsum
from .core.exceptions import (
    EinsumParseError,
    IndexOutOfBounds,
    InvalidArgument,
    InvalidAxis,
    InvalidRange,
    InvalidShape,
    ShapeMismatch,
    TensorError,
)
from .core.indexing import IndexCursor, enumerate_indices, ravel_index, strides, unravel_index
from .core.reductions import argmax, argmin, max, mean, min, sum
from .core.shape import broadcast_shapes, is_reshapable, is_valid_shape, product, promote_rank
from .core.slicing import ALL, NEW_AXIS, Range, slice_array
from .core.transforms import reshape, swap_axes, transpose
from .interop import from_numpy, to_numpy

try:
    __version__ = _load_version("ndtensor")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "NDArray",
    "ExecutionConfig",
    # constructors
    "create_array",
    "zeros",
    "ones",
    "full",
    "repeat",
    "arange",
    "array_from_range",
    # shape algebra and index codec
    "product",
    "is_valid_shape",
    "is_reshapable",
    "broadcast_shapes",
    "promote_rank",
    "strides",
    "ravel_index",
    "unravel_index",
    "IndexCursor",
    "enumerate_indices",
    # transforms and slicing
    "reshape",
    "transpose",
    "swap_axes",
    "slice_array",
    "Range",
    "ALL",
    "NEW_AXIS",
    # element-wise
    "apply_binary",
    "apply_unary",
    "add",
    "sub",
    "mul",
    "div",
    "pow",
    "neg",
    "exp",
    "abs",
    "clip",
    # reductions
    "sum",
    "mean",
    "min",
    "max",
    "argmin",
    "argmax",
    # einsum
    "einsum",
    "plan_einsum",
    "parse_einsum",
    "EinsumSpec",
    "EinsumPlan",
    # interop
    "to_numpy",
    "from_numpy",
    # errors
    "TensorError",
    "ShapeMismatch",
    "InvalidShape",
    "InvalidAxis",
    "InvalidRange",
    "IndexOutOfBounds",
    "InvalidArgument",
    "EinsumParseError",
    "__version__",
]
