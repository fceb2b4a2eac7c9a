"""Element-wise operators with broadcasting.

Operands are either :class:`NDArray` instances or plain real numbers. Every
public operator lifts its operands to arrays once on entry, aligns ranks by
prepending length-1 axes, and then walks the result shape in row-major order,
reading each operand at index 0 along its length-1 axes.
"""

from __future__ import annotations

import builtins
import math
import operator
from typing import Callable, List, Optional, Tuple, Union

from .array import NDArray, Number, is_number
from .config import ExecutionConfig, resolve_config
from .exceptions import InvalidArgument, ShapeMismatch
from .indexing import enumerate_indices
from .shape import Shape, broadcast_shapes, promote_rank

Operand = Union[NDArray, int, float]
BinaryFn = Callable[[Number, Number], Number]
UnaryFn = Callable[[Number], Number]


def _as_array(operand: Operand, rank: int) -> NDArray:
    if isinstance(operand, NDArray):
        if operand.ndim == 0:
            return NDArray._from_buffer(operand.data, (0,))
        return operand
    if is_number(operand):
        return NDArray._from_buffer([operand], (1,) * builtins.max(rank, 1))
    raise InvalidArgument(f"Operands must be NDArray instances or real numbers, got {operand!r}")


def _promote(array: NDArray, rank: int) -> NDArray:
    if array.ndim == rank:
        return array
    # Read-only view over the same buffer with leading length-1 axes.
    return NDArray._from_buffer(array.data, promote_rank(array.shape, rank))


def _lift_pair(a: Operand, b: Operand, cfg: ExecutionConfig) -> Tuple[NDArray, NDArray]:
    rank_a = a.ndim if isinstance(a, NDArray) else 0
    rank_b = b.ndim if isinstance(b, NDArray) else 0
    left = _as_array(a, rank_b)
    right = _as_array(b, rank_a)
    if left.ndim != right.ndim:
        if not cfg.rank_promotion:
            raise ShapeMismatch(
                f"Operands have different ranks: {left.shape} and {right.shape}"
            )
        rank = builtins.max(left.ndim, right.ndim)
        left, right = _promote(left, rank), _promote(right, rank)
    return left, right


def _check_out(out: Optional[NDArray], shape: Shape) -> None:
    if out is None:
        return
    if not isinstance(out, NDArray):
        raise InvalidArgument(f"out must be an NDArray, got {out!r}")
    if out.shape != shape:
        raise ShapeMismatch(f"out has shape {out.shape} but the result has shape {shape}")


def _store(values: List[Number], shape: Shape, out: Optional[NDArray]) -> NDArray:
    if out is None:
        return NDArray._from_buffer(values, shape)
    out.data[:] = values
    return out


def _broadcast_strides(array: NDArray) -> Tuple[int, ...]:
    return tuple(stride if dim > 1 else 0 for dim, stride in zip(array.shape, array.strides))


def apply_binary(
    fn: BinaryFn,
    a: Operand,
    b: Operand,
    out: Optional[NDArray] = None,
    *,
    config: Optional[ExecutionConfig] = None,
) -> NDArray:
    """
    Apply ``fn`` element-wise to two broadcast-compatible operands.

    When ``out`` is given its shape must equal the broadcast result shape; it is
    filled in place and returned. Results are computed in full before ``out`` is
    touched, so a failure leaves it unchanged.
    """
    cfg = resolve_config(config)
    left, right = _lift_pair(a, b, cfg)
    shape = broadcast_shapes(left.shape, right.shape)
    _check_out(out, shape)

    left_strides = _broadcast_strides(left)
    right_strides = _broadcast_strides(right)
    values: List[Number] = []
    for index in enumerate_indices(shape):
        left_offset = 0
        right_offset = 0
        for value, ls, rs in zip(index, left_strides, right_strides):
            left_offset += value * ls
            right_offset += value * rs
        values.append(fn(left.data[left_offset], right.data[right_offset]))
    return _store(values, shape, out)


def apply_unary(fn: UnaryFn, a: Operand, out: Optional[NDArray] = None) -> NDArray:
    source = _as_array(a, 1)
    _check_out(out, source.shape)
    values = [fn(value) for value in source.data]
    return _store(values, source.shape, out)


# ----------------------------------------------------------------- scalar kernels
def _is_odd_integer(value: Number) -> bool:
    return float(value).is_integer() and int(value) % 2 == 1


def _ieee_divide(x: Number, y: Number) -> Number:
    try:
        return x / y
    except ZeroDivisionError:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)


def _power(x: Number, y: Number) -> Number:
    try:
        result = x**y
    except ZeroDivisionError:
        # zero to a negative power
        return math.copysign(math.inf, x) if _is_odd_integer(y) else math.inf
    except OverflowError:
        return -math.inf if x < 0 and _is_odd_integer(y) else math.inf
    if isinstance(result, complex):
        return math.nan
    return result


def _exp(x: Number) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


# ---------------------------------------------------------------------- binary
def add(a: Operand, b: Operand, out: Optional[NDArray] = None, *, config=None) -> NDArray:
    return apply_binary(operator.add, a, b, out, config=config)


def sub(a: Operand, b: Operand, out: Optional[NDArray] = None, *, config=None) -> NDArray:
    return apply_binary(operator.sub, a, b, out, config=config)


def mul(a: Operand, b: Operand, out: Optional[NDArray] = None, *, config=None) -> NDArray:
    return apply_binary(operator.mul, a, b, out, config=config)


def div(a: Operand, b: Operand, out: Optional[NDArray] = None, *, config=None) -> NDArray:
    """Element-wise true division; ``x / 0`` follows IEEE-754 unless configured to raise."""
    cfg = resolve_config(config)
    fn = operator.truediv if cfg.division == "raise" else _ieee_divide
    return apply_binary(fn, a, b, out, config=cfg)


def pow(a: Operand, b: Operand, out: Optional[NDArray] = None, *, config=None) -> NDArray:
    return apply_binary(_power, a, b, out, config=config)


# ----------------------------------------------------------------------- unary
def neg(a: Operand, out: Optional[NDArray] = None) -> NDArray:
    return apply_unary(operator.neg, a, out)


def exp(a: Operand, out: Optional[NDArray] = None) -> NDArray:
    return apply_unary(_exp, a, out)


def abs(a: Operand, out: Optional[NDArray] = None) -> NDArray:
    return apply_unary(builtins.abs, a, out)


def clip(a: Operand, lo: Number, hi: Number, out: Optional[NDArray] = None) -> NDArray:
    """Clamp every element into ``[lo, hi]``."""
    if not is_number(lo) or not is_number(hi):
        raise InvalidArgument(f"clip bounds must be real numbers, got {lo!r} and {hi!r}")
    if lo > hi:
        raise InvalidArgument(f"clip lower bound {lo} exceeds upper bound {hi}")
    return apply_unary(lambda value: builtins.min(builtins.max(value, lo), hi), a, out)


__all__ = [
    "Operand",
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
]
