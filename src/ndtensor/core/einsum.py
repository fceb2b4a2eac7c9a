"""Index-name driven tensor contraction.

Every distinct index name becomes one dimension. The contraction visits every
combination of values over all dimensions (output names first, then the
contracted ones), multiplies the addressed operand elements and accumulates the
product into the output cell selected by the output names. This covers matrix
products, traces (a name repeated on one operand), outer products and
Hadamard products with the same loop.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .array import NDArray, is_number
from .config import ExecutionConfig, resolve_config
from .einsum_parser import EinsumSpec, parse_einsum
from .exceptions import InvalidArgument, ShapeMismatch
from .indexing import enumerate_indices, strides
from .shape import Shape, product
from .stats import compute_einsum_stats

logger = logging.getLogger(__name__)

Expression = Union[str, EinsumSpec, Tuple[Sequence[Sequence[str]], Optional[Sequence[str]]]]


@dataclass(frozen=True)
class EinsumPlan:
    inputs: Tuple[Tuple[str, ...], ...]
    output: Tuple[str, ...]
    contracted: Tuple[str, ...]
    dims: Dict[str, int]
    operand_shapes: Tuple[Shape, ...]

    @property
    def output_shape(self) -> Shape:
        if not self.output:
            return (1,)
        return tuple(self.dims[name] for name in self.output)

    @property
    def loop_names(self) -> Tuple[str, ...]:
        return self.output + self.contracted

    def stats(self) -> Dict[str, object]:
        return compute_einsum_stats(self.dims, self.output, self.contracted, self.operand_shapes)


def _as_spec(expression: Expression) -> EinsumSpec:
    if isinstance(expression, EinsumSpec):
        return expression
    if isinstance(expression, str):
        return parse_einsum(expression)
    if isinstance(expression, tuple) and len(expression) == 2:
        inputs, output = expression
        return EinsumSpec.from_lists(inputs, output)
    raise InvalidArgument(f"Unsupported einsum expression {expression!r}")


def _implicit_output(inputs: Sequence[Sequence[str]], ordering: str) -> Tuple[str, ...]:
    counts: Counter = Counter(name for labels in inputs for name in labels)
    names = [name for name in counts if counts[name] == 1]
    if ordering == "sorted":
        names.sort()
    return tuple(names)


def plan_einsum(
    expression: Expression,
    operand_shapes: Sequence[Sequence[int]],
    *,
    config: Optional[ExecutionConfig] = None,
) -> EinsumPlan:
    cfg = resolve_config(config)
    spec = _as_spec(expression)
    shapes = tuple(tuple(int(dim) for dim in shape) for shape in operand_shapes)
    if not spec.inputs:
        raise InvalidArgument("einsum requires at least one operand")
    if len(spec.inputs) != len(shapes):
        raise InvalidArgument(
            f"Expression {str(spec)!r} names {len(spec.inputs)} operands but {len(shapes)} were given"
        )

    dims: Dict[str, int] = {}
    for position, (labels, shape) in enumerate(zip(spec.inputs, shapes)):
        if len(labels) != len(shape):
            raise ShapeMismatch(
                f"Operand {position} has shape {shape} but {len(labels)} index names {labels}"
            )
        for name, dim in zip(labels, shape):
            known = dims.setdefault(name, dim)
            if known != dim:
                raise ShapeMismatch(
                    f"Index '{name}' has size {known} but operand {position} gives it size {dim}"
                )

    if spec.output is None:
        output = _implicit_output(spec.inputs, cfg.implicit_output)
    else:
        output = spec.output
        unknown = [name for name in output if name not in dims]
        if unknown:
            raise InvalidArgument(f"Output indices {unknown} do not appear in any operand")
        if len(set(output)) != len(output):
            raise InvalidArgument(f"Output indices {list(output)} contain duplicates")

    contracted = tuple(name for name in dims if name not in output)
    plan = EinsumPlan(
        inputs=spec.inputs,
        output=tuple(output),
        contracted=contracted,
        dims=dims,
        operand_shapes=shapes,
    )
    logger.debug(
        "einsum %s: dims=%s output=%s contracted=%s",
        spec,
        dims,
        plan.output,
        plan.contracted,
    )
    return plan


def _as_operand(value) -> NDArray:
    if isinstance(value, NDArray):
        return value
    if is_number(value):
        return NDArray._from_buffer([value], (1,))
    raise InvalidArgument(f"einsum operands must be NDArray instances or real numbers, got {value!r}")


def einsum(
    expression: Expression,
    *operands,
    config: Optional[ExecutionConfig] = None,
) -> NDArray:
    """
    Contract ``operands`` according to ``expression``.

    ``expression`` is either text such as ``"i,j; j,k -> i,k"``, an
    :class:`EinsumSpec`, or an ``(inputs, output)`` pair of name lists. An empty
    output list contracts everything into a single-element array of shape
    ``(1,)``.
    """
    arrays = [_as_operand(value) for value in operands]
    plan = plan_einsum(expression, [array.shape for array in arrays], config=config)

    loop_names = plan.loop_names
    loop_shape = tuple(plan.dims[name] for name in loop_names)
    slot = {name: position for position, name in enumerate(loop_names)}
    lookups: List[List[Tuple[int, int]]] = [
        [(slot[name], stride) for name, stride in zip(labels, array.strides)]
        for labels, array in zip(plan.inputs, arrays)
    ]
    output_shape = plan.output_shape
    output_strides = strides(output_shape) if plan.output else (0,)
    output_rank = len(plan.output)

    buffer = [0] * product(output_shape)
    for combination in enumerate_indices(loop_shape):
        term = 1
        for array, lookup in zip(arrays, lookups):
            offset = 0
            for position, stride in lookup:
                offset += combination[position] * stride
            term *= array.data[offset]
        target = 0
        for position in range(output_rank):
            target += combination[position] * output_strides[position]
        buffer[target] += term
    return NDArray._from_buffer(buffer, output_shape)
