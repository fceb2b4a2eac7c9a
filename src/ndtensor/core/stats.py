from __future__ import annotations

from typing import Dict, Iterable, Mapping, Sequence


def _prod(values: Iterable[int]) -> int:
    result = 1
    for value in values:
        result *= int(value)
    return int(result)


def compute_einsum_stats(
    dims: Mapping[str, int],
    output: Sequence[str],
    contracted: Sequence[str],
    operand_shapes: Sequence[Sequence[int]],
) -> Dict[str, object]:
    """Cost summary of a brute-force contraction over ``dims``."""
    output_size = _prod(dims[label] for label in output)
    contract_size = _prod(dims[label] for label in contracted)
    iterations = output_size * contract_size
    operand_count = len(operand_shapes)

    # one multiply per extra operand, one add per accumulated product
    multiplies = iterations * max(operand_count - 1, 0)
    reductions = max(contract_size - 1, 0) * output_size

    elements_in = 0
    for shape in operand_shapes:
        elements_in += _prod(shape) if shape else 0

    return {
        "iterations": int(iterations),
        "flops": float(multiplies + iterations),
        "reductions": int(reductions),
        "elements_in": int(elements_in),
        "elements_out": int(output_size),
        "contracted": list(contracted),
        "output_indices": list(output),
    }
