#!/usr/bin/env python3
"""
Contraction and broadcasting benchmark for the pure-Python engine.

Times a matrix product, a full contraction and a broadcast add against the
NumPy reference on the same data, and reports the plan statistics so the cost
of the brute-force loop can be read alongside the timings.
"""

from __future__ import annotations

import argparse
import json
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Iterable, List

import numpy as np

from ndtensor import add, einsum, from_numpy, plan_einsum


@dataclass
class BenchmarkResult:
    case: str
    engine: str
    min_s: float
    mean_s: float
    iterations: int


def bench(fn: Callable[[], Any], *, iterations: int, warmup: int) -> Iterable[float]:
    timings = []
    for step in range(iterations + warmup):
        start = time.perf_counter()
        fn()
        elapsed = time.perf_counter() - start
        if step >= warmup:
            timings.append(elapsed)
    return timings


def _summarize(case: str, engine: str, timings: List[float]) -> BenchmarkResult:
    return BenchmarkResult(
        case=case,
        engine=engine,
        min_s=min(timings),
        mean_s=sum(timings) / len(timings),
        iterations=len(timings),
    )


def build_cases(size: int, seed: int) -> Dict[str, Dict[str, Any]]:
    rng = np.random.default_rng(seed)
    left = rng.normal(size=(size, size))
    right = rng.normal(size=(size, size))
    row = rng.normal(size=(size,))
    return {
        "matmul": {
            "expr": "i,j; j,k -> i,k",
            "numpy_expr": "ij,jk->ik",
            "operands": (left, right),
        },
        "full_contraction": {
            "expr": "i,j; i,j ->",
            "numpy_expr": "ij,ij->",
            "operands": (left, right),
        },
        "broadcast_add": {"operands": (left, row)},
    }


def run(size: int, iterations: int, warmup: int, seed: int) -> List[Dict[str, Any]]:
    results: List[Dict[str, Any]] = []
    for name, case in build_cases(size, seed).items():
        arrays = case["operands"]
        converted = [from_numpy(arr) for arr in arrays]
        if "expr" in case:
            plan = plan_einsum(case["expr"], [op.shape for op in converted])

            def ours():
                return einsum(case["expr"], *converted)

            def reference():
                return np.einsum(case["numpy_expr"], *arrays)

            stats = plan.stats()
        else:

            def ours():
                return add(*converted)

            def reference():
                return np.add(*arrays)

            stats = {}
        for engine, fn in (("ndtensor", ours), ("numpy", reference)):
            timings = list(bench(fn, iterations=iterations, warmup=warmup))
            entry = asdict(_summarize(name, engine, timings))
            entry["stats"] = stats
            results.append(entry)
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--size", type=int, default=16)
    parser.add_argument("--iterations", type=int, default=5)
    parser.add_argument("--warmup", type=int, default=1)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()
    print(json.dumps(run(args.size, args.iterations, args.warmup, args.seed), indent=2))


if __name__ == "__main__":
    main()
