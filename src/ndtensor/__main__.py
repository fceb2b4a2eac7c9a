from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .core.array import NDArray
from .core.creation import create_array
from .core.einsum import einsum, plan_einsum
from .core.exceptions import InvalidArgument, TensorError
from .interop import from_numpy, to_numpy

logger = logging.getLogger("ndtensor.cli")


def _load_operand(path: Path) -> NDArray:
    try:
        if path.suffix.lower() == ".npy":
            return from_numpy(np.load(path))
        return create_array(json.loads(path.read_text(encoding="utf-8")))
    except FileNotFoundError as exc:
        raise SystemExit(f"Operand file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidArgument(f"Operand file {path} is not valid JSON: {exc}") from exc


def _write_output(path: Path, array: NDArray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".json":
        path.write_text(json.dumps(array.tolist(), indent=2), encoding="utf-8")
    else:
        np.save(path, to_numpy(array))


def _run_einsum(expression: str, inputs: List[Path], out: Optional[Path], show_stats: bool) -> None:
    operands = [_load_operand(path) for path in inputs]
    logger.debug("loaded %d operand(s): %s", len(operands), [op.shape for op in operands])
    if show_stats:
        plan = plan_einsum(expression, [op.shape for op in operands])
        print(json.dumps(plan.stats(), indent=2))
    result = einsum(expression, *operands)
    if out is None:
        print(f"# shape {list(result.shape)}")
        print(json.dumps(result.tolist()))
        return
    _write_output(out, result)
    logger.info("wrote result of shape %s to %s", result.shape, out)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ndtensor command line utilities")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    # Also accepted after the subcommand; SUPPRESS keeps a leading -v from being reset.
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument(
        "--verbose", "-v", action="store_true", default=argparse.SUPPRESS, help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="cmd")

    einsum_parser = subparsers.add_parser(
        "einsum", parents=[shared], help="Contract arrays with an einsum expression"
    )
    einsum_parser.add_argument("expression", help='Einsum expression, e.g. "i,j; j,k -> i,k"')
    einsum_parser.add_argument(
        "inputs",
        nargs="+",
        type=Path,
        help="Operand files (.json nested lists or .npy)",
    )
    einsum_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Optional output path (.json or .npy). If omitted, prints the result",
    )
    einsum_parser.add_argument(
        "--stats",
        action="store_true",
        help="Print the contraction cost summary before the result",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "einsum":
        try:
            _run_einsum(args.expression, args.inputs, out=args.out, show_stats=args.stats)
        except TensorError as exc:
            print(f"error: {exc}", file=sys.stderr)
            raise SystemExit(2) from exc
        return

    parser.print_help()


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
