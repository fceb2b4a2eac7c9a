from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, UnexpectedInput

from .exceptions import EinsumParseError, InvalidArgument

GRAMMAR_PATH = Path(__file__).with_name("einsum_grammar.lark")


@dataclass(frozen=True)
class EinsumSpec:
    """Index names per operand plus the requested output names (``None`` = implicit)."""

    inputs: Tuple[Tuple[str, ...], ...]
    output: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_lists(
        cls,
        inputs: Sequence[Sequence[str]],
        output: Optional[Sequence[str]] = None,
    ) -> "EinsumSpec":
        names = tuple(tuple(_check_name(name) for name in labels) for labels in inputs)
        out = None if output is None else tuple(_check_name(name) for name in output)
        return cls(inputs=names, output=out)

    def __str__(self) -> str:
        text = "; ".join(",".join(labels) for labels in self.inputs)
        if self.output is None:
            return text
        return f"{text} -> {','.join(self.output)}"


def _check_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidArgument(f"Einsum index names must be non-empty strings, got {name!r}")
    return name


@lru_cache(maxsize=1)
def _build_lark() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="earley",
        start="start",
        propagate_positions=True,
        maybe_placeholders=False,
    )


class _EinsumTransformer(Transformer):
    def start(self, items: List[Any]) -> EinsumSpec:
        inputs = items[0]
        output = items[1] if len(items) > 1 else None
        return EinsumSpec(inputs=inputs, output=output)

    def operands(self, items: List[Tuple[str, ...]]) -> Tuple[Tuple[str, ...], ...]:
        return tuple(items)

    def labels(self, items: List[Token]) -> Tuple[str, ...]:
        return tuple(str(token) for token in items)

    def output(self, items: List[Token]) -> Tuple[str, ...]:
        return tuple(str(token) for token in items)


def parse_einsum(text: str) -> EinsumSpec:
    if not isinstance(text, str):
        raise InvalidArgument(f"Einsum expression must be a string, got {text!r}")
    return _parse_cached(text)


@lru_cache(maxsize=256)
def _parse_cached(text: str) -> EinsumSpec:
    lines = text.splitlines() or [""]
    try:
        tree = _build_lark().parse(text)
    except UnexpectedInput as exc:
        line = _position(getattr(exc, "line", None))
        column = _position(getattr(exc, "column", None))
        line_text = lines[line - 1] if line and 1 <= line <= len(lines) else None
        raise EinsumParseError(
            f"Invalid einsum expression {text!r}",
            line=line,
            column=column,
            line_text=line_text,
        ) from exc
    except LarkError as exc:  # pragma: no cover - grammar-level failures
        raise EinsumParseError(f"Invalid einsum expression {text!r}: {exc}") from exc
    return _EinsumTransformer().transform(tree)


def _position(value: Any) -> Optional[int]:
    # lark reports -1 for positions at end of input
    if isinstance(value, int) and value >= 1:
        return value
    return None
