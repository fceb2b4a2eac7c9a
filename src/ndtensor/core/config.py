from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class ExecutionConfig:
    """
    Switches shared by the element-wise, reshape and einsum operations.

    Key behaviors:
    * ``division`` defaults to ``"ieee"`` so ``x / 0`` yields ``inf``/``nan``
      like a float unit would; ``"raise"`` lets ``ZeroDivisionError`` propagate.
    * ``rank_promotion`` pads the lower-rank operand of a binary operation with
      leading length-1 axes. When disabled, operands of different rank are
      rejected with ``ShapeMismatch``.
    * ``copy_on_reshape`` controls whether ``reshape`` copies the buffer or hands
      the source buffer to the new array (shared storage).
    * ``implicit_output`` orders the output indices of an einsum expression
      without ``->``: ``"first_seen"`` keeps the order of appearance,
      ``"sorted"`` follows NumPy's alphabetical convention.
    """

    division: str = "ieee"  # "ieee" | "raise"
    rank_promotion: bool = True
    copy_on_reshape: bool = True
    implicit_output: str = "first_seen"  # "first_seen" | "sorted"

    def normalized(self) -> "ExecutionConfig":
        division = (self.division or "ieee").lower()
        if division not in {"ieee", "raise"}:
            raise ValueError(f"Unsupported division mode: {self.division}")
        implicit = (self.implicit_output or "first_seen").lower().replace("-", "_")
        if implicit not in {"first_seen", "sorted"}:
            raise ValueError(f"Unsupported implicit output ordering: {self.implicit_output}")
        return replace(
            self,
            division=division,
            rank_promotion=bool(self.rank_promotion),
            copy_on_reshape=bool(self.copy_on_reshape),
            implicit_output=implicit,
        )


DEFAULT_CONFIG = ExecutionConfig()


def resolve_config(config: Optional[ExecutionConfig]) -> ExecutionConfig:
    if config is None:
        return DEFAULT_CONFIG
    return config.normalized()
