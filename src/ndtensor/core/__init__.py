"""Core array engine modules for ndtensor."""

__all__ = [
    "array",
    "broadcast",
    "config",
    "creation",
    "einsum",
    "einsum_parser",
    "exceptions",
    "indexing",
    "reductions",
    "shape",
    "slicing",
    "stats",
    "transforms",
]
