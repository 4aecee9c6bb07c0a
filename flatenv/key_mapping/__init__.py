"""Key mapping, flattening and nested reconstruction utilities."""

from .flattener import flatten, iter_leaves
from .mapper import SEPARATOR, KeyMapper, is_index, join_path, split_path
from .nested import reconstruct_nested, unflatten


__all__ = [
    "SEPARATOR",
    "KeyMapper",
    "flatten",
    "is_index",
    "iter_leaves",
    "join_path",
    "reconstruct_nested",
    "split_path",
    "unflatten",
]
