"""Flattening of nested structures into single-level key paths."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from flatenv.codec import encode_value

from .mapper import join_path


logger = logging.getLogger(__name__)


def _children(node: Any) -> list[tuple[str, Any]] | None:
    if isinstance(node, Mapping):
        return [(str(key), child) for key, child in node.items()]
    if isinstance(node, (list, tuple)):
        return [(str(index), child) for index, child in enumerate(node)]
    return None


def iter_leaves(root: Any) -> list[tuple[tuple[str, ...], Any]]:
    """Return ``(path, leaf)`` pairs of a nested value in depth-first order.

    Empty mappings and sequences contribute no pairs. A scalar root yields a
    single pair with the empty path.
    """
    leaves: list[tuple[tuple[str, ...], Any]] = []
    stack: list[tuple[tuple[str, ...], Any]] = [((), root)]
    while stack:
        path, node = stack.pop()
        children = _children(node)
        if children is None:
            leaves.append((path, node))
            continue
        stack.extend(((*path, segment), child) for segment, child in reversed(children))
    return leaves


def flatten(root: Any) -> dict[str, Any]:
    """Flatten a nested value into ``key_path -> encoded scalar`` entries.

    Keys are converted with ``str``, so distinct keys such as ``1`` and ``"1"``
    can share a key path; the later leaf wins.
    """
    flat: dict[str, Any] = {}
    for path, leaf in iter_leaves(root):
        key_path = join_path(path)
        if key_path in flat:
            logger.warning("duplicate key path %s; overwriting %r", key_path, flat[key_path])
        flat[key_path] = encode_value(leaf)
    return flat
