"""Nested structure reconstruction from flattened key paths."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from flatenv.codec import decode_value

from .mapper import is_index, join_path, split_path


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


logger = logging.getLogger(__name__)

_Container = dict[str, Any] | list[Any]
_Slot = str | int


def _read(container: _Container, slot: _Slot) -> Any:
    if isinstance(container, list):
        return container[slot]
    return container.get(slot)


def _grow(node: list[Any], index: int) -> None:
    if len(node) <= index:
        node.extend([None] * (index + 1 - len(node)))


def _descend(
    container: _Container, slot: _Slot, path: tuple[str, ...], depth: int
) -> tuple[_Container, _Slot]:
    """Step from ``container[slot]`` into the child addressed by ``path[depth]``.

    The node stored at ``container[slot]`` becomes a list when ``path[depth]`` is
    an index and a dict otherwise, whatever it held before.
    """
    segment = path[depth]
    current = _read(container, slot)
    if is_index(segment):
        index = int(segment)
        if not isinstance(current, list):
            if current is not None:
                logger.warning("replacing %r with a list at %s", current, join_path(path[:depth]))
            current = []
            container[slot] = current
        _grow(current, index)
        return current, index

    if not isinstance(current, dict):
        if current is not None:
            logger.warning("replacing %r with a map at %s", current, join_path(path[:depth]))
        current = {}
        container[slot] = current
    return current, segment


def _assign(container: _Container, slot: _Slot, value: Any, path: tuple[str, ...]) -> None:
    current = _read(container, slot)
    if isinstance(current, (dict, list)):
        logger.warning("keeping nested value at %s; dropping scalar %r", join_path(path), value)
        return
    container[slot] = value


def reconstruct_nested(items: Iterable[tuple[tuple[str, ...], Any]]) -> dict[str, Any]:
    """Reconstruct a nested object from path/value pairs.

    Each item consists of a non-empty tuple path and a decoded Python value.
    The first segment of every path is a key of the returned dict; each later
    segment is a list index when it is a non-negative integer literal and a
    map key otherwise. Lists grow with ``None`` placeholders and are never
    truncated, so the result does not depend on the order of ``items``.
    """
    tree: dict[str, Any] = {}
    for path, value in items:
        if not path:
            msg = "key path must not be empty"
            raise ValueError(msg)

        container: _Container = tree
        slot: _Slot = path[0]
        for depth in range(1, len(path)):
            container, slot = _descend(container, slot, path, depth)
        _assign(container, slot, value, path)
    return tree


def unflatten(flat: Mapping[str, Any]) -> dict[str, Any]:
    """Rebuild the nested value encoded by ``flatten``."""
    return reconstruct_nested((split_path(key_path), decode_value(value)) for key_path, value in flat.items())
