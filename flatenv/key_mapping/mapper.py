"""Key-path joining and reserved-prefix mapping for flat KV keys."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable


SEPARATOR = "__"


def join_path(segments: Iterable[str]) -> str:
    """Join path segments into a single flat key.

    Segments are not escaped; a segment containing ``SEPARATOR`` will not
    survive ``split_path``.
    """
    return SEPARATOR.join(segments)


def split_path(key_path: str) -> tuple[str, ...]:
    """Split a flat key back into its path segments."""
    return tuple(key_path.split(SEPARATOR))


def is_index(segment: str) -> bool:
    """Return True when a segment addresses a list slot rather than a map key."""
    return segment.isascii() and segment.isdigit()


class KeyMapper:
    """Map between prefixed flat keys and unprefixed key paths."""

    def __init__(self, prefix: str) -> None:
        super().__init__()
        if not prefix:
            msg = "prefix must not be empty"
            raise ValueError(msg)
        if SEPARATOR in prefix:
            msg = "prefix must not contain separator"
            raise ValueError(msg)

        self.prefix = prefix

    def full_key(self, key_path: str) -> str:
        """Build a prefixed flat key from an unprefixed key path."""
        return self.prefix + key_path

    def matches(self, flat_key: str) -> bool:
        """Return True when a flat key belongs to the reserved namespace."""
        return flat_key.startswith(self.prefix)

    def relative_key(self, flat_key: str) -> str:
        """Strip the reserved prefix from a flat key.

        A key that is only the prefix maps to the empty key path.
        """
        if not self.matches(flat_key):
            msg = f"key does not match prefix: {flat_key}"
            raise ValueError(msg)

        return flat_key.removeprefix(self.prefix)
