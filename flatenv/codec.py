"""Scalar value codec applied to leaves of flattened trees.

Strings are wrapped in double quotes and have their newlines escaped so that
every leaf fits on a single ``key=value`` line and can be told apart from
other scalar kinds sharing the same text channel. Non-string scalars pass
through untouched.
"""

from __future__ import annotations

from typing import Any


_QUOTE = '"'
_NEWLINE = "\n"
_ESCAPED_NEWLINE = "\\n"


def encode_value(value: Any) -> Any:
    """Quote a string leaf and escape its newlines."""
    if isinstance(value, str):
        return _QUOTE + value.replace(_NEWLINE, _ESCAPED_NEWLINE) + _QUOTE
    return value


def decode_value(value: Any) -> Any:
    """Reverse ``encode_value`` for quoted strings; return anything else as-is."""
    if isinstance(value, str) and len(value) >= 2 and value.startswith(_QUOTE) and value.endswith(_QUOTE):  # noqa: PLR2004
        return value[1:-1].replace(_ESCAPED_NEWLINE, _NEWLINE)
    return value
