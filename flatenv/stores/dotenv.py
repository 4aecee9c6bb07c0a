"""Dotenv-style ``key=value`` store with prefixed nested metadata."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Mapping
from typing import Any, override

from flatenv.key_mapping import KeyMapper, flatten, unflatten

from .protocol import FlatDocument, Store


logger = logging.getLogger(__name__)

DEFAULT_METADATA_PREFIX = "meta_"


def _is_complex_value(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def restore_scalar(raw: str, json_decoder: Callable[[str], Any] = json.loads) -> Any:
    """Restore the scalar kind of an unquoted raw value.

    Quoted strings are returned untouched for ``decode_value``. Unquoted text
    that decodes to a JSON scalar (``true``, ``3``, ``null``...) is returned as
    that scalar; anything else stays a string. Text with surrounding
    whitespace and the non-finite constants (``NaN``, ``Infinity``) stay strings
    too, so loading and re-emitting a file never rewrites them.
    """
    if raw.startswith('"') or raw != raw.strip():
        return raw
    try:
        value = json_decoder(raw)
    except ValueError:
        return raw
    if _is_complex_value(value):
        return raw
    if isinstance(value, float) and not math.isfinite(value):
        return raw
    return value


class DotenvStore(Store):
    """Store for flat ``key=value`` files.

    Metadata entries carry ``metadata_prefix`` in front of their flattened key
    path; every other line is content and is passed through as-is.
    """

    def __init__(
        self,
        metadata_prefix: str = DEFAULT_METADATA_PREFIX,
        json_encoder: Callable[[Any], str] = json.dumps,
        json_decoder: Callable[[str], Any] = json.loads,
    ) -> None:
        super().__init__()
        self._mapper = KeyMapper(prefix=metadata_prefix)
        self._json_encoder = json_encoder
        self._json_decoder = json_decoder

    @property
    def metadata_prefix(self) -> str:
        return self._mapper.prefix

    def _render(self, value: Any) -> str:
        if _is_complex_value(value):
            msg = f"cannot use complex value in flat file: {value}"
            raise TypeError(msg)
        if isinstance(value, str):
            return value
        return self._json_encoder(value)

    @override
    def load_plain_file(self, text: str) -> list[tuple[str, str]]:
        """Parse lines into ordered key/value pairs, splitting at the first ``=``."""
        items: list[tuple[str, str]] = []
        for line in text.split("\n"):
            if not line:
                continue
            key, sep, value = line.partition("=")
            if not sep:
                msg = f"invalid dotenv input line: {line}"
                raise ValueError(msg)
            items.append((key, value))
        return items

    @override
    def emit_plain_file(self, items: list[tuple[str, Any]]) -> str:
        """Render one ``key=value`` line per item, in order."""
        return "".join(f"{key}={self._render(value)}\n" for key, value in items)

    @override
    def load_file(self, text: str) -> FlatDocument:
        """Split prefixed metadata entries from content and rebuild the metadata tree."""
        document = FlatDocument()
        flat_metadata: dict[str, Any] = {}
        for key, value in self.load_plain_file(text):
            if self._mapper.matches(key):
                flat_metadata[self._mapper.relative_key(key)] = restore_scalar(value, self._json_decoder)
            else:
                document.items.append((key, value))

        document.metadata = unflatten(flat_metadata)
        logger.debug("loaded %d content entries and %d metadata entries", len(document.items), len(flat_metadata))
        return document

    @override
    def emit_file(self, document: FlatDocument) -> str:
        """Append the flattened, prefixed metadata after the content entries."""
        items = list(document.items)
        for key_path, value in flatten(document.metadata).items():
            if value is None:
                continue
            items.append((self._mapper.full_key(key_path), value))

        logger.debug("emitting %d entries (%d content)", len(items), len(document.items))
        return self.emit_plain_file(items)

    @override
    def emit_value(self, value: Any) -> str:
        """Return a string value unchanged; other values cannot be emitted alone."""
        if isinstance(value, str):
            return value
        msg = f"the dotenv store only supports emitting strings, got {type(value).__name__}"
        raise TypeError(msg)
