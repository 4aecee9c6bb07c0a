"""Store interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FlatDocument:
    """Content entries of a flat file plus its nested metadata tree."""

    items: list[tuple[str, Any]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


class Store(ABC):
    """Flat ``key=value`` file store interface."""

    @abstractmethod
    def load_plain_file(self, text: str) -> list[tuple[str, str]]:
        """Parse file text into ordered raw key/value pairs."""

    @abstractmethod
    def emit_plain_file(self, items: list[tuple[str, Any]]) -> str:
        """Render ordered key/value pairs as file text."""

    @abstractmethod
    def load_file(self, text: str) -> FlatDocument:
        """Parse file text, separating content entries from metadata."""

    @abstractmethod
    def emit_file(self, document: FlatDocument) -> str:
        """Render content entries and flattened metadata as file text."""

    @abstractmethod
    def emit_value(self, value: Any) -> str:
        """Render a single value on its own."""
