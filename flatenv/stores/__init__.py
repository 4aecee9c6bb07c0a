"""Store contracts and implementations."""

from .dotenv import DotenvStore, restore_scalar
from .protocol import FlatDocument, Store


__all__ = ["DotenvStore", "FlatDocument", "Store", "restore_scalar"]
