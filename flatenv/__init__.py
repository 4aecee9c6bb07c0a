"""flatenv - nested metadata trees in flat key=value files"""

from ._version import version as __version__
from .codec import decode_value, encode_value
from .key_mapping import SEPARATOR, KeyMapper, flatten, join_path, split_path, unflatten
from .stores import DotenvStore, FlatDocument, Store


__all__ = [
    "SEPARATOR",
    "DotenvStore",
    "FlatDocument",
    "KeyMapper",
    "Store",
    "__version__",
    "decode_value",
    "encode_value",
    "flatten",
    "join_path",
    "split_path",
    "unflatten",
]
