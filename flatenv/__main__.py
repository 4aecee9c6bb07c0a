"""Interface for ``python -m flatenv``."""

from __future__ import annotations

import json
import logging
import sys
from argparse import ArgumentParser, FileType
from typing import TYPE_CHECKING, Any, TextIO

from ._version import version
from .key_mapping import flatten, unflatten
from .stores import DotenvStore, FlatDocument, restore_scalar


if TYPE_CHECKING:
    from argparse import Namespace
    from collections.abc import Sequence


__all__ = ["main"]

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

logger = logging.getLogger(__name__)


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(level=level_name.upper(), format=LOG_FORMAT)


def _flatten_command(args: Namespace, out: TextIO) -> None:
    tree: Any = json.load(args.file)
    if args.metadata_prefix:
        store = DotenvStore(metadata_prefix=args.metadata_prefix)
        _ = out.write(store.emit_file(FlatDocument(metadata=tree)))
        return
    _ = out.write(DotenvStore().emit_plain_file(list(flatten(tree).items())))


def _unflatten_command(args: Namespace, out: TextIO) -> None:
    text = args.file.read()
    if args.metadata_prefix:
        document = DotenvStore(metadata_prefix=args.metadata_prefix).load_file(text)
        result: dict[str, Any] = {"content": dict(document.items), "metadata": document.metadata}
    else:
        items = DotenvStore().load_plain_file(text)
        result = unflatten({key: restore_scalar(value) for key, value in items})
    json.dump(result, out, indent=2, allow_nan=False)
    _ = out.write("\n")


def main(args: Sequence[str] | None = None) -> int:
    """Argument parser for the CLI."""
    parser = ArgumentParser(prog="flatenv")
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument(
        "--log-level",
        default="warning",
        type=str.lower,
        choices=LOG_LEVELS,
        help="Logging level (default: warning)",
    )
    _ = parser.add_argument(
        "--metadata-prefix",
        default=None,
        help="Treat keys carrying this prefix as flattened metadata",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    flatten_parser = subparsers.add_parser("flatten", help="Write a JSON object as key=value lines")
    _ = flatten_parser.add_argument("file", nargs="?", type=FileType("r"), default=sys.stdin)
    flatten_parser.set_defaults(handler=_flatten_command)

    unflatten_parser = subparsers.add_parser("unflatten", help="Rebuild a JSON object from key=value lines")
    _ = unflatten_parser.add_argument("file", nargs="?", type=FileType("r"), default=sys.stdin)
    unflatten_parser.set_defaults(handler=_unflatten_command)

    parsed = parser.parse_args(args)
    _configure_logging(parsed.log_level)
    try:
        parsed.handler(parsed, sys.stdout)
    except (ValueError, TypeError, OSError) as error:
        logger.debug("%s failed", parsed.command, exc_info=True)
        print(f"error: {error}", file=sys.stderr)
        return 1
    finally:
        if parsed.file is not sys.stdin:
            parsed.file.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
