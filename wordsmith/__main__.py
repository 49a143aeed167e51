"""Wordsmith CLI entry point.

Allows running via `python -m wordsmith` and provides the console script
defined in `pyproject.toml`.

Usage:
    wordsmith [--log-file PATH] [filename]
    wordsmith --version
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys
from typing import Optional

USAGE = "usage: wordsmith [--version] [--log-file PATH] [filename]"


def get_version_string() -> str:
    try:
        version = importlib.metadata.version("wordsmith")
    except importlib.metadata.PackageNotFoundError:
        version = "unknown"
    return f"wordsmith {version}"


def parse_args(args: list[str]) -> tuple[Optional[str], Optional[str]]:
    """Split the command line into (log_file, filename).

    Raises:
        ValueError: on an unknown option or a missing option argument.
    """
    log_file = None
    filename = None
    args = list(args)
    while args:
        arg = args.pop(0)
        if arg == "--log-file":
            if not args:
                raise ValueError("--log-file requires a path")
            log_file = args.pop(0)
        elif arg.startswith("--log-file="):
            log_file = arg.split("=", 1)[1]
        elif arg.startswith("-") and arg != "-":
            raise ValueError(f"unknown option: {arg}")
        elif filename is None:
            filename = arg
        else:
            raise ValueError("only one file can be edited at a time")
    return log_file, filename


def main() -> None:
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    try:
        log_file, filename = parse_args(args)
    except ValueError as e:
        print(f"wordsmith: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    # The terminal belongs to the editor; log only to a file
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if filename:
        editor.load_file(filename)
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
