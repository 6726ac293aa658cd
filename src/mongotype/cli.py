"""mongotype command line: render JSON / JSON Lines documents as text.

Usage::

    mongotype [options] [SOURCE]

SOURCE is a .json file (one object or an array of objects), a JSON Lines
file, or ``-`` / absent for stdin.  Option values resolve as command line,
then config file (``--config``), then defaults.

Exit status: 0 on success, 1 on usage, configuration, or source errors,
2 when a document cannot be traversed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from mongotype import __version__
from mongotype.api import render_documents
from mongotype.config import RenderConfig, RenderStyle, load_config
from mongotype.errors import ConfigError, MalformedNode, SourceError, StackUnderflow
from mongotype.logging_setup import setup_logging
from mongotype.sink import open_sink
from mongotype.sources import load_documents

__all__ = ["create_argument_parser", "main"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_TRAVERSAL = 2


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser with all CLI options."""
    parser = argparse.ArgumentParser(
        prog="mongotype",
        description="Render schema-less documents with their BSON types.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        default="-",
        help="JSON or JSON Lines file of documents (default: stdin)",
    )

    general = parser.add_argument_group("General Options")
    general.add_argument("--version", "-v", action="version", version=__version__)
    general.add_argument(
        "--debug", "-d", action="store_true", help="print debugging info"
    )
    general.add_argument(
        "--stack",
        "-q",
        action="store_true",
        help="log every traversal event with its context stack (implies --debug)",
    )
    general.add_argument("--config", "-c", type=Path, help="path of a TOML config file")
    general.add_argument(
        "--output", "-o", default="-", help="output file (default: stdout)"
    )
    general.add_argument(
        "--name",
        "-n",
        help="document name prefix for dotted paths (default: source file stem)",
    )

    fmt = parser.add_argument_group("Output Format Options")
    fmt.add_argument(
        "--style",
        "-s",
        choices=[style.value for style in RenderStyle],
        help="output style (default: dotted)",
    )
    fmt.add_argument(
        "--type",
        "-t",
        dest="type",
        metavar="{none,name,desc,code,all}",
        help="type annotation parts, combinable with '+' (default: all)",
    )
    fmt.add_argument(
        "--scalar-first",
        "-f",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="output scalar fields before embedded objects and arrays",
    )
    fmt.add_argument(
        "--sort-keys",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="visit object fields in lexical order instead of stored order",
    )
    fmt.add_argument(
        "--indent",
        help="indentation token, or a number of spaces (default: two spaces)",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> RenderConfig:
    """Merge config file values and command-line flags over the defaults.

    Raises:
        ConfigError: On an unreadable config file or invalid values.
    """
    config = RenderConfig()
    if args.config is not None:
        config = load_config(args.config, config)
    overrides: dict[str, Any] = {
        "style": args.style,
        "type": args.type,
        "indent": args.indent,
        "scalar_first": args.scalar_first,
        "sort_keys": args.sort_keys,
        "trace": True if args.stack else None,
    }
    return RenderConfig.from_mapping(
        {key: value for key, value in overrides.items() if value is not None}, config
    )


def _source_name(source: str) -> str:
    if source == "-":
        return "stdin"
    return Path(source).stem


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.debug or args.stack else "WARNING")

    try:
        config = resolve_config(args)
        logger.debug("Effective configuration: %s", config)
        if args.source == "-":
            documents = load_documents(sys.stdin)
        else:
            documents = load_documents(args.source)
    except (ConfigError, SourceError) as exc:
        logger.error("%s", exc)
        return EXIT_USAGE

    name = args.name if args.name is not None else _source_name(args.source)
    try:
        with open_sink(args.output) as sink:
            count = render_documents(documents, sink, config=config, name=name)
    except OSError as exc:
        logger.error("cannot write output: %s", exc)
        return EXIT_USAGE
    except (MalformedNode, StackUnderflow) as exc:
        logger.error("traversal failed: %s", exc)
        return EXIT_TRAVERSAL

    logger.debug("Rendered %d documents from %s", count, args.source)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
