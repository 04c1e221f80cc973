"""Command-line entry point: format a serialized tree.

Reads a JSON tree (as written by ``irulefmt.serialization.to_json``) and
writes the formatted DSL source.

Usage:
    irulefmt tree.json                  # print to stdout
    irulefmt tree.json -o rule.irule    # write to a file
    irulefmt tree.json -o rule.irule --check
    cat tree.json | irulefmt -

Exit codes:
    0  success
    1  --check found a difference
    2  invalid input
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from irulefmt import __version__
from irulefmt.config import FormatConfig
from irulefmt.errors import IruleFmtError
from irulefmt.formatter import Formatter
from irulefmt.serialization import from_json
from irulefmt.utils.logger import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_CHANGED = 1
EXIT_INVALID = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="irulefmt",
        description="Format a serialized rule tree into canonical source",
    )
    parser.add_argument("tree", nargs="?", default="-", help="JSON tree file ('-' for stdin)")
    parser.add_argument("-o", "--output", type=Path, help="Write output here instead of stdout")
    parser.add_argument(
        "--indent", type=int, default=4, help="Spaces per nesting level (default: 4)"
    )
    parser.add_argument(
        "--max-blank-lines",
        type=int,
        default=2,
        help="Longest run of blank lines to keep (default: 2)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Exit 1 if --output differs from the formatted result, write nothing",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.check and args.output is None:
        parser.error("--check requires --output")
    if args.indent < 0:
        parser.error("--indent must be >= 0")
    if args.max_blank_lines < 0:
        parser.error("--max-blank-lines must be >= 0")

    config = FormatConfig(indent=b" " * args.indent, max_blank_lines=args.max_blank_lines)

    try:
        if args.tree == "-":
            raw = sys.stdin.buffer.read()
        else:
            raw = Path(args.tree).read_bytes()
        tree = from_json(raw)
        output = Formatter(config).format(tree)
    except (OSError, IruleFmtError) as e:
        print(f"irulefmt: {e}", file=sys.stderr)
        return EXIT_INVALID

    if args.check:
        existing = args.output.read_bytes() if args.output.exists() else None
        if existing != output:
            logger.info("%s would be reformatted", args.output)
            print(f"would reformat {args.output}", file=sys.stderr)
            return EXIT_CHANGED
        return EXIT_OK

    if args.output is not None:
        args.output.write_bytes(output)
        logger.debug("Wrote %d bytes to %s", len(output), args.output)
    else:
        sys.stdout.buffer.write(output)
        sys.stdout.flush()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
