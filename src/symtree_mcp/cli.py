"""Command-line entry point: dump a binary and print its package size tree."""

import argparse
import json
import logging
import os
import sys
from typing import Optional

from .parser import SORT_ORDERS, split_dump_lines, tree_to_dict
from .render import render_tree
from .tools.analyze_binary import DEFAULT_GO_COMMAND, SymbolDumpError, analyze_lines, run_symbol_dump

logger = logging.getLogger(__name__)


FORMATS = ("json", "text")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symtree",
        description="Group a Go binary's symbols into a package tree with aggregated sizes."
    )
    parser.add_argument(
        "--binary", "-b",
        required=True,
        help="Binary to analyze (also the label of the tree root)",
    )
    parser.add_argument(
        "--skip-symbols", "-s",
        action="store_true",
        help="Skip emitting per-symbol data, keep package sizes only",
    )
    parser.add_argument(
        "--format", "-f",
        type=str.lower,
        choices=FORMATS,
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--order", "-o",
        type=str.lower,
        choices=SORT_ORDERS,
        default="name",
        help="Ordering of packages and symbols in text output (default: name)",
    )
    parser.add_argument(
        "--input", "-i",
        metavar="FILE",
        help="Read pre-dumped `go tool nm -size` output from FILE ('-' for stdin) instead of running go",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Limit text output to this many package levels",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug details to stderr",
    )
    return parser


def _read_lines(path: str) -> list[str]:
    if path == "-":
        return split_dump_lines(sys.stdin.buffer.read().decode("utf-8", errors="replace"))
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return split_dump_lines(f.read())


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    binary = args.binary.strip()
    if not binary:
        print("execution failed: binary argument is required", file=sys.stderr)
        return 1

    try:
        if args.input:
            lines = _read_lines(args.input)
        else:
            go_command = os.environ.get("SYMTREE_GO", DEFAULT_GO_COMMAND)
            lines = run_symbol_dump(binary, go_command)
    except (SymbolDumpError, OSError) as e:
        print(f"execution failed: {e}", file=sys.stderr)
        return 1

    analysis = analyze_lines(lines, binary, skip_symbols=args.skip_symbols)
    tree = analysis["tree"]

    if analysis["skipped"]:
        logger.info("Skipped %d malformed lines", len(analysis["skipped"]))

    if args.format == "json":
        print(json.dumps(tree_to_dict(tree), indent=2))
    else:
        print(render_tree(tree, order=args.order, max_depth=args.max_depth))

    return 0


if __name__ == "__main__":
    sys.exit(main())
