"""Analyze binary tool - dump, parse, build tree, save."""

import logging
import subprocess
from typing import Iterable, Optional

from ..parser import build_package_tree, parse_nm_output, split_dump_lines
from ..storage import TreeStore

logger = logging.getLogger(__name__)


DEFAULT_GO_COMMAND = "go"
DEFAULT_TIMEOUT = 120

# Limit on malformed lines echoed back in a result
MAX_WARNINGS = 20


class SymbolDumpError(RuntimeError):
    """Raised when the symbol dump tool cannot be run or fails."""


def nm_command(binary: str, go_command: str = DEFAULT_GO_COMMAND) -> list[str]:
    """Build the command line that dumps a binary's symbol table with sizes."""
    return [go_command, "tool", "nm", "-size", binary]


def run_symbol_dump(
    binary: str,
    go_command: str = DEFAULT_GO_COMMAND,
    timeout: int = DEFAULT_TIMEOUT,
) -> list[str]:
    """Run the symbol dump and return its stdout lines.

    Raises SymbolDumpError if the tool is missing, times out, or exits
    non-zero. No partial output is returned.
    """
    cmd = nm_command(binary, go_command)
    logger.info("Running %s", " ".join(cmd))

    try:
        completed = subprocess.run(
            cmd, capture_output=True, encoding="utf-8", errors="replace", timeout=timeout
        )
    except FileNotFoundError as e:
        raise SymbolDumpError(f"could not run {go_command!r}: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise SymbolDumpError(f"{' '.join(cmd)} timed out after {timeout}s") from e

    if completed.returncode != 0:
        stderr = completed.stderr.strip()
        raise SymbolDumpError(
            f"{' '.join(cmd)} exited with status {completed.returncode}"
            + (f": {stderr}" if stderr else "")
        )

    return split_dump_lines(completed.stdout)


def analyze_lines(lines: Iterable[str], binary: str, skip_symbols: bool = False) -> dict:
    """Parse dump lines and build the package tree for binary.

    Returns:
        Dict with "tree" (PackageTree), symbol and package counts, and "skipped" lines
    """
    parsed = parse_nm_output(lines)
    tree = build_package_tree(parsed.symbols, binary)

    if skip_symbols:
        tree.drop_symbols()

    grouped = [s for s in parsed.symbols if s.path_segments]

    return {
        "tree": tree,
        "symbol_count": len(grouped),
        "package_count": len({s.package for s in grouped}),
        "parsed_count": len(parsed.symbols),
        "filtered_count": parsed.filtered,
        "skipped": parsed.skipped,
    }


def analyze_binary(
    binary: str,
    skip_symbols: bool = False,
    storage_path: Optional[str] = None,
    go_command: Optional[str] = None,
    lines: Optional[list[str]] = None,
) -> dict:
    """Analyze a binary's symbol table and store its package size tree.

    Args:
        binary: Path to the binary (also used as the root label)
        skip_symbols: Drop per-symbol listings, keeping only sizes
        storage_path: Custom storage path (default: ~/.symtree-index/)
        go_command: Go executable used to run `go tool nm`
        lines: Pre-dumped nm output; skips running the dump tool

    Returns:
        Dict with analysis results
    """
    binary = binary.strip()
    if not binary:
        return {"success": False, "error": "binary argument is required"}

    if lines is None:
        try:
            lines = run_symbol_dump(binary, go_command or DEFAULT_GO_COMMAND)
        except SymbolDumpError as e:
            return {"success": False, "error": str(e)}

    analysis = analyze_lines(lines, binary, skip_symbols=skip_symbols)
    tree = analysis["tree"]

    if not tree.children:
        return {"success": False, "error": "No package symbols found in dump"}

    store = TreeStore(base_path=storage_path)
    index = store.save_index(
        binary=binary,
        tree=tree,
        symbol_count=analysis["symbol_count"],
        skipped_lines=len(analysis["skipped"]),
        skip_symbols=skip_symbols,
    )

    result = {
        "success": True,
        "binary": binary,
        "id": index.id,
        "analyzed_at": index.analyzed_at,
        "symbol_count": analysis["symbol_count"],
        "ungrouped_count": analysis["parsed_count"] - analysis["symbol_count"],
        "internal_count": analysis["filtered_count"],
        "package_count": analysis["package_count"],
        "accumulated_size": tree.accumulated_size,
        "top_packages": [
            {"package": child.package, "accumulated_size": child.accumulated_size}
            for child in tree.sorted_children("size")[:10]
        ],
    }

    if analysis["skipped"]:
        result["warnings"] = [
            f"Skipped malformed line: {line!r}"
            for line in analysis["skipped"][:MAX_WARNINGS]
        ]
        result["skipped_lines"] = len(analysis["skipped"])

    return result
