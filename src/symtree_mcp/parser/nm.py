"""Parse `go tool nm -size` output lines into symbols."""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .symbols import Symbol, is_internal_name, make_symbol

logger = logging.getLogger(__name__)


# <hex-address>? <decimal-size> <kind-char> <qualified-name>
SYMBOL_LINE_RE = re.compile(r"^\s*([a-fA-F0-9]+)?\s*([0-9]+)\s*([a-zA-Z\-\?])\s*(.+)$")


def split_dump_lines(text: str) -> list[str]:
    r"""Split dump text on "\n" only, keeping a trailing empty line.

    str.splitlines would also break on \x85, \x1c-\x1e and \u2028, which may
    appear inside symbol names.
    """
    return text.split("\n")


class MalformedLineError(ValueError):
    """Raised when a dump line lacks the address/size/kind/name shape."""

    def __init__(self, line: str):
        super().__init__(f"failed to find symbol in line: {line!r}")
        self.line = line


@dataclass
class NmParseResult:
    """Symbols parsed from a dump, plus the lines that were not used."""
    symbols: list[Symbol] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)  # Malformed lines
    filtered: int = 0                                  # Internal go:/type: entries


def parse_line(line: str) -> Optional[Symbol]:
    """Parse one dump line.

    Returns None for internal linker entries (go:, type:).
    Raises MalformedLineError when the line does not match.
    """
    match = SYMBOL_LINE_RE.match(line)
    if match is None:
        raise MalformedLineError(line)

    raw_address, raw_size, kind, name = match.groups()

    if is_internal_name(name):
        return None

    address = int(raw_address, 16) if raw_address else None

    return make_symbol(
        size=int(raw_size),
        kind=kind,
        qualified_name=name,
        address=address,
    )


def parse_nm_output(lines: Iterable[str]) -> NmParseResult:
    """Parse every dump line, collecting malformed ones instead of aborting.

    Symbols keep the order of their input lines.
    """
    result = NmParseResult()

    for line in lines:
        try:
            symbol = parse_line(line)
        except MalformedLineError as e:
            logger.warning("%s", e)
            result.skipped.append(line)
            continue

        if symbol is None:
            result.filtered += 1
            continue

        result.symbols.append(symbol)

    logger.debug(
        "Parsed %d symbols (%d skipped, %d internal)",
        len(result.symbols), len(result.skipped), result.filtered,
    )
    return result
