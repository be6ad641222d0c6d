"""Symbol dataclasses and qualified-name decomposition."""

import hashlib
from dataclasses import dataclass, field
from typing import Optional


PATH_SEPARATOR = "/"

# Synthetic runtime/metadata entries emitted by the Go linker
INTERNAL_PREFIXES = ("go:", "type:")


@dataclass
class SymbolSummary:
    """Minimal projection of a symbol kept inside tree leaves."""
    size: int = 0
    kind: str = ""
    name: str = ""


@dataclass
class Symbol:
    """One entry from a binary's symbol table dump."""
    size: int                       # Byte count
    kind: str                       # "T" | "D" | "R" | "B" | "U" | ...
    qualified_name: str             # Raw name field (e.g., "net/http.(*Client).Do")
    address: Optional[int] = None   # None when the dump omits it
    path_segments: list[str] = field(default_factory=list)  # ["net", "http"]
    leaf_name: str = ""             # "(*Client).Do"

    @property
    def package(self) -> str:
        """Package path, or "" when the name has no package."""
        return PATH_SEPARATOR.join(self.path_segments)

    def describe(self) -> str:
        """Human-readable "package.leaf" form."""
        if self.package:
            return f"{self.package}.{self.leaf_name}"
        return self.leaf_name

    def to_summary(self) -> SymbolSummary:
        return SymbolSummary(size=self.size, kind=self.kind, name=self.leaf_name)


def is_internal_name(name: str) -> bool:
    """Check if a symbol name is linker metadata that never gets a Symbol."""
    return name.startswith(INTERNAL_PREFIXES)


def decompose_name(name: str) -> tuple[list[str], str]:
    """Split a qualified symbol name into package path segments and leaf name.

    Path-style names ("example.com/org/repo/pkg.Func") use the first dot at or
    after the last "/", since module paths may themselves contain dots.
    Simple names ("fmt.Println") split on the first dot. Anything else has no
    package and returns an empty segment list.
    """
    if PATH_SEPARATOR in name:
        last_sep = name.rfind(PATH_SEPARATOR)
        dot = name.find(".", last_sep)
        if dot == -1:
            return [], name
        return name[:dot].split(PATH_SEPARATOR), name[dot + 1:]

    dot = name.find(".")
    if dot > -1:
        return [name[:dot]], name[dot + 1:]

    return [], name


def make_symbol(
    size: int,
    kind: str,
    qualified_name: str,
    address: Optional[int] = None,
) -> Symbol:
    """Create a Symbol with its name already decomposed."""
    segments, leaf = decompose_name(qualified_name)
    return Symbol(
        size=size,
        kind=kind,
        qualified_name=qualified_name,
        address=address,
        path_segments=segments,
        leaf_name=leaf,
    )


def slugify(text: str) -> str:
    """Convert a binary path to slug format for index file names.

    Example: ./bin/my.server -> bin-my-server
    """
    slug = text.strip().replace("\\", "/").lstrip("./")
    return slug.replace("/", "-").replace(".", "-").replace(" ", "-")


def make_index_id(binary: str) -> str:
    """Generate the storage ID for an analyzed binary.

    The path slug is followed by a digest of the full path, so paths that
    slug alike (bin/app, bin-app, bin.app) get distinct IDs.
    Example: /usr/local/bin/app -> usr-local-bin-app-<8 hex digits>
    """
    digest = hashlib.sha1(binary.strip().encode("utf-8")).hexdigest()[:8]
    return f"{slugify(binary) or 'binary'}-{digest}"
