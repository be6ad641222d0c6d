"""Build the package size tree from a flat symbol list."""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from .symbols import PATH_SEPARATOR, Symbol, SymbolSummary

logger = logging.getLogger(__name__)


SORT_ORDERS = ("name", "size")


@dataclass
class PackageTree:
    """A node in the package tree with aggregated sizes."""
    package: str                    # Path label (root uses the binary name)
    package_size: int = 0           # Size of symbols attached directly here
    accumulated_size: int = 0       # package_size + all descendants
    symbols: list[SymbolSummary] = field(default_factory=list)
    children: dict[str, "PackageTree"] = field(default_factory=dict)

    def drop_symbols(self) -> None:
        """Clear symbol listings on the whole subtree, keeping sizes."""
        self.symbols = []
        for child in self.children.values():
            child.drop_symbols()

    def sorted_children(self, order: str = "name") -> list["PackageTree"]:
        """Children ordered by package label or by accumulated size (largest first)."""
        _check_order(order)
        children = list(self.children.values())
        if order == "name":
            return sorted(children, key=lambda c: c.package)
        return sorted(children, key=lambda c: c.accumulated_size, reverse=True)

    def sorted_symbols(self, order: str = "name") -> list[SymbolSummary]:
        """Symbols ordered by leaf name or by size (largest first)."""
        _check_order(order)
        if order == "name":
            return sorted(self.symbols, key=lambda s: s.name)
        return sorted(self.symbols, key=lambda s: s.size, reverse=True)


def _check_order(order: str) -> None:
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {order!r} (expected one of {', '.join(SORT_ORDERS)})")


def group_by_package(symbols: list[Symbol]) -> dict[str, list[Symbol]]:
    """Group symbols by package path, dropping symbols without a package."""
    groups: dict[str, list[Symbol]] = {}
    dropped = 0

    for symbol in symbols:
        if not symbol.path_segments:
            dropped += 1
            continue
        groups.setdefault(symbol.package, []).append(symbol)

    if dropped:
        logger.debug("Dropped %d symbols without a package", dropped)

    return groups


def add_to_tree(
    node: PackageTree,
    index: int,
    segments: list[str],
    symbols: list[Symbol],
) -> int:
    """Insert one package's symbols below node, returning the size they add.

    Intermediate nodes are created on demand and every node on the way down
    has its accumulated size increased exactly once.
    """
    if index < len(segments):
        segment = segments[index]

        if segment not in node.children:
            node.children[segment] = PackageTree(
                package=PATH_SEPARATOR.join(segments[:index + 1]),
            )

        added = add_to_tree(node.children[segment], index + 1, segments, symbols)
        node.accumulated_size += added
        return added

    # No segments left: this node is the package itself
    node.symbols = node.symbols + [s.to_summary() for s in symbols]
    added = sum(s.size for s in symbols)
    node.package_size += added
    node.accumulated_size += added
    return added


def build_package_tree(symbols: list[Symbol], root_label: str) -> PackageTree:
    """Build a rooted package tree from parsed symbols.

    Packages are inserted in lexicographic order so node creation is
    reproducible; sizes do not depend on that order.
    """
    root = PackageTree(package=root_label)
    groups = group_by_package(symbols)

    for package in sorted(groups):
        group = sorted(groups[package], key=lambda s: s.leaf_name)
        add_to_tree(root, 0, group[0].path_segments, group)

    logger.debug("Built tree for %s with %d packages", root_label, len(groups))
    return root


def find_package(tree: PackageTree, package: str) -> Optional[PackageTree]:
    """Find the node for a "/"-joined package path. Empty path is the root."""
    package = package.strip(PATH_SEPARATOR)
    if not package:
        return tree

    node = tree
    for segment in package.split(PATH_SEPARATOR):
        node = node.children.get(segment)
        if node is None:
            return None
    return node


def flatten_tree(
    tree: PackageTree,
    order: str = "name",
    max_depth: Optional[int] = None,
    depth: int = 0,
) -> list[tuple[Union[PackageTree, SymbolSummary], int]]:
    """Flatten a subtree below tree with depth information.

    Each child package is followed by its own subtree; a node's symbols come
    after all of its child packages. Returns (entry, depth) tuples.
    """
    if max_depth is not None and depth >= max_depth:
        return []

    result = []
    for child in tree.sorted_children(order):
        result.append((child, depth))
        result.extend(flatten_tree(child, order, max_depth, depth + 1))
    for symbol in tree.sorted_symbols(order):
        result.append((symbol, depth))
    return result


def percent_of(size: int, total: int) -> float:
    """Share of total taken by size, in percent. Zero when total is zero."""
    if not total:
        return 0.0
    return size / total * 100


def summary_to_dict(summary: SymbolSummary) -> dict:
    """Convert SymbolSummary to dict, omitting zero values."""
    result = {}
    if summary.size:
        result["size"] = summary.size
    if summary.kind:
        result["type"] = summary.kind
    if summary.name:
        result["func"] = summary.name
    return result


def tree_to_dict(tree: PackageTree) -> dict:
    """Convert PackageTree to nested dict, omitting zero and empty fields."""
    result = {}
    if tree.package:
        result["package"] = tree.package
    if tree.package_size:
        result["package_size"] = tree.package_size
    if tree.accumulated_size:
        result["accumulated_size"] = tree.accumulated_size
    if tree.symbols:
        result["symbols"] = [summary_to_dict(s) for s in tree.symbols]
    if tree.children:
        result["children"] = {
            segment: tree_to_dict(child)
            for segment, child in tree.children.items()
        }
    return result


def tree_from_dict(data: dict) -> PackageTree:
    """Rebuild a PackageTree from tree_to_dict output."""
    return PackageTree(
        package=data.get("package", ""),
        package_size=data.get("package_size", 0),
        accumulated_size=data.get("accumulated_size", 0),
        symbols=[
            SymbolSummary(
                size=s.get("size", 0),
                kind=s.get("type", ""),
                name=s.get("func", ""),
            )
            for s in data.get("symbols", [])
        ],
        children={
            segment: tree_from_dict(child)
            for segment, child in data.get("children", {}).items()
        },
    )
