"""Get package size tree for an analyzed binary."""

from typing import Optional

from ..parser import SORT_ORDERS, PackageTree, find_package, percent_of
from ..storage import TreeStore


def get_package_tree(
    binary: str,
    package: str = "",
    order: str = "name",
    max_depth: Optional[int] = None,
    storage_path: Optional[str] = None
) -> dict:
    """Get an analyzed binary's package tree, optionally below one package.

    Args:
        binary: Binary path, index ID or binary name
        package: Optional package path to start from (e.g., 'net/http')
        order: Child and symbol ordering, 'name' or 'size'
        max_depth: Limit on nesting levels below the starting node
        storage_path: Custom storage path

    Returns:
        Dict with nested, sorted tree structure
    """
    if order not in SORT_ORDERS:
        return {"error": f"Unknown order: {order} (expected one of {', '.join(SORT_ORDERS)})"}

    store = TreeStore(base_path=storage_path)
    index = store.resolve(binary)

    if not index:
        return {"error": f"Binary not analyzed: {binary}"}

    root = index.get_tree()
    node = find_package(root, package)

    if node is None:
        return {"error": f"Package not found: {package}"}

    return {
        "binary": index.binary,
        "package": package,
        "order": order,
        "total_size": root.accumulated_size,
        "tree": _node_to_dict(node, order, root.accumulated_size, max_depth)
    }


def _node_to_dict(node: PackageTree, order: str, total: int, max_depth: Optional[int], depth: int = 0) -> dict:
    """Convert PackageTree to sorted output dict."""
    result = {
        "package": node.package,
        "package_size": node.package_size,
        "accumulated_size": node.accumulated_size,
        "percent": round(percent_of(node.accumulated_size, total), 2),
    }

    if node.children:
        if max_depth is not None and depth >= max_depth:
            result["child_count"] = len(node.children)
        else:
            result["children"] = [
                _node_to_dict(child, order, total, max_depth, depth + 1)
                for child in node.sorted_children(order)
            ]

    if node.symbols:
        result["symbol_count"] = len(node.symbols)

    return result

