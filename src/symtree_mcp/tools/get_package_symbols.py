"""Get package symbols - the symbols attached to one package node."""

from typing import Optional

from ..parser import SORT_ORDERS, find_package, percent_of
from ..parser.hierarchy import summary_to_dict
from ..storage import TreeStore


def get_package_symbols(
    binary: str,
    package: str,
    order: str = "size",
    storage_path: Optional[str] = None
) -> dict:
    """Get the symbols of one package with sizes.

    Args:
        binary: Binary path, index ID or binary name
        package: Package path (e.g., 'net/http' or 'fmt')
        order: Symbol ordering, 'name' or 'size'
        storage_path: Custom storage path

    Returns:
        Dict with package sizes and sorted symbols
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

    total = root.accumulated_size
    symbols = []
    for summary in node.sorted_symbols(order):
        entry = summary_to_dict(summary)
        entry["percent"] = round(percent_of(summary.size, total), 2)
        symbols.append(entry)

    result = {
        "binary": index.binary,
        "package": node.package,
        "package_size": node.package_size,
        "accumulated_size": node.accumulated_size,
        "symbol_count": len(symbols),
        "symbols": symbols
    }

    if index.skip_symbols:
        result["note"] = "Symbol listings were dropped when this binary was analyzed"

    return result
