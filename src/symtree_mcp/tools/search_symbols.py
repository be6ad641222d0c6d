"""Search symbols across an analyzed binary."""

from typing import Iterator, Optional

from ..parser import PackageTree, SymbolSummary
from ..storage import TreeStore


def search_symbols(
    binary: str,
    query: str,
    kind: Optional[str] = None,
    package_prefix: Optional[str] = None,
    max_results: int = 10,
    storage_path: Optional[str] = None
) -> dict:
    """Search for symbols matching a query.

    Args:
        binary: Binary path, index ID or binary name
        query: Search query
        kind: Optional filter by symbol type code (e.g., 'T')
        package_prefix: Optional package path prefix to restrict the search
        max_results: Maximum results to return
        storage_path: Custom storage path

    Returns:
        Dict with search results
    """
    store = TreeStore(base_path=storage_path)
    index = store.resolve(binary)

    if not index:
        return {"error": f"Binary not analyzed: {binary}"}

    if index.skip_symbols:
        return {"error": f"Symbol listings were dropped for {index.binary}; re-analyze without skip_symbols"}

    query_lower = query.lower()
    query_words = set(query_lower.split())

    scored = []
    for package, summary in _walk_symbols(index.get_tree()):
        if kind and summary.kind != kind:
            continue
        if package_prefix and not package.startswith(package_prefix):
            continue

        score = _calculate_score(package, summary, query_lower, query_words)
        if score > 0:
            scored.append((score, package, summary))

    # Best score first, bigger symbols break ties
    scored.sort(key=lambda x: (x[0], x[2].size), reverse=True)

    results = [
        {
            "package": package,
            "name": summary.name,
            "kind": summary.kind,
            "size": summary.size,
            "score": score
        }
        for score, package, summary in scored[:max_results]
    ]

    return {
        "binary": index.binary,
        "query": query,
        "result_count": len(results),
        "results": results
    }


def _walk_symbols(node: PackageTree) -> Iterator[tuple[str, SymbolSummary]]:
    """Yield (package, symbol) pairs for every symbol in the subtree."""
    for summary in node.symbols:
        yield node.package, summary
    for child in node.children.values():
        yield from _walk_symbols(child)


def _calculate_score(package: str, summary: SymbolSummary, query_lower: str, query_words: set) -> int:
    """Calculate search score for a symbol."""
    score = 0

    # 1. Exact name match (highest weight)
    name_lower = summary.name.lower()
    if query_lower == name_lower:
        score += 20
    elif query_lower in name_lower:
        score += 10

    # 2. Name word overlap
    for word in query_words:
        if word in name_lower:
            score += 5

    # 3. Qualified name match ("net/http.Get")
    qualified_lower = f"{package}.{summary.name}".lower()
    if query_lower != name_lower and query_lower in qualified_lower:
        score += 8

    # 4. Package match
    package_lower = package.lower()
    for word in query_words:
        if word in package_lower:
            score += 2

    return score
