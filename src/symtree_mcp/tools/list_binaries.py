"""List analyzed binaries."""

from typing import Optional

from ..storage import TreeStore


def list_binaries(storage_path: Optional[str] = None) -> dict:
    """List all analyzed binaries.

    Returns:
        Dict with count and list of binaries
    """
    store = TreeStore(base_path=storage_path)
    binaries = store.list_binaries()

    return {
        "count": len(binaries),
        "binaries": binaries
    }
