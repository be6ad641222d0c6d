"""Tree storage with save/load of analyzed binaries."""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..parser.hierarchy import PackageTree, tree_from_dict, tree_to_dict
from ..parser.symbols import make_index_id

logger = logging.getLogger(__name__)


@dataclass
class BinaryIndex:
    """Stored analysis of one binary."""
    id: str                      # Index ID derived from the binary path
    binary: str                  # Binary path as given
    name: str                    # Binary file name
    analyzed_at: str             # ISO timestamp
    symbol_count: int            # Symbols that made it into the tree
    skipped_lines: int           # Malformed dump lines
    skip_symbols: bool           # Symbol listings were dropped
    tree: dict                   # Serialized PackageTree

    def get_tree(self) -> PackageTree:
        """Rebuild the package tree."""
        return tree_from_dict(self.tree)


class TreeStore:
    """Storage for analyzed binary trees, one JSON file per binary."""

    def __init__(self, base_path: Optional[str] = None):
        """Initialize store.

        Args:
            base_path: Base directory for storage. Defaults to ~/.symtree-index/
        """
        if base_path:
            self.base_path = Path(base_path)
        else:
            self.base_path = Path.home() / ".symtree-index"

        self.base_path.mkdir(parents=True, exist_ok=True)

    def _index_path(self, index_id: str) -> Path:
        """Path to index JSON file."""
        return self.base_path / f"{index_id}.json"

    def save_index(
        self,
        binary: str,
        tree: PackageTree,
        symbol_count: int,
        skipped_lines: int = 0,
        skip_symbols: bool = False,
    ) -> BinaryIndex:
        """Save an analyzed tree to storage.

        Args:
            binary: Binary path the tree was built from
            tree: Root of the package tree
            symbol_count: Number of symbols inserted into the tree
            skipped_lines: Number of malformed dump lines
            skip_symbols: Whether symbol listings were dropped

        Returns:
            BinaryIndex object
        """
        index = BinaryIndex(
            id=make_index_id(binary),
            binary=binary,
            name=Path(binary).name or binary,
            analyzed_at=datetime.now().isoformat(),
            symbol_count=symbol_count,
            skipped_lines=skipped_lines,
            skip_symbols=skip_symbols,
            tree=tree_to_dict(tree),
        )

        index_path = self._index_path(index.id)
        with open(index_path, "w", encoding="utf-8") as f:
            json.dump(self._index_to_dict(index), f, indent=2)

        logger.info("Saved %s to %s", binary, index_path)
        return index

    def load_index(self, index_id: str) -> Optional[BinaryIndex]:
        """Load index from storage."""
        index_path = self._index_path(index_id)

        if not index_path.exists():
            return None

        with open(index_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return BinaryIndex(
            id=data["id"],
            binary=data["binary"],
            name=data["name"],
            analyzed_at=data["analyzed_at"],
            symbol_count=data["symbol_count"],
            skipped_lines=data.get("skipped_lines", 0),
            skip_symbols=data.get("skip_symbols", False),
            tree=data["tree"],
        )

    def resolve(self, binary: str) -> Optional[BinaryIndex]:
        """Load an index by binary path, index ID, or bare binary name."""
        index = self.load_index(make_index_id(binary))
        if index:
            return index

        index = self.load_index(binary)
        if index:
            return index

        matching = [b for b in self.list_binaries() if b["name"] == binary]
        if not matching:
            return None
        return self.load_index(matching[0]["id"])

    def list_binaries(self) -> list[dict]:
        """List all analyzed binaries."""
        binaries = []

        for index_file in sorted(self.base_path.glob("*.json")):
            try:
                with open(index_file, "r", encoding="utf-8") as f:
                    data = json.load(f)

                binaries.append({
                    "id": data["id"],
                    "binary": data["binary"],
                    "name": data["name"],
                    "analyzed_at": data["analyzed_at"],
                    "symbol_count": data["symbol_count"],
                    "accumulated_size": data["tree"].get("accumulated_size", 0),
                })
            except (OSError, ValueError, KeyError) as e:
                logger.warning("Skipping unreadable index %s: %s", index_file, e)
                continue

        return binaries

    def delete_index(self, index_id: str) -> bool:
        """Delete a stored index."""
        index_path = self._index_path(index_id)

        if index_path.exists():
            index_path.unlink()
            return True

        return False

    def _index_to_dict(self, index: BinaryIndex) -> dict:
        """Convert BinaryIndex to dict."""
        return {
            "id": index.id,
            "binary": index.binary,
            "name": index.name,
            "analyzed_at": index.analyzed_at,
            "symbol_count": index.symbol_count,
            "skipped_lines": index.skipped_lines,
            "skip_symbols": index.skip_symbols,
            "tree": index.tree,
        }
