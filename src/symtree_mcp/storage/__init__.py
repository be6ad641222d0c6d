"""Storage package for analyzed tree save/load operations."""

from .tree_store import BinaryIndex, TreeStore

__all__ = ["BinaryIndex", "TreeStore"]
