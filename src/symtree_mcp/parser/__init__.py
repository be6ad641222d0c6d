"""Parser package for turning symbol dumps into package size trees."""

from .symbols import (
    Symbol,
    SymbolSummary,
    decompose_name,
    is_internal_name,
    make_symbol,
    slugify,
    make_index_id,
)
from .nm import (
    SYMBOL_LINE_RE,
    MalformedLineError,
    NmParseResult,
    parse_line,
    parse_nm_output,
    split_dump_lines,
)
from .hierarchy import (
    SORT_ORDERS,
    PackageTree,
    add_to_tree,
    build_package_tree,
    find_package,
    flatten_tree,
    group_by_package,
    percent_of,
    tree_from_dict,
    tree_to_dict,
)

__all__ = [
    "Symbol",
    "SymbolSummary",
    "decompose_name",
    "is_internal_name",
    "make_symbol",
    "slugify",
    "make_index_id",
    "SYMBOL_LINE_RE",
    "MalformedLineError",
    "NmParseResult",
    "parse_line",
    "parse_nm_output",
    "split_dump_lines",
    "SORT_ORDERS",
    "PackageTree",
    "add_to_tree",
    "build_package_tree",
    "find_package",
    "flatten_tree",
    "group_by_package",
    "percent_of",
    "tree_from_dict",
    "tree_to_dict",
]
