"""Plain-text rendering of package size trees."""

from typing import Optional

from .parser import PackageTree, flatten_tree, percent_of


_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]


def format_bytes(size: int) -> str:
    """Format a byte count with IEC units (e.g., 1536 -> '1.5 KiB')."""
    if size < 1024:
        return f"{size} B"

    value = float(size)
    for unit in _UNITS[1:]:
        value /= 1024
        if value < 1024 or unit == _UNITS[-1]:
            break

    if value < 10:
        return f"{value:.1f} {unit}"
    return f"{value:.0f} {unit}"


def render_tree(tree: PackageTree, order: str = "name", max_depth: Optional[int] = None) -> str:
    """Render a package tree as indented text, one entry per line."""
    total = tree.accumulated_size
    lines = [f"bin {tree.package} | {format_bytes(total)}"]

    for entry, depth in flatten_tree(tree, order, max_depth):
        indent = "  " * (depth + 1)

        if isinstance(entry, PackageTree):
            pct = percent_of(entry.accumulated_size, total)
            size = format_bytes(entry.accumulated_size)
            if order == "size":
                lines.append(f"{indent}pkg {pct:5.2f}% | {size} | {entry.package}")
            else:
                lines.append(f"{indent}pkg {entry.package} | {pct:5.2f}% | {size}")
        else:
            pct = percent_of(entry.size, total)
            size = format_bytes(entry.size)
            if order == "size":
                lines.append(f"{indent}sym {pct:4.2f}% | {size} | {entry.name}")
            else:
                lines.append(f"{indent}sym {entry.name} | {pct:4.2f}% | {size}")

    return "\n".join(lines)
