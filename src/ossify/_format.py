"""Human-readable rendering of sizes and listing entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ossify._models import Entry

_UNITS = ("B", "K", "M", "G", "T")
_THRESHOLD = 1024

UNKNOWN_MODIFIED = "Unknown"


def format_size(size: int) -> str:
    """Format a byte count with binary units.

    Plain bytes have no decimals, every larger unit shows one:
    ``512`` → ``"512B"``, ``2048`` → ``"2.0K"``, ``1572864`` → ``"1.5M"``.
    Terabytes are the largest unit.
    """
    if size < _THRESHOLD:
        return f"{size}B"
    value = float(size)
    unit = 0
    while value >= _THRESHOLD and unit < len(_UNITS) - 1:
        value /= _THRESHOLD
        unit += 1
    return f"{value:.1f}{_UNITS[unit]}"


def format_entry(entry: Entry, *, long: bool = False) -> str:
    """Render one listing line.

    Short form is the path alone. Long form is kind, size (``-`` for
    directories), modification time (``Unknown`` when absent) and path in
    fixed left-aligned columns.
    """
    if not long:
        return entry.path
    kind = "DIR" if entry.is_dir else "FILE"
    size = "-" if entry.is_dir else format_size(entry.size)
    modified = entry.modified.isoformat() if entry.modified is not None else UNKNOWN_MODIFIED
    return f"{kind:<6} {size:<10} {modified} {entry.path}"
