"""Plain-text table formatting for terminal output.

Design principles:
- Output is plain text so it can be piped, grepped and diffed
- Columns are left-aligned and separated by at least ``padding`` spaces
- The last column is never padded, so lines carry no trailing whitespace
"""

from __future__ import annotations

from collections.abc import Sequence


def format_columns(rows: Sequence[Sequence[str]], *, padding: int = 2) -> str:
    """Align rows of cells into columns.

    Every column but the last is padded to its widest cell plus ``padding``.
    Rows may have differing lengths; missing cells count as empty.

    Examples:
        [["File", "N"], ["a.go", "10"]] ->
            "File  N\\na.go  10\\n"
    """
    if not rows:
        return ""

    n_cols = max(len(row) for row in rows)
    widths = [0] * n_cols
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    lines = []
    for row in rows:
        cells = list(row) + [""] * (n_cols - len(row))
        head = "".join(cell.ljust(widths[i] + padding) for i, cell in enumerate(cells[:-1]))
        lines.append((head + cells[-1]).rstrip())
    return "\n".join(lines) + "\n"
