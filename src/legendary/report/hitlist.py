"""Hitlist table: the worst covered files, two ways.

Each row shows the i-th worst file by missed line count next to the i-th
worst file by missed percentage:

    File        Missed Lines  File        Percent missed
    big.go      120           tiny.go     100.00
    tiny.go     4             big.go      35.29
"""

from collections.abc import Sequence

from legendary.core.formatting import format_columns
from legendary.coverage.rank import HitlistRow

HEADER = ("File", "Missed Lines", "File", "Percent missed")


def hitlist_cells(row: HitlistRow) -> tuple[str, str, str, str]:
    return (
        row.by_count.filename,
        str(row.by_count.miss_count),
        row.by_fraction.filename,
        f"{row.miss_percent:.2f}",
    )


def format_hitlist(rows: Sequence[HitlistRow]) -> str:
    """Render hitlist rows, header included, as an aligned text table."""
    return format_columns([HEADER, *(hitlist_cells(row) for row in rows)])
