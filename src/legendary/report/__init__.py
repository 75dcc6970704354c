"""Report emitters: vim-legend scripts, JSON documents and the hitlist table."""

from collections.abc import Callable
from pathlib import Path

from legendary.coverage.models import ReportContext
from legendary.report.hitlist import format_hitlist
from legendary.report.summary import build_summary, render_json, write_json
from legendary.report.vim import render_vim, write_vim

EMITTERS: dict[str, Callable[[ReportContext, Path], Path]] = {
    "vim": write_vim,
    "json": write_json,
}


def emit(context: ReportContext, path: Path, *, report_format: str = "vim") -> Path:
    """Write ``context`` to ``path`` in ``report_format``.

    Raises:
        ValueError: If the format is unknown.
        EmitError: If rendering or writing fails.
    """
    emitter = EMITTERS.get(report_format)
    if emitter is None:
        valid = ", ".join(sorted(EMITTERS))
        raise ValueError(f"Unknown report format: {report_format!r}. Valid formats: {valid}")
    return emitter(context, path)


__all__ = [
    "EMITTERS",
    "build_summary",
    "emit",
    "format_hitlist",
    "render_json",
    "render_vim",
    "write_json",
    "write_vim",
]
