"""Operator-facing status output.

Run summaries are printed to stderr through a shared Rich console so that
stdout stays reserved for the hitlist table. Structured diagnostics go
through structlog (see logging.py); these helpers are for the short,
human-readable lines at the end of a run.
"""

from __future__ import annotations

import sys

from rich.console import Console
from structlog.stdlib import BoundLogger

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from legendary.core.logging import get_logger

    return get_logger("progress")


def get_console() -> Console:
    """Get a Rich console bound to the current stderr."""
    return Console(file=sys.stderr, highlight=False)


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    get_console().print(f"{padding}{prefix}{message}")

    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Args:
        count: The number of items
        singular: Singular form (e.g., "file")
        plural: Plural form (default: singular + "s")

    Returns:
        Formatted string like "1 file" or "3 files"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"
