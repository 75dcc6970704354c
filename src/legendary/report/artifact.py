"""Writing rendered reports to disk."""

from pathlib import Path

from legendary.core.errors import EmitError
from legendary.core.logging import get_logger

log = get_logger("report.artifact")


def write_artifact(path: Path, content: str) -> Path:
    """Write fully rendered ``content`` to ``path``.

    Content is rendered before this is called, so the output file is only
    opened once there is something complete to put in it.

    Raises:
        EmitError: If the file cannot be written.
    """
    try:
        with path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError as e:
        raise EmitError.write_failed(str(path), e.strerror or str(e)) from e

    log.debug("report_written", path=str(path), bytes=len(content.encode("utf-8")))
    return path
