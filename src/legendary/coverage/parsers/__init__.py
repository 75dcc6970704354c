"""Coverage profile parsing.

Only Go cover profiles (``go test -coverprofile``) are read; every profile
argument goes through the gocov parser.
"""

from pathlib import Path

from legendary.coverage.models import ProfileFile

from .gocov import GocovParser

__all__ = [
    "GocovParser",
    "parse_profile",
]

_PARSER = GocovParser()


def parse_profile(path: Path) -> list[ProfileFile]:
    """Parse a coverage profile into per-file block records.

    Raises:
        ProfileParseError: If the profile is missing, unreadable or malformed.
    """
    return _PARSER.parse(path)
