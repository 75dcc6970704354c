"""Core module exports."""

from legendary.core.errors import (
    ConfigError,
    EmitError,
    ErrorCode,
    InternalError,
    LegendaryError,
    PathResolutionError,
    ProfileParseError,
    SourceReadError,
)
from legendary.core.logging import configure_logging, get_logger
from legendary.core.progress import pluralize, status

__all__ = [
    # Errors
    "ConfigError",
    "EmitError",
    "ErrorCode",
    "InternalError",
    "LegendaryError",
    "PathResolutionError",
    "ProfileParseError",
    "SourceReadError",
    # Logging
    "configure_logging",
    "get_logger",
    # Progress
    "pluralize",
    "status",
]
