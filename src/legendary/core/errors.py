"""Legendary error types with typed error codes.

Error code ranges:
- 1xxx: Profile (skip the profile, keep going)
- 2xxx: Config (fatal)
- 3xxx: Path resolution (skip the rest of the profile, keep going)
- 4xxx: Source read (drop the file's result, keep going)
- 5xxx: Emit (fatal)
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Profile (1xxx)
    PROFILE_NOT_FOUND = 1001
    PROFILE_UNREADABLE = 1002
    PROFILE_MALFORMED = 1003

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_REQUIRED = 2003

    # Path resolution (3xxx)
    PATH_NOT_RELATIVE = 3001
    PATH_EMPTY_ROOT = 3002

    # Source read (4xxx)
    SOURCE_UNREADABLE = 4001

    # Emit (5xxx)
    EMIT_WRITE_FAILED = 5001
    EMIT_RENDER_FAILED = 5002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class LegendaryError(Exception):
    """Base error with structured context for diagnostics."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PROFILE_MALFORMED')."""
        return self.code.name

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ProfileParseError(LegendaryError):
    """A whole coverage profile could not be read or decoded."""

    @classmethod
    def not_found(cls, path: str) -> "ProfileParseError":
        return cls(
            code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Coverage profile not found: {path}",
            details={"path": path},
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "ProfileParseError":
        return cls(
            code=ErrorCode.PROFILE_UNREADABLE,
            message=f"Failed to read coverage profile {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def malformed(cls, path: str, line_no: int, reason: str) -> "ProfileParseError":
        return cls(
            code=ErrorCode.PROFILE_MALFORMED,
            message=f"{path}:{line_no}: {reason}",
            details={"path": path, "line": line_no, "reason": reason},
        )


class PathResolutionError(LegendaryError):
    """A reported file name has no form relative to the project root."""

    @classmethod
    def not_relative(cls, base: str, target: str, reason: str) -> "PathResolutionError":
        return cls(
            code=ErrorCode.PATH_NOT_RELATIVE,
            message=f"Can't make {target} relative to {base}: {reason}",
            details={"base": base, "target": target, "reason": reason},
        )

    @classmethod
    def empty_root(cls, name: str) -> "PathResolutionError":
        return cls(
            code=ErrorCode.PATH_EMPTY_ROOT,
            message=f"{name} must not be empty",
            details={"root": name},
        )


class SourceReadError(LegendaryError):
    """A covered source file could not be opened or scanned."""

    @classmethod
    def from_os_error(cls, path: str, exc: OSError) -> "SourceReadError":
        reason = exc.strerror or str(exc)
        return cls(
            code=ErrorCode.SOURCE_UNREADABLE,
            message=f"Failed to read source file {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @property
    def path(self) -> str:
        return str(self.details.get("path", ""))


class EmitError(LegendaryError):
    """The final report could not be produced."""

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "EmitError":
        return cls(
            code=ErrorCode.EMIT_WRITE_FAILED,
            message=f"Failed to write report to {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def render_failed(cls, template: str, reason: str) -> "EmitError":
        return cls(
            code=ErrorCode.EMIT_RENDER_FAILED,
            message=f"Failed to render {template}: {reason}",
            details={"template": template, "reason": reason},
        )


class ConfigError(LegendaryError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def missing_required(cls, field: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            message=f"Missing required config field: {field}",
            details={"field": field},
        )


class InternalError(LegendaryError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
