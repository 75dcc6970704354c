"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Command line flags (passed to load_config() as overrides)
2. Environment variables (LEGENDARY__KEY or LEGENDARY__SECTION__KEY)
3. Project YAML (<project>/.legendary.yaml)
4. Global YAML (~/.config/legendary/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    LEGENDARY__<KEY>=<VALUE>
    LEGENDARY__<SECTION>__<KEY>=<VALUE>

Examples:
    LEGENDARY__COVERAGE_ROOT=/home/me/go/src
    LEGENDARY__WORKERS=4
    LEGENDARY__LOGGING__LEVEL=DEBUG
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ReportFormat = Literal["vim", "json"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        LEGENDARY__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG also logs per-file classification detail.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


class LegendaryConfig(BaseModel):
    """Resolved run configuration.

    Env vars:
        LEGENDARY__COVERAGE_ROOT: Directory profile file names are rooted at
        LEGENDARY__PROJECT_ROOT: Directory report paths are relative to
        LEGENDARY__LIMIT: Default hitlist length
        LEGENDARY__WORKERS: Threads used for ingestion and classification
        LEGENDARY__REPORT_FORMAT: vim or json
    """

    coverage_root: str | None = Field(
        default=None,
        description="Directory the file names in coverage profiles are rooted at. "
        "Default: $GOPATH/src.",
    )
    project_root: str | None = Field(
        default=None,
        description="Directory the report is rooted at. Default: current directory.",
    )
    limit: int | None = Field(
        default=None,
        ge=0,
        description="Maximum hitlist rows. None shows every file.",
    )
    workers: int = Field(
        default=1,
        ge=1,
        description="Threads for profile parsing and source classification. "
        "Results are identical for any value.",
    )
    report_format: ReportFormat = Field(
        default="vim",
        description="Report artifact format.",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("coverage_root", "project_root")
    @classmethod
    def validate_root(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("root directory must not be empty")
        return os.path.abspath(os.path.expanduser(v))
