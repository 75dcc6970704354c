"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
For configurable values, see models.py.
"""

from pathlib import Path

# =============================================================================
# Environment and config files
# =============================================================================

ENV_PREFIX = "LEGENDARY__"
"""Prefix for environment overrides, e.g. LEGENDARY__COVERAGE_ROOT."""

PROJECT_CONFIG_NAME = ".legendary.yaml"
"""Per-project config file, looked up in the project directory."""

GLOBAL_CONFIG_PATH = Path("~/.config/legendary/config.yaml").expanduser()
"""Per-user config file."""

# =============================================================================
# Go toolchain defaults
# =============================================================================

GOPATH_ENV = "GOPATH"
"""Environment variable naming the Go workspace."""

DEFAULT_GOPATH = Path("~/go").expanduser()
"""Workspace the go tool assumes when GOPATH is unset."""

# =============================================================================
# Internal Implementation Constants
# =============================================================================

LINE_COUNT_CHUNK_BYTES = 32 * 1024
"""Read size used when counting source file lines."""

REPORT_FORMATS = ("vim", "json")
"""Report formats the emitter can produce."""
