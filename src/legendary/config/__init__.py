"""Config module exports."""

from legendary.config.loader import default_coverage_root, default_project_root, load_config
from legendary.config.models import LegendaryConfig, LoggingConfig, LogOutputConfig

__all__ = [
    "default_coverage_root",
    "default_project_root",
    "load_config",
    "LegendaryConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
