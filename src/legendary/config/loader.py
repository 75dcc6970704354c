"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority, used for command line flags)
2. Environment variables (LEGENDARY__KEY, LEGENDARY__SECTION__KEY)
3. Project config (<project>/.legendary.yaml)
4. Global config (~/.config/legendary/config.yaml)
5. Built-in defaults (lowest priority)

After loading, the two roots are resolved to their documented defaults so
the coverage engine always receives non-empty values.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from legendary.config.constants import (
    DEFAULT_GOPATH,
    ENV_PREFIX,
    GLOBAL_CONFIG_PATH,
    GOPATH_ENV,
    PROJECT_CONFIG_NAME,
)
from legendary.config.models import LegendaryConfig, LoggingConfig, ReportFormat
from legendary.core.errors import ConfigError


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source."""

    class LegendarySettings(BaseSettings):
        """Root config. Env vars: LEGENDARY__COVERAGE_ROOT, LEGENDARY__LOGGING__LEVEL, etc."""

        model_config = SettingsConfigDict(
            env_prefix=ENV_PREFIX,
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        coverage_root: str | None = None
        project_root: str | None = None
        limit: int | None = None
        workers: int = 1
        report_format: ReportFormat = "vim"
        logging: LoggingConfig = LoggingConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return LegendarySettings


def default_coverage_root() -> str:
    """Return ``$GOPATH/src``, using the go tool's default GOPATH when unset."""
    gopath = os.environ.get(GOPATH_ENV) or str(DEFAULT_GOPATH)
    # GOPATH may list several workspaces; profiles name packages in the first
    first = gopath.split(os.pathsep)[0]
    return os.path.abspath(os.path.join(first, "src"))


def default_project_root() -> str:
    """Return the current working directory.

    Raises:
        ConfigError: If the working directory no longer exists.
    """
    try:
        return os.getcwd()
    except OSError as e:
        raise ConfigError.invalid_value(
            "project_root", "", f"no --project-root given and the current directory is unavailable: {e}"
        ) from e


def load_config(project_dir: Path | None = None, **kwargs: Any) -> LegendaryConfig:
    """Load config: defaults < global yaml < project yaml < env vars < kwargs.

    Args:
        project_dir: Directory holding .legendary.yaml.
                     Defaults to the current working directory.
        **kwargs: Override values (highest precedence). None values are
                  ignored so unset command line flags don't mask lower sources.

    Returns:
        Configuration with both roots resolved.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    project_dir = project_dir or Path(default_project_root())

    yaml_config = _deep_merge(
        _load_yaml(GLOBAL_CONFIG_PATH),
        _load_yaml(project_dir / PROJECT_CONFIG_NAME),
    )
    overrides = {key: value for key, value in kwargs.items() if value is not None}

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**overrides)
        config = LegendaryConfig.model_validate(settings.model_dump())
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

    return config.model_copy(
        update={
            "coverage_root": config.coverage_root or default_coverage_root(),
            "project_root": config.project_root or default_project_root(),
        }
    )
