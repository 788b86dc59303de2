"""Configuration management for gradle-project-config."""

import logging
import os
import shutil
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import LEGACY_PREFERENCES_LOCATION, LEGACY_PREFERENCES_NODE_NAME
from .utils import ensure_dir, expand_path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_TEMPLATE_PATH = Path(__file__).with_name("config.toml")
CURRENT_CONFIG_SCHEMA_VERSION = 1
CONFIG_ENV_VAR = "GRADLE_PROJECT_CONFIG"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _load_default_template() -> dict[str, Any]:
    """Load the repository default config template."""
    with open(DEFAULT_CONFIG_TEMPLATE_PATH, "rb") as f:
        return tomllib.load(f)


def _merge_config_data(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge config dictionaries recursively."""
    merged = dict(base)
    for key, value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            merged[key] = _merge_config_data(base_value, value)
        else:
            merged[key] = value
    return merged


def _copy_default_config(config_path: Path) -> None:
    """Copy repository template to the user config path."""
    ensure_dir(config_path.parent)
    shutil.copyfile(DEFAULT_CONFIG_TEMPLATE_PATH, config_path)


class WorkspaceConfig(BaseModel):
    """Workspace configuration."""

    metadata_dir: Path

    @field_validator("metadata_dir", mode="before")
    @classmethod
    def expand_paths(cls, v: str | Path) -> Path:
        """Expand path strings with ~ and environment variables."""
        if isinstance(v, str):
            return expand_path(v)
        return v


class LegacyConfig(BaseModel):
    """Legacy gradle.prefs handling."""

    location: str = LEGACY_PREFERENCES_LOCATION
    node_name: str = Field(default=LEGACY_PREFERENCES_NODE_NAME, min_length=1)
    enabled: bool = True

    @field_validator("location")
    @classmethod
    def check_relative(cls, v: str) -> str:
        """Legacy location must be relative to the project root."""
        if not v or Path(v).is_absolute():
            raise ValueError("legacy.location must be a path relative to the project root")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def check_level(cls, v: str) -> str:
        """Validate and normalize the level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {', '.join(LOG_LEVELS)}")
        return level


class MetaConfig(BaseModel):
    """Configuration metadata section."""

    schema_version: int = Field(default=CURRENT_CONFIG_SCHEMA_VERSION, ge=0)


class Config(BaseModel):
    """Configuration for gradle-project-config."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    meta: MetaConfig = Field(default_factory=MetaConfig)
    workspace: WorkspaceConfig
    legacy: LegacyConfig = Field(default_factory=LegacyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def metadata_dir(self) -> Path:
        """Workspace metadata directory."""
        return self.workspace.metadata_dir

    def save(self, config_path: Path) -> None:
        """
        Save configuration to a TOML file.

        Args:
            config_path: Destination path
        """
        ensure_dir(config_path.parent)
        with open(config_path, "wb") as f:
            tomli_w.dump(self.model_dump(mode="json"), f)


def get_config_path() -> Path:
    """
    Get configuration file path.

    Priority:
    1. GRADLE_PROJECT_CONFIG environment variable
    2. Default: ~/.config/gradle-project-config/config.toml

    Returns:
        Path to config file
    """
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return expand_path(env_config)

    return expand_path("~/.config/gradle-project-config/config.toml")


def create_default_config() -> Config:
    """Create default configuration from repository template."""
    return Config.model_validate(_load_default_template())


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from TOML file using Pydantic validation.

    Args:
        config_path: Optional custom config path

    Returns:
        Config instance with validated values

    Raises:
        ValueError: If config validation fails
    """
    if config_path is None:
        config_path = get_config_path()

    defaults = _load_default_template()

    if not config_path.exists():
        try:
            _copy_default_config(config_path)
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not copy default config to {config_path}: {e}")

    if config_path.exists():
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return Config.model_validate(_merge_config_data(defaults, data))

    return Config.model_validate(defaults)
