"""User configuration for the setup tooling."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tlp_switcher_setup.command import DEFAULT_ELEVATOR, DEFAULT_RELOAD_COMMAND
from tlp_switcher_setup.settings import SETTINGS_DIR
from tlp_switcher_setup.targets import DEFAULT_EXTENSION_DIR

CONFIG_ENV_VAR = "TLP_SWITCHER_CONFIG"
CONFIG_FILE = SETTINGS_DIR / "config.yaml"


class ConfigError(Exception):
    """Configuration file could not be read or is invalid."""

    pass


class SetupConfig(BaseModel):
    """Tunable parts of the setup workflow.

    The install destinations are fixed and deliberately absent here.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    elevator: list[str] = Field(default_factory=lambda: list(DEFAULT_ELEVATOR), min_length=1)
    reload_command: str = Field(default=DEFAULT_RELOAD_COMMAND, alias="reloadCommand")
    extension_dir: Path = Field(default=DEFAULT_EXTENSION_DIR, alias="extensionDir")
    settings_dir: Path = Field(default=SETTINGS_DIR, alias="settingsDir")


def default_config_path() -> Path:
    """Config file location, honouring $TLP_SWITCHER_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else CONFIG_FILE


def load_config(path: Path | None = None) -> SetupConfig:
    """Load configuration from a YAML file.

    Args:
        path: Config file. Defaults to `default_config_path()`.

    Returns:
        Parsed SetupConfig, or defaults if the file does not exist.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    config_path = path or default_config_path()
    if not config_path.exists():
        return SetupConfig()

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    try:
        return SetupConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
