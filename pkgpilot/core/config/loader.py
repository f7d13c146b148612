"""
Configuration loader — reads the optional settings YAML into ``Settings``.

The default file is optional: when it is absent every setting keeps its
default.  A path passed explicitly must exist.
A file that exists but is not valid is a user error and raises
``ConfigError`` instead of being silently ignored.

Example ``~/.pkgpilot/config.yml``::

    env_var: MY_PACKAGE_MANAGER
    config_dir_name: .tooling
    global_dir: /opt/shared/pkgpilot
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import ValidationError

from pkgpilot.core.config.settings import Settings
from pkgpilot.core.persistence.file_io import get_config_dir

logger = logging.getLogger(__name__)

# Default settings filename, inside the global config directory
SETTINGS_FILE = "config.yml"


class ConfigError(Exception):
    """Raised when the settings file is invalid."""


def default_settings_path(env: Mapping[str, str] | None = None) -> Path:
    """Location of the settings file when none is given explicitly."""
    return get_config_dir(env) / SETTINGS_FILE


def load_settings(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit settings file. If None, ``default_settings_path``.
        env: Environment used to locate the default file.

    Returns:
        Validated Settings model (defaults if the default file does not exist).

    Raises:
        ConfigError: If an explicit path is missing, or the file is
            unreadable, not YAML, or fails validation.
    """
    if path is None:
        path = default_settings_path(env)
        if not path.is_file():
            logger.debug("No settings file at %s — using defaults", path)
            return Settings()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
