"""
Settings — names and locations used by package-manager resolution.

Defaults cover normal use; ``loader.load_settings`` can override them
from a YAML file.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# Environment variable holding an explicit package manager override.
DEFAULT_ENV_VAR = "PKGPILOT_PACKAGE_MANAGER"

# Hidden directory (per project) and file name for persisted choices.
DEFAULT_CONFIG_DIR_NAME = ".pkgpilot"
DEFAULT_CHOICE_FILE_NAME = "package-manager.json"


class Settings(BaseModel):
    """Resolution settings.

    Attributes:
        env_var: Environment variable consulted by the first resolver tier.
        config_dir_name: Hidden directory inside a project holding its choice.
        choice_file_name: File name of a persisted choice (project and global).
        global_dir: Directory holding the global choice.  None means
            ``file_io.get_config_dir()``.
    """

    env_var: str = Field(default=DEFAULT_ENV_VAR, min_length=1)
    config_dir_name: str = Field(default=DEFAULT_CONFIG_DIR_NAME, min_length=1)
    choice_file_name: str = Field(default=DEFAULT_CHOICE_FILE_NAME, min_length=1)
    global_dir: Path | None = None
