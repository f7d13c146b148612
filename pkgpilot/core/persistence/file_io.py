"""
File utilities — small text reads and atomic writes.

Reads never raise: any failure (missing file, permission, bad encoding)
yields None so callers can treat it as "no signal".  Writes use
write-to-temp-then-rename so a crash never leaves a half-written file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

# Overrides the global configuration directory (mainly for tests and CI)
HOME_ENV_VAR = "PKGPILOT_HOME"
DEFAULT_HOME_DIR_NAME = ".pkgpilot"


def get_config_dir(env: Mapping[str, str] | None = None) -> Path:
    """Resolve the user-global configuration directory.

    ``$PKGPILOT_HOME`` if set and non-empty, else ``~/.pkgpilot``.
    """
    env = os.environ if env is None else env
    override = env.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / DEFAULT_HOME_DIR_NAME


def read_file(path: Path) -> str | None:
    """Read a UTF-8 text file, or return None on any failure."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None


def write_file(path: Path, content: str) -> None:
    """Write text to ``path`` atomically, creating parent directories.

    Raises:
        OSError: If the directory cannot be created or the write fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}_",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        tmp.replace(path)
        logger.debug("Wrote %d bytes to %s", len(content), path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
