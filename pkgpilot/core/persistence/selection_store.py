"""
Selection store — explicit package-manager choices persisted as JSON.

Two locations share one format:

    project:  <project>/.pkgpilot/package-manager.json
    global:   <config dir>/package-manager.json

Writes validate the name first (unknown names raise).  Reads are
tolerant: a missing, corrupt or stale file reads as "no choice".
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pkgpilot.core.config.settings import Settings
from pkgpilot.core.data.package_managers import is_known, require_descriptor
from pkgpilot.core.models.package_manager import PersistedChoice
from pkgpilot.core.persistence import file_io

logger = logging.getLogger(__name__)


class SelectionStore:
    """Reads and writes persisted package-manager choices.

    Args:
        global_dir: Directory holding the global choice.  Falls back to
            ``settings.global_dir`` and then ``file_io.get_config_dir()``.
        settings: Names of the hidden project directory and choice file.
    """

    def __init__(
        self,
        global_dir: Path | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._global_dir = global_dir or self.settings.global_dir

    # ── Locations ───────────────────────────────────────────────

    @property
    def global_dir(self) -> Path:
        # Resolved lazily so $PKGPILOT_HOME changes are seen per call
        return self._global_dir or file_io.get_config_dir()

    def project_path(self, project_dir: Path) -> Path:
        return (
            Path(project_dir)
            / self.settings.config_dir_name
            / self.settings.choice_file_name
        )

    def global_path(self) -> Path:
        return self.global_dir / self.settings.choice_file_name

    # ── Read ────────────────────────────────────────────────────

    def read_project_choice(self, project_dir: Path) -> str | None:
        """Known package manager stored for ``project_dir``, or None."""
        return _read_choice(self.project_path(project_dir))

    def read_global_choice(self) -> str | None:
        """Known package manager stored as the global preference, or None."""
        return _read_choice(self.global_path())

    # ── Write ───────────────────────────────────────────────────

    def set_project(self, name: str, project_dir: Path) -> PersistedChoice:
        """Persist ``name`` as the choice for ``project_dir``."""
        return _write_choice(name, self.project_path(project_dir))

    def set_global(self, name: str) -> PersistedChoice:
        """Persist ``name`` as the global preference."""
        return _write_choice(name, self.global_path())


def _read_choice(path: Path) -> str | None:
    raw = file_io.read_file(path)
    if raw is None:
        return None

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.debug("Ignoring corrupt choice file %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.debug("Ignoring choice file %s: not a JSON object", path)
        return None

    name = data.get("packageManager")
    if not is_known(name):
        logger.debug("Ignoring choice file %s: unknown package manager %r", path, name)
        return None
    return name


def _write_choice(name: str, path: Path) -> PersistedChoice:
    require_descriptor(name)
    choice = PersistedChoice(package_manager=name)
    content = json.dumps(choice.to_json_dict(), indent=2) + "\n"
    file_io.write_file(path, content)
    logger.info("Saved package manager %s to %s", name, path)
    return choice
