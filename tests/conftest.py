"""
Shared test fixtures and configuration.
"""

import json
import logging
from pathlib import Path

import pytest

from pkgpilot.core.config.settings import Settings
from pkgpilot.core.persistence.selection_store import SelectionStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Point the global config directory at a temp dir and clear overrides.

    Keeps every test away from the real ~/.pkgpilot and from a
    package manager set in the developer's shell.
    """
    home = tmp_path / "home"
    monkeypatch.setenv("PKGPILOT_HOME", str(home))
    monkeypatch.delenv("PKGPILOT_PACKAGE_MANAGER", raising=False)
    return home


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging (e.g. through the CLI)."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Return an empty project directory."""
    d = tmp_path / "project"
    d.mkdir()
    return d


@pytest.fixture
def global_dir(tmp_path: Path) -> Path:
    """Return the directory used for global preferences."""
    return tmp_path / "global"


@pytest.fixture
def store(global_dir: Path) -> SelectionStore:
    """SelectionStore rooted at a temp global directory."""
    return SelectionStore(global_dir=global_dir, settings=Settings())


@pytest.fixture
def write_package_json():
    """Write a package.json (dict → JSON, str → raw text) into a directory."""

    def _write(directory: Path, content) -> Path:
        path = directory / "package.json"
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(json.dumps(content))
        return path

    return _write
