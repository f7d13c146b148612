"""
Package manager resolution — one decision, with provenance.

Priority chain (first valid hit wins):

    1. environment        $PKGPILOT_PACKAGE_MANAGER
    2. project-config     <project>/.pkgpilot/package-manager.json
    3. package.json       "packageManager" field
    4. lock-file          pnpm-lock.yaml, bun.lockb, yarn.lock, package-lock.json
    5. global-preference  <config dir>/package-manager.json
    6. default            npm

Every tier is checked against the registry; anything unknown or
unreadable is skipped.  Nothing is cached — each call re-reads the
environment and the disk.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from pkgpilot.core.config.settings import Settings
from pkgpilot.core.data.package_managers import (
    DEFAULT_PACKAGE_MANAGER,
    DETECTION_PRIORITY,
    PACKAGE_MANAGERS,
    is_known,
)
from pkgpilot.core.models.package_manager import (
    PersistedChoice,
    ResolvedSelection,
    SelectionSource,
)
from pkgpilot.core.persistence.selection_store import SelectionStore
from pkgpilot.core.services.pm_detect import (
    detect_from_lock_file,
    detect_from_package_json,
)

logger = logging.getLogger(__name__)


def _selection(name: str, source: SelectionSource) -> ResolvedSelection:
    logger.debug("Package manager %s (source: %s)", name, source)
    return ResolvedSelection(name=name, config=PACKAGE_MANAGERS[name], source=source)


def get_package_manager(
    project_dir: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    store: SelectionStore | None = None,
    settings: Settings | None = None,
) -> ResolvedSelection:
    """Resolve the package manager for a project.

    Args:
        project_dir: Project directory (default: cwd).
        env: Environment mapping (default: ``os.environ``).
        store: Persisted-choice store (default: built from ``settings``).
        settings: Resolution settings (default: ``Settings()``).

    Returns:
        A ResolvedSelection.  Never raises for bad input on disk or in
        the environment; falls back to npm.
    """
    settings = settings or (store.settings if store else Settings())
    store = store or SelectionStore(settings=settings)
    env = os.environ if env is None else env
    project_dir = Path(project_dir) if project_dir is not None else Path.cwd()

    from_env = env.get(settings.env_var)
    if is_known(from_env):
        return _selection(from_env, "environment")
    if from_env:
        logger.debug("Ignoring unknown %s=%r", settings.env_var, from_env)

    from_project = store.read_project_choice(project_dir)
    if from_project:
        return _selection(from_project, "project-config")

    from_package_json = detect_from_package_json(project_dir)
    if from_package_json:
        return _selection(from_package_json, "package.json")

    from_lock_file = detect_from_lock_file(project_dir)
    if from_lock_file:
        return _selection(from_lock_file, "lock-file")

    from_global = store.read_global_choice()
    if from_global:
        return _selection(from_global, "global-preference")

    return _selection(DEFAULT_PACKAGE_MANAGER, "default")


# ── Explicit choices ────────────────────────────────────────────


def set_project_package_manager(
    name: str,
    project_dir: Path | None = None,
    *,
    store: SelectionStore | None = None,
) -> PersistedChoice:
    """Persist a package manager for one project.

    Raises:
        UnknownPackageManagerError: If ``name`` is not supported.
    """
    store = store or SelectionStore()
    return store.set_project(name, Path(project_dir) if project_dir is not None else Path.cwd())


def set_preferred_package_manager(
    name: str,
    *,
    store: SelectionStore | None = None,
) -> PersistedChoice:
    """Persist a global package manager preference.

    Raises:
        UnknownPackageManagerError: If ``name`` is not supported.
    """
    store = store or SelectionStore()
    return store.set_global(name)


# ── Guidance ────────────────────────────────────────────────────


def get_selection_prompt(settings: Settings | None = None) -> str:
    """Explain how to choose a package manager when none was detected."""
    settings = settings or Settings()
    supported = ", ".join(PACKAGE_MANAGERS)
    lock_files = ", ".join(PACKAGE_MANAGERS[n].lock_file for n in DETECTION_PRIORITY)
    return "\n".join([
        "No package manager preference detected.",
        f"Supported package managers: {supported}",
        "",
        "To choose one (highest priority first):",
        f"  - Set the {settings.env_var} environment variable",
        f"  - Project: add {settings.config_dir_name}/{settings.choice_file_name}"
        ' with {"packageManager": "pnpm"}',
        '  - Add "packageManager": "pnpm@9.0.0" to package.json',
        f"  - Keep a lock file in the project ({lock_files})",
        f"  - Global: add {settings.choice_file_name} to your config directory"
        ' with {"packageManager": "pnpm"}',
        "",
        f"Without any of these, {DEFAULT_PACKAGE_MANAGER} is used.",
    ])
