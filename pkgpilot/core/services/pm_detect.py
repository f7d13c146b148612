"""
Package manager detection — read-only probes of a project directory.

Two independent signals:

- lock files (existence only, content never inspected), tie-broken by
  ``DETECTION_PRIORITY``;
- the ``packageManager`` field of ``package.json`` (Corepack format,
  ``<name>[@<version-spec>]``).

Both return a registry name or None.  Malformed input is never an error.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from pkgpilot.core.data.package_managers import (
    DETECTION_PRIORITY,
    PACKAGE_MANAGERS,
    is_known,
)
from pkgpilot.core.persistence.file_io import read_file

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Lock files
# ═══════════════════════════════════════════════════════════════════


def detect_from_lock_file(project_dir: Path) -> str | None:
    """Return the highest-priority manager whose lock file exists."""
    directory = Path(project_dir)
    for name in DETECTION_PRIORITY:
        lock_file = PACKAGE_MANAGERS[name].lock_file
        if (directory / lock_file).is_file():
            logger.debug("Found %s in %s → %s", lock_file, directory, name)
            return name
    return None


# ═══════════════════════════════════════════════════════════════════
#  package.json
# ═══════════════════════════════════════════════════════════════════


def parse_package_manager_field(value: object) -> str | None:
    """Extract a known manager name from a ``packageManager`` value.

    Splits on the first ``@`` and checks the head against the registry:

        "pnpm@8.6.0"  → "pnpm"
        "yarn@^4.0.0" → "yarn"
        "yarn"        → "yarn"
        "pnpm+8.6.0"  → None
        42            → None
    """
    if not isinstance(value, str):
        return None
    candidate, _, _ = value.partition("@")
    return candidate if is_known(candidate) else None


def detect_from_package_json(project_dir: Path) -> str | None:
    """Return the manager declared in ``package.json``, or None."""
    path = Path(project_dir) / "package.json"
    raw = read_file(path)
    if raw is None:
        return None

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.debug("Invalid JSON in %s: %s", path, e)
        return None

    if not isinstance(data, dict) or "packageManager" not in data:
        return None

    name = parse_package_manager_field(data["packageManager"])
    if name is None:
        logger.debug("Unrecognised packageManager %r in %s", data["packageManager"], path)
    return name


# ═══════════════════════════════════════════════════════════════════
#  Availability
# ═══════════════════════════════════════════════════════════════════


def get_available_package_managers() -> list[str]:
    """Managers whose CLI is on PATH, in registry order."""
    return [
        name for name, spec in PACKAGE_MANAGERS.items()
        if shutil.which(spec.cli) is not None
    ]
