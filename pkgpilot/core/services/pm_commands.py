"""
Command builder — renders package-manager command strings.

Nothing here executes anything.  Inputs that end up in a shell string
(script names, binary names, exec arguments) are validated against an
allowlist of characters first; any shell metacharacter is rejected
outright.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Mapping

from pkgpilot.core.config.settings import Settings
from pkgpilot.core.data.package_managers import require_descriptor
from pkgpilot.core.models.package_manager import PackageManagerDescriptor
from pkgpilot.core.persistence.selection_store import SelectionStore
from pkgpilot.core.services.pm_resolve import get_package_manager

logger = logging.getLogger(__name__)

TokenKind = Literal["name", "args"]

# Characters with meaning to a POSIX shell.  Checked explicitly so the
# error stays correct even if the allowlists below are widened.
SHELL_METACHARACTERS = frozenset(";|&$`()<>\n\r'\"\\{}[]*?!#~")

# Script / binary names: enough for scoped packages (@scope/name)
_SAFE_NAME = re.compile(r"^[A-Za-z0-9_.@/-]+$")

# Exec arguments: flags like --config=.prettierrc, @latest, --fix:all
_SAFE_ARGS = re.compile(r"^[A-Za-z0-9_.@/:=,+ -]+$")

_LABELS = {"name": "Name", "args": "Arguments"}


class CommandValidationError(ValueError):
    """Raised when a script name, binary name or argument string is unsafe."""


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of ``validate_token``."""

    ok: bool
    error: str | None = None

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> ValidationResult:
        return cls(ok=False, error=error)


def validate_token(value: Any, *, kind: TokenKind = "name") -> ValidationResult:
    """Check that ``value`` is a non-empty string of safe characters.

    Args:
        value: Candidate script name, binary name or argument string.
        kind: ``"name"`` for script/binary names, ``"args"`` for the
            wider argument charset (adds space, ``:``, ``=``, ``,``, ``+``).
    """
    label = _LABELS[kind]
    if not isinstance(value, str) or not value:
        return ValidationResult.failure(f"{label} must be a non-empty string")

    if any(ch in SHELL_METACHARACTERS for ch in value):
        return ValidationResult.failure(f"{label} contains unsafe characters: {value!r}")

    pattern = _SAFE_NAME if kind == "name" else _SAFE_ARGS
    if not pattern.match(value):
        return ValidationResult.failure(f"{label} contains unsafe characters: {value!r}")

    return ValidationResult.success()


def _require_valid(value: Any, *, kind: TokenKind = "name") -> str:
    result = validate_token(value, kind=kind)
    if not result.ok:
        logger.debug("Rejected %s: %s", kind, result.error)
        raise CommandValidationError(result.error)
    return value


def _resolve_descriptor(
    manager: str | PackageManagerDescriptor | None,
    project_dir: Path | None,
    env: Mapping[str, str] | None,
    store: SelectionStore | None,
    settings: Settings | None,
) -> PackageManagerDescriptor:
    if isinstance(manager, PackageManagerDescriptor):
        return manager
    if manager is not None:
        return require_descriptor(manager)
    return get_package_manager(project_dir, env=env, store=store, settings=settings).config


# ═══════════════════════════════════════════════════════════════════
#  Run
# ═══════════════════════════════════════════════════════════════════


def get_run_command(
    script_name: str,
    *,
    manager: str | PackageManagerDescriptor | None = None,
    project_dir: Path | None = None,
    env: Mapping[str, str] | None = None,
    store: SelectionStore | None = None,
    settings: Settings | None = None,
) -> str:
    """Render the command that runs a package.json script.

    ``install``, ``test``, ``build`` and ``dev`` use each manager's own
    idiom (``yarn`` alone installs); any other name goes through the
    manager's run prefix.

    Args:
        script_name: Script to run.
        manager: Name or descriptor to use instead of resolving one.
        project_dir, env, store, settings: Passed to ``get_package_manager``.

    Raises:
        CommandValidationError: If ``script_name`` is empty or unsafe.
        UnknownPackageManagerError: If ``manager`` names an unknown manager.
    """
    _require_valid(script_name)
    pm = _resolve_descriptor(manager, project_dir, env, store, settings)

    known_actions = {
        "install": pm.install_cmd,
        "test": pm.test_cmd,
        "build": pm.build_cmd,
        "dev": pm.dev_cmd,
    }
    if script_name in known_actions:
        return known_actions[script_name]
    return f"{pm.run_cmd} {script_name}"


# ═══════════════════════════════════════════════════════════════════
#  Exec
# ═══════════════════════════════════════════════════════════════════


def get_exec_command(
    binary_name: str,
    args: str | None = None,
    *,
    manager: str | PackageManagerDescriptor | None = None,
    project_dir: Path | None = None,
    env: Mapping[str, str] | None = None,
    store: SelectionStore | None = None,
    settings: Settings | None = None,
) -> str:
    """Render the command that runs a package binary ad hoc (npx / dlx / bunx).

    Args:
        binary_name: Package binary to run.
        args: Extra arguments as one string.  Falsy values add nothing.
        manager: Name or descriptor to use instead of resolving one.
        project_dir, env, store, settings: Passed to ``get_package_manager``.

    Raises:
        CommandValidationError: If the binary name or arguments are unsafe.
        UnknownPackageManagerError: If ``manager`` names an unknown manager.
    """
    _require_valid(binary_name)

    suffix = ""
    if isinstance(args, str):
        if args:
            suffix = _require_valid(args, kind="args").strip()
    elif args:
        raise CommandValidationError(
            f"Arguments must be a string, got {type(args).__name__}"
        )

    pm = _resolve_descriptor(manager, project_dir, env, store, settings)
    command = f"{pm.exec_cmd} {binary_name}"
    return f"{command} {suffix}" if suffix else command
