"""
Package manager registry — the closed set of supported managers.

Static data, built once at import time and never mutated.  Every other
component treats "not a known name" as "no signal"; only callers that
explicitly ask for a name go through ``require_descriptor`` and get an
error back.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from pkgpilot.core.models.package_manager import PackageManagerDescriptor

DEFAULT_PACKAGE_MANAGER = "npm"


class UnknownPackageManagerError(ValueError):
    """Raised when a caller explicitly requests an unsupported manager."""


# ── Descriptors ─────────────────────────────────────────────────


_DESCRIPTORS = (
    PackageManagerDescriptor(
        name="npm",
        lock_file="package-lock.json",
        install_cmd="npm install",
        run_cmd="npm run",
        exec_cmd="npx",
        test_cmd="npm test",
        build_cmd="npm run build",
        dev_cmd="npm run dev",
    ),
    PackageManagerDescriptor(
        name="pnpm",
        lock_file="pnpm-lock.yaml",
        install_cmd="pnpm install",
        run_cmd="pnpm",
        exec_cmd="pnpm dlx",
        test_cmd="pnpm test",
        build_cmd="pnpm build",
        dev_cmd="pnpm dev",
    ),
    PackageManagerDescriptor(
        name="yarn",
        lock_file="yarn.lock",
        install_cmd="yarn",
        run_cmd="yarn",
        exec_cmd="yarn dlx",
        test_cmd="yarn test",
        build_cmd="yarn build",
        dev_cmd="yarn dev",
    ),
    PackageManagerDescriptor(
        name="bun",
        lock_file="bun.lockb",
        install_cmd="bun install",
        run_cmd="bun run",
        exec_cmd="bunx",
        test_cmd="bun test",
        build_cmd="bun run build",
        dev_cmd="bun run dev",
    ),
)

PACKAGE_MANAGERS: Mapping[str, PackageManagerDescriptor] = MappingProxyType(
    {d.name: d for d in _DESCRIPTORS}
)

# Tie-break order when several lock files exist side by side.
# npm is last: a stray package-lock.json is the most common leftover.
DETECTION_PRIORITY: tuple[str, ...] = ("pnpm", "bun", "yarn", "npm")


# ── Lookup ──────────────────────────────────────────────────────


def is_known(name: Any) -> bool:
    """True if ``name`` is a supported package manager name."""
    return isinstance(name, str) and name in PACKAGE_MANAGERS


def get_descriptor(name: Any) -> PackageManagerDescriptor | None:
    """Look up a descriptor, or None for unknown / non-string names."""
    if not is_known(name):
        return None
    return PACKAGE_MANAGERS[name]


def require_descriptor(name: Any) -> PackageManagerDescriptor:
    """Look up a descriptor the caller asked for by name.

    Raises:
        UnknownPackageManagerError: If ``name`` is not in the registry.
    """
    descriptor = get_descriptor(name)
    if descriptor is None:
        supported = ", ".join(PACKAGE_MANAGERS)
        raise UnknownPackageManagerError(
            f"Unknown package manager: {name!r}. Supported: {supported}"
        )
    return descriptor
