"""
Static data — the package manager registry.

Usage::

    from pkgpilot.core.data import PACKAGE_MANAGERS, DETECTION_PRIORITY

    npm = PACKAGE_MANAGERS["npm"]
    first = DETECTION_PRIORITY[0]   # "pnpm"
"""

from pkgpilot.core.data.package_managers import (
    DEFAULT_PACKAGE_MANAGER,
    DETECTION_PRIORITY,
    PACKAGE_MANAGERS,
    UnknownPackageManagerError,
    get_descriptor,
    is_known,
    require_descriptor,
)

__all__ = [
    "DEFAULT_PACKAGE_MANAGER",
    "DETECTION_PRIORITY",
    "PACKAGE_MANAGERS",
    "UnknownPackageManagerError",
    "get_descriptor",
    "is_known",
    "require_descriptor",
]
