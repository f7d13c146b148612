"""
Domain models — Pydantic types for package-manager resolution.

    from pkgpilot.core.models import PackageManagerDescriptor, ResolvedSelection
"""

from pkgpilot.core.models.package_manager import (
    PackageManagerDescriptor,
    PersistedChoice,
    ResolvedSelection,
    SelectionSource,
)

__all__ = [
    "PackageManagerDescriptor",
    "PersistedChoice",
    "ResolvedSelection",
    "SelectionSource",
]
