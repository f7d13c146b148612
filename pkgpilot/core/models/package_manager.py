"""
Package manager models — descriptors, resolved selections, persisted choices.

A descriptor is the fixed command-syntax table of one JavaScript package
manager.  A ResolvedSelection is the outcome of one resolver call and
records *where* the decision came from.  A PersistedChoice is the JSON
document written by the explicit "set" operations.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SelectionSource = Literal[
    "environment",
    "project-config",
    "package.json",
    "lock-file",
    "global-preference",
    "default",
]


def _now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PackageManagerDescriptor(BaseModel):
    """Command templates for one package manager."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    lock_file: str = Field(min_length=1)
    install_cmd: str = Field(min_length=1)
    run_cmd: str = Field(min_length=1)  # prefix for custom scripts
    exec_cmd: str = Field(min_length=1)  # prefix for ad-hoc binaries
    test_cmd: str = Field(min_length=1)
    build_cmd: str = Field(min_length=1)
    dev_cmd: str = Field(min_length=1)

    @property
    def cli(self) -> str:
        """Executable looked up on PATH for this manager."""
        return self.name


class ResolvedSelection(BaseModel):
    """The package manager chosen for a project, with provenance.

    ``source`` is diagnostic only — nothing downstream branches on it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    config: PackageManagerDescriptor
    source: SelectionSource

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "source": self.source,
            "config": self.config.model_dump(mode="json"),
        }


class PersistedChoice(BaseModel):
    """An explicit package-manager choice as stored on disk.

    Serialized with camelCase keys::

        {"packageManager": "pnpm", "setAt": "2024-05-01T12:00:00.000Z"}
    """

    model_config = ConfigDict(populate_by_name=True)

    package_manager: str = Field(alias="packageManager", min_length=1)
    set_at: str = Field(alias="setAt", default_factory=_now_iso)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
