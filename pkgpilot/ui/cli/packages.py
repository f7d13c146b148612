"""
CLI commands for package-manager resolution.

Thin wrappers over ``pkgpilot.core.services``.  Commands print the
decision or the rendered command string; they never run it.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from pkgpilot.core.config.settings import Settings
from pkgpilot.core.data.package_managers import PACKAGE_MANAGERS, UnknownPackageManagerError
from pkgpilot.core.persistence.selection_store import SelectionStore
from pkgpilot.core.services.pm_commands import CommandValidationError


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj.get("settings") or Settings()


def _store(ctx: click.Context) -> SelectionStore:
    return SelectionStore(settings=_settings(ctx))


def _project_dir(project_dir: str | None) -> Path:
    return Path(project_dir).resolve() if project_dir else Path.cwd()


def _fail(message: str, as_json: bool = False) -> None:
    if as_json:
        click.echo(json.dumps({"error": message}, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


_project_dir_option = click.option(
    "--project-dir", "-d",
    type=click.Path(file_okay=False),
    default=None,
    help="Project directory (default: current directory).",
)
_manager_option = click.option(
    "--manager", "-m",
    default=None,
    help="Package manager to use (default: auto-detect).",
)
_json_option = click.option(
    "--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.",
)


@click.group()
@click.pass_context
def pm(ctx: click.Context) -> None:
    """Package manager — detect, set, run, exec, pattern."""
    ctx.ensure_object(dict)


# ── Decide ──────────────────────────────────────────────────────


@pm.command()
@_project_dir_option
@_json_option
@click.pass_context
def detect(ctx: click.Context, project_dir: str | None, as_json: bool) -> None:
    """Show which package manager governs the project, and why."""
    from pkgpilot.core.services.pm_resolve import get_package_manager

    result = get_package_manager(
        _project_dir(project_dir),
        store=_store(ctx),
        settings=_settings(ctx),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(f"📦 {result.name}", fg="cyan", bold=True, nl=False)
    click.echo(f"  (source: {result.source})")
    if ctx.obj.get("verbose"):
        click.echo(f"   Lock file: {result.config.lock_file}")
        click.echo(f"   Install:   {result.config.install_cmd}")
        click.echo(f"   Exec:      {result.config.exec_cmd}")


@pm.command("set")
@click.argument("name")
@click.option("--global", "is_global", is_flag=True, help="Save as the global preference.")
@_project_dir_option
@_json_option
@click.pass_context
def set_manager(
    ctx: click.Context,
    name: str,
    is_global: bool,
    project_dir: str | None,
    as_json: bool,
) -> None:
    """Persist a package manager choice (project or global)."""
    from pkgpilot.core.services.pm_resolve import (
        set_preferred_package_manager,
        set_project_package_manager,
    )

    store = _store(ctx)
    try:
        if is_global:
            choice = set_preferred_package_manager(name, store=store)
            path = store.global_path()
        else:
            root = _project_dir(project_dir)
            choice = set_project_package_manager(name, root, store=store)
            path = store.project_path(root)
    except (UnknownPackageManagerError, OSError) as e:
        _fail(str(e), as_json)
        return

    if as_json:
        click.echo(json.dumps({**choice.to_json_dict(), "path": str(path)}, indent=2))
        return

    scope = "global preference" if is_global else "project"
    click.secho(f"✅ {choice.package_manager} saved ({scope})", fg="green", bold=True)
    click.echo(f"   {path}")


@pm.command()
@_json_option
def available(as_json: bool) -> None:
    """List package managers installed on PATH."""
    from pkgpilot.core.services.pm_detect import get_available_package_managers

    found = get_available_package_managers()

    if as_json:
        click.echo(json.dumps({"available": found, "supported": list(PACKAGE_MANAGERS)}, indent=2))
        return

    for name in PACKAGE_MANAGERS:
        icon = "✅" if name in found else "❌"
        click.echo(f"   {icon} {name}")


@pm.command()
@_json_option
@click.pass_context
def prompt(ctx: click.Context, as_json: bool) -> None:
    """Explain how to choose a package manager."""
    from pkgpilot.core.services.pm_resolve import get_selection_prompt

    text = get_selection_prompt(_settings(ctx))

    if as_json:
        click.echo(json.dumps({"prompt": text}, indent=2))
        return

    click.echo(text)


# ── Render ──────────────────────────────────────────────────────


@pm.command()
@click.argument("script")
@_manager_option
@_project_dir_option
@_json_option
@click.pass_context
def run(
    ctx: click.Context,
    script: str,
    manager: str | None,
    project_dir: str | None,
    as_json: bool,
) -> None:
    """Print the command that runs SCRIPT (install, test, build, dev, or custom)."""
    from pkgpilot.core.services.pm_commands import get_run_command

    try:
        command = get_run_command(
            script,
            manager=manager,
            project_dir=_project_dir(project_dir),
            store=_store(ctx),
            settings=_settings(ctx),
        )
    except (CommandValidationError, UnknownPackageManagerError) as e:
        _fail(str(e), as_json)
        return

    if as_json:
        click.echo(json.dumps({"command": command}, indent=2))
        return

    click.echo(command)


@pm.command("exec", context_settings={"ignore_unknown_options": True})
@click.argument("binary")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@_manager_option
@_project_dir_option
@_json_option
@click.pass_context
def exec_binary(
    ctx: click.Context,
    binary: str,
    args: tuple[str, ...],
    manager: str | None,
    project_dir: str | None,
    as_json: bool,
) -> None:
    """Print the command that runs BINARY ad hoc (npx, dlx, bunx)."""
    from pkgpilot.core.services.pm_commands import get_exec_command

    try:
        command = get_exec_command(
            binary,
            " ".join(args),
            manager=manager,
            project_dir=_project_dir(project_dir),
            store=_store(ctx),
            settings=_settings(ctx),
        )
    except (CommandValidationError, UnknownPackageManagerError) as e:
        _fail(str(e), as_json)
        return

    if as_json:
        click.echo(json.dumps({"command": command}, indent=2))
        return

    click.echo(command)


@pm.command()
@click.argument("action")
@_json_option
def pattern(action: str, as_json: bool) -> None:
    """Print a regex matching ACTION under any package manager."""
    from pkgpilot.core.services.pm_patterns import get_command_pattern

    regex = get_command_pattern(action)

    if as_json:
        click.echo(json.dumps({"pattern": regex}, indent=2))
        return

    click.echo(regex)
