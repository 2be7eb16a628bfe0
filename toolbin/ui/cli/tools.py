"""
CLI commands for tool installation.

Thin wrappers over ``toolbin.core.services.tool_install``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from toolbin.core.config.loader import ConfigStore, default_install_root
from toolbin.core.services.tool_install import Installer, PathRegistry, ToolbinError


def _build_installer(ctx: click.Context) -> Installer:
    """Wire store, registry and installer from the global CLI options."""
    store = ConfigStore(ctx.obj.get("config_path"))
    root: Path = ctx.obj.get("install_root") or default_install_root()
    registry = PathRegistry(store, root)
    return Installer(store, registry, root)


def _fail(exc: Exception) -> None:
    click.secho(f"❌ {exc}", fg="red", err=True)
    sys.exit(1)


# ── Install / update ────────────────────────────────────────────


@click.command()
@click.argument("name")
@click.pass_context
def install(ctx: click.Context, name: str) -> None:
    """Install a tool (replaces an existing install)."""
    installer = _build_installer(ctx)
    try:
        result = installer.install(name)
    except ToolbinError as exc:
        _fail(exc)
        return

    click.secho(f"✅ Installed {name} via {result.method}", fg="green")
    click.echo(f"   → {result.install_dir}")


@click.command()
@click.argument("name")
@click.pass_context
def update(ctx: click.Context, name: str) -> None:
    """Reinstall an installed tool from its source."""
    installer = _build_installer(ctx)
    try:
        result = installer.update(name)
    except ToolbinError as exc:
        _fail(exc)
        return

    click.secho(f"⬆️  Updated {name} via {result.method}", fg="green")


@click.command("update-all")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def update_all(ctx: click.Context, yes: bool, as_json: bool) -> None:
    """Update every installed tool, continuing past failures."""
    installer = _build_installer(ctx)
    names = installer.installed_names()
    if not names:
        click.secho("Nothing installed", fg="yellow")
        return

    if not yes:
        click.confirm(f"Update {len(names)} tool(s): {', '.join(names)}?", abort=True)

    report = installer.update_all()

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        for name in report.updated:
            click.secho(f"   ✅ {name}", fg="green")
        for name, error in report.failed.items():
            click.secho(f"   ❌ {name}: {error}", fg="red")
        click.echo(f"\n{report.summary()}")

    if not report.ok:
        sys.exit(1)


# ── Remove ──────────────────────────────────────────────────────


@click.command()
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def uninstall(ctx: click.Context, name: str, yes: bool) -> None:
    """Remove a tool and its search-path entries."""
    installer = _build_installer(ctx)
    if not yes:
        click.confirm(f"Uninstall {name} from {installer.install_dir(name)}?", abort=True)

    try:
        installer.uninstall(name)
    except ToolbinError as exc:
        _fail(exc)
        return

    click.secho(f"🗑️  Uninstalled {name}", fg="green")


# ── Observe ─────────────────────────────────────────────────────


@click.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_tools(ctx: click.Context, as_json: bool) -> None:
    """List configured tools and which are installed."""
    installer = _build_installer(ctx)
    try:
        listing = installer.list()
    except ToolbinError as exc:
        _fail(exc)
        return

    if as_json:
        click.echo(json.dumps(listing, indent=2))
        return

    installed = set(listing["installed"])
    click.secho("🧰 Tools:", fg="cyan", bold=True)
    for name in listing["available"]:
        icon = "✅" if name in installed else "  "
        record = installer.store.get(name) or {}
        desc = record.get("description", "")
        click.echo(f"   {icon} {name:<28} {desc}")

    orphans = sorted(installed - set(listing["available"]))
    for name in orphans:
        click.secho(f"   ⚠️  {name} (installed, no configuration)", fg="yellow")

    click.echo(f"\n   {len(installed)}/{len(listing['available'])} installed")


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Validate every configured server."""
    store = ConfigStore(ctx.obj.get("config_path"))
    try:
        errors = store.check_all()
        total = len(store.names())
    except ToolbinError as exc:
        _fail(exc)
        return

    if as_json:
        click.echo(json.dumps({"ok": not errors, "total": total, "errors": errors}, indent=2))
    elif errors:
        for error in errors.values():
            click.secho(f"   ❌ {error}", fg="red")
    else:
        click.secho(f"✅ {total} server(s) valid", fg="green")

    if errors:
        sys.exit(1)


@click.command("setup-paths")
@click.pass_context
def setup_paths(ctx: click.Context) -> None:
    """Print a PATH export covering every installed tool.

    Intended for shell startup files:

        eval "$(toolbin setup-paths)"
    """
    installer = _build_installer(ctx)
    installer.setup_paths()
    click.echo(installer.registry.export_line())
