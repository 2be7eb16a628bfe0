"""
toolbin — CLI entrypoint.

Usage:
    python -m toolbin.main --help
    toolbin list
    toolbin install gopls
    eval "$(toolbin setup-paths)"
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from toolbin import __version__
from toolbin.core.observability.logging_config import level_from_flags, setup_logging
from toolbin.ui.cli.tools import (
    check,
    install,
    list_tools,
    setup_paths,
    uninstall,
    update,
    update_all,
)


@click.group()
@click.version_option(version=__version__, prog_name="toolbin")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to servers.yml (default: $TOOLBIN_CONFIG or ~/.config/toolbin).",
)
@click.option(
    "--root",
    "install_root",
    type=click.Path(file_okay=False),
    default=None,
    help="Install root (default: $TOOLBIN_HOME or ~/.local/share/toolbin/tools).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    install_root: str | None,
) -> None:
    """toolbin — install language servers and developer tools."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["install_root"] = Path(install_root).expanduser() if install_root else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("TOOLBIN_LOG_FILE"),
        log_file_level=os.environ.get("TOOLBIN_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )


cli.add_command(install)
cli.add_command(update)
cli.add_command(update_all)
cli.add_command(uninstall)
cli.add_command(list_tools)
cli.add_command(check)
cli.add_command(setup_paths)


if __name__ == "__main__":
    cli()
