"""
L5 Orchestration — Installer dispatcher.

Ties the pieces together for every user-facing operation:

    install    validate → clean old copy → strategy → register paths
    update     must be installed, then the same sequence as install
    uninstall  must be installed, unregister paths → delete directory
    update_all update every installed tool, isolating each failure

"Installed" is derived, never recorded: the install directory exists
and holds at least one non-hidden entry.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from toolbin.core.services.tool_install.domain.errors import (
    ConfigError,
    InstallError,
    StateError,
    ToolbinError,
)
from toolbin.core.services.tool_install.execution.path_registry import PathRegistry
from toolbin.core.services.tool_install.execution.strategies import (
    InstallSpec,
    StrategyRegistry,
    default_strategies,
)

if TYPE_CHECKING:
    from toolbin.core.config.loader import ConfigStore

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Outcome of a successful install or update."""

    name: str
    method: str
    install_dir: Path
    paths_added: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "method": self.method,
            "install_dir": str(self.install_dir),
            "paths_added": self.paths_added,
        }


@dataclass
class UpdateReport:
    """Tally of an ``update_all`` sweep."""

    updated: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        total = len(self.updated) + len(self.failed)
        return f"{len(self.updated)}/{total} updated, {len(self.failed)} failed"

    def to_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "updated": self.updated, "failed": self.failed}


def _force_writable(func, path, _exc) -> None:
    """rmtree error hook: make read-only entries removable, then retry."""
    parent = os.path.dirname(path)
    os.chmod(parent, os.stat(parent).st_mode | stat.S_IWRITE | stat.S_IEXEC)
    os.chmod(path, os.stat(path).st_mode | stat.S_IWRITE)
    func(path)


def remove_tree(path: Path) -> None:
    """Recursively delete ``path``, including read-only files."""
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_force_writable)
    else:
        shutil.rmtree(path, onerror=_force_writable)


class Installer:
    """Dispatches install operations to the strategy of each server.

    Example:
        store = ConfigStore()
        registry = PathRegistry(store, root)
        installer = Installer(store, registry, root)
        installer.install("gopls")
        report = installer.update_all()
    """

    def __init__(
        self,
        store: ConfigStore,
        registry: PathRegistry,
        install_root: Path,
        *,
        strategies: StrategyRegistry | None = None,
    ):
        self.store = store
        self.registry = registry
        self.install_root = install_root
        self.strategies = strategies or default_strategies()

    # ── State ───────────────────────────────────────────────────

    def install_dir(self, name: str) -> Path:
        return self.install_root / name

    def is_installed(self, name: str) -> bool:
        """True if the install directory holds at least one non-hidden entry."""
        path = self.install_dir(name)
        if not path.is_dir():
            return False
        return any(not entry.name.startswith(".") for entry in path.iterdir())

    def installed_names(self) -> list[str]:
        """Names of every installed tool under the install root, sorted."""
        if not self.install_root.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.install_root.iterdir()
            if entry.is_dir() and not entry.name.startswith(".") and self.is_installed(entry.name)
        )

    def list(self) -> dict[str, list[str]]:
        """``{"available": configured names, "installed": installed names}``."""
        return {
            "available": self.store.names(),
            "installed": self.installed_names(),
        }

    # ── Operations ──────────────────────────────────────────────

    def install(self, name: str) -> InstallResult:
        """Install ``name``, replacing any existing copy.

        Raises:
            InstallError: Wrapping whatever failed, with the phase attached.
        """
        return self._install(name, operation="install")

    def update(self, name: str) -> InstallResult:
        """Reinstall an installed tool from scratch.

        Raises:
            StateError: If ``name`` is not installed (nothing is touched).
            InstallError: If the reinstall fails.
        """
        if not self.is_installed(name):
            raise StateError(name, f"{name} is not installed")
        return self._install(name, operation="update")

    def uninstall(self, name: str) -> int:
        """Unregister the tool's path entries and delete its directory.

        Returns:
            Number of search-path entries removed.

        Raises:
            StateError: If ``name`` is not installed.
            InstallError: If the directory cannot be removed.
        """
        if not self.is_installed(name):
            raise StateError(name, f"{name} is not installed")

        try:
            removed = self.registry.remove(name)
        except ConfigError as exc:
            # Still delete the directory; its entries can't be computed
            logger.warning("%s: cannot compute path entries (%s)", name, exc)
            removed = 0

        try:
            remove_tree(self.install_dir(name))
        except OSError as exc:
            raise InstallError(name, "uninstall", "directory removal", exc) from exc

        logger.info("Uninstalled %s", name)
        return removed

    def update_all(self) -> UpdateReport:
        """Update every installed tool; one failure never stops the sweep."""
        report = UpdateReport()
        for name in self.installed_names():
            try:
                self.update(name)
            except ToolbinError as exc:
                logger.error("Update of %s failed: %s", name, exc)
                report.failed[name] = str(exc)
            else:
                report.updated.append(name)

        logger.info("Update sweep finished: %s", report.summary())
        return report

    def setup_paths(self) -> int:
        """Register path entries for every installed tool (idempotent).

        Returns:
            Number of entries newly added to the search path.
        """
        added = 0
        for name in self.installed_names():
            try:
                added += self.registry.add(name)
            except ConfigError as exc:
                logger.warning("Skipping %s: %s", name, exc)
        return added

    # ── Internals ───────────────────────────────────────────────

    def _install(self, name: str, *, operation: str) -> InstallResult:
        phase = "validation"
        try:
            config = self.store.require(name)
            install_dir = self.install_dir(name)

            if self.is_installed(name):
                phase = "cleanup"
                logger.info("%s: removing existing install at %s", name, install_dir)
                self.registry.remove(name)
                remove_tree(install_dir)

            phase = f"{config.method.value} install"
            try:
                strategy = self.strategies.get(config.method)
            except KeyError:
                raise ConfigError(f"No strategy registered for '{config.method.value}'") from None

            strategy.install(InstallSpec(
                name=name,
                source=config.source,
                executable=config.executable,
                install_dir=install_dir,
                options=config.options,
            ))

            phase = "path registration"
            added = self.registry.add(name)
        except (ToolbinError, OSError) as exc:
            raise InstallError(name, operation, phase, exc) from exc

        logger.info("%s: %s complete (%s)", name, operation, config.method.value)
        return InstallResult(
            name=name,
            method=config.method.value,
            install_dir=install_dir,
            paths_added=added,
        )
