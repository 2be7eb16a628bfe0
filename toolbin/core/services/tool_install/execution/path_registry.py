"""
L4 Execution — Search-path registry.

Keeps the host's search path (``PATH`` of an environment mapping) in
sync with the installed tools. The search path is treated as an
ordered, duplicate-free list of directories; ``add`` and ``remove``
are exact inverses for an unchanged on-disk layout.
"""

from __future__ import annotations

import logging
import os
import shlex
from collections.abc import MutableMapping
from pathlib import Path
from typing import TYPE_CHECKING

from toolbin.core.services.tool_install.data.constants import GLOB_CHARS

if TYPE_CHECKING:
    from toolbin.core.config.loader import ConfigStore

logger = logging.getLogger(__name__)


def expand_path_dirs(install_dir: Path, patterns: list[str]) -> list[Path]:
    """Resolve declared path-dirs against an install directory.

    Glob patterns are expanded and filtered to directories; literal
    entries are kept only if they exist as directories. Input order is
    preserved and patterns matching nothing contribute nothing.

    Args:
        install_dir: The tool's install directory.
        patterns: Relative directories or glob patterns.

    Returns:
        Absolute directory paths, without duplicates.
    """
    result: list[Path] = []
    for pattern in patterns:
        if any(c in pattern for c in GLOB_CHARS):
            matches = sorted(p for p in install_dir.glob(pattern) if p.is_dir())
        else:
            candidate = install_dir / pattern
            matches = [candidate] if candidate.is_dir() else []

        for match in matches:
            resolved = match.resolve()
            if resolved not in result:
                result.append(resolved)
    return result


class PathRegistry:
    """Owns membership of the process search path for installed tools.

    Example:
        registry = PathRegistry(store, install_root)
        registry.add("gopls")      # appends <root>/gopls/bin
        registry.remove("gopls")
    """

    def __init__(
        self,
        store: ConfigStore,
        install_root: Path,
        *,
        environ: MutableMapping[str, str] | None = None,
        var: str = "PATH",
    ):
        self.store = store
        self.install_root = install_root
        self.environ = os.environ if environ is None else environ
        self.var = var

    # ── Search path access ──────────────────────────────────────

    def entries(self) -> list[str]:
        """Current search path as a list (empty segments dropped)."""
        raw = self.environ.get(self.var, "")
        return [p for p in raw.split(os.pathsep) if p]

    def _write(self, entries: list[str]) -> None:
        self.environ[self.var] = os.pathsep.join(entries)

    def export_line(self) -> str:
        """Shell statement that reproduces the current search path."""
        return f"export {self.var}={shlex.quote(os.pathsep.join(self.entries()))}"

    # ── Tool entries ────────────────────────────────────────────

    def tool_entries(self, name: str) -> list[str]:
        """Expanded path-dirs of ``name`` as strings."""
        config = self.store.require(name)
        install_dir = self.install_root / name
        return [str(p) for p in expand_path_dirs(install_dir, config.path_dirs)]

    def add(self, name: str) -> int:
        """Append the tool's directories that are not yet on the search path.

        Returns:
            Number of entries added.
        """
        current = self.entries()
        added = 0
        for entry in self.tool_entries(name):
            if entry not in current:
                current.append(entry)
                added += 1
                logger.debug("PATH += %s", entry)
        if added:
            self._write(current)
        logger.info("%s: %d path entr%s added", name, added, "y" if added == 1 else "ies")
        return added

    def remove(self, name: str) -> int:
        """Drop the tool's directories from the search path.

        Returns:
            Number of entries removed.
        """
        targets = set(self.tool_entries(name))
        current = self.entries()
        kept = [p for p in current if p not in targets]
        removed = len(current) - len(kept)
        if removed:
            self._write(kept)
        logger.info("%s: %d path entr%s removed", name, removed, "y" if removed == 1 else "ies")
        return removed
