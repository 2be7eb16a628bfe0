"""
L4 Execution — Download-based back-ends (binary, github).

Both fetch a single file into a scratch directory, then either unpack
it into the install directory or copy it there as the executable. The
scratch directory is removed on every exit path.
"""

from __future__ import annotations

import logging
import shutil
import stat
import tempfile
from pathlib import Path, PurePosixPath

from toolbin.core.models.server import InstallMethod
from toolbin.core.services.tool_install.data.constants import GLOB_CHARS
from toolbin.core.services.tool_install.execution.archive import extract_archive, is_archive
from toolbin.core.services.tool_install.execution.download import download_file
from toolbin.core.services.tool_install.execution.strategies import InstallSpec, Strategy
from toolbin.core.services.tool_install.resolver.github_release import resolve_release_asset

logger = logging.getLogger(__name__)


def make_executable(path: Path) -> None:
    """Add execute permission for user, group and other."""
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def _find_executables(install_dir: Path, executable: str) -> list[Path]:
    if any(c in executable for c in GLOB_CHARS):
        return sorted(p for p in install_dir.glob(executable) if p.is_file())
    candidate = install_dir / executable
    return [candidate] if candidate.is_file() else []


def install_from_url(url: str, spec: InstallSpec, *, filename: str | None = None) -> Path:
    """Download ``url`` and lay it out in ``spec.install_dir``.

    Archives are extracted (into ``options.target_dir`` when set) and the
    declared executable is marked executable if it exists. Anything else
    is treated as the executable itself and copied under its base name.

    Args:
        url: File to download.
        spec: Install spec of the server.
        filename: Local filename override; decides archive detection.

    Returns:
        The populated install directory.
    """
    with tempfile.TemporaryDirectory(prefix=f"toolbin-{spec.name}-") as scratch:
        downloaded = download_file(url, Path(scratch), filename=filename)

        if is_archive(downloaded.name):
            dest = spec.install_dir
            if spec.options.target_dir:
                dest = dest / spec.options.target_dir
            extract_archive(downloaded, dest, strip_components=spec.options.strip_components)

            found = _find_executables(spec.install_dir, spec.executable)
            if not found:
                logger.warning(
                    "%s: executable '%s' not found after extracting %s",
                    spec.name, spec.executable, downloaded.name,
                )
            for path in found:
                make_executable(path)
        else:
            spec.install_dir.mkdir(parents=True, exist_ok=True)
            target = spec.install_dir / PurePosixPath(spec.executable).name
            shutil.copy2(downloaded, target)
            make_executable(target)
            logger.debug("Copied %s → %s", downloaded.name, target)

    logger.info("Installed %s from %s into %s", spec.name, url, spec.install_dir)
    return spec.install_dir


class BinaryStrategy(Strategy):
    """Download an explicit URL."""

    method = InstallMethod.BINARY

    def install(self, spec: InstallSpec) -> Path:
        return install_from_url(spec.source, spec)


class GithubReleaseStrategy(Strategy):
    """Pick the best asset of the latest GitHub release, then install it as a binary."""

    method = InstallMethod.GITHUB

    def install(self, spec: InstallSpec) -> Path:
        asset = resolve_release_asset(spec.source, spec.name)
        return install_from_url(asset.url, spec, filename=asset.name)
