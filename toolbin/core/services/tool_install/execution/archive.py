"""
L4 Execution — Archive extraction.

Dispatches purely on the filename suffix:

    .zip              → zipfile
    .tar.gz / .tgz    → tarfile (gzip)
    .tar.xz           → tarfile (xz)

``strip_components`` drops N leading path segments from every tar entry,
like ``tar --strip-components``. Zip archives are extracted unchanged
whatever ``strip_components`` says.
"""

from __future__ import annotations

import logging
import lzma
import tarfile
import zipfile
import zlib
from pathlib import Path, PurePosixPath

from toolbin.core.services.tool_install.data.constants import (
    ARCHIVE_SUFFIXES,
    TAR_GZ_SUFFIXES,
    TAR_XZ_SUFFIXES,
    ZIP_SUFFIXES,
)
from toolbin.core.services.tool_install.domain.errors import FormatError

logger = logging.getLogger(__name__)

_TAR_ERRORS = (tarfile.TarError, EOFError, zlib.error, lzma.LZMAError)


def is_archive(filename: str) -> bool:
    """True if ``filename`` ends with a supported archive suffix."""
    return filename.lower().endswith(ARCHIVE_SUFFIXES)


def extract_archive(
    archive: Path,
    target_dir: Path,
    *,
    strip_components: int = 0,
) -> Path:
    """Extract ``archive`` into ``target_dir`` (created if absent).

    Args:
        archive: Archive file; only its name decides the format.
        target_dir: Destination directory.
        strip_components: Leading path segments to drop (tar only).

    Returns:
        ``target_dir``.

    Raises:
        FormatError: Unknown suffix, corrupt archive, or an entry that
            would land outside ``target_dir``.
    """
    name = archive.name.lower()
    target_dir.mkdir(parents=True, exist_ok=True)

    if name.endswith(ZIP_SUFFIXES):
        if strip_components:
            logger.debug("strip_components=%d ignored for zip %s", strip_components, archive.name)
        _extract_zip(archive, target_dir)
    elif name.endswith(TAR_GZ_SUFFIXES):
        _extract_tar(archive, target_dir, "r:gz", strip_components)
    elif name.endswith(TAR_XZ_SUFFIXES):
        _extract_tar(archive, target_dir, "r:xz", strip_components)
    else:
        raise FormatError(
            f"Unsupported archive format: {archive.name} "
            f"(expected one of {', '.join(ARCHIVE_SUFFIXES)})"
        )

    logger.info("Extracted %s → %s", archive.name, target_dir)
    return target_dir


def _entry_parts(raw: str, archive_name: str) -> list[str]:
    """Split an entry name like ``tar`` does, refusing anything escaping the target.

    A leading ``./`` counts as a segment for ``strip_components``; only
    empty segments (doubled or trailing slashes) are dropped.
    """
    path = PurePosixPath(raw)
    if path.is_absolute() or ".." in path.parts:
        raise FormatError(f"Unsafe path '{raw}' in {archive_name}")
    return [part for part in raw.split("/") if part]


def _extract_tar(archive: Path, target_dir: Path, mode: str, strip_components: int) -> None:
    try:
        with tarfile.open(archive, mode) as tf:
            members = []
            for member in tf.getmembers():
                if not (member.isreg() or member.isdir() or member.issym() or member.islnk()):
                    continue
                parts = _entry_parts(member.name, archive.name)
                if strip_components:
                    if len(parts) <= strip_components:
                        continue
                    member.name = "/".join(parts[strip_components:])
                    if member.islnk():
                        # Hard link targets are archive paths too
                        link_parts = _entry_parts(member.linkname, archive.name)
                        member.linkname = "/".join(link_parts[strip_components:])
                members.append(member)

            if hasattr(tarfile, "data_filter"):
                tf.extractall(target_dir, members=members, filter="data")
            else:
                tf.extractall(target_dir, members=members)
    except _TAR_ERRORS as exc:
        raise FormatError(f"Cannot extract {archive.name}: {exc}") from exc


def _extract_zip(archive: Path, target_dir: Path) -> None:
    try:
        with zipfile.ZipFile(archive) as zf:
            for info in zf.infolist():
                _entry_parts(info.filename, archive.name)
                extracted = Path(zf.extract(info, target_dir))
                # zipfile drops Unix permission bits; restore them
                mode = (info.external_attr >> 16) & 0o777
                if mode and not info.is_dir():
                    extracted.chmod(mode)
    except (zipfile.BadZipFile, EOFError, zlib.error) as exc:
        raise FormatError(f"Cannot extract {archive.name}: {exc}") from exc
