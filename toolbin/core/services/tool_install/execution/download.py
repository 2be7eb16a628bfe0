"""
L4 Execution — File downloads.

Streams a URL to disk with ``urllib``. Callers own the destination
directory (normally a scratch ``TemporaryDirectory``).
"""

from __future__ import annotations

import logging
import posixpath
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path

from toolbin.core.services.tool_install.data.constants import DOWNLOAD_CHUNK_SIZE, USER_AGENT
from toolbin.core.services.tool_install.domain.errors import NetworkError

logger = logging.getLogger(__name__)


def filename_from_url(url: str) -> str:
    """Last path segment of ``url``, unquoted (``""`` if there is none)."""
    path = urllib.parse.urlparse(url).path
    return urllib.parse.unquote(posixpath.basename(path.rstrip("/")))


def download_file(
    url: str,
    dest_dir: Path,
    *,
    filename: str | None = None,
    timeout: int = 60,
) -> Path:
    """Download ``url`` into ``dest_dir``.

    Args:
        url: HTTP(S) URL to fetch.
        dest_dir: Existing directory to write into.
        filename: Override for the local filename (default: from the URL).
        timeout: Socket timeout in seconds.

    Returns:
        Path of the written file.

    Raises:
        NetworkError: If the server is unreachable or answers with an error.
    """
    name = filename or filename_from_url(url) or "download"
    target = dest_dir / name

    logger.info("Downloading %s", url)
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            with open(target, "wb") as f:
                while True:
                    chunk = resp.read(DOWNLOAD_CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
    except urllib.error.HTTPError as exc:
        raise NetworkError(f"Download failed: {url} returned HTTP {exc.code}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise NetworkError(f"Download failed: {url}: {exc}") from exc

    logger.debug("Saved %s (%d bytes)", target, target.stat().st_size)
    return target
