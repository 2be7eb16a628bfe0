"""
L2 Resolver — GitHub release asset resolution.

Turns an ``owner/repo`` source into the download URL of the release
asset that best matches this host, using the latest-release endpoint
of the GitHub REST API.
"""

from __future__ import annotations

import json
import logging
import os
import re
import urllib.error
import urllib.request
from typing import Any

from toolbin.core.services.tool_install.data.constants import (
    GITHUB_API_URL,
    METADATA_TIMEOUT,
    USER_AGENT,
)
from toolbin.core.services.tool_install.detection.host import host_platform
from toolbin.core.services.tool_install.domain.asset_scoring import ReleaseAsset, select_asset
from toolbin.core.services.tool_install.domain.errors import (
    ConfigError,
    FormatError,
    NetworkError,
)

logger = logging.getLogger(__name__)

_REPO_RE = re.compile(r"^[\w.-]+/[\w.-]+$")


def _api_headers() -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": USER_AGENT,
    }
    token = os.environ.get("TOOLBIN_GITHUB_TOKEN") or os.environ.get("GITHUB_TOKEN")
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def fetch_latest_release(repo: str, *, timeout: int = METADATA_TIMEOUT) -> dict[str, Any]:
    """Fetch latest-release metadata for ``repo``.

    Args:
        repo: GitHub repo in ``owner/repo`` format.
        timeout: HTTP request timeout in seconds.

    Returns:
        The decoded release JSON object.

    Raises:
        ConfigError: If ``repo`` is not ``owner/repo``.
        NetworkError: If the API is unreachable or answers with an error.
        FormatError: If the body is not a JSON object.
    """
    if not _REPO_RE.match(repo):
        raise ConfigError(f"GitHub source must be 'owner/repo', got '{repo}'")

    base = os.environ.get("TOOLBIN_GITHUB_API", GITHUB_API_URL).rstrip("/")
    api_url = f"{base}/repos/{repo}/releases/latest"
    logger.info("Fetching latest release from %s", api_url)

    req = urllib.request.Request(api_url, headers=_api_headers())
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read()
    except urllib.error.HTTPError as exc:
        raise NetworkError(
            f"Failed to fetch release for {repo}: HTTP {exc.code} {exc.reason}"
        ) from exc
    except (urllib.error.URLError, OSError) as exc:
        raise NetworkError(f"Failed to fetch release for {repo}: {exc}") from exc

    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise FormatError(f"Invalid release JSON for {repo}: {exc}") from exc

    if not isinstance(data, dict):
        raise FormatError(f"Expected a JSON object for {repo}, got {type(data).__name__}")
    return data


def extract_assets(release: dict[str, Any]) -> list[ReleaseAsset]:
    """Pull ``(name, url)`` pairs out of a release payload, in API order.

    Raises:
        FormatError: If the asset list is malformed or has no usable assets.
    """
    raw_assets = release.get("assets") or []
    if not isinstance(raw_assets, list):
        raise FormatError(f"Malformed release payload: 'assets' is a {type(raw_assets).__name__}")

    assets: list[ReleaseAsset] = []
    for item in raw_assets:
        if not isinstance(item, dict):
            raise FormatError(f"Malformed release payload: asset entry is a {type(item).__name__}")
        name = item.get("name", "")
        url = item.get("browser_download_url") or item.get("download_url", "")
        if name and url:
            assets.append(ReleaseAsset(name=name, url=url))

    if not assets:
        tag = release.get("tag_name", "latest")
        raise FormatError(f"No assets found in release {tag}")
    return assets


def resolve_release_asset(
    repo: str,
    server_name: str,
    *,
    os_name: str | None = None,
    arch: str | None = None,
) -> ReleaseAsset:
    """Fetch the latest release of ``repo`` and pick the asset for this host.

    Args:
        repo: GitHub repo in ``owner/repo`` format.
        server_name: Server being installed (drives per-server penalties).
        os_name: Override the detected host OS family.
        arch: Override the detected host architecture family.

    Returns:
        The winning ``ReleaseAsset`` (with its score filled in).
    """
    host_os, host_arch = host_platform()
    os_name = os_name or host_os
    arch = arch or host_arch

    release = fetch_latest_release(repo)
    assets = extract_assets(release)
    chosen = select_asset(assets, server_name, os_name=os_name, arch=arch)

    for asset in assets:
        logger.debug("  %4d  %s", asset.score, asset.name)
    logger.info(
        "Selected %s from %s %s (score %d, %s/%s)",
        chosen.name, repo, release.get("tag_name", ""), chosen.score, os_name, arch,
    )
    return chosen
