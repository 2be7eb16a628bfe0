"""
L1 Domain — Release asset scoring and selection.

Pure functions: given asset names and the host platform, pick the
download most likely to be the runnable tool for this machine.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from toolbin.core.services.tool_install.data.constants import (
    ARCH_MARKERS,
    NON_RUNTIME_MARKERS,
    OS_MARKERS,
    SCORE_ARCH_MATCH,
    SCORE_NON_RUNTIME,
    SCORE_OS_MATCH,
    SERVER_PENALTIES,
)
from toolbin.core.services.tool_install.domain.errors import FormatError


@dataclass
class ReleaseAsset:
    """A downloadable artifact attached to a release."""

    name: str
    url: str
    score: int = 0


def _contains(name: str, marker: str) -> bool:
    """Case-insensitive substring test; ``.`` in a marker matches any char."""
    pattern = re.escape(marker.lower()).replace(r"\.", ".")
    return re.search(pattern, name.lower()) is not None


def _contains_any(name: str, markers: tuple[str, ...]) -> bool:
    return any(_contains(name, m) for m in markers)


def score_asset(
    asset_name: str,
    server_name: str,
    *,
    os_name: str,
    arch: str,
) -> int:
    """Score an asset name for the given host. Higher wins.

    The architecture bonus is only granted on top of an OS match: an
    ``amd64`` build for another OS is no better than any other foreign
    build.

    Args:
        asset_name: Release asset filename.
        server_name: Name of the server being installed (some servers
            publish decoy assets that carry a penalty).
        os_name: Host OS family (``linux``, ``macos``, ``windows``).
        arch: Host architecture family (``x64``, ``arm64``).

    Returns:
        Integer score.
    """
    score = 0

    if _contains_any(asset_name, OS_MARKERS.get(os_name, ())):
        score += SCORE_OS_MATCH
        if _contains_any(asset_name, ARCH_MARKERS.get(arch, ())):
            score += SCORE_ARCH_MATCH

    if _contains_any(asset_name, NON_RUNTIME_MARKERS):
        score += SCORE_NON_RUNTIME

    penalty = SERVER_PENALTIES.get(server_name.lower())
    if penalty:
        markers, delta = penalty
        if _contains_any(asset_name, markers):
            score += delta

    return score


def select_asset(
    assets: list[ReleaseAsset],
    server_name: str,
    *,
    os_name: str,
    arch: str,
) -> ReleaseAsset:
    """Pick the highest-scoring asset; the first one wins ties.

    Every asset gets its ``score`` filled in as a side effect so callers
    can report the full ranking.

    Raises:
        FormatError: If ``assets`` is empty.
    """
    if not assets:
        raise FormatError(f"No release assets to choose from for {server_name}")

    for asset in assets:
        asset.score = score_asset(asset.name, server_name, os_name=os_name, arch=arch)

    # max() keeps the first of equal keys
    return max(assets, key=lambda asset: asset.score)
