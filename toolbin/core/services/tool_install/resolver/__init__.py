"""
L2 Resolver — ``__init__.py`` re-exports all resolver functions.

These functions turn a declared source into something concrete to
download.
"""

from toolbin.core.services.tool_install.resolver.github_release import (  # noqa: F401
    extract_assets,
    fetch_latest_release,
    resolve_release_asset,
)
