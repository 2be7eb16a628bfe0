"""
L1 Domain — ``__init__.py`` re-exports all pure domain functions.

These functions have NO subprocess calls, NO filesystem access,
NO network calls. Pure input→output.
"""

from toolbin.core.services.tool_install.domain.asset_scoring import (  # noqa: F401
    ReleaseAsset,
    score_asset,
    select_asset,
)
from toolbin.core.services.tool_install.domain.errors import (  # noqa: F401
    ConfigError,
    FormatError,
    InstallError,
    NetworkError,
    ProcessError,
    StateError,
    ToolbinError,
    ToolNotFoundError,
)
