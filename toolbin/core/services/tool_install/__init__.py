"""
Tool installation service — package re-exports.

    from toolbin.core.services.tool_install import Installer, PathRegistry

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → domain → resolver → detection → execution →
orchestration).
"""

# ── L0: Data ──
from toolbin.core.services.tool_install.data.catalog import DEFAULT_SERVERS  # noqa: F401

# ── L1: Domain ──
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

# ── L2: Resolver ──
from toolbin.core.services.tool_install.resolver.github_release import (  # noqa: F401
    resolve_release_asset,
)

# ── L3: Detection ──
from toolbin.core.services.tool_install.detection.host import (  # noqa: F401
    host_platform,
    require_tool,
)

# ── L4: Execution ──
from toolbin.core.services.tool_install.execution.archive import extract_archive  # noqa: F401
from toolbin.core.services.tool_install.execution.path_registry import (  # noqa: F401
    PathRegistry,
    expand_path_dirs,
)
from toolbin.core.services.tool_install.execution.strategies import (  # noqa: F401
    StrategyRegistry,
    default_strategies,
)

# ── L5: Orchestration ──
from toolbin.core.services.tool_install.orchestration.orchestrator import (  # noqa: F401
    Installer,
    InstallResult,
    UpdateReport,
)
