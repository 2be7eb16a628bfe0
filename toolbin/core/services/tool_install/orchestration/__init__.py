"""
L5 Orchestration — Top-level coordinators.

These tie config, strategies and the path registry together into the
user-facing operations.
"""

from toolbin.core.services.tool_install.orchestration.orchestrator import (  # noqa: F401
    InstallResult,
    Installer,
    UpdateReport,
    remove_tree,
)
