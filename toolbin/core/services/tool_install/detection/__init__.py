"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ from the system but never modify it.
"""

from toolbin.core.services.tool_install.detection.host import (  # noqa: F401
    host_platform,
    require_tool,
)
