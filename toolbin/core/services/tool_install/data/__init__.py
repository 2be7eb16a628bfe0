"""
L0 Data — ``__init__.py`` re-exports all pure-data modules.

No logic lives here. Only dicts, lists, and constants.
"""

from toolbin.core.services.tool_install.data.catalog import DEFAULT_SERVERS  # noqa: F401
from toolbin.core.services.tool_install.data.constants import (  # noqa: F401
    ARCH_MARKERS,
    ARCHIVE_SUFFIXES,
    NON_RUNTIME_MARKERS,
    OS_MARKERS,
    SERVER_PENALTIES,
)
