"""
L3 Detection — Host platform and executable lookup.

Read-only probes of the machine toolbin runs on.
"""

from __future__ import annotations

import platform
import shutil

from toolbin.core.services.tool_install.data.constants import _ARCH_MAP, _OS_MAP
from toolbin.core.services.tool_install.domain.errors import ToolNotFoundError


def host_platform() -> tuple[str, str]:
    """Return the host ``(os_family, arch_family)``.

    OS family is ``linux``, ``macos`` or ``windows``; arch family is
    ``x64`` or ``arm64``. Unknown values pass through lowercased.
    """
    system = platform.system().lower()
    machine = platform.machine().lower()
    return _OS_MAP.get(system, system), _ARCH_MAP.get(machine, machine)


def require_tool(*candidates: str) -> str:
    """Resolve the first available executable among ``candidates``.

    Returns:
        Absolute path to the executable.

    Raises:
        ToolNotFoundError: If none of the candidates is on PATH.
    """
    for name in candidates:
        path = shutil.which(name)
        if path:
            return path
    hint = f"tried {', '.join(candidates)}" if len(candidates) > 1 else ""
    raise ToolNotFoundError(candidates[0], hint)
