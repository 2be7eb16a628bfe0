"""
Domain models — Pydantic types for toolbin.

    from toolbin.core.models import ServerConfig, InstallMethod
"""

from toolbin.core.models.server import InstallMethod, InstallOptions, ServerConfig

__all__ = [
    "InstallMethod",
    "InstallOptions",
    "ServerConfig",
]
