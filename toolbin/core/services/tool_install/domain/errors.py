"""
L1 Domain — Error taxonomy for tool installation.

Every failure raised by the install engine derives from ``ToolbinError``.
Strategy-level errors propagate unmodified to the dispatcher, which wraps
them in ``InstallError`` with the server name and the failing phase.
"""

from __future__ import annotations


class ToolbinError(Exception):
    """Base class for every toolbin failure."""


class ConfigError(ToolbinError):
    """Raised when a server configuration is missing, invalid, or unreadable."""


class ToolNotFoundError(ToolbinError):
    """Raised when a required external executable is not on the host."""

    def __init__(self, tool: str, hint: str = "") -> None:
        self.tool = tool
        message = f"Required tool '{tool}' not found on PATH"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


class ProcessError(ToolbinError):
    """Raised when an external tool exits with a non-zero code."""

    def __init__(self, tool: str, returncode: int, stderr: str = "") -> None:
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr
        message = f"{tool} exited with code {returncode}"
        lines = stderr.strip().splitlines()
        if lines:
            message = f"{message}: {lines[-1]}"
        super().__init__(message)


class NetworkError(ToolbinError):
    """Raised when a metadata fetch or file download fails."""


class FormatError(ToolbinError):
    """Raised for unknown archive formats, corrupt archives, or unusable releases."""


class StateError(ToolbinError):
    """Raised when an operation's installed/not-installed precondition fails."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(message)


class InstallError(ToolbinError):
    """Dispatcher-level failure: wraps the underlying cause with context.

    The message combines the operation, the server name, the phase that
    failed, and the underlying cause.
    """

    def __init__(
        self,
        name: str,
        operation: str,
        phase: str,
        cause: BaseException,
    ) -> None:
        self.name = name
        self.operation = operation
        self.phase = phase
        self.cause = cause
        super().__init__(f"{operation} {name} failed during {phase}: {cause}")
