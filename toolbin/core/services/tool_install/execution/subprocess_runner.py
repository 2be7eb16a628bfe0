"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for install
operations. Logging, environment handling, and exit-code checking are
centralised here.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass

from toolbin.core.services.tool_install.domain.errors import ProcessError, ToolNotFoundError

logger = logging.getLogger(__name__)

# Keep only the tail of long build logs in results and errors.
_OUTPUT_TAIL = 2000


@dataclass
class CommandResult:
    """Captured outcome of a finished external command."""

    cmd: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    elapsed_ms: int = 0


def run_command(
    cmd: list[str],
    *,
    tool: str | None = None,
    env_overrides: dict[str, str] | None = None,
    cwd: str | None = None,
    timeout: int | None = None,
) -> CommandResult:
    """Run an external command to completion and check its exit code.

    Blocks until the process exits. There is no timeout unless one is
    passed explicitly; package managers enforce their own.

    Args:
        cmd: Command list for ``subprocess.run()``.
        tool: Name used in errors (default: basename of ``cmd[0]``).
        env_overrides: Extra env vars layered over ``os.environ``.
        cwd: Working directory for the command.
        timeout: Seconds before ``TimeoutExpired``.

    Returns:
        ``CommandResult`` for a zero exit code.

    Raises:
        ToolNotFoundError: If the executable cannot be started.
        ProcessError: If the command exits non-zero or times out.
    """
    tool = tool or os.path.basename(cmd[0])

    # ── Environment ──
    env = os.environ.copy()
    if env_overrides:
        for key, value in env_overrides.items():
            env[key] = os.path.expandvars(value)

    # ── Execute ──
    logger.info("Running: %s", " ".join(cmd))
    start = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env,
            cwd=cwd,
        )
    except FileNotFoundError as exc:
        raise ToolNotFoundError(tool) from exc
    except subprocess.TimeoutExpired as exc:
        raise ProcessError(tool, -1, f"timed out after {timeout}s") from exc

    result = CommandResult(
        cmd=list(cmd),
        returncode=proc.returncode,
        stdout=proc.stdout[-_OUTPUT_TAIL:] if proc.stdout else "",
        stderr=proc.stderr[-_OUTPUT_TAIL:] if proc.stderr else "",
        elapsed_ms=int((time.monotonic() - start) * 1000),
    )

    if result.returncode != 0:
        logger.debug("%s failed (exit %d): %s", tool, result.returncode, result.stderr)
        raise ProcessError(tool, result.returncode, result.stderr)

    logger.debug("%s finished in %d ms", tool, result.elapsed_ms)
    return result
