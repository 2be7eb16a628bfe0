"""
L4 Execution — Package-manager back-ends.

Each strategy delegates to an external package manager and redirects
its output into the tool's own install directory, so nothing lands in
global prefixes and uninstalling is a plain directory removal.
"""

from __future__ import annotations

import logging
import os
from abc import abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from toolbin.core.models.server import InstallMethod
from toolbin.core.services.tool_install.detection.host import require_tool
from toolbin.core.services.tool_install.execution.strategies import InstallSpec, Strategy
from toolbin.core.services.tool_install.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)


@dataclass
class Invocation:
    """One external command of an install recipe."""

    cmd: list[str]
    tool: str
    env: dict[str, str] = field(default_factory=dict)


class PackageManagerStrategy(Strategy):
    """Resolve the package manager, then run its invocations in order."""

    def install(self, spec: InstallSpec) -> Path:
        # Resolve before touching the filesystem
        executable = require_tool(*self.tools)

        spec.install_dir.mkdir(parents=True, exist_ok=True)
        for step in self.invocations(executable, spec):
            run_command(
                step.cmd,
                tool=step.tool,
                env_overrides=step.env or None,
                cwd=str(spec.install_dir),
            )

        logger.info("Installed %s via %s into %s", spec.name, self.method.value, spec.install_dir)
        return spec.install_dir

    @abstractmethod
    def invocations(self, executable: str, spec: InstallSpec) -> list[Invocation]:
        """Commands that install ``spec.source`` into ``spec.install_dir``."""


class NpmStrategy(PackageManagerStrategy):
    """``npm install --prefix <dir>``; binaries land in ``node_modules/.bin``."""

    method = InstallMethod.NPM
    tools = ("npm",)

    def invocations(self, executable: str, spec: InstallSpec) -> list[Invocation]:
        return [Invocation(
            [executable, "install", "--prefix", str(spec.install_dir), spec.source],
            tool="npm",
        )]


class PipStrategy(PackageManagerStrategy):
    """Isolated virtual environment at ``<dir>/venv``."""

    method = InstallMethod.PIP
    tools = ("python3", "python")

    @staticmethod
    def venv_python(venv_dir: Path) -> Path:
        if os.name == "nt":
            return venv_dir / "Scripts" / "python.exe"
        return venv_dir / "bin" / "python"

    def invocations(self, executable: str, spec: InstallSpec) -> list[Invocation]:
        venv_dir = spec.install_dir / "venv"
        python = str(self.venv_python(venv_dir))
        return [
            Invocation([executable, "-m", "venv", str(venv_dir)], tool="venv"),
            Invocation(
                [python, "-m", "pip", "install", "--disable-pip-version-check", spec.source],
                tool="pip",
            ),
        ]


class GoStrategy(PackageManagerStrategy):
    """``go install`` with GOPATH/GOBIN pointed at the install directory."""

    method = InstallMethod.GO
    tools = ("go",)

    def invocations(self, executable: str, spec: InstallSpec) -> list[Invocation]:
        package = spec.source if "@" in spec.source else f"{spec.source}@latest"
        return [Invocation(
            [executable, "install", package],
            tool="go",
            env={
                "GOPATH": str(spec.install_dir),
                "GOBIN": str(spec.install_dir / "bin"),
                # Module cache is read-only by default, which blocks rmtree
                "GOFLAGS": "-modcacherw",
            },
        )]


class GemStrategy(PackageManagerStrategy):
    method = InstallMethod.GEM
    tools = ("gem",)

    def invocations(self, executable: str, spec: InstallSpec) -> list[Invocation]:
        return [Invocation(
            [
                executable, "install", spec.source,
                "--install-dir", str(spec.install_dir),
                "--bindir", str(spec.install_dir / "bin"),
                "--no-document",
            ],
            tool="gem",
        )]


class DotnetStrategy(PackageManagerStrategy):
    method = InstallMethod.DOTNET
    tools = ("dotnet",)

    def invocations(self, executable: str, spec: InstallSpec) -> list[Invocation]:
        return [Invocation(
            [executable, "tool", "install", spec.source, "--tool-path", str(spec.install_dir)],
            tool="dotnet",
        )]


class CoursierStrategy(PackageManagerStrategy):
    method = InstallMethod.COURSIER
    tools = ("cs", "coursier")

    def invocations(self, executable: str, spec: InstallSpec) -> list[Invocation]:
        return [Invocation(
            [executable, "install", spec.source, "--install-dir", str(spec.install_dir)],
            tool="coursier",
        )]
