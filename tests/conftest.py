"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from toolbin.core.config.loader import ConfigStore
from toolbin.core.models.server import InstallMethod
from toolbin.core.services.tool_install.domain.errors import ProcessError
from toolbin.core.services.tool_install.execution.path_registry import PathRegistry
from toolbin.core.services.tool_install.execution.strategies import (
    InstallSpec,
    Strategy,
    StrategyRegistry,
)
from toolbin.core.services.tool_install.orchestration.orchestrator import Installer

SERVERS_YML = textwrap.dedent("""\
    servers:
      alpha:
        install-method: npm
        source: alpha-ls
        executable: bin/alpha
        path-dirs: [bin]
      beta:
        install-method: go
        source: example.com/beta
        executable: bin/beta
        path-dirs: [bin]
      gamma:
        install-method: github
        source: owner/gamma
        executable: gamma_*/bin/gamma
        path-dirs: ["gamma_*/bin", "share/man"]
""")


class FakeStrategy(Strategy):
    """Lays out ``bin/<name>`` (or the declared glob dir) without any tool."""

    def __init__(self, method: InstallMethod, fail_for: set[str] | None = None):
        self._method = method
        self.fail_for = fail_for if fail_for is not None else set()
        self.calls: list[str] = []

    @property
    def method(self) -> InstallMethod:
        return self._method

    def install(self, spec: InstallSpec) -> Path:
        self.calls.append(spec.name)
        if spec.name in self.fail_for:
            raise ProcessError("fake", 2, "boom")
        exe = spec.install_dir / spec.executable.replace("*", "1.0")
        exe.parent.mkdir(parents=True, exist_ok=True)
        exe.write_text("#!/bin/sh\n")
        return spec.install_dir


class FakeStrategies(StrategyRegistry):
    """Registry with a ``FakeStrategy`` for every method sharing one fail set."""

    def __init__(self):
        self.fail_for: set[str] = set()
        super().__init__([FakeStrategy(m, self.fail_for) for m in InstallMethod])

    @property
    def calls(self) -> list[str]:
        return [name for m in self.methods() for name in self.get(m).calls]


@pytest.fixture
def servers_yml(tmp_path: Path) -> Path:
    """A user config with three servers."""
    path = tmp_path / "servers.yml"
    path.write_text(SERVERS_YML)
    return path


@pytest.fixture
def store(servers_yml: Path) -> ConfigStore:
    """Config store over ``servers_yml`` without the bundled catalog."""
    return ConfigStore(servers_yml, defaults={})


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    root = tmp_path / "tools"
    root.mkdir()
    return root


@pytest.fixture
def environ() -> dict[str, str]:
    """A private environment so tests never touch the real PATH."""
    return {"PATH": "/usr/local/bin:/usr/bin"}


@pytest.fixture
def registry(store: ConfigStore, install_root: Path, environ: dict) -> PathRegistry:
    return PathRegistry(store, install_root, environ=environ)


@pytest.fixture
def fake_strategies() -> FakeStrategies:
    return FakeStrategies()


@pytest.fixture
def installer(store, registry, install_root, fake_strategies) -> Installer:
    return Installer(store, registry, install_root, strategies=fake_strategies)
