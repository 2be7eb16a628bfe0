"""
L4 Execution — Install strategy contract and registry.

Every install method maps to exactly one ``Strategy``. The dispatcher
only talks to strategies through this protocol and never branches on
the method name itself.

To add a back-end:
    1. Subclass Strategy
    2. Add a member to ``InstallMethod``
    3. Register it in ``default_strategies()``
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from toolbin.core.models.server import InstallMethod, InstallOptions

logger = logging.getLogger(__name__)


@dataclass
class InstallSpec:
    """Everything a strategy needs to populate one install directory."""

    name: str
    source: str
    executable: str
    install_dir: Path
    options: InstallOptions = field(default_factory=InstallOptions)


class Strategy(ABC):
    """Abstract base class for install back-ends.

    ``install`` either leaves a populated ``spec.install_dir`` behind or
    raises. The required external tool must be resolved before anything
    is written to disk.
    """

    @property
    @abstractmethod
    def method(self) -> InstallMethod:
        """The install method this strategy handles."""

    @property
    def tools(self) -> tuple[str, ...]:
        """Executables this strategy needs on the host (any one of them)."""
        return ()

    def is_available(self) -> bool:
        """True if one of ``tools`` is on PATH (always true without tools)."""
        if not self.tools:
            return True
        return any(shutil.which(t) for t in self.tools)

    @abstractmethod
    def install(self, spec: InstallSpec) -> Path:
        """Install ``spec.source`` into ``spec.install_dir``.

        Returns:
            The populated install directory.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} method={self.method.value!r}>"


class StrategyRegistry:
    """Lookup table from install method to strategy."""

    def __init__(self, strategies: list[Strategy] | None = None):
        self._strategies: dict[InstallMethod, Strategy] = {}
        for strategy in strategies or []:
            self.register(strategy)

    def register(self, strategy: Strategy) -> None:
        """Register a strategy, replacing any previous one for its method."""
        if strategy.method in self._strategies:
            logger.debug("Overwriting strategy for %s", strategy.method.value)
        self._strategies[strategy.method] = strategy

    def get(self, method: InstallMethod) -> Strategy:
        """Return the strategy for ``method``.

        Raises:
            KeyError: If nothing is registered for ``method``.
        """
        return self._strategies[method]

    def methods(self) -> list[InstallMethod]:
        return list(self._strategies)

    def availability(self) -> dict[str, bool]:
        """Map of method name → whether its tool is on this host."""
        return {m.value: s.is_available() for m, s in self._strategies.items()}


def default_strategies() -> StrategyRegistry:
    """Registry with one strategy per ``InstallMethod``."""
    from toolbin.core.services.tool_install.execution.binary_install import (
        BinaryStrategy,
        GithubReleaseStrategy,
    )
    from toolbin.core.services.tool_install.execution.package_managers import (
        CoursierStrategy,
        DotnetStrategy,
        GemStrategy,
        GoStrategy,
        NpmStrategy,
        PipStrategy,
    )

    return StrategyRegistry([
        NpmStrategy(),
        PipStrategy(),
        GoStrategy(),
        GemStrategy(),
        DotnetStrategy(),
        CoursierStrategy(),
        BinaryStrategy(),
        GithubReleaseStrategy(),
    ])
