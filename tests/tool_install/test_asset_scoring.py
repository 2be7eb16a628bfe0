"""
Tool Install — release asset scoring and selection.
"""

from __future__ import annotations

import pytest

from toolbin.core.services.tool_install.domain.asset_scoring import (
    ReleaseAsset,
    score_asset,
    select_asset,
)
from toolbin.core.services.tool_install.domain.errors import FormatError

LINUX_X64 = {"os_name": "linux", "arch": "x64"}


def _assets(*names: str) -> list[ReleaseAsset]:
    return [ReleaseAsset(name=n, url=f"https://example.invalid/{n}") for n in names]


class TestScore:

    def test_reference_scores(self) -> None:
        names = [
            "tool-linux-amd64.tar.gz",
            "tool-darwin-amd64.tar.gz",
            "tool-windows-amd64.zip",
            "tool-linux-amd64-debug.tar.gz",
        ]
        assert [score_asset(n, "tool", **LINUX_X64) for n in names] == [15, 0, 0, -5]

    def test_case_insensitive(self) -> None:
        assert score_asset("Tool-Linux-X86_64.TAR.GZ", "tool", **LINUX_X64) == 15

    @pytest.mark.parametrize("os_name, name", [
        ("windows", "tool-win-x64.zip"),
        ("windows", "tool-x86_64-pc-windows-msvc.zip"),
        ("windows", "tool-mingw-x64.zip"),
        ("macos", "tool-osx-x64.tar.gz"),
        ("macos", "tool-x86_64-apple-darwin.tar.gz"),
        ("macos", "tool-mac-x64.zip"),
    ])
    def test_os_markers(self, os_name: str, name: str) -> None:
        assert score_asset(name, "tool", os_name=os_name, arch="x64") == 15

    def test_arm64_markers(self) -> None:
        assert score_asset("tool-linux-aarch64.tar.gz", "tool", os_name="linux", arch="arm64") == 15
        assert score_asset("tool-linux-arm64.tar.gz", "tool", os_name="linux", arch="arm64") == 15
        assert score_asset("tool-linux-amd64.tar.gz", "tool", os_name="linux", arch="arm64") == 10

    @pytest.mark.parametrize("marker", ["source", "debug", "symbols"])
    def test_non_runtime_penalty(self, marker: str) -> None:
        assert score_asset(f"tool-{marker}.tar.gz", "tool", **LINUX_X64) == -20

    def test_omnisharp_penalties(self) -> None:
        assert score_asset("omnisharp-http-linux-x64.tar.gz", "omnisharp", **LINUX_X64) == 0
        assert score_asset("omnisharp-mono.tar.gz", "omnisharp", **LINUX_X64) == -15
        assert score_asset("omnisharp-linux-x64.tar.gz", "omnisharp", **LINUX_X64) == 15
        # Only omnisharp is penalised for these markers
        assert score_asset("other-http-linux-x64.tar.gz", "other", **LINUX_X64) == 15

    def test_clangd_indexing_tools_penalty(self) -> None:
        assert score_asset("clangd-linux-17.zip", "clangd", **LINUX_X64) == 10
        assert score_asset("clangd_indexing_tools-linux-17.zip", "clangd", **LINUX_X64) == -20
        assert score_asset("clangd-indexing.tools-linux.zip", "clangd", **LINUX_X64) == -20

    def test_rules_are_additive(self) -> None:
        name = "omnisharp-mono-linux-x64-symbols.tar.gz"
        assert score_asset(name, "omnisharp", **LINUX_X64) == 10 + 5 - 20 - 15

    def test_deterministic(self) -> None:
        results = {score_asset("tool-linux-amd64.zip", "tool", **LINUX_X64) for _ in range(5)}
        assert results == {15}


class TestSelect:

    def test_reference_selection(self) -> None:
        assets = _assets(
            "tool-linux-amd64.tar.gz",
            "tool-darwin-amd64.tar.gz",
            "tool-windows-amd64.zip",
            "tool-linux-amd64-debug.tar.gz",
        )
        chosen = select_asset(assets, "tool", **LINUX_X64)
        assert chosen.name == "tool-linux-amd64.tar.gz"
        assert [a.score for a in assets] == [15, 0, 0, -5]

    def test_tie_keeps_first(self) -> None:
        assets = _assets("a-linux-x64.tar.gz", "b-linux-x64.zip")
        assert select_asset(assets, "tool", **LINUX_X64).name == "a-linux-x64.tar.gz"

    def test_all_negative_still_selects(self) -> None:
        assets = _assets("tool-source.tar.gz", "tool-debug.tar.gz")
        assert select_asset(assets, "tool", **LINUX_X64).name == "tool-source.tar.gz"

    def test_stable_across_runs(self) -> None:
        names = ["x-darwin-arm64.zip", "x-linux-arm64.zip", "x-linux-x64.zip"]
        first = select_asset(_assets(*names), "x", os_name="linux", arch="arm64").name
        for _ in range(3):
            assert select_asset(_assets(*names), "x", os_name="linux", arch="arm64").name == first
        assert first == "x-linux-arm64.zip"

    def test_empty_raises(self) -> None:
        with pytest.raises(FormatError):
            select_asset([], "tool", **LINUX_X64)
