"""
Tool Install — Installer dispatcher (strategies faked, real filesystem).
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from toolbin.core.models.server import InstallMethod
from toolbin.core.services.tool_install.domain.errors import (
    ConfigError,
    InstallError,
    ProcessError,
    StateError,
)
from toolbin.core.services.tool_install.execution.path_registry import PathRegistry
from toolbin.core.services.tool_install.orchestration.orchestrator import (
    Installer,
    UpdateReport,
    remove_tree,
)

BASE_PATH = "/usr/local/bin:/usr/bin"


def _path(environ: dict) -> list[str]:
    return environ["PATH"].split(os.pathsep)


# ── State ─────────────────────────────────────────────────────


class TestInstalledState:

    def test_missing_dir(self, installer: Installer) -> None:
        assert not installer.is_installed("alpha")

    def test_empty_dir_is_not_installed(self, installer: Installer, install_root: Path) -> None:
        (install_root / "alpha").mkdir()
        assert not installer.is_installed("alpha")

    def test_hidden_entries_only(self, installer: Installer, install_root: Path) -> None:
        (install_root / "alpha").mkdir()
        (install_root / "alpha" / ".partial").write_text("")
        assert not installer.is_installed("alpha")

    def test_list(self, installer: Installer, install_root: Path) -> None:
        installer.install("beta")
        # Orphan: installed but no longer configured
        (install_root / "stale").mkdir()
        (install_root / "stale" / "bin").mkdir()
        (install_root / ".cache").mkdir()

        listing = installer.list()
        assert listing["available"] == ["alpha", "beta", "gamma"]
        assert listing["installed"] == ["beta", "stale"]

    def test_list_without_root(self, store, registry, tmp_path: Path) -> None:
        installer = Installer(store, registry, tmp_path / "nowhere")
        assert installer.list()["installed"] == []


# ── Install ───────────────────────────────────────────────────


class TestInstall:

    def test_install_registers_paths(self, installer, install_root, environ) -> None:
        result = installer.install("alpha")

        assert result.name == "alpha"
        assert result.method == "npm"
        assert result.install_dir == install_root / "alpha"
        assert result.paths_added == 1
        assert (install_root / "alpha" / "bin" / "alpha").is_file()
        assert _path(environ)[-1] == str((install_root / "alpha" / "bin").resolve())

    def test_glob_path_dirs(self, installer, install_root, environ) -> None:
        result = installer.install("gamma")
        # share/man does not exist, so only the glob match is added
        assert result.paths_added == 1
        assert str((install_root / "gamma" / "gamma_1.0" / "bin").resolve()) in _path(environ)

    def test_reinstall_replaces_copy(self, installer, install_root, environ) -> None:
        installer.install("alpha")
        leftover = install_root / "alpha" / "old-file"
        leftover.write_text("x")

        installer.install("alpha")

        assert not leftover.exists()
        assert (install_root / "alpha" / "bin" / "alpha").is_file()
        entry = str((install_root / "alpha" / "bin").resolve())
        assert _path(environ).count(entry) == 1

    def test_result_to_dict(self, installer) -> None:
        data = installer.install("beta").to_dict()
        assert data["name"] == "beta"
        assert data["method"] == "go"
        assert data["paths_added"] == 1

    def test_unknown_server_fails_validation(self, installer, fake_strategies) -> None:
        with pytest.raises(InstallError) as info:
            installer.install("nope")

        err = info.value
        assert err.phase == "validation"
        assert err.operation == "install"
        assert isinstance(err.cause, ConfigError)
        assert str(err).startswith("install nope failed during validation:")
        assert fake_strategies.calls == []

    def test_strategy_failure_is_wrapped(self, installer, fake_strategies, environ) -> None:
        fake_strategies.fail_for.add("beta")

        with pytest.raises(InstallError) as info:
            installer.install("beta")

        err = info.value
        assert err.name == "beta"
        assert err.phase == "go install"
        assert isinstance(err.cause, ProcessError)
        assert "fake exited with code 2" in str(err)
        assert environ["PATH"] == BASE_PATH


# ── Update ────────────────────────────────────────────────────


class TestUpdate:

    def test_not_installed(self, installer, install_root, fake_strategies, environ) -> None:
        with pytest.raises(StateError) as info:
            installer.update("alpha")

        assert info.value.name == "alpha"
        assert "not installed" in str(info.value)
        assert fake_strategies.calls == []
        assert not (install_root / "alpha").exists()
        assert environ["PATH"] == BASE_PATH

    def test_update_reinstalls(self, installer, fake_strategies, environ) -> None:
        installer.install("alpha")
        path_before = environ["PATH"]

        result = installer.update("alpha")

        assert result.name == "alpha"
        assert fake_strategies.calls == ["alpha", "alpha"]
        assert environ["PATH"] == path_before

    def test_failed_update_leaves_tool_removed(self, installer, fake_strategies, environ) -> None:
        installer.install("beta")
        fake_strategies.fail_for.add("beta")

        with pytest.raises(InstallError) as info:
            installer.update("beta")

        assert info.value.operation == "update"
        assert not installer.is_installed("beta")
        assert environ["PATH"] == BASE_PATH


class TestUpdateAll:

    def test_nothing_installed(self, installer) -> None:
        report = installer.update_all()
        assert report.updated == []
        assert report.failed == {}
        assert report.ok

    def test_failure_does_not_stop_sweep(self, installer, fake_strategies) -> None:
        for name in ("alpha", "beta", "gamma"):
            installer.install(name)
        fake_strategies.fail_for.add("beta")

        report = installer.update_all()

        assert report.updated == ["alpha", "gamma"]
        assert list(report.failed) == ["beta"]
        assert "beta" in report.failed["beta"]
        assert not report.ok
        assert report.summary() == "2/3 updated, 1 failed"

    def test_blank_stderr_failure_is_isolated(self, installer, fake_strategies, monkeypatch) -> None:
        for name in ("alpha", "beta", "gamma"):
            installer.install(name)

        def fail(spec):
            raise ProcessError("go", 1, "\n")

        monkeypatch.setattr(fake_strategies.get(InstallMethod.GO), "install", fail)

        report = installer.update_all()

        assert report.updated == ["alpha", "gamma"]
        assert report.failed == {"beta": "update beta failed during go install: go exited with code 1"}

    def test_report_to_dict(self) -> None:
        report = UpdateReport(updated=["a"], failed={"b": "boom"})
        assert report.to_dict() == {"ok": False, "updated": ["a"], "failed": {"b": "boom"}}


# ── Uninstall ─────────────────────────────────────────────────


class TestUninstall:

    def test_round_trip(self, installer, install_root, environ) -> None:
        installer.install("gamma")
        assert environ["PATH"] != BASE_PATH

        removed = installer.uninstall("gamma")

        assert removed == 1
        assert environ["PATH"] == BASE_PATH
        assert not (install_root / "gamma").exists()

    def test_not_installed(self, installer) -> None:
        with pytest.raises(StateError):
            installer.uninstall("alpha")

    def test_orphan_is_still_removed(self, installer, install_root) -> None:
        orphan = install_root / "stale"
        (orphan / "bin").mkdir(parents=True)

        assert installer.uninstall("stale") == 0
        assert not orphan.exists()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_read_only_files(self, installer, install_root) -> None:
        installer.install("beta")
        cache = install_root / "beta" / "pkg" / "mod"
        cache.mkdir(parents=True)
        (cache / "go.mod").write_text("module x\n")
        (cache / "go.mod").chmod(stat.S_IRUSR)
        cache.chmod(stat.S_IRUSR | stat.S_IXUSR)

        installer.uninstall("beta")
        assert not (install_root / "beta").exists()


class TestRemoveTree:

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_read_only_directory(self, tmp_path: Path) -> None:
        locked = tmp_path / "a" / "b"
        locked.mkdir(parents=True)
        (locked / "f").write_text("x")
        locked.chmod(stat.S_IRUSR | stat.S_IXUSR)

        remove_tree(tmp_path / "a")
        assert not (tmp_path / "a").exists()


# ── setup_paths ───────────────────────────────────────────────


class TestSetupPaths:

    def test_registers_installed_tools(self, store, install_root, fake_strategies) -> None:
        first_env = {"PATH": BASE_PATH}
        first = Installer(
            store, PathRegistry(store, install_root, environ=first_env),
            install_root, strategies=fake_strategies,
        )
        first.install("alpha")
        first.install("gamma")

        # A fresh shell: tools on disk, nothing on PATH
        env = {"PATH": BASE_PATH}
        fresh = Installer(
            store, PathRegistry(store, install_root, environ=env),
            install_root, strategies=fake_strategies,
        )
        assert fresh.setup_paths() == 2
        assert env["PATH"] == first_env["PATH"]

    def test_idempotent(self, installer, environ) -> None:
        installer.install("alpha")
        before = environ["PATH"]

        assert installer.setup_paths() == 0
        assert environ["PATH"] == before

    def test_skips_orphans(self, installer, install_root, environ) -> None:
        (install_root / "stale" / "bin").mkdir(parents=True)
        assert installer.setup_paths() == 0
        assert environ["PATH"] == BASE_PATH
