"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Host OS normalization: ``platform.system().lower()`` → marker family.
_OS_MAP: dict[str, str] = {
    "windows": "windows",
    "darwin": "macos",
    "linux": "linux",
}

# Architecture normalization: ``platform.machine()`` → marker family.
#
# Release assets name the same CPU several ways (Go style amd64/arm64,
# uname style x86_64/aarch64, .NET style x64), so both families collapse
# to a single key here and the marker table below lists every spelling.
_ARCH_MAP: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
}

# Substrings in an asset name that identify a target OS.
OS_MARKERS: dict[str, tuple[str, ...]] = {
    "windows": ("win", "windows", "mingw"),
    "macos": ("osx", "darwin", "mac"),
    "linux": ("linux",),
}

# Substrings in an asset name that identify a target architecture.
ARCH_MARKERS: dict[str, tuple[str, ...]] = {
    "x64": ("x64", "x86_64", "amd64"),
    "arm64": ("arm64", "aarch64"),
}

# ── Asset score deltas ──────────────────────────────────────────

SCORE_OS_MATCH = 10
SCORE_ARCH_MATCH = 5
SCORE_NON_RUNTIME = -20

# Assets that are never the runnable tool itself.
NON_RUNTIME_MARKERS: tuple[str, ...] = ("source", "debug", "symbols")

# Per-server penalties: server name → (markers, delta).
#
# omnisharp publishes separate HTTP and Mono flavoured builds next to the
# stdio one; clangd ships an "indexing-tools" bundle beside the server.
SERVER_PENALTIES: dict[str, tuple[tuple[str, ...], int]] = {
    "omnisharp": (("http", "mono"), -15),
    "clangd": (("indexing.tools",), -30),
}

# ── Archives ────────────────────────────────────────────────────

ZIP_SUFFIXES: tuple[str, ...] = (".zip",)
TAR_GZ_SUFFIXES: tuple[str, ...] = (".tar.gz", ".tgz")
TAR_XZ_SUFFIXES: tuple[str, ...] = (".tar.xz",)
ARCHIVE_SUFFIXES: tuple[str, ...] = ZIP_SUFFIXES + TAR_GZ_SUFFIXES + TAR_XZ_SUFFIXES

# ── Network ─────────────────────────────────────────────────────

GITHUB_API_URL = "https://api.github.com"
USER_AGENT = "toolbin/0.1"
METADATA_TIMEOUT = 15
DOWNLOAD_CHUNK_SIZE = 8192

# Glob metacharacters that turn a path-dirs entry into a pattern.
GLOB_CHARS: tuple[str, ...] = ("*", "?", "[")
