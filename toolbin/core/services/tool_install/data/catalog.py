"""
L0 Data — Bundled server catalog.

The default install specifications shipped with toolbin. A user config
file overlays these by name. Pure data, no logic.

Keys use the on-disk spellings (``install-method``, ``path-dirs``) so a
record can be copied into ``servers.yml`` verbatim.
"""

from __future__ import annotations


DEFAULT_SERVERS: dict[str, dict] = {

    # ── npm ─────────────────────────────────────────────────────

    "pyright": {
        "description": "Static type checker and language server for Python",
        "install-method": "npm",
        "source": "pyright",
        "executable": "node_modules/.bin/pyright-langserver",
        "path-dirs": ["node_modules/.bin"],
    },
    "typescript-language-server": {
        "description": "TypeScript and JavaScript language server",
        "install-method": "npm",
        "source": "typescript-language-server",
        "executable": "node_modules/.bin/typescript-language-server",
        "path-dirs": ["node_modules/.bin"],
    },
    "bash-language-server": {
        "description": "Language server for Bash",
        "install-method": "npm",
        "source": "bash-language-server",
        "executable": "node_modules/.bin/bash-language-server",
        "path-dirs": ["node_modules/.bin"],
    },

    # ── pip ─────────────────────────────────────────────────────

    "ruff": {
        "description": "Python linter and formatter",
        "install-method": "pip",
        "source": "ruff",
        "executable": "venv/bin/ruff",
        "path-dirs": ["venv/bin", "venv/Scripts"],
    },
    "cmake-language-server": {
        "description": "CMake language server",
        "install-method": "pip",
        "source": "cmake-language-server",
        "executable": "venv/bin/cmake-language-server",
        "path-dirs": ["venv/bin", "venv/Scripts"],
    },

    # ── go ──────────────────────────────────────────────────────

    "gopls": {
        "description": "Official Go language server",
        "install-method": "go",
        "source": "golang.org/x/tools/gopls",
        "executable": "bin/gopls",
        "path-dirs": ["bin"],
    },

    # ── gem ─────────────────────────────────────────────────────

    "solargraph": {
        "description": "Ruby language server",
        "install-method": "gem",
        "source": "solargraph",
        "executable": "bin/solargraph",
        "path-dirs": ["bin"],
    },

    # ── dotnet ──────────────────────────────────────────────────

    "csharp-ls": {
        "description": "Roslyn-based C# language server",
        "install-method": "dotnet",
        "source": "csharp-ls",
        "executable": "csharp-ls",
        "path-dirs": ["."],
    },

    # ── coursier ────────────────────────────────────────────────

    "metals": {
        "description": "Scala language server",
        "install-method": "coursier",
        "source": "metals",
        "executable": "metals",
        "path-dirs": ["."],
    },

    # ── github releases ─────────────────────────────────────────

    "clangd": {
        "description": "C/C++ language server from the LLVM project",
        "install-method": "github",
        "source": "clangd/clangd",
        "executable": "clangd_*/bin/clangd",
        "path-dirs": ["clangd_*/bin"],
    },
    "omnisharp": {
        "description": "C# language server (stdio build)",
        "install-method": "github",
        "source": "OmniSharp/omnisharp-roslyn",
        "executable": "OmniSharp",
        "path-dirs": ["."],
    },
    "lua-language-server": {
        "description": "Lua language server",
        "install-method": "github",
        "source": "LuaLS/lua-language-server",
        "executable": "bin/lua-language-server",
        "path-dirs": ["bin"],
    },
    "marksman": {
        "description": "Markdown language server",
        "install-method": "github",
        "source": "artempyanykh/marksman",
        "executable": "marksman",
        "path-dirs": ["."],
    },
    "taplo": {
        "description": "TOML toolkit and language server",
        "install-method": "github",
        "source": "tamasfe/taplo",
        "executable": "taplo",
        "path-dirs": ["."],
    },

    # ── plain downloads ─────────────────────────────────────────

    "terraform-ls": {
        "description": "Terraform language server",
        "install-method": "binary",
        "source": (
            "https://releases.hashicorp.com/terraform-ls/0.34.3/"
            "terraform-ls_0.34.3_linux_amd64.zip"
        ),
        "executable": "terraform-ls",
        "path-dirs": ["."],
    },
    "zls": {
        "description": "Zig language server",
        "install-method": "binary",
        "source": (
            "https://builds.zigtools.org/"
            "zls-linux-x86_64-0.13.0.tar.xz"
        ),
        "executable": "zls",
        "path-dirs": ["."],
    },
}
