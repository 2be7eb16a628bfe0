"""
Server model — one installable tool as declared in the configuration.

A ``ServerConfig`` is a declaration of intent: "this tool comes from this
source via this back-end, and exposes these directories." Whether it is
installed is never stored here; it is derived from the install directory.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InstallMethod(str, Enum):
    """Supported install back-ends (closed set)."""

    NPM = "npm"
    PIP = "pip"
    GO = "go"
    GEM = "gem"
    DOTNET = "dotnet"
    COURSIER = "coursier"
    GITHUB = "github"
    BINARY = "binary"

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]


class InstallOptions(BaseModel):
    """Optional knobs for download-based methods."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    target_dir: str | None = Field(default=None, alias="target-dir")
    strip_components: int = Field(default=0, ge=0, alias="strip-components")


class ServerConfig(BaseModel):
    """A validated install specification for a single tool."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    method: InstallMethod = Field(alias="install-method")
    source: str
    executable: str
    path_dirs: list[str] = Field(alias="path-dirs", min_length=1)
    options: InstallOptions = Field(default_factory=InstallOptions)
    description: str = ""

    def to_dict(self) -> dict:
        """Serialize with the on-disk key spellings."""
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)
