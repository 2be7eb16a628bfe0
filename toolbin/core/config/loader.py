"""
Configuration loader — server install specifications.

The ``ConfigStore`` merges the bundled catalog with an optional user
``servers.yml`` and caches the result until ``reload()`` is called.
Records stay raw (plain dicts) in the cache; ``validate`` turns one
into a typed ``ServerConfig`` or raises a field-specific ``ConfigError``.
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path, PurePosixPath

import yaml
from pydantic import ValidationError

from toolbin.core.models.server import InstallMethod, InstallOptions, ServerConfig
from toolbin.core.services.tool_install.data.catalog import DEFAULT_SERVERS
from toolbin.core.services.tool_install.domain.errors import ConfigError

logger = logging.getLogger(__name__)

# Default user config filename
SERVERS_CONFIG_FILE = "servers.yml"

# Required keys, each with its accepted spellings
_REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "install-method": ("install-method", "install_method", "method"),
    "source": ("source",),
    "executable": ("executable",),
    "path-dirs": ("path-dirs", "path_dirs"),
}


def default_config_path() -> Path:
    """``$TOOLBIN_CONFIG`` or ``~/.config/toolbin/servers.yml``."""
    env = os.environ.get("TOOLBIN_CONFIG")
    if env:
        return Path(env).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "toolbin" / SERVERS_CONFIG_FILE


def _lookup(config: dict, spellings: tuple[str, ...]):
    for key in spellings:
        if key in config:
            return config[key]
    return None


def _normalise_records(data: object, path: Path) -> dict[str, dict]:
    """Accept ``{name: record}``, ``servers: {name: record}`` or ``servers: [record]``."""
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    servers = data.get("servers", data)

    if isinstance(servers, list):
        records: dict[str, dict] = {}
        for i, item in enumerate(servers):
            if not isinstance(item, dict) or not item.get("name"):
                raise ConfigError(f"servers[{i}] in {path} must be a mapping with a 'name'")
            records[str(item["name"])] = {k: v for k, v in item.items() if k != "name"}
        return records

    if not isinstance(servers, dict):
        raise ConfigError(f"'servers' in {path} must be a mapping or a list")

    for name, record in servers.items():
        if not isinstance(record, dict):
            raise ConfigError(f"Server '{name}' in {path} must be a mapping")
    return {str(name): record for name, record in servers.items()}


class ConfigStore:
    """Loads and caches per-tool install specifications.

    Example:
        store = ConfigStore(Path("servers.yml"))
        config = store.require("gopls")
        store.reload()   # pick up edits to servers.yml
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        defaults: dict[str, dict] | None = None,
    ):
        """Initialize the store.

        Args:
            path: Explicit user config file. Must exist. When omitted the
                default location is used if it exists.
            defaults: Base catalog (default: the bundled one).
        """
        self.path = path
        self.defaults = DEFAULT_SERVERS if defaults is None else defaults
        self._cache: dict[str, dict] | None = None

    # ── Lifecycle ───────────────────────────────────────────────

    def load(self) -> dict[str, dict]:
        """Parse the configuration once and cache it.

        Returns:
            Mapping of server name → raw record.

        Raises:
            ConfigError: If the user file is missing, unreadable or invalid.
        """
        if self._cache is None:
            self._cache = self._parse()
        return self._cache

    def reload(self) -> dict[str, dict]:
        """Discard the cache and parse again."""
        self._cache = None
        return self.load()

    def _parse(self) -> dict[str, dict]:
        records = copy.deepcopy(self.defaults)

        path = self.path
        if path is None:
            candidate = default_config_path()
            path = candidate if candidate.is_file() else None
        elif not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

        if path is not None:
            logger.debug("Loading server config from %s", path)
            try:
                raw = path.read_text(encoding="utf-8")
            except OSError as e:
                raise ConfigError(f"Cannot read {path}: {e}") from e

            try:
                data = yaml.safe_load(raw)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e

            user = _normalise_records(data or {}, path)
            records.update(user)
            logger.info("Loaded %d server(s) from %s", len(user), path)

        return records

    # ── Lookup ──────────────────────────────────────────────────

    def get(self, name: str) -> dict | None:
        """Exact-match lookup; ``None`` if ``name`` is not configured."""
        return self.load().get(name)

    def names(self) -> list[str]:
        """All configured server names, sorted."""
        return sorted(self.load())

    def require(self, name: str) -> ServerConfig:
        """Look up and validate ``name`` in one step."""
        return self.validate(name, self.get(name))

    # ── Validation ──────────────────────────────────────────────

    def validate(self, name: str, config: dict | None) -> ServerConfig:
        """Check a raw record and build the typed model.

        Raises:
            ConfigError: Naming the server and the offending field.
        """
        if config is None:
            raise ConfigError(f"No configuration found for server '{name}'")
        if not isinstance(config, dict):
            raise ConfigError(f"Configuration for '{name}' must be a mapping")

        values = {}
        for field, spellings in _REQUIRED_FIELDS.items():
            value = _lookup(config, spellings)
            if value is None or value == "":
                raise ConfigError(f"Server '{name}': missing required field '{field}'")
            values[field] = value

        method = values["install-method"]
        if method not in InstallMethod.values():
            raise ConfigError(
                f"Server '{name}': unsupported install-method '{method}' "
                f"(expected one of {', '.join(InstallMethod.values())})"
            )

        path_dirs = values["path-dirs"]
        if (
            not isinstance(path_dirs, list)
            or not path_dirs
            or not all(isinstance(p, str) for p in path_dirs)
        ):
            raise ConfigError(f"Server '{name}': 'path-dirs' must be a non-empty list of strings")

        for field in ("source", "executable"):
            if not isinstance(values[field], str):
                raise ConfigError(f"Server '{name}': '{field}' must be a string")

        options = config.get("options") or {}
        try:
            parsed_options = InstallOptions.model_validate(options)
        except ValidationError as e:
            raise ConfigError(f"Server '{name}': invalid 'options': {e}") from e

        if parsed_options.target_dir:
            target = PurePosixPath(parsed_options.target_dir)
            if target.is_absolute() or ".." in target.parts:
                raise ConfigError(
                    f"Server '{name}': 'target-dir' must stay inside the install directory"
                )

        return ServerConfig(
            name=name,
            method=InstallMethod(method),
            source=values["source"],
            executable=values["executable"],
            path_dirs=path_dirs,
            options=parsed_options,
            description=str(config.get("description", "")),
        )

    def check_all(self) -> dict[str, str]:
        """Validate every configured server.

        Returns:
            ``{name: error message}`` for invalid entries (empty = all valid).
        """
        errors: dict[str, str] = {}
        for name in self.names():
            try:
                self.require(name)
            except ConfigError as e:
                errors[name] = str(e)
        return errors


def default_install_root() -> Path:
    """``$TOOLBIN_HOME`` or ``~/.local/share/toolbin/tools``."""
    env = os.environ.get("TOOLBIN_HOME")
    if env:
        return Path(env).expanduser()
    base = os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(base) / "toolbin" / "tools"
