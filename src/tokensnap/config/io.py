# topmark:header:start
#
#   project      : TokenSnap
#   file         : io.py
#   file_relpath : src/tokensnap/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Project configuration: discovery, TOML loading and validation.

TokenSnap reads its project configuration from the nearest directory (walking
up from a start path) holding either:

* ``tokensnap.toml`` (keys at the top level), or
* ``pyproject.toml`` with a ``[tool.tokensnap]`` table.

When both exist in one directory, ``tokensnap.toml`` wins. Example:

```toml
[tool.tokensnap]
format_tokens = true
ignore_docs_for_tokens = false
snapshot_dir = "snapshots"
snapshot_extension = "snap"
directives = ["assert_snapshot", "assert_token_snapshot"]
tree_exclude = [".git/", "target/"]
```

Parsing is done with `tomlkit`. Unknown keys are logged and ignored; values
of the wrong type raise [`ConfigError`][tokensnap.core.errors.ConfigError].
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.config.settings import Settings, set_base_settings
from tokensnap.constants import (
    DEFAULT_DIRECTIVES,
    DEFAULT_SNAPSHOT_DIR,
    DEFAULT_SNAPSHOT_EXTENSION,
    DEFAULT_TREE_EXCLUDE,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_TABLE,
    TOKENSNAP_TOML_NAME,
)
from tokensnap.core.errors import ConfigError

logger: TokensnapLogger = get_logger(__name__)

_BOOL_KEYS: tuple[str, ...] = ("format_tokens", "ignore_docs_for_tokens")
_STR_KEYS: tuple[str, ...] = ("snapshot_dir", "snapshot_extension")
_LIST_KEYS: tuple[str, ...] = ("directives", "tree_exclude")


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Resolved project configuration (defaults for absent keys)."""

    format_tokens: bool = True
    ignore_docs_for_tokens: bool = True
    snapshot_dir: str = DEFAULT_SNAPSHOT_DIR
    snapshot_extension: str = DEFAULT_SNAPSHOT_EXTENSION
    directives: tuple[str, ...] = DEFAULT_DIRECTIVES
    tree_exclude: tuple[str, ...] = DEFAULT_TREE_EXCLUDE
    config_file: Path | None = field(default=None, compare=False)

    @property
    def settings(self) -> Settings:
        """The comparison/printing settings this configuration selects."""
        return Settings(
            format_tokens=self.format_tokens,
            ignore_docs_for_tokens=self.ignore_docs_for_tokens,
        )

    @classmethod
    def from_toml_dict(
        cls, data: dict[str, Any], *, config_file: Path | None = None
    ) -> ProjectConfig:
        """Validate a configuration table.

        Args:
            data (dict[str, Any]): The ``tokensnap`` table (already extracted from
                ``pyproject.toml`` when applicable).
            config_file (Path | None): Source file, for messages.

        Returns:
            ProjectConfig: The validated configuration.

        Raises:
            ConfigError: When a known key holds a value of the wrong type.
        """
        source = str(config_file) if config_file else "<config>"
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key in _BOOL_KEYS:
                if not isinstance(value, bool):
                    raise ConfigError(f"{source}: '{key}' must be a boolean, got {value!r}")
                values[key] = value
            elif key in _STR_KEYS:
                if not isinstance(value, str) or not value:
                    raise ConfigError(
                        f"{source}: '{key}' must be a non-empty string, got {value!r}"
                    )
                values[key] = value
            elif key in _LIST_KEYS:
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigError(f"{source}: '{key}' must be a list of strings, got {value!r}")
                values[key] = tuple(value)
            else:
                logger.warning("%s: ignoring unknown configuration key '%s'", source, key)
        if "directives" in values and not values["directives"]:
            raise ConfigError(f"{source}: 'directives' must not be empty")
        config = cls(config_file=config_file, **values)
        logger.debug("Project configuration from %s: %s", source, config)
        return config


def load_toml_dict(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        dict[str, Any]: The parsed TOML content as plain Python values.

    Raises:
        ConfigError: When the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    except TomlkitParseError as e:
        raise ConfigError(f"invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("dict[str, Any]", data_any) if isinstance(data_any, dict) else {}


def _tool_table(data: dict[str, Any]) -> dict[str, Any] | None:
    tool = data.get("tool", {})
    table = tool.get(PYPROJECT_TOOL_TABLE) if isinstance(tool, dict) else None
    return table if isinstance(table, dict) else None


def discover_config_file(start: Path) -> Path | None:
    """Return the nearest configuration file at or above ``start``.

    Within one directory ``tokensnap.toml`` takes precedence; a
    ``pyproject.toml`` only counts when it has a ``[tool.tokensnap]`` table.

    Args:
        start (Path): File or directory where discovery starts.

    Returns:
        Path | None: The configuration file, or ``None`` when there is none.
    """
    cur: Path = start.resolve()
    if cur.is_file():
        cur = cur.parent
    while True:
        candidate = cur / TOKENSNAP_TOML_NAME
        if candidate.is_file():
            logger.debug("Discovered config file: %s", candidate)
            return candidate
        candidate = cur / PYPROJECT_TOML_NAME
        if candidate.is_file() and _tool_table(load_toml_dict(candidate)) is not None:
            logger.debug("Discovered config file: %s", candidate)
            return candidate
        parent: Path = cur.parent
        if parent == cur:
            return None
        cur = parent


def load_project_config(start: Path | None = None, *, path: Path | None = None) -> ProjectConfig:
    """Load the project configuration.

    Args:
        start (Path | None): Where discovery starts (defaults to the working directory).
        path (Path | None): Explicit configuration file; disables discovery.

    Returns:
        ProjectConfig: The configuration, or the defaults when no file is found.

    Raises:
        ConfigError: When the file is unreadable, invalid, or holds ill-typed values.
    """
    config_file = path if path is not None else discover_config_file(start or Path.cwd())
    if config_file is None:
        logger.debug("No project configuration found; using defaults")
        return ProjectConfig()
    data = load_toml_dict(config_file)
    if config_file.name == PYPROJECT_TOML_NAME:
        table = _tool_table(data)
        if table is None:
            raise ConfigError(f"[tool.{PYPROJECT_TOOL_TABLE}] section missing in {config_file}")
        data = table
    return ProjectConfig.from_toml_dict(data, config_file=config_file)


def apply_project_config(config: ProjectConfig) -> Settings:
    """Seed the process-wide base settings from ``config``.

    Returns:
        Settings: The previous base settings.
    """
    return set_base_settings(config.settings)
