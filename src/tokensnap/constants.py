# topmark:header:start
#
#   project      : TokenSnap
#   file         : constants.py
#   file_relpath : src/tokensnap/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokenSnap Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    TOKENSNAP_VERSION: str = get_version("tokensnap")
except PackageNotFoundError:  # running from a source checkout
    TOKENSNAP_VERSION = "0.0.0"

# Project configuration sources, in lookup order within one directory.
TOKENSNAP_TOML_NAME: str = "tokensnap.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_TABLE: str = "tokensnap"

ENV_LOG_LEVEL: str = "TOKENSNAP_LOG_LEVEL"

# Assertion directives recognized when locating inline placeholders.
DEFAULT_DIRECTIVES: tuple[str, ...] = ("assert_snapshot", "assert_token_snapshot")

# File-based snapshots: <source dir>/<SNAPSHOT_DIR>/<module>__<name>.<SNAPSHOT_EXTENSION>
DEFAULT_SNAPSHOT_DIR: str = "snapshots"
DEFAULT_SNAPSHOT_EXTENSION: str = "snap"
SNAPSHOT_NAME_SEPARATOR: str = "__"

# Entries never listed by directory tree diffs.
DEFAULT_TREE_EXCLUDE: tuple[str, ...] = (".git/", "target/", "__pycache__/")

# Layout of formatted source and of expanded inline literals.
INDENT_WIDTH: int = 4
MAX_WIDTH: int = 100

PLACEHOLDER_SIGIL: str = "@"
