# topmark:header:start
#
#   project      : TokenSnap
#   file         : store.py
#   file_relpath : src/tokensnap/snapshot/store.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File-based snapshots.

A named snapshot asserted from ``tests/parse.rs`` as ``my_function`` lives in
``tests/snapshots/parse__my_function.snap``. Its content is the rendered
token tree followed by a newline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tokensnap.config.io import ProjectConfig
from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.constants import SNAPSHOT_NAME_SEPARATOR
from tokensnap.snapshot.render import render
from tokensnap.utils.file import read_source, write_text_atomic

if TYPE_CHECKING:
    from pathlib import Path

    from tokensnap.lang.tokens import TokenTree
    from tokensnap.snapshot.session import CallSite

logger: TokensnapLogger = get_logger(__name__)


def snapshot_path(site: CallSite, name: str, config: ProjectConfig | None = None) -> Path:
    """Return the snapshot file for the assertion ``name`` made at ``site``.

    Args:
        site (CallSite): Where the assertion is made.
        name (str): Snapshot name.
        config (ProjectConfig | None): Snapshot directory and extension (defaults if ``None``).

    Returns:
        Path: ``<source dir>/<snapshot_dir>/<module>__<name>.<extension>``.
    """
    config = config or ProjectConfig()
    filename = f"{site.module_name}{SNAPSHOT_NAME_SEPARATOR}{name}.{config.snapshot_extension}"
    return site.path.parent / config.snapshot_dir / filename


def read_snapshot(path: Path) -> str | None:
    """Return the recorded snapshot at ``path``, or ``None`` when there is none."""
    if not path.is_file():
        return None
    return read_source(path)


def snapshot_content(tokens: TokenTree) -> str:
    """Return the file content recording ``tokens``."""
    return render(tokens) + "\n"


def write_snapshot(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` atomically, creating the snapshot directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    write_text_atomic(path, content)
    logger.info("wrote snapshot %s", path)
