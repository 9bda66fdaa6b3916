# topmark:header:start
#
#   project      : TokenSnap
#   file         : file.py
#   file_relpath : src/tokensnap/utils/file.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File helpers: newline-preserving reads, atomic writes and display paths."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from tokensnap.config.logging import TokensnapLogger, get_logger

logger: TokensnapLogger = get_logger(__name__)


def read_source(path: Path) -> str:
    """Read ``path`` as UTF-8 without translating line endings.

    Offsets computed on the returned text are valid for rewriting the file
    byte-for-byte outside the edited spans.
    """
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def detect_newline(text: str) -> str:
    """Return the first line break found in ``text``.

    Args:
        text (str): Source text read without newline translation.

    Returns:
        str: ``"\\r\\n"``, ``"\\n"`` or ``"\\r"``; ``"\\n"`` when ``text`` has no line break.
    """
    for line in text.splitlines(keepends=True):
        if line.endswith("\r\n"):
            return "\r\n"
        if line.endswith("\n"):
            return "\n"
        if line.endswith("\r"):
            return "\r"
    return "\n"


def write_text_atomic(path: Path, text: str) -> None:
    """Replace the contents of ``path`` with ``text`` atomically.

    The text is written to a temporary file in the same directory which then
    replaces ``path``, so readers see either the old or the new contents. The
    permission bits of an existing file are kept.

    Args:
        path (Path): Destination file.
        text (str): New contents (written verbatim, no newline translation).

    Raises:
        OSError: When the temporary file cannot be written or moved into place.
    """
    directory = path.parent if str(path.parent) else Path(".")
    mode: int | None = None
    if path.exists():
        mode = stat.S_IMODE(path.stat().st_mode)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        if mode is not None:
            os.chmod(tmp, mode)
        os.replace(tmp, path)
    except OSError:
        logger.error("atomic write of %s failed; removing %s", path, tmp)
        Path(tmp).unlink(missing_ok=True)
        raise
    logger.debug("wrote %d characters to %s", len(text), path)


def compute_relpath(file_path: Path, root_path: Path | None = None) -> Path:
    """Compute the relative path from root_path to file_path.

    Args:
        file_path (Path): The file path to compute the relative path for.
        root_path (Path | None): The root path to compute the relative path from
            (defaults to the current working directory).

    Returns:
        Path: The relative path from root_path to file_path.
    """
    resolved_path = file_path.resolve()
    resolved_root = (root_path or Path.cwd()).resolve()

    try:
        # Direct subpath case
        return resolved_path.relative_to(resolved_root)
    except ValueError:
        # Not a direct subpath: fall back to os.path.relpath
        return Path(os.path.relpath(resolved_path, start=resolved_root))
