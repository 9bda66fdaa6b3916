# topmark:header:start
#
#   project      : TokenSnap
#   file         : diff.py
#   file_relpath : src/tokensnap/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diff reporting for snapshot changes.

* [`unified_diff`][tokensnap.utils.diff.unified_diff]: line diff of a file
  before and after a rewrite (``--- Original: <path>`` / ``+++ Updated: <path>``);
* [`DirectoryListing`][tokensnap.utils.diff.DirectoryListing] and
  [`tree_diff`][tokensnap.utils.diff.tree_diff]: diff of the files and
  directories present under a root, e.g. to show which snapshot files a run
  created;
* [`render_patch`][tokensnap.utils.diff.render_patch]: colorized preview of
  a diff for terminal output.
"""

from __future__ import annotations

import difflib
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern
from yachalk import chalk

from tokensnap.config.logging import TokensnapLogger, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger: TokensnapLogger = get_logger(__name__)


def _diff(before: list[str], after: list[str], fromfile: str, tofile: str, context: int) -> str:
    lines = difflib.unified_diff(
        before, after, fromfile=fromfile, tofile=tofile, n=context, lineterm=""
    )
    text = "\n".join(lines)
    return text + "\n" if text else ""


def unified_diff(
    before: str,
    after: str,
    *,
    path: str | Path | None = None,
    context: int = 3,
) -> str:
    """Return a unified diff between two versions of a text.

    Args:
        before (str): Original text.
        after (str): Updated text.
        path (str | Path | None): Display path used in the headers.
        context (int): Number of context lines around each change.

    Returns:
        str: The diff (newline-terminated), or an empty string when the texts are equal.
    """
    if before == after:
        return ""
    suffix = f": {Path(path).as_posix()}" if path is not None else ""
    return _diff(
        before.splitlines(),
        after.splitlines(),
        f"Original{suffix}",
        f"Updated{suffix}",
        context,
    )


@dataclass(frozen=True, slots=True)
class DirectoryListing:
    """Sorted relative POSIX paths of the files and directories under ``root``."""

    root: Path
    entries: tuple[str, ...]

    @classmethod
    def from_path(cls, root: Path, *, exclude: Iterable[str] = ()) -> DirectoryListing:
        """List ``root`` recursively.

        Args:
            root (Path): Directory to list.
            exclude (Iterable[str]): Gitignore-style patterns of entries to leave out;
                excluded directories are not descended into.

        Returns:
            DirectoryListing: The listing, in tree order.
        """
        spec: PathSpec = PathSpec.from_lines(GitWildMatchPattern, list(exclude))
        entries: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            base = Path(dirpath).relative_to(root)
            kept: list[str] = []
            for name in sorted(dirnames):
                rel = (base / name).as_posix()
                if spec.match_file(rel + "/"):
                    logger.trace("tree listing: excluded directory %s", rel)
                    continue
                kept.append(name)
                entries.append(rel)
            # Prune in place so os.walk skips excluded directories
            dirnames[:] = kept
            for name in filenames:
                rel = (base / name).as_posix()
                if spec.match_file(rel):
                    logger.trace("tree listing: excluded file %s", rel)
                    continue
                entries.append(rel)
        entries.sort(key=lambda entry: PurePosixPath(entry).parts)
        logger.debug("listed %d entries under %s", len(entries), root)
        return cls(root, tuple(entries))

    def lines(self) -> list[str]:
        """Return the entries indented by two spaces per path component."""
        return ["  " * len(PurePosixPath(entry).parts) + entry for entry in self.entries]


def tree_diff(before: DirectoryListing, after: DirectoryListing) -> str:
    """Return a unified diff of two directory listings.

    Args:
        before (DirectoryListing): Listing taken before the change.
        after (DirectoryListing): Listing taken after the change.

    Returns:
        str: The diff, or an empty string when both listings hold the same entries.
    """
    if before.entries == after.entries:
        return ""
    return _diff(before.lines(), after.lines(), "Original file tree", "Updated file tree", 3)


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): A unified diff as **either** a list/sequence of lines
            **or** a single multiline string.
        show_line_numbers (bool): Whether to prefix output with line numbers.

    Returns:
        str: The formatted, colorized diff preview.
    """
    # Normalize input to a list of lines
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = list(patch)

    # Map diff markers to colors and show control characters explicitly.
    def process_line(line: str) -> str:
        content = line.replace("\r", "\\r").replace("\n", "\\n")
        if line.startswith(("---", "+++")):
            return chalk.bold(content)
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.white(content)

    if show_line_numbers:
        return "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
    return "".join(f"{process_line(line)}\n" for line in lines)
