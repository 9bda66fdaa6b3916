# topmark:header:start
#
#   project      : TokenSnap
#   file         : tree_diff.py
#   file_relpath : src/tokensnap/cli/commands/tree_diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokenSnap `tree-diff` command.

Lists two directory trees and prints the entries added or removed between
them, e.g. to review which snapshot files a test run created.
"""

from __future__ import annotations

from pathlib import Path

import click

from tokensnap.cli.cmd_common import get_config, get_console, get_verbosity
from tokensnap.cli.exit_codes import ExitCode
from tokensnap.utils.diff import DirectoryListing, tree_diff


@click.command(
    name="tree-diff",
    help="Show files and directories added or removed between BEFORE and AFTER.",
)
@click.argument("before", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("after", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--exclude",
    "exclude",
    multiple=True,
    help="Gitignore-style pattern of entries to leave out (repeatable).",
)
def tree_diff_command(*, before: Path, after: Path, exclude: tuple[str, ...]) -> None:
    """Diff two directory listings.

    Args:
        before (Path): Directory as it was.
        after (Path): Directory as it is.
        exclude (tuple[str, ...]): Extra exclusion patterns (added to ``tree_exclude``).
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    patterns = (*get_config(ctx).tree_exclude, *exclude)
    diff = tree_diff(
        DirectoryListing.from_path(before, exclude=patterns),
        DirectoryListing.from_path(after, exclude=patterns),
    )
    if not diff:
        if get_verbosity(ctx) > 0:
            console.print("no differences")
        return
    if get_verbosity(ctx) >= 0:
        console.diff(diff)
    ctx.exit(ExitCode.FAILURE)
