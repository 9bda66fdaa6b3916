# topmark:header:start
#
#   project      : TokenSnap
#   file         : console.py
#   file_relpath : src/tokensnap/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""User-facing output of the ``tokensnap`` commands.

Rendered snapshots, previews and per-assertion status lines go to stdout; errors go
to stderr. Diagnostics stay with `logging` (see
[`tokensnap.config.logging`][tokensnap.config.logging]).
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

import click

from tokensnap.utils.diff import render_patch

if TYPE_CHECKING:
    from collections.abc import Sequence


class SnapshotConsole:
    """Output sink for one CLI invocation.

    Args:
        enable_color (bool | None): ``True`` keeps ANSI codes, ``False`` strips them,
            ``None`` keeps them only on a terminal.
        out (TextIO | None): Stream for results (defaults to ``sys.stdout``).
        err (TextIO | None): Stream for errors (defaults to ``sys.stderr``).
    """

    def __init__(
        self,
        *,
        enable_color: bool | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to the result stream."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def status(self, source: str, line: int, message: str) -> None:
        """Report the outcome for the assertion starting at ``source:line``."""
        self.print(f"{source}:{line}: {message}")

    def diff(self, lines: Sequence[str] | str) -> None:
        """Preview a unified diff of a rewritten file or rendering."""
        self.print(render_patch(lines), nl=False)

    def error(self, text: str) -> None:
        """Write ``text`` to the error stream in bright red."""
        click.secho(text, file=self.err, color=self.enable_color, fg="bright_red")
