# topmark:header:start
#
#   project      : TokenSnap
#   file         : fmt.py
#   file_relpath : src/tokensnap/cli/commands/fmt.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokenSnap `fmt` command.

Tokenizes a Rust file (or STDIN) and prints the canonical rendering that a
snapshot of its token tree would record.
"""

from __future__ import annotations

import click

from tokensnap.cli.cmd_common import get_console, read_tokens
from tokensnap.cli.options import settings_override_options
from tokensnap.config.settings import settings_scope
from tokensnap.snapshot.render import render, render_for_literal


@click.command(
    name="fmt",
    help="Print the canonical rendering of the token tree of SOURCE ('-' for STDIN).",
)
@click.argument("source", type=click.Path(dir_okay=False, allow_dash=True))
@settings_override_options
@click.option(
    "--literal",
    is_flag=True,
    default=False,
    help="Render as the content of an inline @{ ... } literal.",
)
def fmt_command(
    *,
    source: str,
    format_tokens: bool | None,
    ignore_docs: bool | None,
    literal: bool,
) -> None:
    """Pretty-print a token file.

    Args:
        source (str): Input file, or ``-`` for STDIN.
        format_tokens (bool | None): Override of the ``format_tokens`` setting.
        ignore_docs (bool | None): Override of the ``ignore_docs_for_tokens`` setting.
        literal (bool): Frame multi-line output as for an inline literal.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    tokens = read_tokens(source)
    with settings_scope(format_tokens=format_tokens, ignore_docs_for_tokens=ignore_docs):
        text = render_for_literal(tokens) if literal else render(tokens)
    console.print(text)
