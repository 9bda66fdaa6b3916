# topmark:header:start
#
#   project      : TokenSnap
#   file         : compare.py
#   file_relpath : src/tokensnap/cli/commands/compare.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokenSnap `compare` command.

Compares the token trees of two files the way snapshot assertions do:
structurally when both parse (ignoring formatting and, by default, doc
comments), by raw token text otherwise. Exits with ``FAILURE`` when they differ.
"""

from __future__ import annotations

import click

from tokensnap.cli.cmd_common import get_console, get_verbosity, read_tokens
from tokensnap.cli.exit_codes import ExitCode
from tokensnap.cli.options import settings_override_options
from tokensnap.config.logging import TokensnapLogger, get_logger
from tokensnap.config.settings import settings_scope
from tokensnap.snapshot.normalize import tokens_equal
from tokensnap.snapshot.render import render
from tokensnap.utils.diff import unified_diff

logger: TokensnapLogger = get_logger(__name__)


@click.command(
    name="compare",
    help="Compare the token trees of RECORDED and ACTUAL semantically.",
)
@click.argument("recorded", type=click.Path(dir_okay=False, allow_dash=True))
@click.argument("actual", type=click.Path(dir_okay=False, allow_dash=True))
@settings_override_options
def compare_command(
    *,
    recorded: str,
    actual: str,
    format_tokens: bool | None,
    ignore_docs: bool | None,
) -> None:
    """Compare two token files.

    Args:
        recorded (str): The recorded token file.
        actual (str): The fresh token file.
        format_tokens (bool | None): Override of the ``format_tokens`` setting.
        ignore_docs (bool | None): Override of the ``ignore_docs_for_tokens`` setting.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    verbosity = get_verbosity(ctx)
    if recorded == "-" and actual == "-":
        raise click.BadParameter("only one input can be read from STDIN", param_hint="ACTUAL")

    left = read_tokens(recorded)
    right = read_tokens(actual)
    with settings_scope(format_tokens=format_tokens, ignore_docs_for_tokens=ignore_docs):
        if tokens_equal(left, right):
            logger.info("%s and %s are equivalent", recorded, actual)
            if verbosity >= 0:
                console.print("equal")
            return
        diff = unified_diff(render(left) + "\n", render(right) + "\n")

    if verbosity >= 0:
        console.print("different")
        console.diff(diff)
    ctx.exit(ExitCode.FAILURE)
