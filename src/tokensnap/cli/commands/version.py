# topmark:header:start
#
#   project      : TokenSnap
#   file         : version.py
#   file_relpath : src/tokensnap/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokenSnap `version` command.

Prints the current TokenSnap version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from tokensnap.cli.cmd_common import get_console, get_verbosity
from tokensnap.constants import TOKENSNAP_VERSION


@click.command(
    name="version",
    help="Show the current version of TokenSnap.",
)
def version_command() -> None:
    """Show the current version of TokenSnap."""
    ctx = click.get_current_context()
    console = get_console(ctx)
    if get_verbosity(ctx) > 0:
        console.print(f"TokenSnap version {TOKENSNAP_VERSION}")
    else:
        console.print(TOKENSNAP_VERSION)
