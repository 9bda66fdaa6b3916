# topmark:header:start
#
#   project      : TokenSnap
#   file         : main.py
#   file_relpath : src/tokensnap/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokenSnap command-line entry point.

Key ideas:
- Group-level options are initialized once, placed into ``ctx.obj``.
- The project configuration is loaded once and seeds the base settings.
- Subcommands share input helpers from `tokensnap.cli.cmd_common`.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

import click

from tokensnap.cli.commands.compare import compare_command
from tokensnap.cli.commands.fmt import fmt_command
from tokensnap.cli.commands.patch import patch_command
from tokensnap.cli.commands.tree_diff import tree_diff_command
from tokensnap.cli.commands.version import version_command
from tokensnap.cli.console import SnapshotConsole
from tokensnap.cli.errors import TokensnapConfigError
from tokensnap.cli.options import (
    common_color_options,
    common_config_options,
    common_verbose_options,
    log_level_for_verbosity,
    resolve_verbosity,
)
from tokensnap.config.io import apply_project_config, load_project_config
from tokensnap.config.logging import (
    TokensnapLogger,
    get_logger,
    resolve_env_log_level,
    setup_logging,
)
from tokensnap.config.settings import set_base_settings
from tokensnap.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

logger: TokensnapLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """Initialize shared state (verbosity, color, configuration) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
        config_path (Path | None): Explicit configuration file, if any.

    Raises:
        TokensnapConfigError: When the configuration cannot be loaded.
    """
    ctx.obj = ctx.obj or {}

    verbosity = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = verbosity

    # The environment wins over -v for internal logging
    level = resolve_env_log_level() or log_level_for_verbosity(verbosity)
    ctx.obj["log_level"] = level
    setup_logging(level=level)

    enable_color: bool | None = False if no_color else None
    ctx.color = enable_color
    console = SnapshotConsole(enable_color=enable_color)
    ctx.obj["console"] = console

    try:
        config = load_project_config(path=config_path)
    except ConfigError as exc:
        raise TokensnapConfigError(str(exc)) from exc
    ctx.obj["config"] = config
    # Base settings are process-wide; restore them when the command finishes
    previous = apply_project_config(config)
    ctx.call_on_close(partial(set_base_settings, previous))


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="TokenSnap: token-tree snapshots for Rust sources.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """Entry point for the TokenSnap CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        config_path=config_path,
    )
    console: SnapshotConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'tokensnap fmt FILE' to pretty-print a token file.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(fmt_command)

cli.add_command(compare_command)

cli.add_command(patch_command)

cli.add_command(tree_diff_command)

if __name__ == "__main__":
    cli()
