# topmark:header:start
#
#   project      : TokenSnap
#   file         : options.py
#   file_relpath : src/tokensnap/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, settings
overrides) and their resolution logic, so commands and groups can stay thin.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

import click

from tokensnap.cli.errors import TokensnapUsageError
from tokensnap.config.logging import TRACE_LEVEL

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v`` / ``-q`` counts.

    Args:
        verbose_count (int): Number of times ``-v`` is passed.
        quiet_count (int): Number of times ``-q`` is passed.

    Returns:
        int: ``verbose_count`` when verbose, ``-quiet_count`` when quiet, else 0.

    Raises:
        TokensnapUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise TokensnapUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    return verbose_count or -quiet_count


def log_level_for_verbosity(verbosity: int) -> int | None:
    """Map program verbosity to a logging level (``None`` keeps the default)."""
    if verbosity >= 3:  # -vvv
        return TRACE_LEVEL
    if verbosity == 2:  # -vv
        return logging.DEBUG
    if verbosity == 1:  # -v
        return logging.INFO
    return None


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f (Callable[P, R]): The Click command function to decorate.

    Returns:
        Callable[P, R]: The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress non-essential output.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --no-color option to a command."""
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        default=False,
        help="Disable ANSI colors in the output.",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --config option to a command."""
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Configuration file (default: discover tokensnap.toml / pyproject.toml).",
    )(f)
    return f


def settings_override_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --format/--no-format and --ignore-docs/--keep-docs to a command.

    Both default to ``None``, meaning "use the project configuration".
    """
    f = click.option(
        "--format/--no-format",
        "format_tokens",
        default=None,
        help="Pretty-print token trees (default from configuration).",
    )(f)
    f = click.option(
        "--ignore-docs/--keep-docs",
        "ignore_docs",
        default=None,
        help="Ignore doc comments when comparing and printing (default from configuration).",
    )(f)
    return f
