# topmark:header:start
#
#   project      : TokenSnap
#   file         : logging.py
#   file_relpath : src/tokensnap/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic logging for TokenSnap.

Every module logs through [`get_logger`][tokensnap.config.logging.get_logger]. On top
of the standard levels there is ``TRACE`` for per-token-tree detail: tier routing,
directive matches and settings frames. Records are written to stderr, prefixed with
the emitting component (``snapshot.patch``, ``lang.syntax``) and colored with yachalk,
so they never mix with snapshots rendered on stdout.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Final, cast

from yachalk import chalk

from tokensnap.constants import ENV_LOG_LEVEL

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

logging.addLevelName(TRACE_LEVEL, "TRACE")


class TokensnapLogger(logging.Logger):
    """Logger with a ``trace`` method below ``debug``."""

    def trace(self, msg: object, *args: object) -> None:
        """Log ``msg % args`` at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, stacklevel=2)


logging.setLoggerClass(TokensnapLogger)

_PACKAGE_PREFIX: Final[str] = "tokensnap."

LOG_FORMAT: Final[str] = "[%(levelname)s] %(component)s: %(message)s"
DEBUG_LOG_FORMAT: Final[str] = (
    "[%(levelname)s] %(component)s:%(lineno)d %(funcName)s: %(message)s"
)

# Lowest level first; a record takes the style of the last threshold it reaches.
_LEVEL_STYLES: Final = (
    (TRACE_LEVEL, chalk.blue),
    (logging.DEBUG, chalk.gray),
    (logging.INFO, chalk.green),
    (logging.WARNING, chalk.yellow),
    (logging.ERROR, chalk.red),
    (logging.CRITICAL, chalk.red_bright),
)


class DiagnosticFormatter(logging.Formatter):
    """Formatter naming the TokenSnap component and coloring by level."""

    def format(self, record: logging.LogRecord) -> str:
        """Format ``record``, exposing its short logger name as ``component``.

        Args:
            record (logging.LogRecord): The record to format.

        Returns:
            str: The colored line.
        """
        setattr(record, "component", record.name.removeprefix(_PACKAGE_PREFIX))
        message = super().format(record)
        style = chalk.dim
        for threshold, level_style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                style = level_style
        return style(message)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``TOKENSNAP_LOG_LEVEL``, or None.

    Accepts level names in any case (``trace``, ``DEBUG``, ``warn``) and numeric
    values. Unknown names are ignored.
    """
    value = os.environ.get(ENV_LOG_LEVEL, "").strip().upper()
    if not value:
        return None
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value)
    return level if isinstance(level, int) else None


def setup_logging(level: int | None = None) -> None:
    """Send diagnostics at ``level`` and above to stderr.

    Args:
        level (int | None): Threshold; ``None`` consults the environment and falls back
            to CRITICAL, which keeps normal runs silent.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        DiagnosticFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    )
    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> TokensnapLogger:
    """Return the TokenSnap logger for module ``name``."""
    return cast("TokensnapLogger", logging.getLogger(name))
