# topmark:header:start
#
#   project      : TokenSnap
#   file         : exit_codes.py
#   file_relpath : src/tokensnap/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for TokenSnap CLI.

TokenSnap aligns with the BSD `sysexits` convention where practical, so that other tooling
can interpret failures consistently. The one deliberate divergence is `WOULD_CHANGE=2`,
which signals that a snapshot literal would be rewritten if ``--apply`` were given; Click
also uses 2 for its own usage errors, so tests tell the two apart by their output.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for TokenSnap CLI.

    Attributes:
        SUCCESS: Successful execution; snapshots match.
        FAILURE: Snapshots (or token files, or directory trees) differ.
        WOULD_CHANGE: Dry-run: a literal would be rewritten if ``--apply`` were set.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        SYNTAX_ERROR: Input cannot be tokenized. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Invalid or unreadable configuration. Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # deliberate divergence from sysexits; see module docstring

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    SYNTAX_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
