# topmark:header:start
#
#   project      : TokenSnap
#   file         : __main__.py
#   file_relpath : src/tokensnap/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running TokenSnap via ``python -m tokensnap``.

Delegates to :func:`tokensnap.cli.main.cli`, the single authoritative CLI
entry point.

Examples:
    Pretty-print a token file::

        python -m tokensnap fmt tokens.rs
"""

from __future__ import annotations

from tokensnap.cli.main import cli

if __name__ == "__main__":
    cli()
