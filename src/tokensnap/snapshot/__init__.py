# topmark:header:start
#
#   project      : TokenSnap
#   file         : __init__.py
#   file_relpath : src/tokensnap/snapshot/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Snapshot reconciliation: comparison, rendering, inline literals and patching.

* `tokensnap.snapshot.normalize`: tiered parsing and semantic token equality;
* `tokensnap.snapshot.render`: canonical printing of token trees;
* `tokensnap.snapshot.literal`: per-kind layout of inline ``@`` literals;
* `tokensnap.snapshot.placeholder`: locating inline literals in source files;
* `tokensnap.snapshot.patch`: pending updates and atomic source rewrites;
* `tokensnap.snapshot.store`: file-based snapshots;
* `tokensnap.snapshot.session`: the assertion runtime tying it all together.
"""

from __future__ import annotations
