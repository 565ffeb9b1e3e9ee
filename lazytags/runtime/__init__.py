"""Tag history, options and the caller-facing tag commands.

Submodules are imported directly; ``tag_commands`` pulls in the matcher and
workspace and is kept out of this package's import path to avoid cycles.
"""

from __future__ import annotations
