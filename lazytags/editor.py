"""Editor launch helper for opening a resolved tag location.

Runs ``$EDITOR +<line> <file>``, the form vi-family and most other terminal
editors accept. Returns an error message string instead of raising.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path


def launch_editor(target: Path, line: int = 1) -> str | None:
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        return "Cannot edit: $EDITOR is not set."
    cmd = shlex.split(editor_env)
    if not cmd:
        return "Cannot edit: $EDITOR is empty."

    try:
        subprocess.run([*cmd, f"+{max(1, line)}", str(target)], check=False)
    except Exception as exc:
        return f"Failed to launch editor: {exc}"
    return None
