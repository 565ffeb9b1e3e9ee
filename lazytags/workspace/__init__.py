"""In-process editor model: buffers, windows and the workspace."""

from __future__ import annotations

from .buffers import Buffer, BufferList, Cursor, clamp_cursor, split_lines
from .window import MODIFIED_MESSAGE, Window, Workspace

__all__ = [
    "Buffer",
    "BufferList",
    "Cursor",
    "MODIFIED_MESSAGE",
    "Window",
    "Workspace",
    "clamp_cursor",
    "split_lines",
]
