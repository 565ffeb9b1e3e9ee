"""Windows and the workspace that owns them.

A window shows one buffer, has a cursor and owns its tag stack. The
workspace tracks the current window and a pending split request that the
next file switch honors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..runtime.navigation import TAGSTACKSIZE, TagPosition, TagStack
from .buffers import Buffer, BufferList, Cursor, clamp_cursor

logger = logging.getLogger(__name__)

MODIFIED_MESSAGE = "No write since last change (use ! to override)"


@dataclass
class Window:
    buffer: Buffer | None = None
    cursor: Cursor = field(default_factory=Cursor)
    tag_stack: TagStack = field(default_factory=TagStack)

    @property
    def lines(self) -> list[str]:
        return self.buffer.lines if self.buffer is not None else [""]

    @property
    def path(self) -> Path | None:
        return self.buffer.path if self.buffer is not None else None

    def position(self) -> TagPosition:
        number = self.buffer.number if self.buffer is not None else None
        return TagPosition(number, self.cursor.line, self.cursor.column)

    def set_cursor(self, cursor: Cursor) -> None:
        self.cursor = clamp_cursor(self.lines, cursor)

    def show(self, buffer: Buffer) -> None:
        """Display ``buffer`` at its last cursor, remembering ours in the old one."""
        if self.buffer is buffer:
            return
        if self.buffer is not None:
            self.buffer.cursor = self.cursor
        self.buffer = buffer
        self.cursor = clamp_cursor(buffer.lines, buffer.cursor)

    def detach(self) -> None:
        """Stop showing any buffer, remembering our cursor in the old one."""
        if self.buffer is not None:
            self.buffer.cursor = self.cursor
        self.buffer = None
        self.cursor = Cursor()


class Workspace:
    """Buffer list plus ordered windows; one of them is current."""

    def __init__(self, tagstack_size: int = TAGSTACKSIZE) -> None:
        self.tagstack_size = tagstack_size
        self.buffers = BufferList()
        self.windows: list[Window] = [Window(tag_stack=TagStack(tagstack_size))]
        self.current_window = self.windows[0]
        self.postponed_split = False

    @property
    def current_file(self) -> Path | None:
        return self.current_window.path

    def split_window(self) -> Window:
        """Open a new window above the current one showing the same buffer."""
        parent = self.current_window
        window = Window(buffer=parent.buffer, cursor=parent.cursor, tag_stack=parent.tag_stack.copy())
        self.windows.insert(self.windows.index(parent), window)
        self.current_window = window
        return window

    def close_window(self, window: Window, fallback: Window | None = None) -> None:
        if len(self.windows) <= 1 or window not in self.windows:
            return
        self.windows.remove(window)
        if self.current_window is window:
            self.current_window = fallback if fallback in self.windows else self.windows[0]

    def _switch_check(self, target: Buffer | None) -> str | None:
        current = self.current_window.buffer
        if current is not None and current.modified and current is not target:
            return MODIFIED_MESSAGE
        return None

    def edit_file(self, path: Path) -> str | None:
        """Show ``path`` in the current window, honoring a pending split.

        Returns an error message and leaves windows, buffers and cursor as they
        were when the file cannot be shown.
        """
        parent = self.current_window
        split = self.postponed_split
        self.postponed_split = False
        if split:
            self.split_window()

        error = self._switch_check(self.buffers.find(path))
        if error is None:
            try:
                buffer = self.buffers.load(path)
            except OSError as exc:
                logger.debug("cannot load %s: %s", path, exc)
                error = f'Cannot read "{path}"'

        if error is not None:
            if split:
                self.close_window(self.current_window, fallback=parent)
            return error

        self.current_window.show(buffer)
        return None

    def goto_position(self, position: TagPosition) -> str | None:
        """Move the current window to a saved tag position."""
        window = self.current_window
        if position.buffer is None:
            # The jump started in a window showing no file.
            if window.buffer is not None:
                error = self._switch_check(None)
                if error is not None:
                    return error
                window.detach()
        elif window.buffer is None or position.buffer != window.buffer.number:
            buffer = self.buffers.get(position.buffer)
            if buffer is None:
                return f"buffer {position.buffer} not found"
            error = self._switch_check(buffer)
            if error is not None:
                return error
            window.show(buffer)
        window.set_cursor(Cursor(position.line, position.column))
        return None


__all__ = ["MODIFIED_MESSAGE", "Window", "Workspace"]
