"""Caller-facing tag operations bound to a workspace.

Wires the current window's tag stack to the matcher and the workspace, and
routes notices (stack bounds, lookup failures, guessed positions) to the
status message.
"""

from __future__ import annotations

from collections.abc import Callable

from ..tags.expand import expand_tag_names
from ..tags.matcher import TagJump, TagMatcher
from ..workspace.window import Window, Workspace
from .config import TagOptions
from .navigation import TagStackDeps


class TagCommands:
    """Tag jumps, history steps, history listing and name expansion."""

    def __init__(
        self,
        workspace: Workspace,
        options: TagOptions,
        set_status_message: Callable[[str], None] | None = None,
    ) -> None:
        self.workspace = workspace
        self.options = options
        self.status_message = ""
        self.last_jump: TagJump | None = None
        self._status_sink = set_status_message
        self.matcher = TagMatcher(options, self.set_status_message)

    def set_status_message(self, message: str) -> None:
        self.status_message = message
        if self._status_sink is not None:
            self._status_sink(message)

    def clear_status_message(self) -> None:
        self.status_message = ""

    def _resolve(self, name: str) -> TagJump:
        jump = self.matcher.resolve(name, self.workspace)
        if jump.warning:
            self.set_status_message(jump.warning)
        self.last_jump = jump
        return jump

    def _deps(self, window: Window) -> TagStackDeps:
        return TagStackDeps(
            current_position=window.position,
            resolve=self._resolve,
            goto_position=self.workspace.goto_position,
            set_status_message=self.set_status_message,
        )

    def _share_stack(self, origin: Window) -> None:
        """A window split off by the jump inherits the committed history."""
        current = self.workspace.current_window
        if current is not origin:
            current.tag_stack = origin.tag_stack.copy()

    def jump_to_tag(self, name: str, count: int = 1) -> bool:
        """Jump to ``name``; an empty name re-jumps to a newer history entry."""
        self.clear_status_message()
        window = self.workspace.current_window
        moved = window.tag_stack.push_and_jump(name, count, self._deps(window))
        self._share_stack(window)
        return moved

    def split_and_jump(self, name: str, count: int = 1) -> bool:
        """Like ``jump_to_tag`` but shows the target in a new window."""
        self.workspace.postponed_split = True
        try:
            return self.jump_to_tag(name, count)
        finally:
            self.workspace.postponed_split = False

    def pop(self, count: int = 1) -> bool:
        """Step ``count`` entries back in the current window's tag history."""
        self.clear_status_message()
        window = self.workspace.current_window
        return window.tag_stack.older_position(count, self._deps(window))

    def tag_newer(self, count: int = 1) -> bool:
        self.clear_status_message()
        window = self.workspace.current_window
        moved = window.tag_stack.newer_position(count, self._deps(window))
        self._share_stack(window)
        return moved

    def list_tags(self) -> list[str]:
        return self.workspace.current_window.tag_stack.list_lines(self.workspace.buffers.name)

    def expand(self, pattern: str) -> tuple[list[str], bool]:
        """Tag names matching a vi-style ``pattern`` and whether the list was cut."""
        return expand_tag_names(pattern, self.options, self.workspace.current_file)


__all__ = ["TagCommands"]
