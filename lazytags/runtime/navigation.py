"""Tag navigation history: a bounded, branchable stack per window.

Entries remember where a tag jump started. ``idx`` points just past the entry
of the most recent jump; older/newer steps move it. This module has no editor
concerns: the caller supplies a ``TagStackDeps`` bundle for positions,
lookups and status messages.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from ..tags.errors import TagError

TAGSTACKSIZE = 20

BOTTOM_MESSAGE = "at bottom of tag stack"
TOP_MESSAGE = "at top of tag stack"
EMPTY_MESSAGE = "tag stack empty"
LIST_HEADER = "  # TO tag      FROM line in file"


@dataclass(frozen=True)
class TagPosition:
    """Saved cursor location; ``buffer`` is the buffer number of the file."""

    buffer: int | None
    line: int = 1
    column: int = 0


@dataclass(frozen=True)
class TagStackEntry:
    tagname: str
    position: TagPosition


@dataclass(frozen=True)
class TagStackDeps:
    """Dependency bundle for tag-stack transitions.

    ``resolve`` performs the tag jump and raises ``TagError`` on failure.
    ``goto_position`` returns an error message, or ``None`` once the cursor
    is at the saved position.
    """

    current_position: Callable[[], TagPosition]
    resolve: Callable[[str], object]
    goto_position: Callable[[TagPosition], str | None]
    set_status_message: Callable[[str], None]


class TagStack:
    """Bounded tag history with browser-style branch truncation.

    Invariant: ``0 <= idx <= len(entries) <= capacity``. Every transition
    either commits fully or restores the previous entries and index.
    """

    def __init__(self, capacity: int = TAGSTACKSIZE) -> None:
        self.capacity = max(1, capacity)
        self.entries: list[TagStackEntry] = []
        self.idx = 0

    def __len__(self) -> int:
        return len(self.entries)

    def copy(self) -> TagStack:
        clone = TagStack(self.capacity)
        clone.entries = list(self.entries)
        clone.idx = self.idx
        return clone

    def _snapshot(self) -> tuple[list[TagStackEntry], int]:
        return list(self.entries), self.idx

    def _restore(self, snapshot: tuple[list[TagStackEntry], int]) -> None:
        self.entries, self.idx = list(snapshot[0]), snapshot[1]

    def _jump(self, index: int, deps: TagStackDeps, snapshot: tuple[list[TagStackEntry], int]) -> bool:
        try:
            deps.resolve(self.entries[index].tagname)
        except TagError as exc:
            self._restore(snapshot)
            deps.set_status_message(str(exc))
            return False
        self.idx = index + 1
        return True

    def push_and_jump(self, name: str, count: int, deps: TagStackDeps) -> bool:
        """Jump to tag ``name`` and record where the jump started.

        Forward history above ``idx`` is discarded and the oldest entry is
        evicted when full. An empty ``name`` re-jumps to a newer entry.
        """
        if not name:
            return self.newer_position(count, deps)

        snapshot = self._snapshot()
        del self.entries[self.idx :]
        if len(self.entries) >= self.capacity:
            del self.entries[0]
            self.idx -= 1
        self.entries.append(TagStackEntry(name, deps.current_position()))
        return self._jump(len(self.entries) - 1, deps, snapshot)

    def older_position(self, count: int, deps: TagStackDeps) -> bool:
        """Return to the position saved ``count`` entries below ``idx``."""
        if not self.entries:
            deps.set_status_message(EMPTY_MESSAGE)
            return False

        previous_idx = self.idx
        index = previous_idx - count
        if index < 0:
            deps.set_status_message(BOTTOM_MESSAGE)
            if previous_idx == 0:
                self.idx = 0
                return False
            index = 0
        elif index >= len(self.entries):
            deps.set_status_message(TOP_MESSAGE)
            return False

        error = deps.goto_position(self.entries[index].position)
        if error is not None:
            self.idx = previous_idx
            deps.set_status_message(error)
            return False
        self.idx = index
        return True

    def newer_position(self, count: int, deps: TagStackDeps) -> bool:
        """Jump again to the tag ``count - 1`` entries above ``idx``."""
        if not self.entries:
            deps.set_status_message(EMPTY_MESSAGE)
            return False

        snapshot = self._snapshot()
        index = self.idx + count - 1
        if index >= len(self.entries):
            index = len(self.entries) - 1
            deps.set_status_message(TOP_MESSAGE)
        elif index < 0:
            deps.set_status_message(BOTTOM_MESSAGE)
            self.idx = 0
            return False

        self.entries[index] = replace(self.entries[index], position=deps.current_position())
        return self._jump(index, deps, snapshot)

    def list_lines(self, buffer_name: Callable[[int | None], str | None]) -> list[str]:
        """Report rows for every entry whose file can still be named."""
        lines = [LIST_HEADER]
        for index, entry in enumerate(self.entries):
            name = buffer_name(entry.position.buffer)
            if name is None:
                continue
            marker = ">" if index == self.idx else " "
            lines.append(f"{marker}{index + 1:2d} {entry.tagname:<15} {entry.position.line:4d}  {name}")
        if self.idx == len(self.entries):
            lines.append(">")
        return lines


__all__ = [
    "BOTTOM_MESSAGE",
    "EMPTY_MESSAGE",
    "LIST_HEADER",
    "TAGSTACKSIZE",
    "TOP_MESSAGE",
    "TagPosition",
    "TagStack",
    "TagStackDeps",
    "TagStackEntry",
]
