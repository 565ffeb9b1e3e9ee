"""Numbered buffer list.

Each loaded file gets a stable buffer number, its text lines and the cursor
position it was last left at. Tag history refers to files by buffer number.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ..highlight import read_text


@dataclass(frozen=True)
class Cursor:
    """Cursor location: 1-based line, 0-based column."""

    line: int = 1
    column: int = 0


def clamp_cursor(lines: list[str], cursor: Cursor) -> Cursor:
    """Clamp ``cursor`` into the text of ``lines``."""
    line = min(max(1, cursor.line), max(1, len(lines)))
    text = lines[line - 1] if lines else ""
    column = min(max(0, cursor.column), max(0, len(text) - 1))
    return Cursor(line, column)


def split_lines(source: str) -> list[str]:
    lines = source.splitlines()
    return lines if lines else [""]


@dataclass
class Buffer:
    """One loaded file."""

    number: int
    path: Path
    lines: list[str] = field(default_factory=lambda: [""])
    cursor: Cursor = field(default_factory=Cursor)
    modified: bool = False


def _normalized(path: Path) -> Path:
    try:
        return path.resolve()
    except (OSError, RuntimeError):
        return Path(os.path.abspath(path))


class BufferList:
    """Buffers keyed by number, looked up by normalized path."""

    def __init__(self) -> None:
        self._buffers: dict[int, Buffer] = {}
        self._next_number = 1

    def __len__(self) -> int:
        return len(self._buffers)

    def __iter__(self):
        return iter(self._buffers.values())

    def get(self, number: int | None) -> Buffer | None:
        if number is None:
            return None
        return self._buffers.get(number)

    def find(self, path: Path) -> Buffer | None:
        target = _normalized(path)
        for buffer in self._buffers.values():
            if buffer.path == target:
                return buffer
        return None

    def add(self, path: Path, lines: list[str]) -> Buffer:
        buffer = Buffer(number=self._next_number, path=_normalized(path), lines=lines)
        self._buffers[buffer.number] = buffer
        self._next_number += 1
        return buffer

    def load(self, path: Path) -> Buffer:
        """Return the buffer for ``path``, reading the file on first use.

        Raises ``OSError`` when the file cannot be read.
        """
        existing = self.find(path)
        if existing is not None:
            return existing
        return self.add(path, split_lines(read_text(path)))

    def wipe(self, number: int) -> None:
        """Forget a buffer; history entries pointing at it lose their name."""
        self._buffers.pop(number, None)

    def name(self, number: int | None) -> str | None:
        """Display name of a buffer, relative to the working directory if possible."""
        buffer = self.get(number)
        if buffer is None:
            return None
        try:
            return str(buffer.path.relative_to(Path.cwd()))
        except ValueError:
            return str(buffer.path)


__all__ = ["Buffer", "BufferList", "Cursor", "clamp_cursor", "split_lines"]
