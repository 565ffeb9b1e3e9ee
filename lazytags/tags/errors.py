"""Tag lookup failures.

Every exception message is the user-visible notice for that failure.
Only ``MissingTargetFileError``, ``NoTagsFileError``, ``TagNotFoundError`` and
``TagJumpError`` escape a lookup; the others are handled per candidate file.
"""

from __future__ import annotations

from pathlib import Path


class TagError(Exception):
    """Base class for tag lookup and tag jump failures."""


class TagFileOpenError(TagError):
    """An index file could not be opened; the candidate is skipped."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open tags file {path}")


class TagFormatError(TagError):
    """A malformed index line; scanning of that file stops."""

    def __init__(self, path: Path, line: int) -> None:
        self.path = path
        self.line = line
        super().__init__(f"Format error in tags file {path}")


class MissingTargetFileError(TagError):
    """The first matching record names a file that does not exist."""

    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path
        super().__init__(f'File "{path}" does not exist')


class NoTagsFileError(TagError):
    """None of the candidate index files could be opened."""

    def __init__(self) -> None:
        super().__init__("No tags file")


class TagNotFoundError(TagError):
    """Every readable index file was scanned without an eligible match."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("tag not found")


class TagJumpError(TagError):
    """Switching to the defining file failed; prior state is kept."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(reason or f"Cannot edit {path}")


__all__ = [
    "MissingTargetFileError",
    "NoTagsFileError",
    "TagError",
    "TagFileOpenError",
    "TagFormatError",
    "TagJumpError",
    "TagNotFoundError",
]
