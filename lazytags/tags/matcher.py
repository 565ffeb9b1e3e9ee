"""Resolve a tag name to one location and jump there.

Candidate index files are consulted in order and the first eligible record
wins; there is no ranking. Problems confined to one index file (unreadable,
malformed) move the lookup on to the next file. A matching record whose
defining file is missing stops the lookup.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from contextlib import closing
from dataclasses import dataclass, field
from pathlib import Path

from ..runtime.config import TagOptions
from ..search.vi_regex import (
    PatternError,
    compile_vi_pattern,
    first_nonblank,
    line_command_target,
    search_whole_buffer,
)
from ..workspace.buffers import Cursor
from ..workspace.window import Window, Workspace
from .errors import (
    MissingTargetFileError,
    NoTagsFileError,
    TagFileOpenError,
    TagFormatError,
    TagJumpError,
    TagNotFoundError,
)
from .index import TagFileReader, TagIndexRecord
from .pattern import SearchCommand, fallback_patterns, parse_search_command

logger = logging.getLogger(__name__)

GUESS_MESSAGE = "Couldn't find tag, just guessing!"
PATTERN_NOT_FOUND_MESSAGE = "Can't find tag pattern"


@dataclass(frozen=True)
class TagLocation:
    """Where the first matching record points.

    ``tagname`` is the record's own name, which differs from the requested
    ``name`` when only a prefix is significant.
    """

    name: str
    tagname: str
    path: Path
    command: SearchCommand
    index_path: Path
    line_number: int


@dataclass(frozen=True)
class TagJump:
    location: TagLocation
    window: Window = field(compare=False)
    cursor: Cursor
    warning: str | None = None


def _expand_filename(filename: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(filename)))


class TagMatcher:
    """First-match tag lookup over the configured index files."""

    def __init__(
        self,
        options: TagOptions,
        set_status_message: Callable[[str], None] | None = None,
    ) -> None:
        self.options = options
        self.set_status_message = set_status_message
        self.format_errors: list[TagFormatError] = []

    def _report(self, message: str) -> None:
        if self.set_status_message is not None:
            self.set_status_message(message)

    def reader(self, current_file: Path | None) -> TagFileReader:
        return TagFileReader(
            self.options.tags,
            current_file,
            taglength=self.options.taglength,
            ignorecase=self.options.ignorecase,
        )

    def find(self, name: str, current_file: Path | None) -> TagLocation:
        """Locate ``name`` without touching any buffer or window.

        Raises ``MissingTargetFileError``, ``NoTagsFileError`` or
        ``TagNotFoundError``.
        """
        reader = self.reader(current_file)
        self.format_errors = []
        opened_any = False

        for index_path in reader.candidate_files():
            try:
                records = reader.records(index_path)
            except TagFileOpenError as exc:
                logger.debug("skipping tags file %s: %s", index_path, exc.reason)
                continue
            opened_any = True
            try:
                with closing(records):
                    for record in records:
                        if reader.name_matches(record, name):
                            return self._locate(name, record)
            except TagFormatError as exc:
                logger.warning("%s (line %d)", exc, exc.line)
                self.format_errors.append(exc)
                self._report(str(exc))

        if not opened_any:
            raise NoTagsFileError()
        raise TagNotFoundError(name)

    def _locate(self, name: str, record: TagIndexRecord) -> TagLocation:
        filename, raw_command = record.split_fields()
        command = parse_search_command(raw_command, self.options.magic)

        path = _expand_filename(filename)
        if self.options.tagrelative and not path.is_absolute() and record.index_path.parent != Path("."):
            path = record.index_path.parent / path

        # The current buffer must stay untouched when the target is missing.
        if not path.exists():
            raise MissingTargetFileError(name, path)

        assert record.name is not None
        return TagLocation(
            name=name,
            tagname=record.name,
            path=path,
            command=command,
            index_path=record.index_path,
            line_number=record.line_number,
        )

    def jump(self, location: TagLocation, workspace: Workspace) -> TagJump:
        """Show the defining file and position the cursor on the tag.

        Raises ``TagJumpError`` when the file cannot be shown. A pattern that
        cannot be found is not an error: the jump keeps the file switch and
        carries a warning instead.
        """
        error = workspace.edit_file(location.path)
        if error is not None:
            raise TagJumpError(location.path, error)

        window = workspace.current_window
        command = location.command
        warning: str | None = None
        if command.is_pattern:
            if not self._search(window, command.pattern, forward=command.direction == "/"):
                warning = self._guess(window, location.tagname)
        else:
            window.set_cursor(Cursor(1, 0))
            target = line_command_target(command.text, 1, len(window.lines))
            if target is None:
                warning = f"Not an editor command: {command.text.strip()}"
            else:
                window.set_cursor(Cursor(target, first_nonblank(window.lines[target - 1])))

        return TagJump(location=location, window=window, cursor=window.cursor, warning=warning)

    def resolve(self, name: str, workspace: Workspace) -> TagJump:
        location = self.find(name, workspace.current_file)
        return self.jump(location, workspace)

    def _search(self, window: Window, pattern: str, forward: bool = True) -> bool:
        try:
            regex = compile_vi_pattern(pattern, self.options.magic, self.options.ignorecase)
        except PatternError as exc:
            logger.debug("%s", exc)
            return False
        found = search_whole_buffer(window.lines, regex, forward=forward)
        if found is None:
            return False
        window.set_cursor(Cursor(found.line, found.column))
        return True

    def _guess(self, window: Window, tagname: str) -> str:
        for pattern in fallback_patterns(tagname, self.options.magic):
            if self._search(window, pattern):
                logger.info("tag pattern for %s not found, guessed with %s", tagname, pattern)
                return GUESS_MESSAGE
        return PATTERN_NOT_FOUND_MESSAGE


__all__ = [
    "GUESS_MESSAGE",
    "PATTERN_NOT_FOUND_MESSAGE",
    "TagJump",
    "TagLocation",
    "TagMatcher",
]
