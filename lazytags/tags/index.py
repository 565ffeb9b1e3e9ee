"""Index-file discovery and record parsing.

One record per line: ``<tag>\\t<defining-file>\\t<search-command>``.
Static tags (``file:tag``) are only eligible while editing ``file``.
Parsing is lazy so a lookup can stop at the first matching record.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .errors import TagFileOpenError, TagFormatError

logger = logging.getLogger(__name__)

TAGS_FILENAME = "tags"
_FIELD_SEPARATORS = " \t"


def _find_separator(text: str, start: int = 0) -> int:
    """Index of the first space or tab at/after ``start``, or ``-1``."""
    for pos in range(start, len(text)):
        if text[pos] in _FIELD_SEPARATORS:
            return pos
    return -1


def _resolved(path: Path) -> Path:
    try:
        return path.resolve()
    except (OSError, RuntimeError):
        return Path(os.path.abspath(path))


def eligible_name(raw_tag: str, current_file: Path | None) -> str | None:
    """Apply the static-scope filter to a raw tag field.

    ``scope:name`` yields ``name`` only when the base name of ``scope`` equals
    the base name of ``current_file``; otherwise the record is excluded.
    """
    if ":" not in raw_tag:
        return raw_tag
    scope, _, name = raw_tag.partition(":")
    if current_file is None or Path(scope).name != current_file.name:
        return None
    return name


def names_match(candidate: str, requested: str, taglength: int = 0, ignorecase: bool = False) -> bool:
    """Compare tag names over ``taglength`` leading characters (0 = whole name)."""
    if ignorecase:
        candidate = candidate.lower()
        requested = requested.lower()
    if taglength > 0:
        return candidate[:taglength] == requested[:taglength]
    return candidate == requested


@dataclass(frozen=True)
class TagIndexRecord:
    """One parsed index line; ``name`` is ``None`` for out-of-scope static tags."""

    raw_tag: str
    name: str | None
    remainder: str
    index_path: Path
    line_number: int

    def split_fields(self) -> tuple[str, str]:
        """Return ``(defining_file, search_command)``.

        The search command keeps its line terminator; the pattern translator
        relies on it to close the pattern.
        """
        end = _find_separator(self.remainder)
        if end == -1:
            raise TagFormatError(self.index_path, self.line_number)
        filename = self.remainder[:end]
        command = self.remainder[end:].lstrip(_FIELD_SEPARATORS)
        return filename, command


def parse_record(line: str, index_path: Path, line_number: int, current_file: Path | None) -> TagIndexRecord:
    """Parse one index line, raising ``TagFormatError`` without a file field."""
    end = _find_separator(line)
    if end == -1:
        raise TagFormatError(index_path, line_number)
    raw_tag = line[:end]
    return TagIndexRecord(
        raw_tag=raw_tag,
        name=eligible_name(raw_tag, current_file),
        remainder=line[end:].lstrip(_FIELD_SEPARATORS),
        index_path=index_path,
        line_number=line_number,
    )


def candidate_tag_files(tags_option: str, current_file: Path | None) -> list[Path]:
    """Ordered index files to consult.

    Names from the space-separated ``tags_option`` come first (``~`` and
    environment references expanded), followed by a ``tags`` file next to
    ``current_file`` unless that path was already listed.
    """
    candidates: list[Path] = []
    tried: set[Path] = set()
    for name in tags_option.split(" "):
        if not name:
            continue
        path = Path(os.path.expandvars(os.path.expanduser(name)))
        candidates.append(path)
        tried.add(_resolved(path))

    if current_file is not None:
        local = current_file.parent / TAGS_FILENAME
        if _resolved(local) not in tried:
            candidates.append(local)
    return candidates


class TagFileReader:
    """Reads index records for one lookup context.

    The context is the file currently being edited (for static tags) and the
    comparison settings used by ``name_matches``.
    """

    def __init__(
        self,
        tags_option: str,
        current_file: Path | None,
        *,
        taglength: int = 0,
        ignorecase: bool = False,
    ) -> None:
        self.tags_option = tags_option
        self.current_file = current_file
        self.taglength = max(0, taglength)
        self.ignorecase = ignorecase

    def candidate_files(self) -> list[Path]:
        return candidate_tag_files(self.tags_option, self.current_file)

    def records(self, index_path: Path) -> Iterator[TagIndexRecord]:
        """Open ``index_path`` and return an iterator over its records.

        Raises ``TagFileOpenError`` right away when the file cannot be opened;
        the iterator raises ``TagFormatError`` at the first malformed line.
        Wrap in ``contextlib.closing`` when stopping early.
        """
        try:
            handle = open(index_path, encoding="utf-8", errors="replace", newline="\n")
        except OSError as exc:
            raise TagFileOpenError(index_path, str(exc)) from exc
        logger.debug("scanning tags file %s", index_path)
        return self._iter_records(handle, index_path)

    def _iter_records(self, handle: TextIO, index_path: Path) -> Iterator[TagIndexRecord]:
        # Records end at LF only; a stray CR stays inside its record.
        with handle:
            for line_number, line in enumerate(handle, start=1):
                yield parse_record(line, index_path, line_number, self.current_file)

    def name_matches(self, record: TagIndexRecord, requested: str) -> bool:
        if record.name is None:
            return False
        return names_match(record.name, requested, self.taglength, self.ignorecase)


__all__ = [
    "TAGS_FILENAME",
    "TagFileReader",
    "TagIndexRecord",
    "candidate_tag_files",
    "eligible_name",
    "names_match",
    "parse_record",
]
