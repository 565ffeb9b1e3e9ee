"""Collect every tag name matching a pattern, for completion.

Unlike the lookup there is no early exit: all candidate index files are
scanned and every eligible name is kept in file order, duplicates included.
"""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path

from ..runtime.config import DEFAULT_EXPAND_LIMIT, TagOptions
from ..search.vi_regex import compile_vi_pattern
from .errors import TagFileOpenError, TagFormatError
from .index import TagFileReader

logger = logging.getLogger(__name__)

INITIAL_CAPACITY = 100


def compile_tag_pattern(text: str, options: TagOptions) -> re.Pattern[str]:
    """Compile a vi-style completion pattern with the configured modes."""
    return compile_vi_pattern(text, magic=options.magic, ignorecase=options.ignorecase)


def expand_tags(
    pattern: re.Pattern[str],
    reader: TagFileReader,
    max_matches: int = DEFAULT_EXPAND_LIMIT,
) -> tuple[list[str], bool]:
    """Return ``(names, truncated)`` for every eligible name matching ``pattern``.

    Matches accumulate with a capacity that starts at ``INITIAL_CAPACITY``
    and doubles when full, the last step stopping at ``max_matches``. Once
    ``max_matches`` names are held, a further match returns them with
    ``truncated=True``.
    """
    names: list[str] = []
    capacity = min(INITIAL_CAPACITY, max(1, max_matches))

    for index_path in reader.candidate_files():
        try:
            records = reader.records(index_path)
        except TagFileOpenError as exc:
            logger.debug("skipping tags file %s: %s", index_path, exc.reason)
            continue
        try:
            with closing(records):
                for record in records:
                    if record.name is None or pattern.search(record.name) is None:
                        continue
                    if len(names) == capacity:
                        if capacity >= max_matches:
                            logger.info("tag expansion stopped at %d matches", len(names))
                            return names, True
                        capacity = min(capacity * 2, max_matches)
                    names.append(record.name)
        except TagFormatError as exc:
            logger.warning("%s (line %d)", exc, exc.line)

    return names, False


def expand_tag_names(
    text: str,
    options: TagOptions,
    current_file: Path | None,
) -> tuple[list[str], bool]:
    """Compile ``text`` and expand it against the configured index files."""
    reader = TagFileReader(
        options.tags,
        current_file,
        taglength=options.taglength,
        ignorecase=options.ignorecase,
    )
    return expand_tags(compile_tag_pattern(text, options), reader, options.expand_limit)


__all__ = ["INITIAL_CAPACITY", "compile_tag_pattern", "expand_tag_names", "expand_tags"]
