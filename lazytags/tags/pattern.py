"""Search-command translation for tag records.

Index files carry either a delimited search pattern (``/.../`` or ``?...?``)
or a direct line command. Patterns written by tag generators are mostly
literal source text, so metacharacters are escaped before the pattern reaches
the vi-style search engine. Everything here is pure and file-independent.
"""

from __future__ import annotations

from dataclasses import dataclass

PATTERN_DELIMITERS = ("/", "?")
EXTENSION_FIELDS_MARKER = ';"'

_LINE_ENDS = ("\r", "\n")
_MAGIC_ESCAPES = frozenset("^*.")


def translate_pattern(raw: str, magic: bool = True) -> str:
    """Translate a raw ``/pattern`` or ``?pattern`` into a literal-safe search.

    The opening delimiter and an immediately following ``^`` are kept as-is.
    ``\\(`` loses its backslash, other backslash pairs are copied, a line end
    is replaced by the delimiter and ends the pattern. A delimiter inside the
    pattern is escaped; as the last character of the line it is dropped.
    ``[``, ``^``, ``*`` and ``.`` are escaped only in magic mode.
    """
    if not raw or raw[0] not in PATTERN_DELIMITERS:
        raise ValueError(f"not a search pattern: {raw!r}")

    delimiter = raw[0]
    out = [delimiter]
    pos = 1
    if raw.startswith("^", 1):
        out.append("^")
        pos = 2

    length = len(raw)
    while pos < length:
        ch = raw[pos]
        following = raw[pos + 1] if pos + 1 < length else ""

        if ch == "\\":
            if following == "(":
                pos += 1
                continue
            if following and following not in _LINE_ENDS:
                out.append(ch + following)
                pos += 2
                continue
            out.append(ch)
        elif ch in _LINE_ENDS:
            out.append(delimiter)
            break
        elif ch == delimiter:
            if following == "" or following in _LINE_ENDS:
                pos += 1
                continue
            out.append("\\" + ch)
        elif ch == "[" or ch in _MAGIC_ESCAPES:
            out.append("\\" + ch if magic else ch)
        else:
            out.append(ch)
        pos += 1

    return "".join(out)


def escape_literal(text: str, magic: bool = True) -> str:
    """Escape ``text`` so a vi-style pattern matches it literally."""
    special = "\\.*[" if magic else "\\"
    return "".join("\\" + ch if ch in special else ch for ch in text)


def fallback_patterns(name: str, magic: bool = True) -> tuple[str, str]:
    """Return the two guesses tried when a record's pattern is stale.

    First a definition starting the line (``^name(``), then any line that
    starts like a declaration and calls ``name(`` later on.
    """
    literal = escape_literal(name, magic)
    if magic:
        return f"^{literal}(", f"^[#A-Za-z_].*{literal}("
    return f"^{literal}(", f"^\\[#A-Za-z_]\\.\\*{literal}("


def _closing_delimiter_index(command: str) -> int | None:
    """Index of the first unescaped delimiter after the opening one."""
    delimiter = command[0]
    pos = 1
    while pos < len(command):
        ch = command[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == delimiter:
            return pos
        if ch in _LINE_ENDS:
            return None
        pos += 1
    return None


def strip_extension_fields(command: str) -> str:
    """Drop ctags ``;"`` extension fields trailing a search command.

    Patterns are cut after their closing delimiter, line commands at the
    marker. Commands without the marker are returned unchanged.
    """
    if EXTENSION_FIELDS_MARKER not in command:
        return command
    if command[:1] in PATTERN_DELIMITERS:
        close = _closing_delimiter_index(command)
        if close is None or not command.startswith(EXTENSION_FIELDS_MARKER, close + 1):
            return command
        return command[: close + 1]
    return command.split(EXTENSION_FIELDS_MARKER, 1)[0]


@dataclass(frozen=True)
class SearchCommand:
    """Executable location command of a tag record."""

    text: str
    is_pattern: bool

    @property
    def direction(self) -> str:
        """``/`` (forward) or ``?`` (backward); empty for line commands."""
        return self.text[0] if self.is_pattern else ""

    @property
    def pattern(self) -> str:
        """Pattern body without the surrounding delimiters."""
        if not self.is_pattern:
            return ""
        body = self.text[1:]
        if body.endswith(self.direction):
            backslashes = len(body[:-1]) - len(body[:-1].rstrip("\\"))
            if backslashes % 2 == 0:
                body = body[:-1]
        return body


def parse_search_command(field: str, magic: bool = True) -> SearchCommand:
    """Build the executable command for a raw search-command field."""
    field = strip_extension_fields(field.lstrip(" \t"))
    if field[:1] in PATTERN_DELIMITERS:
        return SearchCommand(text=translate_pattern(field, magic), is_pattern=True)
    end = len(field)
    for line_end in _LINE_ENDS:
        found = field.find(line_end)
        if found != -1:
            end = min(end, found)
    return SearchCommand(text=field[:end], is_pattern=False)


__all__ = [
    "SearchCommand",
    "escape_literal",
    "fallback_patterns",
    "parse_search_command",
    "strip_extension_fields",
    "translate_pattern",
]
