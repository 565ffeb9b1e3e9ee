"""Vi-style pattern search over buffer lines.

Converts magic / nomagic vi patterns to Python regular expressions and runs
forward (``/``) or backward (``?``) searches with optional wraparound.
Also executes direct line commands (``42``, ``:42``, ``$``, ``+3``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..workspace.buffers import Cursor


class PatternError(ValueError):
    """A vi pattern that cannot be compiled."""


_NO_REPEAT_AFTER = {"", "^", "(", "|"}
_LINE_COMMAND_RE = re.compile(r"^:?\s*(?P<address>\d+|\$|[+-]\d*)?\s*$")


def _bracket_expression(pattern: str, start: int) -> tuple[str, int] | None:
    """Translate ``[...]`` beginning at ``start``; ``None`` if unterminated."""
    pos = start + 1
    out = ["["]
    if pos < len(pattern) and pattern[pos] == "^":
        out.append("^")
        pos += 1
    if pos < len(pattern) and pattern[pos] == "]":
        out.append("\\]")
        pos += 1
    while pos < len(pattern):
        ch = pattern[pos]
        if ch == "]":
            out.append("]")
            return "".join(out), pos + 1
        if ch == "\\" and pos + 1 < len(pattern):
            out.append(re.escape(pattern[pos + 1]))
            pos += 2
            continue
        out.append("\\[" if ch == "[" else ch)
        pos += 1
    return None


def vi_to_python(pattern: str, magic: bool = True) -> str:
    """Convert a vi pattern body (no delimiters) to Python ``re`` syntax.

    Supported: ``^``/``$`` anchors, ``.``, ``*``, ``[...]`` (magic forms, or
    their backslashed forms in nomagic mode), ``\\(``/``\\)`` groups, ``\\|``
    alternation and ``\\<``/``\\>`` word boundaries. Anything else is literal.
    """
    out: list[str] = []
    last = ""
    pos = 0
    length = len(pattern)
    while pos < length:
        ch = pattern[pos]
        token: str
        if ch == "\\" and pos + 1 < length:
            nxt = pattern[pos + 1]
            pos += 2
            if nxt in "()|":
                token = nxt
            elif nxt == "<":
                token = r"\b(?=\w)"
            elif nxt == ">":
                token = r"\b(?<=\w)"
            elif nxt == "t":
                token = "\t"
            elif not magic and nxt == ".":
                token = "."
            elif not magic and nxt == "*":
                token = "*" if last not in _NO_REPEAT_AFTER and last != "*" else "\\*"
            elif not magic and nxt == "[":
                bracket = _bracket_expression(pattern, pos - 1)
                if bracket is None:
                    token = "\\["
                else:
                    token, pos = bracket
            else:
                token = re.escape(nxt)
            out.append(token)
            last = token
            continue

        pos += 1
        if ch == "^" and last in ("", "(", "|"):
            token = "^"
        elif ch == "$" and (pos == length or pattern.startswith(("\\)", "\\|"), pos)):
            token = "$"
        elif magic and ch == ".":
            token = "."
        elif magic and ch == "*":
            token = "*" if last not in _NO_REPEAT_AFTER and last != "*" else "\\*"
        elif magic and ch == "[":
            bracket = _bracket_expression(pattern, pos - 1)
            if bracket is None:
                token = "\\["
            else:
                token, pos = bracket
        else:
            token = re.escape(ch)
        out.append(token)
        last = token
    return "".join(out)


def compile_vi_pattern(pattern: str, magic: bool = True, ignorecase: bool = False) -> re.Pattern[str]:
    flags = re.IGNORECASE if ignorecase else 0
    try:
        return re.compile(vi_to_python(pattern, magic), flags)
    except re.error as exc:
        raise PatternError(f"Invalid search pattern: {pattern}") from exc


@dataclass(frozen=True)
class PatternMatch:
    line: int  # 1-based
    column: int  # 0-based
    text: str


def _last_match_before(regex: re.Pattern[str], text: str, limit: int) -> int | None:
    for pos in range(min(limit, len(text)), -1, -1):
        if pos < limit and regex.match(text, pos) is not None:
            return pos
    return None


def search_lines(
    lines: list[str],
    regex: re.Pattern[str],
    start: Cursor,
    forward: bool = True,
    wrapscan: bool = True,
) -> PatternMatch | None:
    """Find the next match strictly after (or before) ``start``.

    With ``wrapscan`` the search continues from the other end of the buffer
    and finally re-examines the start line as a whole.
    """
    if not lines:
        lines = [""]
    origin = min(max(1, start.line), len(lines)) - 1
    count = len(lines)

    if forward:
        found = regex.search(lines[origin], start.column + 1)
        if found is not None:
            return PatternMatch(origin + 1, found.start(), lines[origin])
        order = list(range(origin + 1, count))
        if wrapscan:
            order.extend(range(0, origin + 1))
        for index in order:
            found = regex.search(lines[index])
            if found is not None:
                return PatternMatch(index + 1, found.start(), lines[index])
        return None

    column = _last_match_before(regex, lines[origin], start.column)
    if column is not None:
        return PatternMatch(origin + 1, column, lines[origin])
    order = list(range(origin - 1, -1, -1))
    if wrapscan:
        order.extend(range(count - 1, origin - 1, -1))
    for index in order:
        column = _last_match_before(regex, lines[index], len(lines[index]) + 1)
        if column is not None:
            return PatternMatch(index + 1, column, lines[index])
    return None


def search_whole_buffer(
    lines: list[str],
    regex: re.Pattern[str],
    forward: bool = True,
) -> PatternMatch | None:
    """First (forward) or last (backward) match in the buffer, cursor-independent."""
    if not lines:
        lines = [""]
    if forward:
        edge = Cursor(len(lines), len(lines[-1]))
    else:
        edge = Cursor(1, 0)
    return search_lines(lines, regex, edge, forward=forward, wrapscan=True)


def first_nonblank(text: str) -> int:
    stripped = len(text) - len(text.lstrip(" \t"))
    return stripped if stripped < len(text) else max(0, len(text) - 1)


def line_command_target(command: str, current_line: int, line_count: int) -> int | None:
    """Resolve a direct line command to a 1-based line, ``None`` if unsupported.

    An empty command keeps ``current_line``; numbers past the end clamp.
    """
    matched = _LINE_COMMAND_RE.match(command.strip())
    if matched is None:
        return None
    address = matched.group("address")
    line_count = max(1, line_count)
    if not address:
        target = current_line
    elif address == "$":
        target = line_count
    elif address[0] in "+-":
        step = int(address[1:] or "1")
        target = current_line + step if address[0] == "+" else current_line - step
    else:
        target = int(address)
    return min(max(1, target), line_count)


__all__ = [
    "PatternError",
    "PatternMatch",
    "compile_vi_pattern",
    "first_nonblank",
    "line_command_target",
    "search_lines",
    "search_whole_buffer",
    "vi_to_python",
]
