"""Source loading, sanitization, and syntax-highlighted jump previews.

Highlighting uses Pygments with a plain-text lexer for unknown file types.
Terminal control bytes are neutralized before anything reaches the terminal.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
DEFAULT_STYLE = "monokai"


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=8)
def _formatter_for_style(style: str) -> TerminalFormatter:
    """Return cached Pygments terminal formatter for style name."""
    return TerminalFormatter(style=_normalize_style(style))


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` for the terminal, picking the lexer from ``path``.

    Blank edge lines are kept so rendered rows stay aligned with line numbers.
    """
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    return pygments_highlight(source, lexer, _formatter_for_style(style))


def render_jump_preview(
    path: Path,
    lines: list[str],
    line: int,
    context: int = 3,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> str:
    """Render the lines around ``line`` with numbers and a ``>`` marker."""
    if context < 0 or not lines:
        return ""
    first = max(1, line - context)
    last = min(len(lines), line + context)
    snippet = "\n".join(sanitize_terminal_text(text) for text in lines[first - 1 : last]) + "\n"
    rendered = snippet if no_color else colorize_source(snippet, path, style)
    rendered_lines = rendered.rstrip("\n").split("\n")

    out: list[str] = []
    width = len(str(last))
    for offset, text in enumerate(rendered_lines):
        number = first + offset
        marker = ">" if number == line else " "
        out.append(f"{marker}{number:>{width}}  {text}")
    return "\n".join(out) + "\n"


__all__ = ["colorize_source", "read_text", "render_jump_preview", "sanitize_terminal_text"]
