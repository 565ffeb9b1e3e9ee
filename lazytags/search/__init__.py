"""Search package exports.

Vi-style pattern compilation, buffer search and direct line commands.
"""

from __future__ import annotations

from .vi_regex import (
    PatternError,
    PatternMatch,
    compile_vi_pattern,
    first_nonblank,
    line_command_target,
    search_lines,
    search_whole_buffer,
    vi_to_python,
)

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
