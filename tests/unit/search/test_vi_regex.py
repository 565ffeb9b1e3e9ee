"""Tests for vi-style pattern conversion and buffer search.

Covers magic/nomagic metacharacters, anchors, wraparound in both directions
and direct line commands.
"""

from __future__ import annotations

import unittest

from lazytags.search.vi_regex import (
    PatternError,
    compile_vi_pattern,
    first_nonblank,
    line_command_target,
    search_lines,
    search_whole_buffer,
    vi_to_python,
)
from lazytags.workspace.buffers import Cursor

LINES = [
    "#include <stdio.h>",
    "static int count;",
    "int foo(int x)",
    "{",
    "    return foo(x - 1);",
    "}",
]


class ViToPythonTests(unittest.TestCase):
    def test_magic_metacharacters(self) -> None:
        regex = compile_vi_pattern("^in.*foo(")
        self.assertIsNotNone(regex.search("int foo(int x)"))
        self.assertIsNone(regex.search("    return foo(x - 1);"))

    def test_escaped_metacharacters_are_literal_in_magic_mode(self) -> None:
        regex = compile_vi_pattern("a\\.b\\*")
        self.assertIsNotNone(regex.search("a.b*"))
        self.assertIsNone(regex.search("axbb"))

    def test_nomagic_treats_dot_and_star_literally(self) -> None:
        regex = compile_vi_pattern("a.*b", magic=False)
        self.assertIsNotNone(regex.search("xa.*b"))
        self.assertIsNone(regex.search("axxb"))

    def test_nomagic_backslashed_forms_are_magic(self) -> None:
        regex = compile_vi_pattern("^\\[#a-z]\\.\\*foo(", magic=False)
        self.assertIsNotNone(regex.search("int foo(int x)"))

    def test_bracket_expression(self) -> None:
        regex = compile_vi_pattern("^[#A-Za-z_].*foo(")
        self.assertIsNotNone(regex.search("#define foo(x) x"))
        self.assertIsNone(regex.search("    foo(1)"))

    def test_unterminated_bracket_is_literal(self) -> None:
        self.assertEqual(vi_to_python("a[b"), "a\\[b")

    def test_dollar_anchors_only_at_end(self) -> None:
        regex = compile_vi_pattern("^int foo(int x)$")
        self.assertIsNotNone(regex.search("int foo(int x)"))
        self.assertIsNone(regex.search("int foo(int x) {"))
        self.assertIsNotNone(compile_vi_pattern("a$b").search("a$b"))

    def test_caret_mid_pattern_is_literal(self) -> None:
        self.assertIsNotNone(compile_vi_pattern("a^b").search("a^b"))

    def test_star_at_start_is_literal(self) -> None:
        self.assertIsNotNone(compile_vi_pattern("*p").search("char *p;"))

    def test_groups_and_word_boundaries(self) -> None:
        regex = compile_vi_pattern("\\<\\(foo\\|bar\\)\\>")
        self.assertIsNotNone(regex.search("call bar now"))
        self.assertIsNone(regex.search("foobar"))

    def test_ignorecase(self) -> None:
        self.assertIsNotNone(compile_vi_pattern("FOO", ignorecase=True).search("foo"))

    def test_invalid_pattern_raises(self) -> None:
        with self.assertRaises(PatternError):
            compile_vi_pattern("\\(open")


class SearchLinesTests(unittest.TestCase):
    def test_forward_search_starts_after_cursor(self) -> None:
        regex = compile_vi_pattern("foo")
        found = search_lines(LINES, regex, Cursor(3, 4))
        self.assertIsNotNone(found)
        assert found is not None
        self.assertEqual((found.line, found.column), (5, 11))

    def test_forward_search_wraps_to_start_line(self) -> None:
        regex = compile_vi_pattern("foo")
        found = search_lines(LINES, regex, Cursor(6, 0))
        assert found is not None
        self.assertEqual((found.line, found.column), (3, 4))

    def test_no_wrap_returns_none(self) -> None:
        regex = compile_vi_pattern("foo")
        self.assertIsNone(search_lines(LINES, regex, Cursor(6, 0), wrapscan=False))

    def test_backward_search_wraps_to_end(self) -> None:
        regex = compile_vi_pattern("foo")
        found = search_lines(LINES, regex, Cursor(2, 0), forward=False)
        assert found is not None
        self.assertEqual((found.line, found.column), (5, 11))

    def test_backward_search_finds_earlier_column_on_start_line(self) -> None:
        regex = compile_vi_pattern("o")
        found = search_lines(["foo boo"], regex, Cursor(1, 5), forward=False)
        assert found is not None
        self.assertEqual(found.column, 2)

    def test_whole_buffer_search_is_cursor_independent(self) -> None:
        regex = compile_vi_pattern("foo")
        found = search_whole_buffer(LINES, regex)
        assert found is not None
        self.assertEqual((found.line, found.column), (3, 4))
        last = search_whole_buffer(LINES, regex, forward=False)
        assert last is not None
        self.assertEqual(last.line, 5)

    def test_match_on_first_line_column_zero(self) -> None:
        regex = compile_vi_pattern("^#include")
        found = search_whole_buffer(LINES, regex)
        assert found is not None
        self.assertEqual((found.line, found.column), (1, 0))


class LineCommandTests(unittest.TestCase):
    def test_absolute_and_colon_forms(self) -> None:
        self.assertEqual(line_command_target("3", 1, 10), 3)
        self.assertEqual(line_command_target(":7", 1, 10), 7)

    def test_last_line_and_clamping(self) -> None:
        self.assertEqual(line_command_target("$", 1, 10), 10)
        self.assertEqual(line_command_target("99", 1, 10), 10)
        self.assertEqual(line_command_target("0", 1, 10), 1)

    def test_relative_forms(self) -> None:
        self.assertEqual(line_command_target("+2", 1, 10), 3)
        self.assertEqual(line_command_target("+", 4, 10), 5)
        self.assertEqual(line_command_target("-9", 4, 10), 1)

    def test_empty_command_keeps_line(self) -> None:
        self.assertEqual(line_command_target("", 4, 10), 4)

    def test_unsupported_command(self) -> None:
        self.assertIsNone(line_command_target("normal gg", 1, 10))

    def test_first_nonblank(self) -> None:
        self.assertEqual(first_nonblank("    return"), 4)
        self.assertEqual(first_nonblank(""), 0)
        self.assertEqual(first_nonblank("   "), 2)


if __name__ == "__main__":
    unittest.main()
