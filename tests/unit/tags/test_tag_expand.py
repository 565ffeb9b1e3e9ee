"""Tests for tag-name expansion used by completion."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazytags.runtime.config import TagOptions
from lazytags.tags.expand import INITIAL_CAPACITY, compile_tag_pattern, expand_tag_names, expand_tags
from lazytags.tags.index import TagFileReader


class ExpandTagNamesTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _index(self, name: str, text: str) -> Path:
        path = self.root / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_no_matches_is_empty_not_an_error(self) -> None:
        index = self._index("tags", "alpha\ta.c\t1\n")
        names, truncated = expand_tag_names("^zz", TagOptions(tags=str(index)), None)
        self.assertEqual(names, [])
        self.assertFalse(truncated)

    def test_all_files_scanned_in_order_with_duplicates(self) -> None:
        first = self._index("first", "get_a\ta.c\t1\nset_a\ta.c\t2\nget_b\tb.c\t1\n")
        second = self._index("second", "get_a\tother.c\t9\n")
        options = TagOptions(tags=f"{first} {second}")

        names, truncated = expand_tag_names("^get_", options, None)

        self.assertEqual(names, ["get_a", "get_b", "get_a"])
        self.assertFalse(truncated)

    def test_static_tags_follow_current_file(self) -> None:
        index = self._index("tags", "main.c:helper\tmain.c\t1\nhelp\tutil.c\t1\n")
        options = TagOptions(tags=str(index))

        from_main, _ = expand_tag_names("^help", options, self.root / "main.c")
        from_util, _ = expand_tag_names("^help", options, self.root / "util.c")

        self.assertEqual(from_main, ["helper", "help"])
        self.assertEqual(from_util, ["help"])

    def test_format_error_keeps_names_gathered_so_far(self) -> None:
        first = self._index("first", "get_a\ta.c\t1\nbroken\nget_c\tc.c\t1\n")
        second = self._index("second", "get_d\td.c\t1\n")
        names, _ = expand_tag_names("get", TagOptions(tags=f"{first} {second}"), None)
        self.assertEqual(names, ["get_a", "get_d"])

    def test_unreadable_files_are_skipped(self) -> None:
        index = self._index("tags", "alpha\ta.c\t1\n")
        options = TagOptions(tags=f"{self.root / 'missing'} {index}")
        names, _ = expand_tag_names("a", options, None)
        self.assertEqual(names, ["alpha"])

    def test_ignorecase_applies_to_pattern(self) -> None:
        index = self._index("tags", "Alpha\ta.c\t1\n")
        names, _ = expand_tag_names("^alpha", TagOptions(tags=str(index), ignorecase=True), None)
        self.assertEqual(names, ["Alpha"])


class ExpansionCapTests(unittest.TestCase):
    def _reader(self, root: Path, count: int) -> TagFileReader:
        index = root / "tags"
        index.write_text("".join(f"tag{number}\tf.c\t{number}\n" for number in range(count)), encoding="utf-8")
        return TagFileReader(str(index), None)

    def test_cap_between_doublings_is_filled_then_truncated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            reader = self._reader(Path(tmp), INITIAL_CAPACITY * 2)
            names, truncated = expand_tags(compile_tag_pattern("^tag", TagOptions()), reader, max_matches=150)
        self.assertTrue(truncated)
        self.assertEqual(len(names), 150)
        self.assertEqual(names[0], "tag0")
        self.assertEqual(names[-1], "tag149")

    def test_exactly_cap_matches_is_not_truncated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            reader = self._reader(Path(tmp), 150)
            names, truncated = expand_tags(compile_tag_pattern("^tag", TagOptions()), reader, max_matches=150)
        self.assertFalse(truncated)
        self.assertEqual(len(names), 150)

    def test_capacity_doubles_below_cap(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            reader = self._reader(Path(tmp), INITIAL_CAPACITY + 50)
            names, truncated = expand_tags(compile_tag_pattern("^tag", TagOptions()), reader, max_matches=1000)
        self.assertFalse(truncated)
        self.assertEqual(len(names), INITIAL_CAPACITY + 50)

    def test_small_cap(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            reader = self._reader(Path(tmp), 10)
            names, truncated = expand_tags(compile_tag_pattern("tag", TagOptions()), reader, max_matches=4)
        self.assertTrue(truncated)
        self.assertEqual(names, ["tag0", "tag1", "tag2", "tag3"])


if __name__ == "__main__":
    unittest.main()
