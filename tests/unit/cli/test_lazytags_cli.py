"""CLI behavior tests for ``lazytags.cli.main``.

Covers location output, the plain-text preview, expansion listing and the
exit notices for failed lookups.
"""

from __future__ import annotations

import io
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazytags import cli

UTIL_C = "static int counter;\n\nint helper(int x)\n{\n    return x;\n}\n"


class LazytagsCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "util.c").write_text(UTIL_C, encoding="utf-8")
        self.tags = self.root / "tags"
        self.tags.write_text(
            "helper\tutil.c\t/^int helper(int x)$/\n"
            "hidden\tutil.c\t/^int hidden(\n"
            "counter\tutil.c\t1\n",
            encoding="utf-8",
        )
        config_patch = mock.patch("lazytags.runtime.config.CONFIG_PATH", self.root / "config.json")
        config_patch.start()
        self.addCleanup(config_patch.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *args: str) -> tuple[str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        argv = ["lazytags", "--tags", str(self.tags), "--tagrelative", *args]
        with (
            mock.patch.object(sys, "argv", argv),
            mock.patch("sys.stdout", stdout),
            mock.patch("sys.stderr", stderr),
        ):
            cli.main()
        return stdout.getvalue(), stderr.getvalue()

    def test_prints_location_without_preview(self) -> None:
        stdout, stderr = self._run("helper", "--no-preview")
        self.assertEqual(stdout, f"{self.root / 'util.c'}:3:1\n")
        self.assertEqual(stderr, "")

    def test_plain_preview_marks_tag_line(self) -> None:
        stdout, _ = self._run("helper", "--context", "1", "--no-color")
        self.assertEqual(
            stdout,
            f"{self.root / 'util.c'}:3:1\n"
            " 2  \n"
            ">3  int helper(int x)\n"
            " 4  {\n",
        )

    def test_guess_notice_goes_to_stderr(self) -> None:
        (self.root / "util.c").write_text("int hidden(void)\n", encoding="utf-8")
        stdout, stderr = self._run("hidden", "--no-preview")
        self.assertEqual(stdout, f"{self.root / 'util.c'}:1:1\n")
        self.assertEqual(stderr, "")

        (self.root / "util.c").write_text("void wrapper(void) { hidden(); }\n", encoding="utf-8")
        _, stderr = self._run("hidden", "--no-preview")
        self.assertEqual(stderr, "lazytags: Couldn't find tag, just guessing!\n")

    def test_unknown_tag_exits_with_notice(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run("nosuch")
        self.assertEqual(ctx.exception.code, "tag not found")

    def test_missing_index_exits_with_notice(self) -> None:
        self.tags.unlink()
        with self.assertRaises(SystemExit) as ctx:
            self._run("helper")
        self.assertEqual(ctx.exception.code, "No tags file")

    def test_expand_lists_matching_names(self) -> None:
        stdout, stderr = self._run("--expand", "^h")
        self.assertEqual(stdout, "helper\nhidden\n")
        self.assertEqual(stderr, "")

    def test_name_required_without_expand(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run()
        self.assertEqual(ctx.exception.code, 2)

    def test_edit_launches_editor_at_tag_line(self) -> None:
        with mock.patch("lazytags.cli.launch_editor", return_value=None) as launch:
            self._run("counter", "--no-preview", "--edit")
        launch.assert_called_once_with(self.root / "util.c", 1)

    def test_persisted_options_are_used(self) -> None:
        (self.root / "config.json").write_text('{"taglength": 3}', encoding="utf-8")
        stdout, _ = self._run("helpme", "--no-preview")
        self.assertEqual(stdout, f"{self.root / 'util.c'}:3:1\n")


if __name__ == "__main__":
    unittest.main()
