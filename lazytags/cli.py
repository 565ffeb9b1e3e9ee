"""Command-line front door for lazytags.

Resolves a tag from the configured index files and prints its location with
a highlighted preview, or lists the tag names matching a pattern.
Persisted options come from the JSON config; flags override them per run.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .editor import launch_editor
from .highlight import render_jump_preview
from .runtime.config import TagOptions, load_tag_options
from .runtime.tag_commands import TagCommands
from .search.vi_regex import PatternError
from .workspace.window import Workspace


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Jump to tag definitions listed in tags index files."
    )
    parser.add_argument("name", nargs="?", default=None, help="Tag name to look up.")
    parser.add_argument(
        "--from",
        dest="from_file",
        metavar="FILE",
        default=None,
        help="File being edited; enables its static tags and its local tags file.",
    )
    parser.add_argument("--tags", default=None, help="Space-separated index files, searched in order.")
    parser.add_argument(
        "--taglength",
        type=_nonnegative_int,
        default=None,
        help="Significant characters of a tag name (0 compares whole names).",
    )
    parser.add_argument("--ignorecase", action="store_true", default=None, help="Compare and search ignoring case.")
    parser.add_argument("--nomagic", action="store_true", help="Treat . * [ as literal pattern characters.")
    parser.add_argument("--tagrelative", action="store_true", default=None, help="Resolve paths relative to the tags file.")
    parser.add_argument("--expand", metavar="PATTERN", default=None, help="Print tag names matching PATTERN and exit.")
    parser.add_argument(
        "--context",
        type=_nonnegative_int,
        default=3,
        help="Lines of preview shown around the tag (default: 3).",
    )
    parser.add_argument("--no-preview", action="store_true", help="Print only the location.")
    parser.add_argument("--style", default=None, help="Pygments style name for the preview.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--edit", action="store_true", help="Open $EDITOR at the tag location.")
    parser.add_argument("--verbose", action="store_true", help="Log lookup diagnostics to stderr.")
    return parser


def _options_from_args(args: argparse.Namespace, options: TagOptions) -> TagOptions:
    """Overlay explicitly given flags on persisted options."""
    overrides: dict[str, object] = {}
    if args.tags is not None:
        overrides["tags"] = args.tags
    if args.taglength is not None:
        overrides["taglength"] = args.taglength
    if args.ignorecase:
        overrides["ignorecase"] = True
    if args.nomagic:
        overrides["magic"] = False
    if args.tagrelative:
        overrides["tagrelative"] = True
    if args.style:
        overrides["style"] = args.style
    return replace(options, **overrides)


def _print_expansion(commands: TagCommands, pattern: str) -> None:
    try:
        names, truncated = commands.expand(pattern)
    except PatternError as exc:
        raise SystemExit(str(exc)) from exc
    for name in names:
        sys.stdout.write(name + "\n")
    if truncated:
        sys.stderr.write(f"lazytags: stopped after {len(names)} matches\n")


def main() -> None:
    """Parse CLI arguments, resolve the tag and report where it lives.

    Lookup failures exit with the same notice an editor would show in its
    status line (``tag not found``, ``No tags file``...).
    """
    parser = _build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    options = _options_from_args(args, load_tag_options())
    workspace = Workspace(options.tagstack)
    if args.from_file is not None:
        error = workspace.edit_file(Path(args.from_file))
        if error is not None:
            raise SystemExit(error)
    commands = TagCommands(workspace, options)

    if args.expand is not None:
        _print_expansion(commands, args.expand)
        return

    if not args.name:
        parser.error("a tag name is required unless --expand is given")

    if not commands.jump_to_tag(args.name):
        raise SystemExit(commands.status_message)

    if commands.status_message:
        sys.stderr.write(f"lazytags: {commands.status_message}\n")

    window = workspace.current_window
    assert window.path is not None
    sys.stdout.write(f"{window.path}:{window.cursor.line}:{window.cursor.column + 1}\n")
    if not args.no_preview:
        no_color = args.no_color or not sys.stdout.isatty()
        sys.stdout.write(
            render_jump_preview(
                window.path,
                window.lines,
                window.cursor.line,
                context=args.context,
                style=options.style,
                no_color=no_color,
            )
        )

    if args.edit:
        error = launch_editor(window.path, window.cursor.line)
        if error is not None:
            raise SystemExit(error)


if __name__ == "__main__":
    main()
