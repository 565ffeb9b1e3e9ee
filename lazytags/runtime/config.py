"""Persistent JSON config helpers.

Stores the tag options: index search path, comparison and pattern modes,
history capacity and preview style.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .navigation import TAGSTACKSIZE

APP_NAME = "lazytags"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_EXPAND_LIMIT = 10_000


@dataclass(frozen=True)
class TagOptions:
    """Options consulted by tag lookups, expansion and the tag stack."""

    tags: str = "tags"
    taglength: int = 0
    ignorecase: bool = False
    magic: bool = True
    tagrelative: bool = False
    tagstack: int = TAGSTACKSIZE
    expand_limit: int = DEFAULT_EXPAND_LIMIT
    style: str = "monokai"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _coerce_int(value: object, default: int, minimum: int) -> int:
    """Accept real integers only; booleans and other types use ``default``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return max(minimum, value)


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_str(value: object, default: str) -> str:
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def load_tag_options() -> TagOptions:
    """Load tag options, replacing invalid or missing values with defaults."""
    data = load_config()
    defaults = TagOptions()
    return TagOptions(
        tags=_coerce_str(data.get("tags"), defaults.tags),
        taglength=_coerce_int(data.get("taglength"), defaults.taglength, 0),
        ignorecase=_coerce_bool(data.get("ignorecase"), defaults.ignorecase),
        magic=_coerce_bool(data.get("magic"), defaults.magic),
        tagrelative=_coerce_bool(data.get("tagrelative"), defaults.tagrelative),
        tagstack=_coerce_int(data.get("tagstack"), defaults.tagstack, 1),
        expand_limit=_coerce_int(data.get("expand_limit"), defaults.expand_limit, 1),
        style=_coerce_str(data.get("style"), defaults.style),
    )


def save_tag_options(options: TagOptions) -> None:
    """Persist all tag options, keeping unrelated keys already in the file."""
    config = load_config()
    config.update(asdict(options))
    save_config(config)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_EXPAND_LIMIT",
    "TagOptions",
    "load_config",
    "load_tag_options",
    "save_config",
    "save_tag_options",
]
