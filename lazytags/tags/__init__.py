"""Tag index lookup: index-file parsing, pattern translation, matching.

Submodules are imported directly (``lazytags.tags.matcher`` etc.); only the
exception types are re-exported here.
"""

from __future__ import annotations

from .errors import (
    MissingTargetFileError,
    NoTagsFileError,
    TagError,
    TagFileOpenError,
    TagFormatError,
    TagJumpError,
    TagNotFoundError,
)

__all__ = [
    "MissingTargetFileError",
    "NoTagsFileError",
    "TagError",
    "TagFileOpenError",
    "TagFormatError",
    "TagJumpError",
    "TagNotFoundError",
]
