from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import filetype

DEFAULT_CONTENT_TYPE = "text/plain"

# Source, config and lock files that browsers would otherwise download
# or misrender.
FORCED_TEXT_EXTENSIONS = frozenset(
    {".rs", ".toml", ".lock", ".py", ".cfg", ".ini", ".yaml", ".yml", ".md"}
)

INLINE_CONTENT_TYPES = frozenset(
    {
        "application/json",
        "image/jpeg",
        "image/png",
        "image/gif",
        "application/pdf",
    }
)


@dataclass(frozen=True)
class ContentClass:
    content_type: str
    inline: bool


def sniff(data: bytes) -> str | None:
    """Guess a mime type from the magic numbers at the start of ``data``."""
    if not data:
        return None
    return filetype.guess_mime(data)


def is_forced_text(path: Path) -> bool:
    return path.suffix.lower() in FORCED_TEXT_EXTENSIONS


def classify(data: bytes, path: Path) -> ContentClass:
    forced = is_forced_text(path)
    mime_type = sniff(data) or DEFAULT_CONTENT_TYPE
    inline = (
        forced
        or mime_type.startswith("text/")
        or mime_type in INLINE_CONTENT_TYPES
    )
    content_type = DEFAULT_CONTENT_TYPE if forced else mime_type
    return ContentClass(content_type=content_type, inline=inline)
