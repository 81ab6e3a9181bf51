from __future__ import annotations

import html
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .http_utils import send_response
from .resolver import is_within, relative_url

logger = logging.getLogger(__name__)

DIR_ICON = "📁 "
FILE_ICON = "📄 "

PAGE_START = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Directory listing for {title}</title>
    <style>
        body { font-family: Arial, sans-serif; }
        ul { list-style-type: none; padding: 0; }
        li { margin: 5px 0; }
        a { text-decoration: none; color: #0366d6; }
        a:hover { text-decoration: underline; }
    </style>
</head>
<body>
"""

PAGE_END = """</body>
</html>
"""


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    href: str
    is_dir: bool


def iter_entries(path: Path, root_dir: Path) -> Iterator[DirectoryEntry]:
    """Yield the immediate children of ``path`` sorted by name.

    Children whose type cannot be read are skipped. An unreadable
    directory yields nothing.
    """
    try:
        with os.scandir(path) as it:
            children = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        logger.warning("Cannot list %s: %s", path, exc)
        return
    for child in children:
        try:
            is_dir = child.is_dir()
        except OSError as exc:
            logger.debug("Skipping %s: %s", child.path, exc)
            continue
        yield DirectoryEntry(
            name=child.name,
            href=relative_url(path / child.name, root_dir),
            is_dir=is_dir,
        )


def parent_url(path: Path, root_dir: Path) -> str:
    if path == root_dir:
        return "/"
    parent = path.parent
    if parent == path or not is_within(root_dir, parent):
        return "/"
    return relative_url(parent, root_dir)


def _heading(path: Path, root_dir: Path) -> str:
    if path == root_dir:
        return str(root_dir)
    return f"{root_dir}/{path.relative_to(root_dir).as_posix()}"


def render_listing(path: Path, root_dir: Path) -> bytes:
    heading = html.escape(_heading(path, root_dir))
    parts = [PAGE_START.replace("{title}", heading)]
    parts.append(f"<h1>Directory listing for {heading}</h1>\n<ul>\n")
    parts.append(
        f'<li><a href="{html.escape(parent_url(path, root_dir))}">'
        "⬆️ Go back up a directory</a></li>\n"
    )
    for entry in iter_entries(path, root_dir):
        icon = DIR_ICON if entry.is_dir else FILE_ICON
        parts.append(
            f'<li>{icon}<a href="{html.escape(entry.href)}">{html.escape(entry.name)}</a></li>\n'
        )
    parts.append("</ul>\n")
    parts.append(PAGE_END)
    return "".join(parts).encode("utf-8", errors="replace")


def serve_directory(conn, path: Path, root_dir: Path) -> int:
    body = render_listing(path, root_dir)
    send_response(
        conn,
        200,
        {
            "Content-Type": "text/html",
            "Content-Length": str(len(body)),
        },
        body,
    )
    return 200
