from __future__ import annotations

import enum
import logging
import stat
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote, urlsplit

logger = logging.getLogger(__name__)


class MalformedRequest(ValueError):
    pass


class PathKind(enum.Enum):
    DIRECTORY = "directory"
    FILE = "file"
    MISSING = "missing"


@dataclass
class RequestLine:
    method: str
    target: str
    version: str


def parse_request_line(line: str) -> RequestLine:
    parts = line.split()
    if len(parts) < 2:
        raise MalformedRequest(f"unparseable request line: {line[:80]!r}")
    method, target = parts[0], parts[1]
    version = parts[2] if len(parts) > 2 else ""
    return RequestLine(method=method, target=target, version=version)


def is_within(base: Path, target: Path) -> bool:
    return target == base or base in target.parents


def _target_path(target: str) -> str:
    # urlsplit would read a leading "//" as a host
    if target.startswith("/"):
        return target.split("?", 1)[0]
    return urlsplit(target).path


def resolve_path(target: str, root_dir: Path) -> Path:
    """Map a request target onto a path that never leaves ``root_dir``.

    Anything that would escape the root, or that the OS refuses to
    resolve, maps to ``root_dir`` itself. Existence is not checked.
    """
    decoded = unquote(_target_path(target), errors="surrogateescape")
    if decoded.startswith("/"):
        decoded = decoded[1:]
    try:
        resolved = (root_dir / decoded).resolve()
    except (OSError, ValueError, RuntimeError) as exc:
        logger.debug("Cannot resolve %r, using root: %s", target, exc)
        return root_dir
    if not is_within(root_dir, resolved):
        logger.debug("Target %r escapes root, using root", target)
        return root_dir
    return resolved


def classify_path(path: Path) -> PathKind:
    try:
        mode = path.stat().st_mode
    except (OSError, ValueError):
        return PathKind.MISSING
    if stat.S_ISDIR(mode):
        return PathKind.DIRECTORY
    if stat.S_ISREG(mode):
        return PathKind.FILE
    return PathKind.MISSING


def relative_url(path: Path, root_dir: Path) -> str:
    relative = path.relative_to(root_dir).as_posix()
    if relative == ".":
        return "/"
    return "/" + quote(relative, safe="/", errors="surrogateescape")
