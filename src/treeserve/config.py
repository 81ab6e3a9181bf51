from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
import os


@dataclass(frozen=True)
class Config:
    root_dir: Path
    bind: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "info"
    read_timeout: float = 5.0
    max_request_bytes: int = 8192


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treeserve",
        description="Serve a directory tree over HTTP for browsing and download.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Directory to serve (default: current directory)",
    )
    parser.add_argument("--bind", default="127.0.0.1", help="Address to listen on")
    parser.add_argument("--port", type=int, default=8080, help="Port to listen on")
    parser.add_argument(
        "--log-level",
        default="info",
        help="Logging level (debug, info, warning, error)",
    )
    return parser


def load_config(argv: list[str] | None = None) -> Config:
    parser = build_parser()
    args = parser.parse_args(argv)

    root_value = args.root if args.root else os.getcwd()
    root_dir = Path(root_value).expanduser().resolve()
    if not root_dir.is_dir():
        parser.error(f"not a directory: {root_value}")
    if not (0 <= args.port <= 65535):
        parser.error(f"invalid port: {args.port}")

    return Config(
        root_dir=root_dir,
        bind=args.bind,
        port=args.port,
        log_level=args.log_level.lower(),
    )
