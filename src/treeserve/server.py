from __future__ import annotations

import logging
import socket
import threading

from .config import Config
from .files import serve_file
from .http_utils import (
    RequestTooLarge,
    first_line,
    read_request_head,
    send_not_found,
    send_text,
)
from .listing import serve_directory
from .resolver import MalformedRequest, PathKind, classify_path, parse_request_line, resolve_path

logger = logging.getLogger(__name__)


def run_server(config: Config) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server.bind((config.bind, config.port))
        server.listen(32)
        logger.info(
            "Serving %s on http://%s:%s", config.root_dir, config.bind, config.port
        )
        while True:
            try:
                conn, addr = server.accept()
            except OSError as exc:
                logger.warning("Failed to accept connection: %s", exc)
                continue
            thread = threading.Thread(
                target=handle_connection,
                args=(conn, addr, config),
                daemon=True,
            )
            thread.start()


def handle_connection(conn: socket.socket, addr: tuple[str, int], config: Config) -> None:
    with conn:
        try:
            _dispatch(conn, addr, config)
        except Exception:
            logger.exception("Client handling failed for %s:%s", addr[0], addr[1])


def _dispatch(conn: socket.socket, addr: tuple[str, int], config: Config) -> None:
    try:
        conn.settimeout(config.read_timeout)
        head = read_request_head(conn, config.max_request_bytes)
        conn.settimeout(None)
    except RequestTooLarge as exc:
        logger.debug("Rejecting request from %s:%s: %s", addr[0], addr[1], exc)
        send_text(conn, 400, b"Request Too Large")
        logger.info("%s:%s oversized request -> 400", addr[0], addr[1])
        return
    except OSError as exc:
        logger.debug("Read failed for %s:%s: %s", addr[0], addr[1], exc)
        return
    if head is None:
        logger.debug("Client %s:%s closed before sending a request", addr[0], addr[1])
        return

    line = first_line(head)
    try:
        request = parse_request_line(line)
    except MalformedRequest as exc:
        logger.debug("Bad request from %s:%s: %s", addr[0], addr[1], exc)
        send_text(conn, 400, b"Bad Request")
        logger.info("%r -> 400", line)
        return

    path = resolve_path(request.target, config.root_dir)
    kind = classify_path(path)
    if kind is PathKind.DIRECTORY:
        status = serve_directory(conn, path, config.root_dir)
    elif kind is PathKind.FILE:
        status = serve_file(conn, path)
    else:
        send_not_found(conn)
        status = 404
    logger.info("%s %r -> %s", request.method, request.target, status)
