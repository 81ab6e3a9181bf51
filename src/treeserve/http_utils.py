from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


HTTP_REASONS = {
    200: "OK",
    400: "BAD REQUEST",
    404: "NOT FOUND",
    500: "INTERNAL SERVER ERROR",
}

HEAD_TERMINATORS = (b"\r\n\r\n", b"\n\n")


class RequestTooLarge(ValueError):
    pass


def _head_complete(data: bytes | bytearray) -> bool:
    # empty lines ahead of the request line are ignored
    data = data.lstrip(b"\r\n")
    return any(marker in data for marker in HEAD_TERMINATORS)


def _has_request_line(data: bytes | bytearray) -> bool:
    return b"\n" in data.lstrip(b"\r\n")


def read_request_head(conn, max_bytes: int = 8192) -> bytes | None:
    """Read from ``conn`` until the end of the request head.

    Only the request line is needed, so once it is complete a peer that
    closes, stalls or errors before the blank line still gets an answer.
    Returns ``None`` when the peer goes away before sending a full line.
    Raises ``RequestTooLarge`` once more than ``max_bytes`` arrive without
    a terminator.
    """
    data = bytearray()
    while not _head_complete(data):
        try:
            chunk = conn.recv(4096)
        except OSError:
            if _has_request_line(data):
                break
            raise
        if not chunk:
            if _has_request_line(data):
                break
            return None
        data.extend(chunk)
        if len(data) > max_bytes and not _head_complete(data):
            raise RequestTooLarge(f"request head exceeds {max_bytes} bytes")
    return bytes(data)


def first_line(head: bytes) -> str:
    line = head.lstrip(b"\r\n").split(b"\n", 1)[0].rstrip(b"\r")
    return line.decode("utf-8", errors="surrogateescape")


def send_response(conn, status: int, headers: dict[str, str] | None, body: bytes) -> bool:
    reason = HTTP_REASONS.get(status, "")
    lines = [f"HTTP/1.1 {status} {reason}"]
    if headers:
        for name, value in headers.items():
            lines.append(f"{name}: {value}")
    lines.append("")
    lines.append("")
    payload = "\r\n".join(lines).encode("ascii") + body
    try:
        conn.sendall(payload)
    except OSError as exc:
        logger.debug("Dropping response %s: %s", status, exc)
        return False
    return True


def send_text(conn, status: int, body: bytes) -> bool:
    return send_response(
        conn,
        status,
        {
            "Content-Type": "text/plain",
            "Content-Length": str(len(body)),
        },
        body,
    )


def send_not_found(conn) -> bool:
    return send_response(conn, 404, {"Content-Length": "0"}, b"")
