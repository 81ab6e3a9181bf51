from __future__ import annotations

import logging
from pathlib import Path

from .content import classify
from .http_utils import send_not_found, send_response, send_text

logger = logging.getLogger(__name__)

READ_ERROR_BODY = b"Unable to read file"


def serve_file(conn, path: Path) -> int:
    """Send the whole of ``path`` and return the status that was sent.

    An open failure is a 404; a read failure after a successful open
    is a 500.
    """
    try:
        handle = open(path, "rb")
    except OSError as exc:
        logger.debug("Cannot open %s: %s", path, exc)
        send_not_found(conn)
        return 404

    with handle:
        try:
            body = handle.read()
        except OSError as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            send_text(conn, 500, READ_ERROR_BODY)
            return 500

    content = classify(body, path)
    send_response(
        conn,
        200,
        {
            "Content-Type": content.content_type,
            "Content-Length": str(len(body)),
        },
        body,
    )
    return 200
