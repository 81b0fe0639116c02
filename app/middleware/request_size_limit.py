"""Request body size limit middleware.

Rejects fragment bodies larger than max_fragment_size with 413 before the
route reads them. Checks Content-Length up front; bodies without one
(chunked) are counted as they arrive and buffered for replay.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming.
"""

import json
import logging
from typing import Callable

from app.middleware.request_id import get_header

logger = logging.getLogger(__name__)


async def _send_413(send: Callable, max_bytes: int, actual: int) -> None:
    """Send 413 Payload Too Large in the API error envelope."""
    body = json.dumps(
        {
            "status": "error",
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": {"max_bytes": max_bytes, "content_length": actual},
        }
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", b"application/json")],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes (Content-Length or chunked). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("method") in ("GET", "HEAD", "DELETE", "OPTIONS"):
            await app(scope, receive, send)
            return

        content_length = get_header(scope, "content-length")
        if content_length is not None:
            try:
                length = int(content_length)
            except ValueError:
                length = 0
            if length > max_bytes:
                logger.warning("Rejected %s %s: %d bytes", scope.get("method"), scope.get("path"), length)
                await _send_413(send, max_bytes, length)
                return
            await app(scope, receive, send)
            return

        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                break
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                logger.warning("Rejected %s %s: over %d bytes", scope.get("method"), scope.get("path"), max_bytes)
                await _send_413(send, max_bytes, total)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        replay = iter([b"".join(chunks)])

        async def replay_receive() -> dict:
            body = next(replay, None)
            if body is None:
                return await receive()
            return {"type": "http.request", "body": body, "more_body": False}

        await app(scope, replay_receive, send)

    return asgi_app
