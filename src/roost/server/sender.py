"""ASGI response sending — translates roost Responses to ASGI messages."""

import logging

from roost._internal.asgi import Send
from roost.http.response import Response

logger = logging.getLogger("roost.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a Response into ASGI send() calls.

    A ``Content-Length`` set by the handler is kept as-is so HEAD
    responses can advertise the full entity length without a body.
    """
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    has_length = False
    for name, value in response.headers:
        lowered = name.lower()
        if lowered == "content-length":
            if not _body_allowed(response.status):
                continue
            has_length = True
        raw_headers.append((lowered.encode("latin-1"), value.encode("latin-1")))

    allowed = _body_allowed(response.status)
    body = response.body_bytes if allowed and not response.omit_body else b""

    if not has_length:
        length = len(response.body_bytes) if allowed else 0
        raw_headers.append((b"content-length", str(length).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
