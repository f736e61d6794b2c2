"""ASGI handler — translates ASGI scope/messages to roost types.

The only component that touches raw ASGI directly. Converts scope dicts
to Request objects, dispatches through the middleware stack and the
fallback, and sends the Response back through ASGI send().
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

from roost._internal.asgi import Receive, Scope, Send
from roost.errors import HTTPError
from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.protocol import Next
from roost.server.sender import send_response

logger = logging.getLogger("roost.server")

Fallback: TypeAlias = Callable[[Request], Awaitable[Response]]


def build_pipeline(middleware: tuple[Callable[..., Any], ...], fallback: Fallback) -> Next:
    """Wrap *middleware* around *fallback*, outermost first."""
    handler: Next = fallback
    for mw in reversed(middleware):
        outer = handler

        async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
            return await _mw(req, _next)

        handler = make_next
    return handler


def error_response(exc: HTTPError) -> Response:
    """Plain-text response for an HTTPError, carrying its headers."""
    response = Response(body=exc.detail or str(exc.status), status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    pipeline: Next,
) -> None:
    """Process a single HTTP request through the pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        response = await pipeline(request)
    except HTTPError as exc:
        logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
        response = error_response(exc)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        response = Response(body="Internal Server Error", status=500)

    await send_response(response, send)
