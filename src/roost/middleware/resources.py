"""Resource-serving middleware.

Dispatches requests whose path matches a registered pattern to the
corresponding ``ResourceRequestHandler``. Falls through to the next
handler when no pattern matches or no location holds the resource.
"""

import logging
from collections.abc import Sequence

from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.protocol import Next
from roost.resources.handler import ResourceRequestHandler
from roost.resources.patterns import PathPattern

logger = logging.getLogger("roost.resources")


class ResourceMiddleware:
    """Middleware that serves registered static resources.

    Mappings are tried in order; the first handler that produces a
    response wins.

    Usage::

        app = ResourceApp(middleware=[registry.build()])
    """

    __slots__ = ("_mappings",)

    def __init__(self, mappings: Sequence[tuple[PathPattern, ResourceRequestHandler]]) -> None:
        self._mappings = tuple(mappings)

    @property
    def mappings(self) -> tuple[tuple[PathPattern, ResourceRequestHandler], ...]:
        return self._mappings

    def handler_for(self, pattern: str) -> ResourceRequestHandler | None:
        """Return the handler registered under *pattern*, if any."""
        for path_pattern, handler in self._mappings:
            if path_pattern.pattern == pattern:
                return handler
        return None

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve a matching resource or fall through."""
        for pattern, handler in self._mappings:
            within = pattern.match(request.path)
            if within is None:
                continue
            response = await handler.handle(request, within)
            if response is not None:
                return response
            logger.debug("%s matched %s but no resource was found", request.path, pattern.pattern)
        return await next(request)
