"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    ResourceMiddleware -- Serve registered static resources
"""

from roost.middleware.protocol import Middleware, Next
from roost.middleware.resources import ResourceMiddleware

__all__ = [
    "Middleware",
    "Next",
    "ResourceMiddleware",
]
