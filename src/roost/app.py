"""ResourceApp — an ASGI application that serves registered resources.

Mutable during setup (register handlers, add middleware, set a
fallback); frozen on the first request or on ``run()``::

    app = ResourceApp(resource_loader=DefaultResourceLoader(package="myapp"))
    app.resources.add_resource_handler("/resources/**").add_resource_locations(
        "/public/", "classpath:/static/"
    ).set_cache_period(3600)
    app.run()

Requests that no registration serves go to the fallback, which raises
``NotFound`` unless replaced.
"""

import logging
import threading
from collections.abc import Awaitable, Callable
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost.config import ResourceConfig
from roost.errors import ConfigurationError, NotFound
from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.protocol import Middleware, Next
from roost.resources.loader import ResourceLoader
from roost.resources.registry import ResourceHandlerRegistry
from roost.server.handler import build_pipeline, handle_request

logger = logging.getLogger("roost.server")


async def _not_found(request: Request) -> Response:
    raise NotFound(f"No resource for {request.path}")


class ResourceApp:
    """ASGI 3.0 application wrapping a ``ResourceHandlerRegistry``.

    Extra middleware added with ``add_middleware()`` runs outside the
    resource middleware, in the order added.
    """

    __slots__ = (
        "_fallback",
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_pipeline",
        "config",
        "resources",
    )

    def __init__(
        self,
        config: ResourceConfig | None = None,
        *,
        resource_loader: ResourceLoader | None = None,
    ) -> None:
        self.config = config or ResourceConfig()
        self.resources = ResourceHandlerRegistry(resource_loader, config=self.config)
        self._middleware_list: list[Middleware] = []
        self._fallback: Callable[[Request], Awaitable[Response]] = _not_found
        self._pipeline: Next | None = None
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Setup --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def fallback(
        self, handler: Callable[[Request], Awaitable[Response]]
    ) -> Callable[[Request], Awaitable[Response]]:
        """Set the handler for requests no resource matched.

        Usable as a decorator::

            @app.fallback
            async def spa(request):
                return Response(index_html, content_type="text/html")
        """
        self._check_not_frozen()
        self._fallback = handler
        return handler

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot modify the app after it has started serving requests."
            raise ConfigurationError(msg)

    # -- Lifecycle --

    def run(
        self, host: str | None = None, port: int | None = None, *, reload: bool = False
    ) -> None:
        """Freeze the app and serve it with pounce."""
        self._ensure_frozen()
        from roost.server.dev import run_dev_server

        run_dev_server(self, host or self.config.host, port or self.config.port, reload=reload)

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile registrations and middleware into the request pipeline.

        MUST only be called while holding _freeze_lock.
        """
        middleware: list[Any] = list(self._middleware_list)
        resource_middleware = self.resources.build()
        if resource_middleware is not None:
            middleware.append(resource_middleware)
        else:
            logger.warning("ResourceApp started with no resource handlers registered")
        self._pipeline = build_pipeline(tuple(middleware), self._fallback)
        self._frozen = True

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._pipeline is not None
        await handle_request(scope, receive, send, pipeline=self._pipeline)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            msg_type = message["type"]
            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except ConfigurationError as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
