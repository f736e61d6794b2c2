"""Request handler that serves static resources from configured locations.

Built by ``ResourceHandlerRegistration.get_request_handler()``, but
usable directly::

    handler = ResourceRequestHandler()
    handler.locations = [loader.get_resource("/public/")]
    handler.cache_seconds = 3600
    response = await handler.handle(request, "css/site.css")

``handle()`` returns ``None`` when no location holds the resource, so
the caller can fall through to the next handler.
"""

from __future__ import annotations

import logging
import mimetypes
import time
from collections.abc import Sequence
from email.utils import formatdate, parsedate_to_datetime

from anyio import to_thread

from roost.config import ResourceConfig
from roost.errors import MethodNotAllowed
from roost.http.request import Request
from roost.http.response import Response
from roost.resources.resolvers import (
    PathResourceResolver,
    ResourceResolver,
    ResourceResolverChain,
)
from roost.resources.resource import Resource
from roost.resources.transformers import ResourceTransformer, ResourceTransformerChain

logger = logging.getLogger("roost.resources")


def _http_date(timestamp: float) -> str:
    return formatdate(timestamp, usegmt=True)


def process_path(path: str) -> str:
    """Normalise a request path before resolution.

    Strips surrounding whitespace and leading slashes, and collapses
    repeated slashes.
    """
    path = path.strip()
    parts = [part for part in path.replace("\\", "/").split("/") if part]
    normalized = "/".join(parts)
    if path.endswith("/") and normalized:
        normalized += "/"
    return normalized


def is_invalid_path(path: str) -> bool:
    """True for paths that must never reach a location.

    Rejects empty paths, NUL bytes, scheme- or drive-qualified paths
    (``file:``, ``C:``), and any ``..`` segment.
    """
    if not path or "\x00" in path:
        return True
    if ":" in path.split("/", 1)[0]:
        return True
    return any(segment == ".." for segment in path.split("/"))


class ResourceRequestHandler:
    """Serve resources found by a resolver chain, with cache headers.

    Defaults (left intact unless a registration overrides them):

    - resolvers: ``[PathResourceResolver()]``
    - transformers: none
    - cache_seconds: ``config.default_cache_period`` (``None`` by default)

    Cache directives:

    - ``None`` or negative — no ``Cache-Control``; clients revalidate with
      ``Last-Modified`` / ``If-Modified-Since``
    - ``0`` — ``Cache-Control: no-cache, no-store`` plus ``Pragma`` and
      an expired ``Expires``
    - ``N > 0`` — ``Cache-Control: max-age=N`` and ``Expires`` N seconds out
    """

    __slots__ = (
        "_cache_seconds",
        "_config",
        "_locations",
        "_resource_resolvers",
        "_resource_transformers",
    )

    def __init__(self, *, config: ResourceConfig | None = None) -> None:
        self._config = config or ResourceConfig()
        self._locations: tuple[Resource, ...] = ()
        self._resource_resolvers: tuple[ResourceResolver, ...] = (PathResourceResolver(),)
        self._resource_transformers: tuple[ResourceTransformer, ...] = ()
        self._cache_seconds: int | None = self._config.default_cache_period

    # -- Configuration --

    @property
    def config(self) -> ResourceConfig:
        return self._config

    @property
    def locations(self) -> tuple[Resource, ...]:
        return self._locations

    @locations.setter
    def locations(self, locations: Sequence[Resource]) -> None:
        self._locations = tuple(locations)

    @property
    def resource_resolvers(self) -> tuple[ResourceResolver, ...]:
        return self._resource_resolvers

    @resource_resolvers.setter
    def resource_resolvers(self, resolvers: Sequence[ResourceResolver]) -> None:
        self._resource_resolvers = tuple(resolvers)

    @property
    def resource_transformers(self) -> tuple[ResourceTransformer, ...]:
        return self._resource_transformers

    @resource_transformers.setter
    def resource_transformers(self, transformers: Sequence[ResourceTransformer]) -> None:
        self._resource_transformers = tuple(transformers)

    @property
    def cache_seconds(self) -> int | None:
        return self._cache_seconds

    @cache_seconds.setter
    def cache_seconds(self, seconds: int | None) -> None:
        self._cache_seconds = seconds

    # -- Serving --

    async def handle(self, request: Request, path: str) -> Response | None:
        """Serve *path* (relative to the matched pattern) or return ``None``."""
        allowed = self._config.allowed_methods
        if request.method not in allowed:
            raise MethodNotAllowed(frozenset(allowed))

        found = await to_thread.run_sync(self._lookup, request, path)
        if found is None:
            return None

        resource, last_modified = found
        if self._config.use_last_modified and self._not_modified(request, last_modified):
            logger.debug("Not modified: %s", resource.description)
            return self._apply_cache_headers(
                Response(body=b"", status=304, content_type=self._content_type(resource)),
                last_modified,
            )

        body = await to_thread.run_sync(resource.read_bytes)
        response = Response(body=body, content_type=self._content_type(resource)).with_header(
            "Content-Length", str(len(body))
        )
        response = self._apply_cache_headers(response, last_modified)
        if request.method == "HEAD":
            response = response.without_body()
        return response

    def get_resource(self, request: Request | None, path: str) -> Resource | None:
        """Run *path* through the resolver and transformer chains."""
        processed = process_path(path)
        if is_invalid_path(processed):
            logger.debug("Ignoring invalid resource path %r", path)
            return None

        resolvers = ResourceResolverChain(self._resource_resolvers)
        resource = resolvers.resolve_resource(request, processed, self._locations)
        if resource is None:
            logger.debug(
                "No matching resource for %r in %d location(s)", processed, len(self._locations)
            )
            return None

        transformers = ResourceTransformerChain(self._resource_transformers)
        return transformers.transform(request, resource)

    def resolve_url_path(self, resource_path: str) -> str | None:
        """Ask the resolver chain for the public URL path of a resource."""
        resolvers = ResourceResolverChain(self._resource_resolvers)
        return resolvers.resolve_url_path(process_path(resource_path), self._locations)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lookup(self, request: Request, path: str) -> tuple[Resource, float | None] | None:
        resource = self.get_resource(request, path)
        if resource is None:
            return None
        return resource, resource.last_modified()

    def _content_type(self, resource: Resource) -> str:
        content_type, _ = mimetypes.guess_type(resource.filename or "")
        return content_type or self._config.default_content_type

    def _not_modified(self, request: Request, last_modified: float | None) -> bool:
        header = request.if_modified_since
        if header is None or last_modified is None:
            return False
        try:
            since = parsedate_to_datetime(header).timestamp()
        except (TypeError, ValueError):
            return False
        # HTTP dates have one-second resolution.
        return int(last_modified) <= int(since)

    def _apply_cache_headers(self, response: Response, last_modified: float | None) -> Response:
        if self._config.use_last_modified and last_modified is not None:
            response = response.with_header("Last-Modified", _http_date(last_modified))

        seconds = self._cache_seconds
        if seconds is None or seconds < 0:
            return response
        if seconds == 0:
            return (
                response
                .with_header("Cache-Control", "no-cache, no-store")
                .with_header("Pragma", "no-cache")
                .with_header("Expires", _http_date(0))
            )
        return (
            response
            .with_header("Cache-Control", f"max-age={seconds}")
            .with_header("Expires", _http_date(time.time() + seconds))
        )
