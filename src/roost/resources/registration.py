"""Registration descriptor for one resource handler.

Collects the URL path patterns, the locations to serve from, an
optional cache period and optional resolver / transformer chains, then
builds a ``ResourceRequestHandler``.

Usage::

    registration = (
        ResourceHandlerRegistration(loader, "/resources/**")
        .add_resource_locations("/public/", "classpath:/static/")
        .set_cache_period(3600)
    )
    handler = registration.get_request_handler()
"""

from __future__ import annotations

import logging

from roost.config import ResourceConfig
from roost.errors import IncompleteRegistrationError, InvalidRegistrationError
from roost.resources.handler import ResourceRequestHandler
from roost.resources.loader import ResourceLoader
from roost.resources.resolvers import ResourceResolver
from roost.resources.resource import Resource
from roost.resources.transformers import ResourceTransformer

logger = logging.getLogger("roost.resources")


class ResourceHandlerRegistration:
    """Encapsulates what is needed to create one resource handler.

    Path patterns are fixed at construction. Locations are appended in
    call order, which is also the lookup order at serve time. Resolvers,
    transformers and the cache period stay ``None`` until set; unset
    values leave the handler's own defaults in place.
    """

    __slots__ = (
        "_cache_period",
        "_config",
        "_locations",
        "_path_patterns",
        "_resource_loader",
        "_resource_resolvers",
        "_resource_transformers",
    )

    def __init__(
        self,
        resource_loader: ResourceLoader,
        *path_patterns: str,
        config: ResourceConfig | None = None,
    ) -> None:
        if not path_patterns:
            msg = "At least one path pattern is required for resource handling."
            raise InvalidRegistrationError(msg)
        if any(not pattern for pattern in path_patterns):
            msg = f"Path patterns must be non-empty strings, got {path_patterns!r}."
            raise InvalidRegistrationError(msg)

        self._resource_loader = resource_loader
        self._path_patterns: tuple[str, ...] = tuple(path_patterns)
        self._config = config
        self._locations: list[Resource] = []
        self._cache_period: int | None = None
        self._resource_resolvers: tuple[ResourceResolver, ...] | None = None
        self._resource_transformers: tuple[ResourceTransformer, ...] | None = None

    # -- Chained configuration --

    def add_resource_locations(self, *resource_locations: str) -> ResourceHandlerRegistration:
        """Add one or more locations to serve static content from.

        Locations are checked for a resource in the order given, across
        all calls. For example ``"/"`` followed by
        ``"classpath:/public-web-resources/"`` serves from the web root
        first and falls back to package data. Existence is not checked.
        """
        for location in resource_locations:
            self._locations.append(self._resource_loader.get_resource(location))
        return self

    def set_resource_resolvers(
        self, *resource_resolvers: ResourceResolver
    ) -> ResourceHandlerRegistration:
        """Replace the resolver chain.

        The handler defaults to a lone ``PathResourceResolver``; a custom
        chain should usually end with one.
        """
        self._resource_resolvers = resource_resolvers
        return self

    def set_resource_transformers(
        self, *resource_transformers: ResourceTransformer
    ) -> ResourceHandlerRegistration:
        """Replace the transformer chain. None are configured by default."""
        self._resource_transformers = resource_transformers
        return self

    def set_cache_period(self, cache_period: int | None) -> ResourceHandlerRegistration:
        """Cache period for served resources, in seconds.

        ``None`` sends no cache headers and relies on last-modified
        checks only, as does a negative value. ``0`` sends headers that
        prevent caching. A positive number sends ``max-age`` with that value.
        """
        self._cache_period = cache_period
        return self

    # -- Accessors --

    @property
    def path_patterns(self) -> tuple[str, ...]:
        """The URL path patterns for the resource handler."""
        return self._path_patterns

    @property
    def locations(self) -> tuple[Resource, ...]:
        return tuple(self._locations)

    @property
    def cache_period(self) -> int | None:
        return self._cache_period

    @property
    def resource_resolvers(self) -> tuple[ResourceResolver, ...] | None:
        return self._resource_resolvers

    @property
    def resource_transformers(self) -> tuple[ResourceTransformer, ...] | None:
        return self._resource_transformers

    # -- Build --

    def get_request_handler(self) -> ResourceRequestHandler:
        """Build the ``ResourceRequestHandler`` for this registration."""
        if not self._locations:
            msg = "At least one location is required for resource handling."
            raise IncompleteRegistrationError(msg)

        handler = ResourceRequestHandler(config=self._config)
        if self._resource_resolvers is not None:
            handler.resource_resolvers = self._resource_resolvers
        if self._resource_transformers is not None:
            handler.resource_transformers = self._resource_transformers
        handler.locations = self._locations
        if self._cache_period is not None:
            handler.cache_seconds = self._cache_period

        logger.debug(
            "Built resource handler for %s (%d location(s), cache=%s)",
            ", ".join(self._path_patterns),
            len(self._locations),
            self._cache_period,
        )
        return handler
