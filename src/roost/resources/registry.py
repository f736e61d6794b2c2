"""Registry of resource handler registrations.

Collects registrations at startup and turns them into a single
``ResourceMiddleware`` for the request pipeline::

    registry = ResourceHandlerRegistry(DefaultResourceLoader(package="myapp"))
    registry.add_resource_handler("/resources/**").add_resource_locations(
        "/public/", "classpath:/static/"
    ).set_cache_period(3600)

    app = ResourceApp(middleware=[registry.build()])
"""

from __future__ import annotations

import logging

from roost.config import ResourceConfig
from roost.errors import InvalidRegistrationError
from roost.middleware.resources import ResourceMiddleware
from roost.resources.loader import DefaultResourceLoader, ResourceLoader
from roost.resources.patterns import PathPattern
from roost.resources.registration import ResourceHandlerRegistration

logger = logging.getLogger("roost.resources")


class ResourceHandlerRegistry:
    """Stores registrations in the order they were added.

    Order matters: when two registrations match the same request path,
    the one registered first is asked first.
    """

    __slots__ = ("_config", "_registrations", "_resource_loader")

    def __init__(
        self,
        resource_loader: ResourceLoader | None = None,
        *,
        config: ResourceConfig | None = None,
    ) -> None:
        self._resource_loader = resource_loader or DefaultResourceLoader()
        self._config = config or ResourceConfig()
        self._registrations: list[ResourceHandlerRegistration] = []

    @property
    def config(self) -> ResourceConfig:
        return self._config

    @property
    def registrations(self) -> tuple[ResourceHandlerRegistration, ...]:
        return tuple(self._registrations)

    def add_resource_handler(self, *path_patterns: str) -> ResourceHandlerRegistration:
        """Register a handler for *path_patterns* and return it for chaining.

        Patterns are validated now so a typo fails at startup, not on
        the first request.
        """
        for pattern in path_patterns:
            PathPattern.parse(pattern)
        registration = ResourceHandlerRegistration(
            self._resource_loader, *path_patterns, config=self._config
        )
        self._registrations.append(registration)
        logger.debug("Registered resource handler for %s", ", ".join(path_patterns))
        return registration

    def has_mapping_for_pattern(self, path_pattern: str) -> bool:
        """Whether a handler is already registered for *path_pattern*."""
        return any(path_pattern in reg.path_patterns for reg in self._registrations)

    def build(self) -> ResourceMiddleware | None:
        """Build the middleware, or ``None`` if nothing was registered.

        Raises ``IncompleteRegistrationError`` if any registration has no
        location.
        """
        if not self._registrations:
            return None

        mappings = []
        for registration in self._registrations:
            handler = registration.get_request_handler()
            for pattern in registration.path_patterns:
                mappings.append((PathPattern.parse(pattern), handler))

        seen: set[str] = set()
        for pattern, _ in mappings:
            if pattern.pattern in seen:
                msg = f"Path pattern {pattern.pattern!r} is registered more than once."
                raise InvalidRegistrationError(msg)
            seen.add(pattern.pattern)

        return ResourceMiddleware(mappings)
