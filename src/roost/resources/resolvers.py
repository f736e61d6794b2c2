"""Resource resolvers — mapping a request path onto a concrete resource.

A resolver gets the request path (already stripped of the matched
pattern), the configured locations and the rest of the chain. It may
answer directly, delegate to the chain, or wrap the chain's answer.

The default chain is a single ``PathResourceResolver``. Custom chains
should normally end with one::

    registration.set_resource_resolvers(MyResolver(), PathResourceResolver())
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from roost.http.request import Request
from roost.resources.resource import FileSystemResource, PackageResource, Resource

logger = logging.getLogger("roost.resources")


class ResourceResolver(Protocol):
    """Protocol for resolution strategies.

    Accepts any object with these two methods::

        class Fingerprinted:
            def resolve_resource(self, request, path, locations, chain):
                return chain.resolve_resource(request, strip_hash(path), locations)

            def resolve_url_path(self, path, locations, chain):
                return chain.resolve_url_path(path, locations)
    """

    def resolve_resource(
        self,
        request: Request | None,
        request_path: str,
        locations: Sequence[Resource],
        chain: ResourceResolverChain,
    ) -> Resource | None: ...

    def resolve_url_path(
        self,
        resource_path: str,
        locations: Sequence[Resource],
        chain: ResourceResolverChain,
    ) -> str | None: ...


class ResourceResolverChain:
    """An ordered list of resolvers, invoked front to back.

    Each resolver receives the chain positioned after itself, so calling
    ``chain.resolve_resource(...)`` hands off to the next resolver.
    Running off the end yields ``None``.
    """

    __slots__ = ("_index", "_resolvers")

    def __init__(self, resolvers: Sequence[ResourceResolver], _index: int = 0) -> None:
        self._resolvers = tuple(resolvers)
        self._index = _index

    def __len__(self) -> int:
        return len(self._resolvers) - self._index

    def _next(self) -> tuple[ResourceResolver, ResourceResolverChain] | None:
        if self._index >= len(self._resolvers):
            return None
        rest = ResourceResolverChain(self._resolvers, self._index + 1)
        return self._resolvers[self._index], rest

    def resolve_resource(
        self,
        request: Request | None,
        request_path: str,
        locations: Sequence[Resource],
    ) -> Resource | None:
        step = self._next()
        if step is None:
            return None
        resolver, rest = step
        return resolver.resolve_resource(request, request_path, locations, rest)

    def resolve_url_path(self, resource_path: str, locations: Sequence[Resource]) -> str | None:
        step = self._next()
        if step is None:
            return None
        resolver, rest = step
        return resolver.resolve_url_path(resource_path, locations, rest)


class PathResourceResolver:
    """Find the first location that holds a readable resource at the path.

    Locations are tried in order. A candidate must exist, be readable
    and stay inside its location after normalisation; anything that
    escapes (``..`` segments, symlinks pointing outside) is skipped.
    Terminal: never delegates to the rest of the chain.
    """

    __slots__ = ()

    def resolve_resource(
        self,
        request: Request | None,  # noqa: ARG002
        request_path: str,
        locations: Sequence[Resource],
        chain: ResourceResolverChain,  # noqa: ARG002
    ) -> Resource | None:
        return self._find(request_path, locations)

    def resolve_url_path(
        self,
        resource_path: str,
        locations: Sequence[Resource],
        chain: ResourceResolverChain,  # noqa: ARG002
    ) -> str | None:
        return resource_path if self._find(resource_path, locations) is not None else None

    def _find(self, path: str, locations: Sequence[Resource]) -> Resource | None:
        for location in locations:
            try:
                candidate = location.create_relative(path)
                if not self._is_under(candidate, location):
                    logger.debug("Rejected %s: outside %s", path, location.description)
                    continue
                if candidate.exists() and candidate.is_readable():
                    return candidate
            except OSError:
                logger.debug("Failed to check %s in %s", path, location.description, exc_info=True)
        return None

    @staticmethod
    def _is_under(candidate: Resource, location: Resource) -> bool:
        if isinstance(candidate, FileSystemResource) and isinstance(location, FileSystemResource):
            return candidate.is_under(location)
        if isinstance(candidate, PackageResource) and isinstance(location, PackageResource):
            return candidate.is_under(location)
        # Unknown resource types manage their own containment.
        return True
