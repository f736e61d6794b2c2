"""Resource transformers — post-processing resolved content.

A transformer receives the resolved resource and the rest of the chain.
It usually lets the chain run first and then rewrites the result::

    class Banner:
        def transform(self, request, resource, chain):
            resource = chain.transform(request, resource)
            return TransformedResource(resource, b"/* v1 */\\n" + resource.read_bytes())

No transformers are configured by default.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from roost.http.request import Request
from roost.resources.resource import Resource


class ResourceTransformer(Protocol):
    """Protocol for transformation strategies."""

    def transform(
        self,
        request: Request | None,
        resource: Resource,
        chain: ResourceTransformerChain,
    ) -> Resource: ...


class ResourceTransformerChain:
    """An ordered list of transformers, invoked front to back.

    Running off the end returns the resource unchanged.
    """

    __slots__ = ("_index", "_transformers")

    def __init__(self, transformers: Sequence[ResourceTransformer], _index: int = 0) -> None:
        self._transformers = tuple(transformers)
        self._index = _index

    def __len__(self) -> int:
        return len(self._transformers) - self._index

    def transform(self, request: Request | None, resource: Resource) -> Resource:
        if self._index >= len(self._transformers):
            return resource
        transformer = self._transformers[self._index]
        rest = ResourceTransformerChain(self._transformers, self._index + 1)
        return transformer.transform(request, resource, rest)
