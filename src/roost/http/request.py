"""Immutable HTTP request.

Resource handlers only read the method, the path and a conditional
header, so the request is a frozen record built once from the ASGI
scope.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from roost.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request. The body is never read."""

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)

    @property
    def if_modified_since(self) -> str | None:
        """The raw ``If-Modified-Since`` header value."""
        return self.headers.get("if-modified-since")

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI scope."""
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
        )
