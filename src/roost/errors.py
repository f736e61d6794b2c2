"""Roost exception hierarchy.

Shared across registration, handler, middleware and the ASGI layer so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when resource configuration is invalid.

    Typically raised at startup while registrations are wired up.
    """


class InvalidRegistrationError(ConfigurationError, ValueError):
    """A registration was given an invalid argument.

    Raised for a missing or malformed path pattern and for a negative
    cache period.
    """


class IncompleteRegistrationError(ConfigurationError):
    """A registration was asked for a handler before it was complete.

    Raised by ``get_request_handler()`` when no location was added.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RoostError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers or middleware. The ASGI handler catches these
    and turns them into plain responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — nothing matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — a resource matched but not for this HTTP method.

    Includes an ``Allow`` header listing the supported methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
