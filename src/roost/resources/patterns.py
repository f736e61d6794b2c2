"""URL path patterns for resource handlers.

Only three forms are understood:

- ``/favicon.ico`` — exact path; the path within the pattern is the
  last segment
- ``/images/*`` — one segment below ``/images``
- ``/resources/**`` — anything below ``/resources``
"""

from dataclasses import dataclass

from roost.errors import InvalidRegistrationError


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A compiled resource path pattern."""

    pattern: str
    prefix: str
    wildcard: str  # "", "*" or "**"

    @classmethod
    def parse(cls, pattern: str) -> "PathPattern":
        if not pattern or not pattern.startswith("/"):
            msg = f"Resource path pattern {pattern!r} must start with '/'."
            raise InvalidRegistrationError(msg)

        for suffix in ("/**", "/*"):
            if pattern.endswith(suffix):
                prefix = pattern[: -len(suffix)]
                wildcard = suffix[1:]
                break
        else:
            prefix, wildcard = pattern, ""

        if "*" in prefix:
            msg = f"Resource path pattern {pattern!r} may only use '*' or '**' as its last segment."
            raise InvalidRegistrationError(msg)
        if wildcard:
            prefix = prefix.rstrip("/")
        return cls(pattern=pattern, prefix=prefix, wildcard=wildcard)

    def match(self, path: str) -> str | None:
        """Return the path within the pattern, or ``None`` if no match."""
        if not self.wildcard:
            if path != self.prefix:
                return None
            return path.rsplit("/", 1)[-1]

        if self.prefix and not path.startswith(self.prefix + "/"):
            return None
        within = path[len(self.prefix) :].lstrip("/")
        if self.wildcard == "*" and "/" in within.rstrip("/"):
            return None
        return within
