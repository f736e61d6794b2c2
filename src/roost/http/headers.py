"""Case-insensitive lookup over ASGI request headers."""

from collections.abc import Iterable, Mapping


class Headers:
    """Read-only, case-insensitive request header lookup.

    Built from the raw ``(name, value)`` byte pairs of an ASGI scope.
    Names are lowercased once; a repeated header keeps its first value.
    """

    __slots__ = ("_values",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        values: dict[str, str] = {}
        for name, value in raw:
            values.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
        self._values = values

    @classmethod
    def from_dict(cls, values: Mapping[str, str]) -> "Headers":
        """Build headers from a plain ``{name: value}`` mapping."""
        return cls(
            (name.encode("latin-1"), value.encode("latin-1")) for name, value in values.items()
        )

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._values

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._values.get(name.lower(), default)
