"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body and status, then chain ``.with_header()``
    calls. Each call returns a new ``Response``.

    ``omit_body`` marks a HEAD response: headers describe the full
    entity but the sender writes no body bytes.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()
    omit_body: bool = False

    # -- Chainable transformations --

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def without_body(self) -> "Response":
        """Return a new Response whose body is not sent (HEAD)."""
        return replace(self, omit_body=True)

    # -- Lookup --

    def header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        name_lower = name.lower()
        for hname, hvalue in self.headers:
            if hname.lower() == name_lower:
                return hvalue
        return None

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
