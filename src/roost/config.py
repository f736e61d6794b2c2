"""Resource serving configuration.

ResourceConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResourceConfig:
    """Defaults shared by every registration in a registry.

    All fields have sensible defaults. Override what you need::

        config = ResourceConfig(default_cache_period=3600, port=3000)
    """

    # Server (used by ResourceApp.run)
    host: str = "127.0.0.1"
    port: int = 8000

    # Responses
    default_content_type: str = "application/octet-stream"
    allowed_methods: frozenset[str] = frozenset({"GET", "HEAD"})

    # Caching — None sends no Cache-Control, 0 prevents caching,
    # N > 0 sends max-age=N. Registrations may override per handler.
    default_cache_period: int | None = None
    use_last_modified: bool = True
