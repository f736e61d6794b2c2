"""Turning textual locations into resources.

Location strings accepted by ``DefaultResourceLoader``:

- ``file:/srv/www/`` — an explicit filesystem path
- ``package:myapp/static/`` — data inside an importable package, imported
  on first use
- ``classpath:/static/`` — data inside the loader's default package
- anything else — a path relative to the loader's base directory
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Protocol

from roost.errors import ConfigurationError
from roost.resources.resource import FileSystemResource, PackageResource, Resource

logger = logging.getLogger("roost.resources")

FILE_PREFIX = "file:"
PACKAGE_PREFIX = "package:"
CLASSPATH_PREFIX = "classpath:"


class ResourceLoader(Protocol):
    """Anything that resolves a location string into a ``Resource``."""

    def get_resource(self, location: str) -> Resource: ...


class DefaultResourceLoader:
    """Resolve filesystem and package locations.

    Usage::

        loader = DefaultResourceLoader(base_dir="./web", package="myapp")
        loader.get_resource("/public/")            # ./web/public/
        loader.get_resource("classpath:/static/")  # myapp/static/
        loader.get_resource("package:other/assets/")
    """

    __slots__ = ("_base_dir", "_package")

    def __init__(self, base_dir: str | Path = ".", *, package: str | None = None) -> None:
        self._base_dir = Path(base_dir)
        self._package = package

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def package(self) -> str | None:
        return self._package

    def get_resource(self, location: str) -> Resource:
        """Resolve *location*. Existence is not checked here."""
        if location.startswith(FILE_PREFIX):
            return FileSystemResource.from_location(location[len(FILE_PREFIX) :])

        if location.startswith(PACKAGE_PREFIX):
            target = location[len(PACKAGE_PREFIX) :].lstrip("/")
            package, _, subpath = target.partition("/")
            if not package:
                msg = f"Package location {location!r} does not name a package."
                raise ConfigurationError(msg)
            return self._package_resource(package, subpath)

        if location.startswith(CLASSPATH_PREFIX):
            if self._package is None:
                msg = (
                    f"Cannot resolve {location!r}: no default package configured. "
                    "Pass package=... to DefaultResourceLoader or use 'package:<name>/...'."
                )
                raise ConfigurationError(msg)
            return self._package_resource(self._package, location[len(CLASSPATH_PREFIX) :])

        # Web-root relative: "/public/" means <base_dir>/public/
        relative = location.lstrip("/")
        path = self._base_dir / relative if relative else self._base_dir
        is_dir = location.endswith(("/", "\\")) or not relative or path.is_dir()
        return FileSystemResource(path, is_directory_location=is_dir)

    def _package_resource(self, package: str, subpath: str) -> PackageResource:
        cleaned = subpath.strip("/")
        logger.debug("Package location %s:%s", package, cleaned or ".")
        return PackageResource(
            package=package,
            subpath=PurePosixPath(cleaned) if cleaned else PurePosixPath("."),
            is_directory_location=not cleaned or subpath.endswith("/"),
        )
