"""Addressable resources — the things a location resolves to.

A ``Resource`` is anything that can report whether it exists, produce
its bytes and derive a sibling or child resource from a relative path.
Filesystem directories and importable package data are supported out
of the box; transformers wrap a resource in ``TransformedResource`` to
replace its content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources as importlib_resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

logger = logging.getLogger("roost.resources")


@runtime_checkable
class Resource(Protocol):
    """Protocol for addressable static content.

    No base class required. Implementations only need the shape.
    """

    @property
    def filename(self) -> str | None: ...

    @property
    def description(self) -> str: ...

    def exists(self) -> bool: ...

    def is_readable(self) -> bool: ...

    def read_bytes(self) -> bytes: ...

    def content_length(self) -> int: ...

    def last_modified(self) -> float | None: ...

    def create_relative(self, relative_path: str) -> Resource: ...


def _join(parent: PurePosixPath | Path, relative_path: str, *, is_dir: bool) -> str:
    """Apply *relative_path* the way a URL would: directories are bases,
    files are replaced by their sibling."""
    base = parent if is_dir else parent.parent
    return str(base / relative_path)


@dataclass(frozen=True, slots=True)
class FileSystemResource:
    """A file or directory on the local filesystem.

    Directory locations should be given with a trailing ``/`` so that
    relative resources resolve inside them rather than beside them.
    """

    path: Path
    is_directory_location: bool = False

    @classmethod
    def from_location(cls, location: str | Path) -> FileSystemResource:
        text = str(location)
        is_dir = text.endswith(("/", "\\")) or Path(text).is_dir()
        return cls(Path(text), is_directory_location=is_dir)

    @property
    def filename(self) -> str | None:
        return self.path.name or None

    @property
    def description(self) -> str:
        return f"file [{self.path}]"

    def exists(self) -> bool:
        return self.path.exists()

    def is_readable(self) -> bool:
        return self.path.is_file()

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def content_length(self) -> int:
        return self.path.stat().st_size

    def last_modified(self) -> float | None:
        try:
            return self.path.stat().st_mtime
        except OSError:
            return None

    def create_relative(self, relative_path: str) -> FileSystemResource:
        joined = _join(self.path, relative_path, is_dir=self.is_directory_location)
        return FileSystemResource(Path(joined))

    def is_under(self, location: FileSystemResource) -> bool:
        """True if this resource resolves to a path inside *location*.

        Resolves symlinks on both sides before comparing.
        """
        root = location.path.resolve()
        if not location.is_directory_location:
            root = root.parent
        return self.path.resolve().is_relative_to(root)


@dataclass(frozen=True, slots=True)
class PackageResource:
    """Data shipped inside an importable package.

    Only the package name is stored; the package is imported through
    ``importlib.resources`` when the resource is first inspected. A
    package that cannot be imported behaves like a missing directory.
    ``subpath`` tracks the position inside the package for the
    containment check.
    """

    package: str
    subpath: PurePosixPath = PurePosixPath(".")
    is_directory_location: bool = False

    @property
    def root(self) -> Traversable | None:
        try:
            return importlib_resources.files(self.package)
        except ModuleNotFoundError:
            logger.debug("Package %r for resource location is not importable", self.package)
            return None

    @property
    def traversable(self) -> Traversable | None:
        node = self.root
        if node is None:
            return None
        for part in self.subpath.parts:
            if part in (".", ""):
                continue
            node = node / part
        return node

    @property
    def filename(self) -> str | None:
        name = self.subpath.name
        return name or None

    @property
    def description(self) -> str:
        return f"package resource [{self.package}:{self.subpath}]"

    def exists(self) -> bool:
        node = self.traversable
        return node is not None and (node.is_file() or node.is_dir())

    def is_readable(self) -> bool:
        node = self.traversable
        return node is not None and node.is_file()

    def read_bytes(self) -> bytes:
        node = self.traversable
        if node is None:
            raise FileNotFoundError(self.description)
        return node.read_bytes()

    def content_length(self) -> int:
        return len(self.read_bytes())

    def last_modified(self) -> float | None:
        node = self.traversable
        if isinstance(node, Path):
            try:
                return node.stat().st_mtime
            except OSError:
                return None
        return None

    def create_relative(self, relative_path: str) -> PackageResource:
        node = None if self.is_directory_location else self.traversable
        is_dir = self.is_directory_location or (node is not None and node.is_dir())
        joined = PurePosixPath(_join(self.subpath, relative_path, is_dir=is_dir))
        return PackageResource(package=self.package, subpath=joined)

    def is_under(self, location: PackageResource) -> bool:
        """True if this resource stays inside *location* within the package."""
        if location.package != self.package:
            return False
        parts: list[str] = []
        for part in self.subpath.parts:
            if part == "..":
                if not parts:
                    return False
                parts.pop()
            elif part not in (".", ""):
                parts.append(part)
        base = [p for p in location.subpath.parts if p not in (".", "")]
        return parts[: len(base)] == base


@dataclass(frozen=True, slots=True)
class TransformedResource:
    """A resource whose content was replaced by a transformer.

    Metadata (name, timestamp) comes from the original resource.
    """

    original: Resource
    content: bytes

    @property
    def filename(self) -> str | None:
        return self.original.filename

    @property
    def description(self) -> str:
        return f"transformed {self.original.description}"

    def exists(self) -> bool:
        return True

    def is_readable(self) -> bool:
        return True

    def read_bytes(self) -> bytes:
        return self.content

    def content_length(self) -> int:
        return len(self.content)

    def last_modified(self) -> float | None:
        return self.original.last_modified()

    def create_relative(self, relative_path: str) -> Resource:
        return self.original.create_relative(relative_path)
