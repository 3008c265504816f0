"""Base handle implementation with shared behavior.

``File`` and ``Directory`` share identity (the path string), display and
the overwrite contract used by ``move``/``copy``. They vary only in the
type check, the error classes they raise and how they delete themselves.

Pattern: Template Method - the base class owns ``_check_overlap`` and
``_claim_destination``, subclasses provide ``exists`` and
``_remove_for_overwrite``.
"""

from __future__ import annotations

import ntpath
import os
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from handlefs.exceptions import SameSourceAndDestinationError, SourceInsideDestinationError
from handlefs.filesystem import RealFileSystem

if TYPE_CHECKING:
    from handlefs.protocols import FileSystem


def normalize_separators(path: str) -> str:
    """Convert Windows separators to forward slashes."""
    return path.replace("\\", "/")


def join_path(base: str, name: str) -> str:
    """Join a child name onto a base path without doubling the separator."""
    return base + name if base.endswith("/") else f"{base}/{name}"


def absolute_path(path: str) -> str:
    """Make a path absolute, using forward slashes.

    Paths that are already absolute, Windows drive paths included, are kept
    as given.
    """
    normalized = normalize_separators(path)
    if os.path.isabs(normalized) or ntpath.isabs(normalized):
        return normalized
    return normalize_separators(os.path.abspath(normalized))


def canonical_path(path: str) -> str:
    """Absolute, normalized form used to compare two paths."""
    return normalize_separators(os.path.abspath(normalize_separators(path)))


def is_within(path: str, parent: str) -> bool:
    """Check if a canonical path lies strictly below a canonical parent."""
    prefix = parent if parent.endswith("/") else parent + "/"
    return path != parent and path.startswith(prefix)


class BaseHandle(ABC):
    """Common state for handles: a path and the filesystem it lives on.

    The constructor never touches the filesystem. Use the ``open()``
    factory on concrete subclasses to also validate the path's type.
    """

    def __init__(self, path: str | os.PathLike[str], filesystem: FileSystem | None = None) -> None:
        self.path = os.fspath(path)
        self.fs: FileSystem = filesystem or RealFileSystem()

    @property
    def basename(self) -> str:
        """Last segment of the path, ignoring a trailing separator."""
        return os.path.basename(normalize_separators(self.path).rstrip("/"))

    @abstractmethod
    def exists(self) -> bool:
        """Check if the path currently denotes a resource of this type."""
        ...

    @abstractmethod
    def _remove_for_overwrite(self) -> None:
        """Delete the resource so that something can replace it."""
        ...

    @abstractmethod
    def _conflict(self, source: str, action: str) -> Exception:
        """Build the error raised when this destination already exists."""
        ...

    def _check_overlap(self, destination: str, action: str) -> None:
        """Reject destinations whose overwrite would delete this handle's path.

        Must run before ``_claim_destination``.

        Raises:
            SameSourceAndDestinationError: If both paths are the same.
            SourceInsideDestinationError: If the destination contains the source.
        """
        source = canonical_path(self.path)
        target = canonical_path(destination)
        if target == source:
            raise SameSourceAndDestinationError(self.path, destination, action)
        if is_within(source, target):
            raise SourceInsideDestinationError(self.path, destination, action)

    def _claim_destination(self, source: str, overwrite: bool, action: str) -> None:
        """Make this handle's path available as a move/copy destination.

        Raises the type-specific "found" error when the destination exists
        and ``overwrite`` is False. With ``overwrite`` the destination is
        deleted; a failure there aborts the whole operation.
        """
        if not overwrite and self.exists():
            raise self._conflict(source, action)
        if overwrite:
            self._remove_for_overwrite()

    def __fspath__(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseHandle):
            return NotImplemented
        return type(self) is type(other) and self.path == other.path

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.path))
