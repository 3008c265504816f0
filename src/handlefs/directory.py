"""Directory handle.

Recursive operations (delete, copy, walk) use an explicit stack instead of
Python recursion, so tree depth is only bounded by memory.

Listing cache
-------------
``read()`` caches the listing on the handle the first time it succeeds and
returns it on every later call, even after the handle's own ``write()`` or
``delete()`` changed the directory. ``walk()`` and ``copy()`` go through the
same cache. Build a new handle, or call ``rescan()``, when fresh data is
needed. ``delete()`` never trusts the cache and always lists from disk.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from typing import TYPE_CHECKING, Union

from handlefs.exceptions import (
    DestinationInsideSourceError,
    DirectoryFoundError,
    DirectoryIsNotEmptyError,
    DirectoryMissingError,
    DirectoryPermissionError,
    PathIsNotDirectoryError,
)
from handlefs.file import File
from handlefs.handle import (
    BaseHandle,
    absolute_path,
    canonical_path,
    is_within,
    join_path,
    normalize_separators,
)

if TYPE_CHECKING:
    from handlefs.protocols import FileSystem

logger = logging.getLogger(__name__)

Entry = Union[File, "Directory"]

DEFAULT_PERMISSIONS = 0o777


class Directory(BaseHandle):
    """Handle over a single directory."""

    def __init__(self, path: str | os.PathLike[str], filesystem: FileSystem | None = None) -> None:
        super().__init__(path, filesystem)
        self._children: dict[str, Entry] | None = None

    @classmethod
    def open(
        cls, path: str | os.PathLike[str], filesystem: FileSystem | None = None
    ) -> Directory:
        """Create a handle, rejecting paths occupied by something else.

        Args:
            path: Location of the directory. It does not need to exist.
            filesystem: Filesystem implementation. Defaults to the real one.

        Returns:
            Directory handle for the path.

        Raises:
            PathIsNotDirectoryError: If the path exists and is not a directory.
        """
        handle = cls(path, filesystem)
        if handle.fs.exists(handle.path) and not handle.fs.is_dir(handle.path):
            raise PathIsNotDirectoryError(handle.path)
        return handle

    @property
    def cached(self) -> bool:
        """Whether a listing is cached on this handle."""
        return self._children is not None

    def exists(self) -> bool:
        return self.fs.is_dir(self.path)

    def exists_or_die(self) -> None:
        """Raise DirectoryMissingError unless the directory exists."""
        if not self.exists():
            raise DirectoryMissingError(self.path)

    def write(self, recursive: bool = False, permissions: int = DEFAULT_PERMISSIONS) -> None:
        """Create the directory. Does nothing if it already exists.

        Args:
            recursive: Also create missing parent directories.
            permissions: Mode bits for new directories, subject to the umask.

        Raises:
            DirectoryMissingError: If the parent is missing and recursive is False.
        """
        if self.exists():
            return

        if not recursive:
            parent = os.path.dirname(normalize_separators(self.path).rstrip("/"))
            if parent and not self.fs.is_dir(parent):
                raise DirectoryMissingError(
                    parent,
                    f"Cannot create '{self.path}': parent directory '{parent}' not found. "
                    "Pass recursive=True to create it.",
                )

        self.fs.mkdir(self.path, permissions, parents=recursive)
        logger.debug("Created directory %s (recursive=%s)", self.path, recursive)

    def read(self) -> dict[str, Entry]:
        """List the immediate children of the directory.

        Symbolic links are skipped. Keys are absolute child paths using
        forward slashes, ordered by name; a handle built on a relative path
        is resolved against the current directory. The first successful
        listing is cached.

        Returns:
            Mapping of child path to File or Directory handle.

        Raises:
            DirectoryMissingError: If the directory does not exist.
            DirectoryPermissionError: If the directory is not readable.
        """
        self._check_readable()
        if self._children is None:
            self._children = self._list_children()
        return dict(self._children)

    def _check_readable(self) -> None:
        self.exists_or_die()
        if not self.fs.is_readable(self.path):
            raise DirectoryPermissionError(self.path)

    def _scan(self) -> dict[str, Entry]:
        """List the children from disk, bypassing and leaving the cache alone."""
        self._check_readable()
        return self._list_children()

    def _list_children(self) -> dict[str, Entry]:
        base = absolute_path(self.path)
        children: dict[str, Entry] = {}
        for entry in sorted(self.fs.scandir(self.path), key=lambda e: e.name):
            if entry.is_symlink():
                continue
            child_path = join_path(base, entry.name)
            if entry.is_dir(follow_symlinks=False):
                children[child_path] = Directory(child_path, self.fs)
            elif entry.is_file(follow_symlinks=False):
                children[child_path] = File(child_path, self.fs)
        return children

    def rescan(self) -> dict[str, Entry]:
        """Drop the cached listing and read the directory again."""
        self._children = None
        return self.read()

    def empty(self) -> bool:
        """Check if the directory has no children."""
        return not self.read()

    def walk(self) -> Iterator[Entry]:
        """Yield every file and directory below this one.

        Each directory's children are yielded, in name order, before the
        walk descends into its subdirectories.
        """
        pending: list[Directory] = [self]
        while pending:
            directory = pending.pop()
            subdirectories = []
            for child in directory.read().values():
                yield child
                if isinstance(child, Directory):
                    subdirectories.append(child)
            pending.extend(reversed(subdirectories))

    def delete(self, recursive: bool = False) -> None:
        """Remove the directory. Does nothing if it does not exist.

        Args:
            recursive: Remove the content first, children before parents.

        Raises:
            DirectoryIsNotEmptyError: If the directory has children and
                recursive is False.
        """
        if not self.exists():
            return
        # Always scan fresh: a stale cache must not hide children from rmdir.
        if not recursive:
            if self._scan():
                raise DirectoryIsNotEmptyError(self.path)
            self.fs.rmdir(self.path)
            logger.debug("Deleted directory %s", self.path)
            return

        # Pre-order collection; removing in reverse handles leaves first.
        visited: list[Directory] = []
        pending: list[Directory] = [self]
        while pending:
            directory = pending.pop()
            visited.append(directory)
            for child in directory._scan().values():
                if isinstance(child, Directory):
                    pending.append(child)
                else:
                    child.delete()

        for directory in reversed(visited):
            self.fs.rmdir(directory.path)
        logger.debug("Deleted directory %s and %d subdirectories", self.path, len(visited) - 1)

    def move(self, new_path: str | os.PathLike[str], overwrite: bool = False) -> Directory:
        """Rename the whole tree.

        Args:
            new_path: Destination path.
            overwrite: Recursively delete an existing destination first.

        Returns:
            Fresh handle for the destination.

        Raises:
            DirectoryMissingError: If this directory does not exist.
            PathIsNotDirectoryError: If the destination is not a directory.
            DirectoryFoundError: If the destination exists and overwrite is False.
            SameSourceAndDestinationError: If the destination is this directory.
            DestinationInsideSourceError: If the destination lies inside it.
            SourceInsideDestinationError: If the destination contains it.
        """
        self.exists_or_die()
        destination = Directory.open(new_path, self.fs)
        self._check_overlap(destination.path, "move")
        destination._claim_destination(self.path, overwrite, "move")

        self.fs.rename(self.path, destination.path)
        logger.debug("Moved directory %s to %s", self.path, destination.path)
        return Directory(destination.path, self.fs)

    def copy(self, new_path: str | os.PathLike[str], overwrite: bool = False) -> Directory:
        """Copy the whole tree, preserving its relative structure.

        Same existence and overwrite contract as :meth:`move`. The flag is
        propagated to every file and subdirectory copied.

        Raises:
            SameSourceAndDestinationError: If the destination is this directory.
            DestinationInsideSourceError: If the destination lies inside it.
            SourceInsideDestinationError: If the destination contains it.
        """
        self.exists_or_die()
        destination = Directory.open(new_path, self.fs)
        self._check_overlap(destination.path, "copy")
        destination._claim_destination(self.path, overwrite, "copy")

        pending: list[tuple[Directory, Directory]] = [(self, destination)]
        while pending:
            source, target = pending.pop()
            target.write(recursive=True)
            for child in source.read().values():
                child_path = join_path(target.path, child.basename)
                if isinstance(child, Directory):
                    subdirectory = Directory.open(child_path, self.fs)
                    subdirectory._claim_destination(child.path, overwrite, "copy")
                    pending.append((child, subdirectory))
                else:
                    child.copy(child_path, overwrite)

        logger.debug("Copied directory %s to %s", self.path, destination.path)
        return Directory(destination.path, self.fs)

    def _check_overlap(self, destination: str, action: str) -> None:
        super()._check_overlap(destination, action)
        if is_within(canonical_path(destination), canonical_path(self.path)):
            raise DestinationInsideSourceError(self.path, destination, action)

    def _remove_for_overwrite(self) -> None:
        self.delete(recursive=True)

    def _conflict(self, source: str, action: str) -> Exception:
        return DirectoryFoundError(source, self.path, action)
