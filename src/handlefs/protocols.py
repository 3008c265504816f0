"""Protocol definitions for core abstractions.

Two seams are defined here:

- ``FileSystem``: the OS primitives every handle goes through. The
  production implementation is :class:`handlefs.filesystem.RealFileSystem`;
  tests substitute a ``MagicMock`` to exercise error paths that are hard to
  reproduce on disk (for example permission checks when running as root).
- ``PathHandle``: the capability shared by ``File`` and ``Directory``.
  ``Directory``'s recursive delete and copy only rely on this interface for
  the children they visit.

All concrete implementations satisfy these protocols structurally.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the filesystem primitives used by handles."""

    def exists(self, path: str) -> bool:
        """Check if anything (including a broken symlink) exists at a path."""
        ...

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        ...

    def is_dir(self, path: str) -> bool:
        """Check if a path is a directory."""
        ...

    def is_readable(self, path: str) -> bool:
        """Check if the current process may read a path."""
        ...

    def is_writable(self, path: str) -> bool:
        """Check if the current process may write a path."""
        ...

    def read_bytes(self, path: str) -> bytes:
        """Read the full content of a file."""
        ...

    def write_bytes(self, path: str, data: bytes, append: bool = False) -> int:
        """Write or append data to a file.

        Returns:
            Number of bytes written.
        """
        ...

    def unlink(self, path: str) -> None:
        """Remove a file."""
        ...

    def mkdir(self, path: str, mode: int = 0o777, parents: bool = False) -> None:
        """Create a directory."""
        ...

    def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        ...

    def rename(self, src: str, dst: str) -> None:
        """Rename a file or directory."""
        ...

    def copy_file(self, src: str, dst: str) -> None:
        """Copy the content of a file."""
        ...

    def scandir(self, path: str) -> Iterator[os.DirEntry[str]]:
        """Iterate over the immediate entries of a directory."""
        ...


@runtime_checkable
class PathHandle(Protocol):
    """Capability shared by file and directory handles."""

    path: str

    @property
    def basename(self) -> str:
        """Last path segment."""
        ...

    def exists(self) -> bool:
        """Check if the handle's path currently has the handle's type."""
        ...

    def delete(self) -> None:
        """Remove the resource; no-op when absent."""
        ...

    def copy(self, new_path: str, overwrite: bool = False) -> PathHandle:
        """Copy the resource and return a handle for the copy."""
        ...

    def move(self, new_path: str, overwrite: bool = False) -> PathHandle:
        """Move the resource and return a handle for the new location."""
        ...
