"""Filesystem abstraction for testability.

This module provides the production implementation of the ``FileSystem``
protocol. ``RealFileSystem`` wraps ``os`` and ``shutil`` calls; handles
never touch those modules directly.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterator


class RealFileSystem:
    """Production filesystem implementation.

    Satisfies the FileSystem protocol structurally.
    """

    def exists(self, path: str) -> bool:
        """Check if anything exists at a path, broken symlinks included."""
        return os.path.lexists(path)

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        """Check if a path is a directory."""
        return os.path.isdir(path)

    def is_readable(self, path: str) -> bool:
        """Check read permission."""
        return os.access(path, os.R_OK)

    def is_writable(self, path: str) -> bool:
        """Check write permission."""
        return os.access(path, os.W_OK)

    def read_bytes(self, path: str) -> bytes:
        """Read the full content of a file."""
        with open(path, "rb") as f:
            return f.read()

    def write_bytes(self, path: str, data: bytes, append: bool = False) -> int:
        """Write or append data to a file."""
        with open(path, "ab" if append else "wb") as f:
            return f.write(data)

    def unlink(self, path: str) -> None:
        """Remove a file."""
        os.unlink(path)

    def mkdir(self, path: str, mode: int = 0o777, parents: bool = False) -> None:
        """Create a directory, optionally with its missing parents."""
        if parents:
            os.makedirs(path, mode=mode, exist_ok=True)
        else:
            os.mkdir(path, mode)

    def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        os.rmdir(path)

    def rename(self, src: str, dst: str) -> None:
        """Rename a file or directory, replacing a file destination."""
        os.replace(src, dst)

    def copy_file(self, src: str, dst: str) -> None:
        """Copy file content and permission bits."""
        shutil.copy(src, dst)

    def scandir(self, path: str) -> Iterator[os.DirEntry[str]]:
        """Iterate over the immediate entries of a directory."""
        with os.scandir(path) as entries:
            yield from entries
