"""File handle."""

from __future__ import annotations

import importlib.util
import logging
import os
from collections.abc import Iterable
from types import ModuleType
from typing import TYPE_CHECKING

from handlefs.exceptions import (
    FileExtensionNotAllowedError,
    FileFoundError,
    FileMissingError,
    FilePermissionError,
    PathIsNotFileError,
)
from handlefs.handle import BaseHandle

if TYPE_CHECKING:
    from handlefs.protocols import FileSystem

logger = logging.getLogger(__name__)

# Only Python sources can be loaded through load_script()
SCRIPT_EXTENSION = "py"


class File(BaseHandle):
    """Handle over a single regular file.

    The handle only holds the path. Content is read from disk on every
    call, and no file descriptor is kept open between calls.
    """

    @classmethod
    def open(cls, path: str | os.PathLike[str], filesystem: FileSystem | None = None) -> File:
        """Create a handle, rejecting paths occupied by something else.

        Args:
            path: Location of the file. It does not need to exist.
            filesystem: Filesystem implementation. Defaults to the real one.

        Returns:
            File handle for the path.

        Raises:
            PathIsNotFileError: If the path exists and is not a regular file.
        """
        handle = cls(path, filesystem)
        if handle.fs.exists(handle.path) and not handle.fs.is_file(handle.path):
            raise PathIsNotFileError(handle.path)
        return handle

    @property
    def extension(self) -> str:
        """Text after the last dot of the basename, or "" if there is none."""
        name = self.basename
        return name.rsplit(".", 1)[1] if "." in name else ""

    def exists(self) -> bool:
        return self.fs.is_file(self.path)

    def exists_or_die(self) -> None:
        """Raise FileMissingError unless the file exists."""
        if not self.exists():
            raise FileMissingError(self.path)

    def write(self, content: str | bytes, overwrite: bool = True) -> int:
        """Write content to the file, creating it if needed.

        Args:
            content: Text (encoded as UTF-8) or bytes.
            overwrite: Replace the content when True, append when False.

        Returns:
            Number of bytes written.

        Raises:
            FilePermissionError: If the file exists and is not writable.
        """
        if self.exists() and not self.fs.is_writable(self.path):
            raise FilePermissionError(self.path, "write to")

        data = content.encode("utf-8") if isinstance(content, str) else content
        written = self.fs.write_bytes(self.path, data, append=not overwrite)
        logger.debug("Wrote %d bytes to %s (overwrite=%s)", written, self.path, overwrite)
        return written

    def read(self) -> bytes:
        """Read the full content of the file.

        Raises:
            FileMissingError: If the file does not exist.
            FilePermissionError: If the file is not readable.
        """
        self.exists_or_die()
        if not self.fs.is_readable(self.path):
            raise FilePermissionError(self.path, "read")
        return self.fs.read_bytes(self.path)

    def read_text(self, encoding: str = "utf-8") -> str:
        """Read the file and decode it."""
        return self.read().decode(encoding)

    def match_extensions(self, extensions: str | Iterable[str]) -> bool:
        """Check the extension against one value or a collection of values.

        The comparison is exact and case-sensitive.
        """
        if isinstance(extensions, str):
            return self.extension == extensions
        return self.extension in set(extensions)

    def match_extensions_or_die(self, extensions: str | Iterable[str]) -> None:
        """Raise FileExtensionNotAllowedError unless the extension matches."""
        allowed = [extensions] if isinstance(extensions, str) else list(extensions)
        if not self.match_extensions(allowed):
            raise FileExtensionNotAllowedError(self.path, allowed)

    def load_script(self) -> ModuleType:
        """Execute a trusted Python script and return it as a module.

        This runs arbitrary code in the current process. Only call it on
        files you control. The module is not added to ``sys.modules``.

        Raises:
            FileMissingError: If the file does not exist.
            FileExtensionNotAllowedError: If the file is not a ``.py`` file.
        """
        self.exists_or_die()
        self.match_extensions_or_die(SCRIPT_EXTENSION)

        module_name = f"handlefs_script_{self.basename[: -len(SCRIPT_EXTENSION) - 1]}"
        spec = importlib.util.spec_from_file_location(module_name, self.path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load script located at '{self.path}'")

        module = importlib.util.module_from_spec(spec)
        logger.debug("Executing script %s", self.path)
        spec.loader.exec_module(module)
        return module

    def delete(self) -> None:
        """Remove the file. Does nothing if it does not exist."""
        if self.exists():
            self.fs.unlink(self.path)
            logger.debug("Deleted file %s", self.path)

    def move(self, new_path: str | os.PathLike[str], overwrite: bool = False) -> File:
        """Rename the file.

        Args:
            new_path: Destination path.
            overwrite: Delete an existing destination file first.

        Returns:
            Handle for the destination.

        Raises:
            FileMissingError: If this file does not exist.
            PathIsNotFileError: If the destination is not a file.
            FileFoundError: If the destination exists and overwrite is False.
            SameSourceAndDestinationError: If the destination is this file.
        """
        self.exists_or_die()
        destination = File.open(new_path, self.fs)
        self._check_overlap(destination.path, "move")
        destination._claim_destination(self.path, overwrite, "move")

        self.fs.rename(self.path, destination.path)
        logger.debug("Moved file %s to %s", self.path, destination.path)
        return destination

    def copy(self, new_path: str | os.PathLike[str], overwrite: bool = False) -> File:
        """Duplicate the file, leaving the source intact.

        Same existence and overwrite contract as :meth:`move`.
        """
        self.exists_or_die()
        destination = File.open(new_path, self.fs)
        self._check_overlap(destination.path, "copy")
        destination._claim_destination(self.path, overwrite, "copy")

        self.fs.copy_file(self.path, destination.path)
        logger.debug("Copied file %s to %s", self.path, destination.path)
        return destination

    def _remove_for_overwrite(self) -> None:
        self.delete()

    def _conflict(self, source: str, action: str) -> Exception:
        return FileFoundError(source, self.path, action)
