"""Exception hierarchy for filesystem handles.

Every error raised by handlefs derives from :class:`HandleError` and keeps
the offending path on ``.path``. Each one also derives from the closest
builtin exception, so ``except FileNotFoundError`` and friends still work
for callers that do not know about handlefs.
"""

from __future__ import annotations

__all__ = [
    "HandleError",
    "PathIsNotFileError",
    "PathIsNotDirectoryError",
    "FileMissingError",
    "DirectoryMissingError",
    "FilePermissionError",
    "DirectoryPermissionError",
    "FileFoundError",
    "DirectoryFoundError",
    "DirectoryIsNotEmptyError",
    "FileExtensionNotAllowedError",
    "DestinationInsideSourceError",
    "SourceInsideDestinationError",
    "SameSourceAndDestinationError",
]


class HandleError(Exception):
    """Base class for all handle errors."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


# Existence mismatches


class PathIsNotFileError(HandleError, OSError):
    """Something other than a regular file exists at the path."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"The resource located at '{path}' that you are trying to open is not a file.",
            path,
        )


class PathIsNotDirectoryError(HandleError, NotADirectoryError):
    """Something other than a directory exists at the path."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"The resource located at '{path}' that you are trying to open is not a directory.",
            path,
        )


# Not found


class FileMissingError(HandleError, FileNotFoundError):
    """The file was expected to exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File located at '{path}' not found.", path)


class DirectoryMissingError(HandleError, FileNotFoundError):
    """The directory was expected to exist."""

    def __init__(self, path: str, message: str | None = None) -> None:
        super().__init__(message or f"Directory located at '{path}' not found.", path)


# Permissions


class FilePermissionError(HandleError, PermissionError):
    """The file exists but lacks the permission the operation needs."""

    def __init__(self, path: str, action: str) -> None:
        super().__init__(
            f"Cannot {action} file located at '{path}'. Check file permissions.", path
        )


class DirectoryPermissionError(HandleError, PermissionError):
    """The directory exists but cannot be listed."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Cannot read directory located at '{path}'. Check directory permissions.",
            path,
        )


# Destination conflicts


class FileFoundError(HandleError, FileExistsError):
    """A move/copy destination file already exists."""

    def __init__(self, source: str, destination: str, action: str) -> None:
        super().__init__(
            f"Cannot {action} '{source}' to '{destination}'. "
            "Pass overwrite=True to overwrite it.",
            destination,
        )


class DirectoryFoundError(HandleError, FileExistsError):
    """A move/copy destination directory already exists."""

    def __init__(self, source: str, destination: str, action: str) -> None:
        super().__init__(
            f"Cannot {action} '{source}' to '{destination}'. "
            "Pass overwrite=True to overwrite it.",
            destination,
        )


class DestinationInsideSourceError(HandleError, ValueError):
    """A directory cannot be copied or moved into itself."""

    def __init__(self, source: str, destination: str, action: str = "copy") -> None:
        super().__init__(
            f"Cannot {action} '{source}' to '{destination}': destination is inside the source.",
            destination,
        )


class SourceInsideDestinationError(HandleError, ValueError):
    """The destination contains the source, so overwriting it would destroy the source."""

    def __init__(self, source: str, destination: str, action: str) -> None:
        super().__init__(
            f"Cannot {action} '{source}' to '{destination}': source is inside the destination.",
            destination,
        )


class SameSourceAndDestinationError(HandleError, ValueError):
    """Source and destination are the same path."""

    def __init__(self, source: str, destination: str, action: str) -> None:
        super().__init__(
            f"Cannot {action} '{source}' to '{destination}': they are the same path.",
            destination,
        )


# Structural conflicts


class DirectoryIsNotEmptyError(HandleError, OSError):
    """Non-recursive delete of a directory that still has children."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Cannot delete directory located at '{path}' because it is not empty. "
            "Pass recursive=True to delete it recursively.",
            path,
        )


# Extensions


class FileExtensionNotAllowedError(HandleError, ValueError):
    """The file extension is not one of the accepted ones."""

    def __init__(self, path: str, allowed: list[str]) -> None:
        super().__init__(
            f"Extension not allowed for file located at '{path}'. "
            f"Only '{', '.join(allowed)}' accepted.",
            path,
        )
        self.allowed = allowed
