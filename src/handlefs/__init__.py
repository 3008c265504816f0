"""Typed file and directory handles over a root-scoped storage."""

__version__ = "0.1.0"

from handlefs.directory import Directory
from handlefs.exceptions import (
    DestinationInsideSourceError,
    DirectoryFoundError,
    DirectoryIsNotEmptyError,
    DirectoryMissingError,
    DirectoryPermissionError,
    FileExtensionNotAllowedError,
    FileFoundError,
    FileMissingError,
    FilePermissionError,
    HandleError,
    PathIsNotDirectoryError,
    PathIsNotFileError,
    SameSourceAndDestinationError,
    SourceInsideDestinationError,
)
from handlefs.file import File

# Export protocol interfaces for type hints and dependency injection
from handlefs.protocols import FileSystem, PathHandle
from handlefs.storage import Storage

__all__ = [
    "__version__",
    "Directory",
    "File",
    "FileSystem",
    "PathHandle",
    "Storage",
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
