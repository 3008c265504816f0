"""Root-scoped storage resolving logical paths to handles.

A logical path is relative to the storage root and may contain alias
tokens such as ``{uploads}``. Resolution substitutes every registered
token, then anchors the result under the root::

    storage = Storage("/srv/app")
    storage.add_alias("uploads", "user/uploads")
    storage.open_file("{uploads}/a.png").path  # "/srv/app/user/uploads/a.png"
"""

from __future__ import annotations

import logging
import os
import re
from typing import TYPE_CHECKING

from handlefs.directory import Directory
from handlefs.exceptions import DirectoryMissingError
from handlefs.file import File
from handlefs.filesystem import RealFileSystem
from handlefs.handle import normalize_separators

if TYPE_CHECKING:
    from handlefs.protocols import FileSystem
    from handlefs.settings import StorageSettings

logger = logging.getLogger(__name__)

_REPEATED_SEPARATORS = re.compile(r"/{2,}")


class Storage:
    """Factory for handles rooted at a directory.

    Args:
        root: Existing directory every logical path is resolved under.
        filesystem: Filesystem implementation shared with opened handles.

    Raises:
        DirectoryMissingError: If ``root`` is not an existing directory.
    """

    def __init__(self, root: str | os.PathLike[str], filesystem: FileSystem | None = None) -> None:
        self.fs: FileSystem = filesystem or RealFileSystem()
        root_path = os.fspath(root)
        if not self.fs.is_dir(root_path):
            raise DirectoryMissingError(root_path, f"Root directory not found: '{root_path}'.")

        self.root = normalize_separators(os.path.abspath(root_path)).rstrip("/") + "/"
        self._aliases: dict[str, str] = {}

    @classmethod
    def from_settings(
        cls, settings: StorageSettings, filesystem: FileSystem | None = None
    ) -> Storage:
        """Create a storage and register the aliases declared in settings."""
        storage = cls(settings.root, filesystem)
        for token, path in settings.aliases.items():
            storage.add_alias(token, path)
        return storage

    @property
    def aliases(self) -> dict[str, str]:
        """Registered aliases mapped to their absolute targets."""
        return dict(self._aliases)

    def add_alias(self, token: str, path: str | os.PathLike[str]) -> None:
        """Register ``{token}`` as a substitution for ``path``.

        Args:
            token: Alias name, written between braces in logical paths.
            path: Target, relative to the root unless already under it.

        Raises:
            ValueError: If the token is empty or contains braces.
        """
        if not token or "{" in token or "}" in token:
            raise ValueError(f"Invalid alias token: {token!r}")

        target = self._anchor(os.fspath(path))
        if not target.endswith("/"):
            target += "/"
        self._aliases[token] = target
        logger.debug("Registered alias {%s} -> %s", token, target)

    def remove_alias(self, token: str) -> bool:
        """Unregister an alias.

        Returns:
            True if removed, False if not registered.
        """
        return self._aliases.pop(token, None) is not None

    def resolve(self, logical_path: str | os.PathLike[str]) -> str:
        """Turn a logical path into an absolute path under the root.

        Every alias token is substituted wherever it appears. No existence
        check is made.
        """
        path = os.fspath(logical_path)
        for token, target in self._aliases.items():
            path = path.replace(f"{{{token}}}", target)
        return self._anchor(path)

    def open_dir(self, logical_path: str | os.PathLike[str]) -> Directory:
        """Resolve a logical path and open it as a directory.

        Raises:
            PathIsNotDirectoryError: If something other than a directory is there.
        """
        return Directory.open(self.resolve(logical_path), self.fs)

    def open_file(self, logical_path: str | os.PathLike[str]) -> File:
        """Resolve a logical path and open it as a file.

        Raises:
            PathIsNotFileError: If something other than a file is there.
        """
        return File.open(self.resolve(logical_path), self.fs)

    def _anchor(self, path: str) -> str:
        path = normalize_separators(path)
        if path.startswith(self.root):
            relative = path[len(self.root):]
        elif path + "/" == self.root:
            relative = ""
        else:
            relative = path.lstrip("/")
        return self.root + _REPEATED_SEPARATORS.sub("/", relative).lstrip("/")

    def __repr__(self) -> str:
        return f"Storage({self.root!r})"
