"""Application context for dependency injection.

This module separates object creation from object use: CLI commands
receive a ready ``AppContext`` and tests construct one directly around a
temporary directory or test doubles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from handlefs.protocols import FileSystem
from handlefs.settings import StorageSettings
from handlefs.storage import Storage


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from handlefs.filesystem import RealFileSystem

    return RealFileSystem()


@dataclass
class AppContext:
    """Container for the services used by CLI commands."""

    storage: Storage
    filesystem: FileSystem = field(default_factory=_default_filesystem)


def create_context(
    root: Path | None = None,
    config_path: Path | None = None,
    aliases: dict[str, str] | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Settings from ``config_path`` are loaded first; an explicit ``root``
    overrides the configured one and ``aliases`` are registered on top of
    the configured ones.

    Args:
        root: Storage root. Defaults to the configured root, then the cwd.
        config_path: Optional YAML/JSON settings file.
        aliases: Extra alias tokens mapped to their targets.

    Returns:
        Configured AppContext.
    """
    if config_path is not None:
        settings = StorageSettings.from_file(config_path)
        if root is not None:
            settings = settings.model_copy(update={"root": str(root)})
    else:
        settings = StorageSettings(root=str(root or Path.cwd()))

    if aliases:
        settings = settings.model_copy(update={"aliases": {**settings.aliases, **aliases}})

    filesystem = _default_filesystem()
    storage = Storage.from_settings(settings, filesystem)
    return AppContext(storage=storage, filesystem=filesystem)
