"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from handlefs.directory import Directory
from handlefs.storage import Storage


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Create the standard test layout.

    root/
        directory/
        full_directory/
            sub_directory/
            sub_document.txt
        document.txt
    """
    root = tmp_path / "root"
    root.mkdir()
    (root / "directory").mkdir()
    (root / "full_directory").mkdir()
    (root / "full_directory" / "sub_directory").mkdir()
    (root / "full_directory" / "sub_document.txt").write_text("")
    (root / "document.txt").write_text("")
    return root


@pytest.fixture
def storage(tree: Path) -> Storage:
    """Create a storage rooted at the test layout."""
    return Storage(tree)


@pytest.fixture
def deep_tree(tmp_path: Path) -> Iterator[Path]:
    """Create a directory nested deeper than the default recursion limit.

    Removed iteratively on teardown so tmp_path cleanup never recurses
    through it.
    """
    root = tmp_path / "deep"
    root.mkdir()
    current = root
    # One level at a time; short segments keep the full path under PATH_MAX.
    for _ in range(1100):
        current = current / "d"
        current.mkdir()
    (current / "leaf.txt").write_text("leaf")
    yield root
    for leftover in (root, tmp_path / "deep_copy"):
        Directory(leftover).delete(recursive=True)


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_file.return_value = False
    fs.is_dir.return_value = False
    fs.is_readable.return_value = True
    fs.is_writable.return_value = True
    fs.scandir.return_value = iter([])
    return fs


def make_entry(path: str, kind: str) -> MagicMock:
    """Build a fake os.DirEntry of kind "file", "dir" or "link"."""
    entry = MagicMock()
    entry.path = path
    entry.name = path.replace("\\", "/").rsplit("/", 1)[-1]
    entry.is_symlink.return_value = kind == "link"
    entry.is_dir.return_value = kind == "dir"
    entry.is_file.return_value = kind == "file"
    return entry


def read_tree(root: Path) -> dict[str, bytes | None]:
    """Map relative paths under root to file content (None for directories)."""
    result: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root).as_posix()
        result[relative] = None if path.is_dir() else path.read_bytes()
    return result
