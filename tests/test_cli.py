"""Tests for CLI commands.

Commands accept a ``_context`` parameter for dependency injection, so most
tests call them directly around a temporary storage. A few go through
Typer's runner to cover option parsing.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import typer
from rich.console import Console
from typer.testing import CliRunner

from handlefs import __version__, cli
from handlefs.console import Output
from handlefs.context import AppContext
from handlefs.storage import Storage


@pytest.fixture(autouse=True)
def wide_output(monkeypatch: pytest.MonkeyPatch) -> Output:
    """Replace the CLI output with consoles that never wrap long paths."""
    output = Output(Console(width=500), Console(stderr=True, width=500))
    monkeypatch.setattr(cli, "output", output)
    return output


@pytest.fixture
def context(storage: Storage) -> AppContext:
    """Create an AppContext around the test layout."""
    return AppContext(storage=storage, filesystem=storage.fs)


def call(command, *args, **kwargs) -> None:
    """Invoke a command function with default storage options."""
    kwargs.setdefault("root", None)
    kwargs.setdefault("config", None)
    kwargs.setdefault("alias", None)
    command(*args, **kwargs)


class TestListCommand:
    """Tests for ls."""

    def test_list(self, context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test listing the immediate children of a directory."""
        call(cli.list_directory, "full_directory", recursive=False, _context=context)

        out = capsys.readouterr().out
        assert "full_directory/sub_directory/" in out
        assert "full_directory/sub_document.txt" in out

    def test_list_recursive(
        self, context: AppContext, tree: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test listing the whole tree."""
        (tree / "full_directory" / "sub_directory" / "deep.txt").touch()

        call(cli.list_directory, "", recursive=True, _context=context)

        assert "full_directory/sub_directory/deep.txt" in capsys.readouterr().out

    def test_list_empty(self, context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test an empty directory shows a placeholder."""
        call(cli.list_directory, "directory", recursive=False, _context=context)

        assert "Directory is empty" in capsys.readouterr().out

    def test_list_missing(self, context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a missing directory exits with status 1."""
        with pytest.raises(typer.Exit) as excinfo:
            call(cli.list_directory, "nonexisting", recursive=False, _context=context)

        assert excinfo.value.exit_code == 1
        assert "not found" in capsys.readouterr().err


class TestFileCommands:
    """Tests for cat and write."""

    def test_write_then_cat(self, context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test writing, appending and printing a file."""
        call(cli.write_file, "notes.txt", "test", append=False, _context=context)
        call(cli.write_file, "notes.txt", "test", append=True, _context=context)
        capsys.readouterr()

        call(cli.show_file, "notes.txt", _context=context)

        assert capsys.readouterr().out == "testtest"

    def test_cat_directory(self, context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test printing a directory fails with the type error."""
        with pytest.raises(typer.Exit):
            call(cli.show_file, "directory", _context=context)

        assert "is not a file" in capsys.readouterr().err


class TestTreeCommands:
    """Tests for mkdir, rm, cp and mv."""

    def test_mkdir(self, context: AppContext, tree: Path) -> None:
        """Test creating nested directories."""
        call(cli.make_directory, "a/b", parents=True, _context=context)

        assert (tree / "a" / "b").is_dir()

    def test_mkdir_missing_parent(self, context: AppContext) -> None:
        """Test a missing parent without --parents exits with status 1."""
        with pytest.raises(typer.Exit):
            call(cli.make_directory, "a/b", parents=False, _context=context)

    def test_rm_not_empty(self, context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test removing a non-empty directory needs --recursive."""
        with pytest.raises(typer.Exit):
            call(cli.remove, "full_directory", recursive=False, _context=context)

        assert "not empty" in capsys.readouterr().err

    def test_rm_recursive(self, context: AppContext, tree: Path) -> None:
        """Test recursive removal."""
        call(cli.remove, "full_directory", recursive=True, _context=context)

        assert not (tree / "full_directory").exists()

    def test_rm_file(self, context: AppContext, tree: Path) -> None:
        """Test removing a file."""
        call(cli.remove, "document.txt", recursive=False, _context=context)

        assert not (tree / "document.txt").exists()

    def test_rm_missing(self, context: AppContext) -> None:
        """Test removing a missing path fails."""
        with pytest.raises(typer.Exit):
            call(cli.remove, "nonexisting", recursive=False, _context=context)

    def test_cp_conflict_and_overwrite(self, context: AppContext, tree: Path) -> None:
        """Test copying onto an existing directory needs --overwrite."""
        with pytest.raises(typer.Exit):
            call(cli.copy, "full_directory", "directory", overwrite=False, _context=context)

        call(cli.copy, "full_directory", "directory", overwrite=True, _context=context)

        assert (tree / "directory" / "sub_document.txt").is_file()
        assert (tree / "full_directory" / "sub_document.txt").is_file()

    def test_mv_with_alias(self, context: AppContext, tree: Path) -> None:
        """Test moving into an aliased location."""
        context.storage.add_alias("archive", "directory")

        call(cli.move, "document.txt", "{archive}/document.txt", overwrite=False, _context=context)

        assert (tree / "directory" / "document.txt").is_file()
        assert not (tree / "document.txt").exists()


class TestAliasesCommand:
    """Tests for aliases."""

    def test_aliases(self, context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test configured aliases are shown."""
        context.storage.add_alias("uploads", "user/uploads")

        call(cli.list_aliases, _context=context)

        out = capsys.readouterr().out
        assert "{uploads}" in out
        assert "user/uploads/" in out

    def test_no_aliases(self, context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a placeholder is shown without aliases."""
        call(cli.list_aliases, _context=context)

        assert "No aliases configured" in capsys.readouterr().out


class TestParseAliases:
    """Tests for TOKEN=PATH parsing."""

    def test_parse(self) -> None:
        """Test valid pairs are parsed."""
        assert cli._parse_aliases(["uploads=user/uploads", " cache = var/cache "]) == {
            "uploads": "user/uploads",
            "cache": "var/cache",
        }

    def test_parse_invalid(self) -> None:
        """Test a value without '=' exits."""
        with pytest.raises(typer.Exit):
            cli._parse_aliases(["uploads"])


class TestRunner:
    """End-to-end tests through Typer's runner."""

    def test_version(self) -> None:
        """Test --version prints the version."""
        result = CliRunner().invoke(cli.app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_copy_with_root_and_alias(self, tree: Path) -> None:
        """Test options build the storage for the command."""
        result = CliRunner().invoke(
            cli.app,
            ["cp", "{full}", "copy", "--root", str(tree), "--alias", "full=full_directory"],
        )

        assert result.exit_code == 0, result.output
        assert (tree / "copy" / "sub_directory").is_dir()

    def test_config_file(self, tree: Path, tmp_path: Path) -> None:
        """Test aliases are read from a settings file."""
        config = tmp_path / "storage.yaml"
        config.write_text(f"root: {tree}\naliases:\n  docs: full_directory\n")

        result = CliRunner().invoke(cli.app, ["cat", "{docs}/sub_document.txt", "-c", str(config)])

        assert result.exit_code == 0, result.output

    def test_missing_root(self, tmp_path: Path) -> None:
        """Test a missing root exits with status 1."""
        result = CliRunner().invoke(cli.app, ["ls", "--root", str(tmp_path / "nonexisting")])

        assert result.exit_code == 1
