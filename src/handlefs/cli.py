"""CLI commands using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from handlefs import __version__
from handlefs.console import Output
from handlefs.context import create_context
from handlefs.directory import Directory
from handlefs.exceptions import HandleError

if TYPE_CHECKING:
    from handlefs.context import AppContext
    from handlefs.file import File
    from handlefs.storage import Storage

app = typer.Typer(
    name="handlefs",
    help="File and directory handles over a root-scoped storage",
    no_args_is_help=True,
)

output = Output()

RootOption = Annotated[
    Path | None, typer.Option("--root", "-r", help="Storage root (default: current directory)")
]
ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="YAML or JSON settings file")
]
AliasOption = Annotated[
    list[str] | None, typer.Option("--alias", "-a", help="Alias as TOKEN=PATH (repeatable)")
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        output.console.print(f"handlefs v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every operation")] = False,
) -> None:
    """File and directory handles over a root-scoped storage."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


# ============================================================================
# Helpers
# ============================================================================


def _parse_aliases(values: list[str] | None) -> dict[str, str]:
    """Parse TOKEN=PATH pairs into a mapping."""
    aliases: dict[str, str] = {}
    for value in values or []:
        token, sep, path = value.partition("=")
        if not sep or not token.strip():
            output.show_error(f"Invalid alias '{value}', expected TOKEN=PATH")
            raise typer.Exit(1)
        aliases[token.strip()] = path.strip()
    return aliases


def _load_context(
    root: Path | None, config: Path | None, alias: list[str] | None, _context: AppContext | None
) -> AppContext:
    """Return the injected context or build one from the command options."""
    if _context is not None:
        return _context
    aliases = _parse_aliases(alias)
    try:
        return create_context(root=root, config_path=config, aliases=aliases)
    except (HandleError, FileNotFoundError, ValueError, ValidationError) as e:
        output.show_error(str(e))
        raise typer.Exit(1) from e


def _open_existing(storage: Storage, logical_path: str) -> File | Directory:
    """Open whatever exists at a logical path.

    Raises:
        FileMissingError: If nothing exists there.
    """
    if storage.fs.is_dir(storage.resolve(logical_path)):
        return storage.open_dir(logical_path)
    handle = storage.open_file(logical_path)
    handle.exists_or_die()
    return handle


def _fail(error: Exception) -> typer.Exit:
    output.show_error(str(error))
    return typer.Exit(1)


# ============================================================================
# Commands
# ============================================================================


@app.command("ls")
def list_directory(
    path: Annotated[str, typer.Argument(help="Logical directory path")] = "",
    recursive: Annotated[bool, typer.Option("--recursive", "-R", help="List the whole tree")] = False,
    root: RootOption = None,
    config: ConfigOption = None,
    alias: AliasOption = None,
    _context=None,
) -> None:
    """List a directory."""
    ctx = _load_context(root, config, alias, _context)
    try:
        directory = ctx.storage.open_dir(path)
        entries = list(directory.walk()) if recursive else list(directory.read().values())
    except (HandleError, OSError) as e:
        raise _fail(e) from e
    output.show_entries(entries, ctx.storage.root)


@app.command("cat")
def show_file(
    path: Annotated[str, typer.Argument(help="Logical file path")],
    root: RootOption = None,
    config: ConfigOption = None,
    alias: AliasOption = None,
    _context=None,
) -> None:
    """Print a file."""
    ctx = _load_context(root, config, alias, _context)
    try:
        content = ctx.storage.open_file(path).read()
    except (HandleError, OSError) as e:
        raise _fail(e) from e
    output.show_text(content.decode("utf-8", errors="replace"))


@app.command("write")
def write_file(
    path: Annotated[str, typer.Argument(help="Logical file path")],
    content: Annotated[str, typer.Argument(help="Text to write")],
    append: Annotated[bool, typer.Option("--append", help="Append instead of replacing")] = False,
    root: RootOption = None,
    config: ConfigOption = None,
    alias: AliasOption = None,
    _context=None,
) -> None:
    """Write text to a file."""
    ctx = _load_context(root, config, alias, _context)
    try:
        handle = ctx.storage.open_file(path)
        written = handle.write(content, overwrite=not append)
    except (HandleError, OSError) as e:
        raise _fail(e) from e
    output.show_success(f"Wrote {written} bytes to '{handle.path}'")


@app.command("mkdir")
def make_directory(
    path: Annotated[str, typer.Argument(help="Logical directory path")],
    parents: Annotated[bool, typer.Option("--parents", "-p", help="Create missing parents")] = False,
    root: RootOption = None,
    config: ConfigOption = None,
    alias: AliasOption = None,
    _context=None,
) -> None:
    """Create a directory."""
    ctx = _load_context(root, config, alias, _context)
    try:
        directory = ctx.storage.open_dir(path)
        directory.write(recursive=parents)
    except (HandleError, OSError) as e:
        raise _fail(e) from e
    output.show_success(f"Created '{directory.path}'")


@app.command("rm")
def remove(
    path: Annotated[str, typer.Argument(help="Logical path")],
    recursive: Annotated[
        bool, typer.Option("--recursive", "-R", help="Delete directories with their content")
    ] = False,
    root: RootOption = None,
    config: ConfigOption = None,
    alias: AliasOption = None,
    _context=None,
) -> None:
    """Delete a file or directory."""
    ctx = _load_context(root, config, alias, _context)
    try:
        handle = _open_existing(ctx.storage, path)
        if isinstance(handle, Directory):
            handle.delete(recursive=recursive)
        else:
            handle.delete()
    except (HandleError, OSError) as e:
        raise _fail(e) from e
    output.show_success(f"Deleted '{handle.path}'")


@app.command("cp")
def copy(
    source: Annotated[str, typer.Argument(help="Logical source path")],
    destination: Annotated[str, typer.Argument(help="Logical destination path")],
    overwrite: Annotated[
        bool, typer.Option("--overwrite", "-f", help="Replace an existing destination")
    ] = False,
    root: RootOption = None,
    config: ConfigOption = None,
    alias: AliasOption = None,
    _context=None,
) -> None:
    """Copy a file or directory tree."""
    ctx = _load_context(root, config, alias, _context)
    try:
        handle = _open_existing(ctx.storage, source)
        copied = handle.copy(ctx.storage.resolve(destination), overwrite)
    except (HandleError, OSError) as e:
        raise _fail(e) from e
    output.show_success(f"Copied '{handle.path}' to '{copied.path}'")


@app.command("mv")
def move(
    source: Annotated[str, typer.Argument(help="Logical source path")],
    destination: Annotated[str, typer.Argument(help="Logical destination path")],
    overwrite: Annotated[
        bool, typer.Option("--overwrite", "-f", help="Replace an existing destination")
    ] = False,
    root: RootOption = None,
    config: ConfigOption = None,
    alias: AliasOption = None,
    _context=None,
) -> None:
    """Move a file or directory tree."""
    ctx = _load_context(root, config, alias, _context)
    try:
        handle = _open_existing(ctx.storage, source)
        moved = handle.move(ctx.storage.resolve(destination), overwrite)
    except (HandleError, OSError) as e:
        raise _fail(e) from e
    output.show_success(f"Moved '{handle.path}' to '{moved.path}'")


@app.command("aliases")
def list_aliases(
    root: RootOption = None,
    config: ConfigOption = None,
    alias: AliasOption = None,
    _context=None,
) -> None:
    """Show configured aliases."""
    ctx = _load_context(root, config, alias, _context)
    output.show_aliases(ctx.storage.aliases)
