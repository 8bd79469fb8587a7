# src/git_assets/cli.py
"""git-assets Command Line Interface.

Thin glue between git's clean/smudge filter protocol and the store core:

    store-file     stdin bytes -> store -> reference on stdout (clean filter)
    retrieve-file  reference on stdin -> store -> bytes on stdout (smudge filter)
    validate       consistency scan of the store's data directory

stdout carries filter payloads only. Diagnostics go to stderr.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import typer
from pydantic import ValidationError

from git_assets import __version__
from git_assets.contracts import (
    GitAssetsError,
    InconsistentStoreError,
    NotInGitRepoError,
    ValidationReport,
)
from git_assets.contracts.enums import ErrorKind
from git_assets.core.config import GitAssetsSettings, load_settings
from git_assets.core.reference import Reference
from git_assets.core.store import Store

__all__ = ["app", "find_git_store"]

GIT_STORE_DIR_NAME = "x-assets"

app = typer.Typer(
    name="git-assets",
    help="git-assets: binary asset handling for git.",
    no_args_is_help=True,
)


@dataclass(frozen=True)
class CliState:
    """Options shared by all subcommands."""

    store: Path | None
    settings: GitAssetsSettings


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"git-assets version {__version__}")
        raise typer.Exit()


def find_git_store(start: Path | None = None) -> Path | None:
    """Find the default store of the git repository enclosing ``start``.

    Walks from ``start`` (default: current directory) up through its
    ancestors and returns ``<first dir with a .git directory>/.git/x-assets``.

    Returns:
        The store path, or None when no ancestor is a git work tree
    """
    here = (start if start is not None else Path.cwd()).absolute()
    for ancestor in (here, *here.parents):
        git_dir = ancestor / ".git"
        if git_dir.is_dir():
            return git_dir / GIT_STORE_DIR_NAME
    return None


@contextmanager
def _error_boundary() -> Iterator[None]:
    """Report failures as kind-labelled messages on stderr and exit 1."""
    try:
        yield
    except GitAssetsError as e:
        typer.echo(e.describe(), err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        typer.echo(f"{ErrorKind.UNEXPECTED_ERROR.description}\nSource: {e}", err=True)
        raise typer.Exit(1) from None


def _open_store(state: CliState) -> Store:
    """Resolve the store root and open it.

    Precedence: --store, then settings store_path, then git discovery.
    """
    store_path = state.store or state.settings.store_path or find_git_store()
    if store_path is None:
        raise NotInGitRepoError()
    return Store.open_or_create(
        store_path.expanduser(),
        staging_prefix=state.settings.staging_prefix,
        max_staging_probes=state.settings.max_staging_probes,
        chunk_size=state.settings.copy_chunk_size,
    )


def _print_report(report: ValidationReport) -> None:
    for mismatch in report.hash_mismatches:
        typer.echo(f"hash-mismatch: {mismatch.file_name}: {mismatch.expected_hash} != {mismatch.actual_hash}")
    for unexpected in report.unexpected_files:
        typer.echo(f"unexpected: {unexpected}")


@app.callback()
def main(
    ctx: typer.Context,
    store: Path | None = typer.Option(
        None,
        "--store",
        "-s",
        help="Path to the store root (default: .git/x-assets of the enclosing repository).",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        help="Path to a settings file (YAML or TOML).",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs on stderr.",
    ),
) -> None:
    """git-assets: binary asset handling for git."""
    from git_assets.core.logging import configure_logging

    log_level = "DEBUG" if verbose else "WARNING"
    configure_logging(json_output=json_logs, level=log_level)

    try:
        loaded = load_settings(settings.expanduser() if settings is not None else None)
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None

    ctx.obj = CliState(store=store, settings=loaded)


@app.command("store-file")
def store_file(ctx: typer.Context) -> None:
    """Store the contents received on stdin and print a reference on stdout.

    To be used as a git clean filter.
    """
    state: CliState = ctx.obj
    with _error_boundary():
        store = _open_store(state)
        # Copy stdin to a staging file, hashing while writing
        ref = store.store_stream(typer.get_binary_stream("stdin"))
        out = typer.get_binary_stream("stdout")
        out.write(ref.encode() + b"\n")
        out.flush()


@app.command("retrieve-file")
def retrieve_file(ctx: typer.Context) -> None:
    """Read a reference from stdin and write the referenced contents to stdout.

    To be used as a git smudge filter.
    """
    state: CliState = ctx.obj
    with _error_boundary():
        ref = Reference.decode(typer.get_binary_stream("stdin"))
        store = _open_store(state)
        out = typer.get_binary_stream("stdout")
        with store.open_ref(ref) as f:
            while chunk := f.read(store.chunk_size):
                out.write(chunk)
        out.flush()


@app.command()
def validate(ctx: typer.Context) -> None:
    """Validate the store contents.

    Checks that every data file's name matches the hash of its contents and
    that there are no unexpected files in the data directory.
    """
    state: CliState = ctx.obj
    with _error_boundary():
        store = _open_store(state)
        report = store.validate()
        if not report.is_valid:
            _print_report(report)
            raise InconsistentStoreError()
