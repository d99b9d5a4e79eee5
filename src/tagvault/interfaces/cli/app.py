"""CLI application for tagvault using Rich and Typer."""

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from tagvault.core.config import DATABASE_PATH, load_settings, setup_logging
from tagvault.core.errors import TagVaultError
from tagvault.core.handler import TagEventHandler
from tagvault.core.preview import strip_preview
from tagvault.core.types import NoChange, Tag, TagAction, TagSettings
from tagvault.storage.db import get_connection, init_db
from tagvault.storage.repos.tags_repo import TagsRepo
from tagvault.vault.notes import NoteTagger, list_notes, read_note

app = typer.Typer(
    name="tagvault",
    help="tagvault - note tags kept in YAML front matter",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


@dataclass
class CliState:
    """Options shared by every command."""

    db_path: Path
    settings: TagSettings


@contextmanager
def _open_tagger(ctx: typer.Context) -> Iterator[tuple[NoteTagger, TagsRepo]]:
    state: CliState = ctx.obj
    init_db(state.db_path)
    with get_connection(state.db_path) as conn:
        repo = TagsRepo(conn)
        yield NoteTagger(TagEventHandler(state.settings, repo)), repo


def _split_tag_path(ctx: typer.Context, tag_path: str) -> list[str]:
    state: CliState = ctx.obj
    separator = state.settings.hierarchy_separator
    return [part.strip() for part in tag_path.split(separator)]


def _require_tag(repo: TagsRepo, ctx: typer.Context, tag_path: str) -> Tag:
    tag = repo.find_by_breadcrumb_path(_split_tag_path(ctx, tag_path))
    if tag is None:
        err_console.print(f"[red]Unknown tag: {tag_path}[/red]")
        raise typer.Exit(1)
    return tag


def _report(path: Path, result) -> None:
    if isinstance(result, NoChange):
        console.print(f"[dim]{path}: unchanged[/dim]")
    else:
        console.print(f"[green]{path}: updated[/green]")


def _note_argument():
    return typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Markdown note"
    )


@app.callback()
def main(
    ctx: typer.Context,
    db: Optional[Path] = typer.Option(
        None,
        "--db",
        help="Tag store database (default: $TAGVAULT_DB_PATH or ~/.tagvault/tags.db)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Settings file (default: ~/.tagvault/tagvault.yaml)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """tagvault - note tags kept in YAML front matter."""
    setup_logging("DEBUG" if debug else None)
    try:
        settings = load_settings(config)
    except TagVaultError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    ctx.obj = CliState(db_path=db or DATABASE_PATH, settings=settings)


@app.command()
def add(
    ctx: typer.Context,
    note: Path = _note_argument(),
    tag_path: str = typer.Argument(..., help="Tag path, e.g. projects/alpha"),
):
    """Tag a note, creating the tag if needed."""
    with _open_tagger(ctx) as (tagger, repo):
        tag = repo.get_or_create_by_breadcrumb_path(_split_tag_path(ctx, tag_path))
        if not tag.name:
            err_console.print("[red]Tag path is empty[/red]")
            raise typer.Exit(1)
        _report(note, tagger.apply(note, TagAction.ADD, tag))


@app.command()
def remove(
    ctx: typer.Context,
    note: Path = _note_argument(),
    tag_path: str = typer.Argument(..., help="Tag path, e.g. projects/alpha"),
):
    """Remove a tag from a note."""
    with _open_tagger(ctx) as (tagger, repo):
        tag = _require_tag(repo, ctx, tag_path)
        _report(note, tagger.apply(note, TagAction.REMOVE, tag))


@app.command()
def rename(
    ctx: typer.Context,
    tag_path: str = typer.Argument(..., help="Tag path, e.g. projects/alpha"),
    new_name: str = typer.Argument(..., help="New name for the tag itself"),
    notes: Optional[List[Path]] = typer.Argument(
        None, exists=True, dir_okay=False, help="Notes to rewrite"
    ),
    folder: Optional[Path] = typer.Option(
        None,
        "--folder",
        "-f",
        help="Rewrite every markdown note below this folder",
    ),
):
    """Rename a tag in notes and in the tag store."""
    new_name = new_name.strip()
    if not new_name:
        err_console.print("[red]New tag name must not be blank[/red]")
        raise typer.Exit(1)

    targets = list(notes or [])
    if folder is not None:
        targets.extend(list_notes(folder))

    with _open_tagger(ctx) as (tagger, repo):
        tag = _require_tag(repo, ctx, tag_path)
        sibling = repo.find_child(new_name, tag.parent_id)
        if sibling is not None and sibling.id != tag.id:
            err_console.print(f"[red]Tag already exists: {new_name}[/red]")
            raise typer.Exit(1)
        try:
            for note in targets:
                _report(note, tagger.apply(note, TagAction.RENAME, tag, new_name))
        except TagVaultError as e:
            err_console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        repo.rename(tag.id, new_name)
    console.print(f"[green]Renamed {tag_path} to {new_name}[/green]")


@app.command("list")
def list_command(
    ctx: typer.Context,
    note: Path = _note_argument(),
):
    """List the tags of a note."""
    state: CliState = ctx.obj
    with _open_tagger(ctx) as (tagger, repo):
        tag_ids = tagger.list_tag_ids(note)
        if not tag_ids:
            console.print("[dim]No tags.[/dim]")
            return

        table = Table(title=str(note), show_header=True)
        table.add_column("ID", style="dim")
        table.add_column("Tag", style="cyan")
        for tag_id in tag_ids:
            tag = repo.get(tag_id)
            if tag is None:
                continue
            path = state.settings.hierarchy_separator.join(repo.breadcrumb(tag))
            table.add_row(str(tag.id), path)
        console.print(table)


@app.command("strip-preview")
def strip_preview_command(
    note: Path = _note_argument(),
    html_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Rendered preview"
    ),
):
    """Print a rendered preview without its front matter."""
    html = html_file.read_text(encoding="utf-8")
    typer.echo(strip_preview(read_note(note), html), nl=False)


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
