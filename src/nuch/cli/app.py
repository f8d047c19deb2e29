"""CLI entry point: publish, delete, list and config commands."""

from __future__ import annotations

import importlib
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, NoReturn

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
    from typer import Typer as TyperType
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")
    TyperType = Any

from rich.console import Console
from rich.table import Table

from nuch.cli.selection import choose_collection, choose_file, find_collection
from nuch.config.loader import config_file_path, load_config, write_sample_config
from nuch.core.errors import NuchError
from nuch.core.models import AppConfig, Collection
from nuch.engine.confirm import Confirmer, auto_confirm, terminal_confirm
from nuch.engine.delete import DeleteEngine
from nuch.engine.publish import PublishEngine
from nuch.fs.assets import list_content_files
from nuch.utils.log_config import configure_logging
from nuch.vcs.git_runner import GitRunner

app: TyperType = typer.Typer(
    help="Publish and retract Nuxt content files, committed through git.",
    no_args_is_help=True,
)

console = Console()


CollectionOption = Annotated[
    str | None,
    typer.Option("--collection", "-c", help="Collection name (skips the prompt)."),
]
FileOption = Annotated[
    Path | None,
    typer.Option("--file", "-f", help="File to act on (skips the prompt)."),
]
YesFlag = Annotated[
    bool,
    typer.Option("--yes", "-y", help="Answer yes to every confirmation."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Config file to use instead of the default."),
]
VerboseFlag = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Emit debug-level structured logs."),
]
PathFlag = Annotated[
    bool,
    typer.Option("--path", help="Only print where the config file lives."),
]


def _fail(exc: NuchError) -> NoReturn:
    typer.secho(str(exc), err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1) from exc


def _load(config_path: Path | None) -> AppConfig:
    try:
        return load_config(config_path)
    except NuchError as exc:
        _fail(exc)


def _confirmer(yes: bool) -> Confirmer:
    return auto_confirm(True) if yes else terminal_confirm


def _resolve_file(file: Path, directory: Path) -> Path:
    # Relative names prefer the directory being listed over the cwd.
    if not file.is_absolute() and (directory / file).exists():
        return directory / file
    return file


def _pick(cfg: AppConfig, collection_name: str | None) -> Collection | None:
    try:
        return choose_collection(cfg.collections, console, name=collection_name)
    except NuchError as exc:
        _fail(exc)


def main(verbose: VerboseFlag = False) -> None:
    """nuch: Nuxt content handler."""
    configure_logging(verbose)


def publish_command(
    collection: CollectionOption = None,
    file: FileOption = None,
    yes: YesFlag = False,
    config: ConfigOption = None,
) -> None:
    """Publish a file from the working area into a collection."""
    cfg = _load(config)
    target = _pick(cfg, collection)
    if target is None:
        console.print("Cancelled.")
        return

    if file is not None:
        selected = _resolve_file(file, cfg.working.files)
    else:
        selected = choose_file(cfg.working.files, console, exclude=target.files)
    if selected is None:
        return

    engine = PublishEngine(runner=GitRunner(), confirm=_confirmer(yes), ui=console)
    try:
        engine.publish(selected, target, cfg.working.images)
    except NuchError as exc:
        _fail(exc)


def delete_command(
    collection: CollectionOption = None,
    file: FileOption = None,
    yes: YesFlag = False,
    config: ConfigOption = None,
) -> None:
    """Delete a published file (and its images) from a collection."""
    cfg = _load(config)
    target = _pick(cfg, collection)
    if target is None:
        console.print("Cancelled.")
        return

    if file is not None:
        selected = _resolve_file(file, target.files)
    else:
        selected = choose_file(target.files, console)
    if selected is None:
        return

    engine = DeleteEngine(runner=GitRunner(), confirm=_confirmer(yes), ui=console)
    try:
        engine.delete(selected, target, cfg.working)
    except NuchError as exc:
        _fail(exc)


def list_command(
    collection: CollectionOption = None,
    config: ConfigOption = None,
) -> None:
    """Show published files and drafts that are ready to publish."""
    cfg = _load(config)
    try:
        targets = (
            [find_collection(cfg.collections, collection)]
            if collection is not None
            else cfg.collections
        )
    except NuchError as exc:
        _fail(exc)

    for target in targets:
        published = [p.name for p in list_content_files(target.files)]
        publishable = [
            p.name for p in list_content_files(cfg.working.files, exclude=target.files)
        ]
        table = Table(title=f"Collection: {target.name}")
        table.add_column("Published Posts")
        table.add_column("Publishable Posts")
        for row in range(max(len(published), len(publishable))):
            table.add_row(
                published[row] if row < len(published) else "",
                publishable[row] if row < len(publishable) else "",
            )
        console.print(table)


def config_command(path_only: PathFlag = False) -> None:
    """Write a sample config file if none exists."""
    path = config_file_path()
    if path_only:
        typer.echo(str(path))
        return

    if write_sample_config(path):
        typer.secho(f"Wrote sample config to {path}", fg=typer.colors.GREEN)
    else:
        typer.echo(f"Config already exists at {path}")


def run_cli(args: Sequence[str] | None = None) -> None:
    app(args=args)


app.callback()(main)
app.command("publish")(publish_command)
app.command("delete")(delete_command)
app.command("list")(list_command)
app.command("config")(config_command)
