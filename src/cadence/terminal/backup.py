# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from cadence import configuration
from cadence.repository.yaml_store import YamlStore
from cadence.service.backup import create_backup, list_backups, restore_from_file
from cadence.terminal.custom_typer import AliasedTyperGroup
from cadence.terminal.parse import parse_directory
from cadence.view.backup import (
    backup_result,
    backups_report,
    progress_bar,
    restore_result,
)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("create, c")
def create(
    output: Annotated[
        Optional[str],
        typer.Option(
            "--output",
            "-o",
            help="Directory to write the backup to (defaults to the backup path)",
        ),
    ] = None,
) -> None:
    """Write a backup of all collections, tags, habits and entries."""
    backup_dir = parse_directory(output, configuration.BACKUP_PATH)
    store = YamlStore(configuration.DATA_PATH)

    with progress_bar("Creating backup") as progress:
        result = create_backup(store, backup_dir, progress)

    backup_result(result)
    if not result["success"]:
        raise typer.Exit(1)


@app.command("restore, r")
def restore(
    path: Annotated[Path, typer.Argument(help="Backup file to restore")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")
    ] = False,
) -> None:
    """Replace all current data with the contents of a backup."""
    console = Console()

    if not path.is_file():
        console.print(f"[red]Backup file not found: {path}[/red]")
        raise typer.Exit(1)

    if not yes:
        console.print(
            "[yellow]WARNING: Restoring replaces all existing data with the backup.[/yellow]"
        )
        confirm = typer.confirm("Are you sure you want to continue?")
        if not confirm:
            console.print("[cyan]Restore cancelled.[/cyan]")
            return

    store = YamlStore(configuration.DATA_PATH)
    with progress_bar("Restoring backup") as progress:
        result = restore_from_file(store, path, progress)

    restore_result(result)
    if not result["success"]:
        raise typer.Exit(1)


@app.command("list, ls")
def list_(
    directory: Annotated[
        Optional[str],
        typer.Option("--dir", "-d", help="Directory to list backups from"),
    ] = None,
) -> None:
    """List backups, newest first."""
    backup_dir = parse_directory(directory, configuration.BACKUP_PATH)
    backups_report(list_backups(backup_dir))
