# SPDX-License-Identifier: MIT

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from rich import box
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from cadence import time
from cadence.model.entity_type import ENTITY_KINDS
from cadence.service.backup import BackupResult, RestoreResult
from cadence.service.progress import ProgressCallback

KIND_LABELS = {
    "collections": "collections",
    "tags": "tags",
    "habits": "habits",
    "habit_entries": "habit entries",
    "journal_entries": "journal entries",
}


@contextmanager
def progress_bar(description: str) -> Iterator[ProgressCallback]:
    """Rich progress bar driven by a 0..1 progress callback."""
    with Progress(
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=Console(stderr=True),
        transient=True,
    ) as progress:
        task_id = progress.add_task(description, total=1.0)

        def callback(value: float) -> None:
            progress.update(task_id, completed=value)

        yield callback


def backup_result(result: BackupResult) -> None:
    console = Console()
    if result["success"]:
        console.print(f"[green]{result['message']}[/green]")
        if result["path"] is not None:
            console.print(f"[dim]{result['path']}[/dim]")
    else:
        console.print(f"[red]{result['message']}[/red]")


def restore_result(result: RestoreResult) -> None:
    console = Console()
    if not result["success"]:
        console.print(f"[red]{result['message']}[/red]")
        return

    console.print(f"[green]{result['message']}[/green]")

    counts_table = Table(box=box.SIMPLE)
    counts_table.add_column("kind", style="cyan")
    counts_table.add_column("restored", justify="right")
    for kind in ENTITY_KINDS:
        counts_table.add_row(KIND_LABELS[kind], str(result["counts"].get(kind, 0)))
    console.print(counts_table)


def backups_report(backups: list[Path]) -> None:
    console = Console()
    if len(backups) == 0:
        console.print("No backups found")
        return

    backups_table = Table(box=box.SIMPLE)
    backups_table.add_column("file")
    backups_table.add_column("modified")
    backups_table.add_column("size", justify="right")

    for backup in backups:
        stat = backup.stat()
        backups_table.add_row(
            backup.name,
            time.datetime_to_display_local_datetime_str(
                time.datetime_from_timestamp(stat.st_mtime)
            ),
            f"{stat.st_size / 1024:.1f} KB",
        )

    console.print(backups_table)


def export_result(kind: str, file_path: Path) -> None:
    console = Console()
    console.print(f"[green]Exported {kind}: {file_path.name}[/green]")
    console.print(f"[dim]{file_path}[/dim]")
