# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console

from cadence import configuration
from cadence.repository.store import StoreError
from cadence.repository.yaml_store import YamlStore
from cadence.service.backup_error import BackupWriteError
from cadence.service.csv_export import EXPORT_KINDS, export_csv
from cadence.terminal.parse import parse_directory, parse_month
from cadence.view.backup import export_result


def export(
    kind: Annotated[
        str,
        typer.Argument(help=f"What to export: {', '.join(EXPORT_KINDS)}"),
    ],
    month: Annotated[
        Optional[str],
        typer.Option(
            "--month",
            "-m",
            help="Month for the monthly report, YYYY-MM (defaults to this month)",
        ),
    ] = None,
    output: Annotated[
        Optional[str],
        typer.Option(
            "--output",
            "-o",
            help="Directory to write the CSV file to (defaults to the export path)",
        ),
    ] = None,
) -> None:
    """Export habits or habit entries as CSV."""
    if kind not in EXPORT_KINDS:
        Console().print(
            f"[red]Invalid export kind: {kind}. Valid options: {', '.join(EXPORT_KINDS)}[/red]"
        )
        raise typer.Exit(1)

    report_month = parse_month(month)
    export_dir = parse_directory(output, configuration.EXPORT_PATH)
    store = YamlStore(configuration.DATA_PATH)

    try:
        file_path = export_csv(store, kind, export_dir, report_month)
    except (BackupWriteError, StoreError) as e:
        Console().print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    export_result(kind, file_path)
