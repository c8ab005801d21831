# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from cadence import configuration
from cadence.logger import set_log_level
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def __configuration_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("backup_path", str(configuration.BACKUP_PATH))
    table.add_row("export_path", str(configuration.EXPORT_PATH))
    table.add_row("log_level", config["log_level"])

    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    console = Console()
    console.print(__configuration_table())

    yaml_library_type = "untested"
    try:
        from yaml import CSafeDumper as SafeDumper  # noqa: F401
        from yaml import CSafeLoader as SafeLoader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory path for storing data files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="Reset data path to the default"),
    ] = False,
    backup_path: Annotated[
        Optional[str],
        typer.Option("--backup-path", help="Directory path for backup files"),
    ] = None,
    remove_backup_path: Annotated[
        bool,
        typer.Option("--remove-backup-path", help="Reset backup path to the default"),
    ] = False,
    export_path: Annotated[
        Optional[str],
        typer.Option("--export-path", help="Directory path for CSV exports"),
    ] = None,
    remove_export_path: Annotated[
        bool,
        typer.Option("--remove-export-path", help="Reset export path to the default"),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=f"One of {', '.join(LOG_LEVELS)}"),
    ] = None,
) -> None:
    """
    Update configuration settings.

    Path changes take effect on the next invocation.
    """
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        typer.echo(
            f"Invalid log level: {log_level}. Valid options: {', '.join(LOG_LEVELS)}"
        )
        raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        backup_path=backup_path,
        remove_backup_path=remove_backup_path,
        export_path=export_path,
        remove_export_path=remove_export_path,
        log_level=log_level,
    )
    CONFIGURATION_REPO.flush()
    configuration.load_data_path_configuration()
    if log_level is not None:
        set_log_level(log_level)

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(__configuration_table("Updated Configuration"))
