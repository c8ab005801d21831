# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from cadence.logger import set_log_level
from cadence.terminal import backup, configuration
from cadence.terminal.custom_typer import OrderedAliasedTyperGroup
from cadence.terminal.export import export

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Cadence - Backup, restore and export for your journal and habits",
    no_args_is_help=True,
)
app.add_typer(backup.app, name="backup, b", help="Create, restore and list backups")
app.command(name="export, ex")(export)
app.add_typer(configuration.app, name="config, c", help="View and change settings")


@app.callback()
def main_callback(
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log debug output to stderr"),
    ] = False,
) -> None:
    """
    Cadence - Backup, restore and export for your journal and habits

    Global options that apply to all commands.
    """
    if debug:
        set_log_level("DEBUG")


def run() -> None:
    app()
