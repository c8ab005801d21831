# SPDX-License-Identifier: MIT

import re
from pathlib import Path
from typing import Optional

import pendulum
import typer

from cadence.time import month_from_str


def parse_month(month_param: Optional[str]) -> Optional[pendulum.Date]:
    """Parse YYYY-MM into the first day of that month."""
    if month_param is None:
        return None

    if not re.match(r"^\d{4}-\d{2}$", month_param):
        raise typer.BadParameter("Month must be in YYYY-MM format")

    try:
        return month_from_str(month_param)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid month: {e}")


def parse_directory(path_param: Optional[str], default: Path) -> Path:
    if path_param is None:
        return default

    path = Path(path_param).expanduser()
    if path.exists() and not path.is_dir():
        raise typer.BadParameter(f"Not a directory: {path}")
    return path
