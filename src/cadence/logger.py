# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Route all cadence log records through a rich handler on stderr."""
    handler = RichHandler(
        console=Console(stderr=True), show_path=False, rich_tracebacks=True
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("cadence")
    for existing_handler in list(package_logger.handlers):
        package_logger.removeHandler(existing_handler)
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())
    package_logger.propagate = False


def set_log_level(level: str) -> None:
    logging.getLogger("cadence").setLevel(level.upper())
