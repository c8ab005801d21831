# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "cadence"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
BASE_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_PATH: Path = BASE_PATH / "data"
BACKUP_PATH: Path = BASE_PATH / "backups"
EXPORT_PATH: Path = BASE_PATH / "exports"


class Configuration(TypedDict):
    data_path: Optional[str]
    backup_path: Optional[str]
    export_path: Optional[str]
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "backup_path": None,
        "export_path": None,
        "log_level": "WARNING",
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the data, backup and export paths.

    This must be called after the config file exists and before any
    store is instantiated.
    """
    global DATA_PATH, BACKUP_PATH, EXPORT_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    DATA_PATH = Path(config.get("data_path") or BASE_PATH / "data")
    BACKUP_PATH = Path(config.get("backup_path") or BASE_PATH / "backups")
    EXPORT_PATH = Path(config.get("export_path") or BASE_PATH / "exports")
