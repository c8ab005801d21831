# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from cadence import configuration
from cadence.logger import configure_logging
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.repository.yaml_store import YamlStore


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()

    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)
    configuration.BACKUP_PATH.mkdir(parents=True, exist_ok=True)
    configuration.EXPORT_PATH.mkdir(parents=True, exist_ok=True)
    YamlStore(configuration.DATA_PATH).ensure_directories()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))
