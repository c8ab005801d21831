# SPDX-License-Identifier: MIT

from cadence.model.backup import SUPPORTED_VERSION
from cadence.service.backup_error import BackupVersionError


def accept(version: int, supported_version: int = SUPPORTED_VERSION) -> bool:
    """
    Whether a backup of the given format version can be restored.

    Every version up to the supported one is restored the same way; records
    are never upgraded.
    """
    return version <= supported_version


def check_version(version: int, supported_version: int = SUPPORTED_VERSION) -> None:
    if not accept(version, supported_version):
        raise BackupVersionError()
