# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Optional, TypedDict, Union

from yaml import YAMLError, dump, load

try:
    from yaml import CSafeDumper as SafeDumper
    from yaml import CSafeLoader as SafeLoader
except ImportError:
    from yaml import SafeDumper, SafeLoader  # type: ignore[assignment]

from cadence import time
from cadence.model.entity_type import EntityKind
from cadence.repository.store import Store, StoreError
from cadence.service import backup_version
from cadence.service.backup_codec import envelope_from_dict, envelope_to_dict, read_version
from cadence.service.backup_encoder import encode
from cadence.service.backup_error import (
    BackupError,
    BackupFormatError,
    BackupReadError,
    BackupWriteError,
)
from cadence.service.backup_importer import import_envelope
from cadence.service.progress import ProgressCallback, ProgressPublisher, as_publisher
from cadence.service.reset import reset_store

logger = logging.getLogger(__name__)

BACKUP_FILE_PREFIX = "Cadence_Backup_"
BACKUP_FILE_SUFFIXES = (".yaml", ".yml", ".json")


class BackupResult(TypedDict):
    success: bool
    message: str
    path: Optional[Path]


class RestoreResult(TypedDict):
    success: bool
    message: str
    counts: dict[EntityKind, int]


def create_backup(
    store: Store,
    backup_dir: Path,
    progress: Optional[Union[ProgressCallback, ProgressPublisher]] = None,
) -> BackupResult:
    """Encode the whole store and write it to a new file in backup_dir."""
    publisher = as_publisher(progress)

    try:
        envelope = encode(store, publisher)
    except StoreError as e:
        logger.error("could not read data for backup: %s", e)
        return {
            "success": False,
            "message": f"Failed to read data: {e}",
            "path": None,
        }

    try:
        contents = dump(envelope_to_dict(envelope), Dumper=SafeDumper, sort_keys=False)
    except YAMLError as e:
        logger.error("could not encode backup: %s", e)
        return {
            "success": False,
            "message": "Failed to encode backup data",
            "path": None,
        }
    publisher.publish(0.8)

    file_name = (
        f"{BACKUP_FILE_PREFIX}"
        f"{time.datetime_to_backup_filename_str(envelope['timestamp'])}.yaml"
    )
    file_path = backup_dir / file_name
    try:
        write_backup_file(file_path, contents)
    except BackupWriteError as e:
        return {"success": False, "message": str(e), "path": None}

    publisher.publish(1.0)
    logger.info("backup written to %s", file_path)
    return {
        "success": True,
        "message": f"Backup created: {file_path.name}",
        "path": file_path,
    }


def write_backup_file(file_path: Path, contents: str) -> None:
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(contents)
    except OSError as e:
        raise BackupWriteError(f"Failed to write backup file: {e}") from e


def restore_from_file(
    store: Store,
    path: Path,
    progress: Optional[Union[ProgressCallback, ProgressPublisher]] = None,
) -> RestoreResult:
    """
    Replace the store's contents with the backup at path.

    Format and version problems are detected before the store is touched.
    The reset and the import are committed together, so a failed commit
    leaves the store as it was before the restore.
    """
    publisher = as_publisher(progress)
    counts: dict[EntityKind, int] = {}
    publisher.publish(0.1)

    try:
        data = read_backup_file(path)
        publisher.publish(0.3)

        backup_version.check_version(read_version(data))
        envelope = envelope_from_dict(data)
        publisher.publish(0.4)
    except BackupError as e:
        logger.info("restore of %s rejected: %s", path, e)
        return {"success": False, "message": str(e), "counts": counts}

    reset_result = reset_store(store, commit=False)
    if not reset_result["success"]:
        store.rollback()
        failed = ", ".join(sorted(reset_result["failed_kinds"]))
        return {
            "success": False,
            "message": f"Failed to clear existing data: {failed}",
            "counts": counts,
        }
    publisher.publish(0.5)

    success, message = import_envelope(store, envelope, publisher, counts)
    if not success:
        counts = {}
    publisher.publish(1.0)

    return {"success": success, "message": message, "counts": counts}


def read_backup_file(path: Path) -> object:
    try:
        contents = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("could not read %s: %s", path, e)
        raise BackupReadError() from e

    try:
        return load(contents, Loader=SafeLoader)
    except YAMLError as e:
        logger.debug("could not parse %s: %s", path, e)
        raise BackupFormatError() from e


def list_backups(backup_dir: Path) -> list[Path]:
    """Backup files in backup_dir, newest first."""
    if not backup_dir.is_dir():
        return []
    backups = [
        file_path
        for file_path in backup_dir.iterdir()
        if file_path.is_file() and file_path.suffix in BACKUP_FILE_SUFFIXES
    ]
    return sorted(backups, key=lambda file_path: file_path.stat().st_mtime, reverse=True)
