# SPDX-License-Identifier: MIT

import logging
from typing import Any, Callable, Optional, TypeVar

import pendulum

from cadence import time
from cadence.model.backup import (
    CollectionRecord,
    Envelope,
    HabitEntryRecord,
    HabitRecord,
    JournalEntryRecord,
    TagRecord,
)
from cadence.model.habit_entry import COMPLETION_STATE_FAILURE, COMPLETION_STATE_NONE
from cadence.service.backup_error import BackupFormatError
from cadence.template.habit import (
    DEFAULT_DETAIL_TYPE,
    DEFAULT_FREQUENCY,
    DEFAULT_HABIT_COLOR,
    DEFAULT_HABIT_ICON,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")

RECORD_ARRAYS = [
    "collections",
    "tags",
    "habits",
    "habit_entries",
    "journal_entries",
]

# Keys written by the mobile app's JSON backups, mapped to ours.
KEY_ALIASES: dict[str, str] = {
    "createdAt": "timestamp",
    "habitEntries": "habit_entries",
    "journalEntries": "journal_entries",
    "collectionId": "collection_id",
    "collectionID": "collection_id",
    "habitId": "habit_id",
    "habitID": "habit_id",
    "tagIds": "tag_ids",
    "tagIDs": "tag_ids",
    "customDays": "custom_days",
    "startDate": "start_date",
    "trackDetails": "track_details",
    "detailType": "detail_type",
    "detailKind": "detail_type",
    "useMultipleStates": "use_multiple_states",
    "completionState": "completion_state",
    "entryType": "entry_type",
    "taskStatus": "task_status",
    "scheduledDate": "scheduled_date",
    "originalDate": "original_date",
    "isMigrated": "is_migrated",
    "isFutureEntry": "is_future_entry",
}


class MissingFieldError(ValueError):
    pass


# ─────────────────────────────────────────────────────────────
# Writing
# ─────────────────────────────────────────────────────────────


def envelope_to_dict(envelope: Envelope) -> dict[str, Any]:
    """Flatten an envelope into plain YAML/JSON-compatible values."""
    data: dict[str, Any] = {
        "version": envelope["version"],
        "timestamp": time.datetime_to_timestamp(envelope["timestamp"]),
    }
    for array_name in RECORD_ARRAYS:
        data[array_name] = [
            __record_to_dict(record)
            for record in envelope[array_name]  # type: ignore[literal-required]
        ]
    return data


def __record_to_dict(record: Any) -> dict[str, Any]:
    serializable_record: dict[str, Any] = {}
    for key, value in record.items():
        # Optional fields are omitted when absent
        if value is None:
            continue
        if isinstance(value, pendulum.DateTime):
            value = time.datetime_to_iso_str(value)
        elif isinstance(value, list):
            value = list(value)
        serializable_record[key] = value
    return serializable_record


# ─────────────────────────────────────────────────────────────
# Reading
# ─────────────────────────────────────────────────────────────


def read_version(data: Any) -> int:
    """Extract the format version without interpreting any record."""
    if not isinstance(data, dict):
        raise BackupFormatError()
    version = data.get("version")
    if not isinstance(version, int) or isinstance(version, bool):
        raise BackupFormatError()
    return version


def envelope_from_dict(data: Any) -> Envelope:
    """
    Build an envelope from loaded YAML/JSON data.

    The envelope shape itself must be valid, otherwise BackupFormatError is
    raised. Individual records missing a required field are skipped.
    """
    version = read_version(data)
    data = __normalize_keys(data)

    timestamp = time.now_utc()
    if data.get("timestamp") is not None:
        try:
            timestamp = time.datetime_from_value(data["timestamp"])
        except ValueError as e:
            raise BackupFormatError() from e

    for array_name in RECORD_ARRAYS:
        if data.get(array_name) is not None and not isinstance(data[array_name], list):
            raise BackupFormatError()

    return {
        "version": version,
        "timestamp": timestamp,
        "collections": __parse_records(data, "collections", collection_record_from_dict),
        "tags": __parse_records(data, "tags", tag_record_from_dict),
        "habits": __parse_records(data, "habits", habit_record_from_dict),
        "habit_entries": __parse_records(
            data, "habit_entries", habit_entry_record_from_dict
        ),
        "journal_entries": __parse_records(
            data, "journal_entries", journal_entry_record_from_dict
        ),
    }


def __normalize_keys(raw: dict[str, Any]) -> dict[str, Any]:
    return {KEY_ALIASES.get(key, key): value for key, value in raw.items()}


def __parse_records(
    data: dict[str, Any],
    array_name: str,
    parse_record: Callable[[dict[str, Any]], R],
) -> list[R]:
    records: list[R] = []
    for index, raw_record in enumerate(data.get(array_name) or []):
        if not isinstance(raw_record, dict):
            logger.debug("%s[%d]: not a mapping, skipped", array_name, index)
            continue
        try:
            records.append(parse_record(__normalize_keys(raw_record)))
        except (MissingFieldError, ValueError) as e:
            logger.debug("%s[%d]: %s, skipped", array_name, index, e)
    return records


def collection_record_from_dict(raw: dict[str, Any]) -> CollectionRecord:
    return {
        "id": __required_id(raw, "id"),
        "name": __required_str(raw, "name"),
    }


def tag_record_from_dict(raw: dict[str, Any]) -> TagRecord:
    return {
        "id": __required_id(raw, "id"),
        "name": __required_str(raw, "name"),
    }


def habit_record_from_dict(raw: dict[str, Any]) -> HabitRecord:
    start_date = __optional_date(raw, "start_date")
    return {
        "id": __required_id(raw, "id"),
        "name": __required_str(raw, "name"),
        "icon": __str(raw, "icon", DEFAULT_HABIT_ICON),
        "color": __str(raw, "color", DEFAULT_HABIT_COLOR),
        "frequency": __str(raw, "frequency", DEFAULT_FREQUENCY),
        "custom_days": __custom_days(raw.get("custom_days")),
        "start_date": start_date if start_date is not None else time.now_utc(),
        "notes": __str(raw, "notes", ""),
        "order": __int(raw, "order", 0),
        "collection_id": __optional_id(raw, "collection_id"),
        "track_details": __bool(raw, "track_details"),
        "detail_type": __str(raw, "detail_type", DEFAULT_DETAIL_TYPE),
        "use_multiple_states": __bool(raw, "use_multiple_states"),
    }


def habit_entry_record_from_dict(raw: dict[str, Any]) -> HabitEntryRecord:
    if not isinstance(raw.get("completed"), bool):
        raise MissingFieldError("missing field 'completed'")
    return {
        "id": __required_id(raw, "id"),
        "habit_id": __required_id(raw, "habit_id"),
        "date": __required_date(raw, "date"),
        "completed": raw["completed"],
        "completion_state": __completion_state(raw),
        "details": __str(raw, "details", ""),
    }


def journal_entry_record_from_dict(raw: dict[str, Any]) -> JournalEntryRecord:
    return {
        "id": __required_id(raw, "id"),
        "content": __required_str(raw, "content"),
        "date": __required_date(raw, "date"),
        "entry_type": __required_str(raw, "entry_type"),
        "task_status": __optional_str(raw, "task_status"),
        "priority": __bool(raw, "priority"),
        "scheduled_date": __optional_date(raw, "scheduled_date"),
        "original_date": __optional_date(raw, "original_date"),
        "is_migrated": __bool(raw, "is_migrated"),
        "is_future_entry": __bool(raw, "is_future_entry"),
        "collection_id": __optional_id(raw, "collection_id"),
        "tag_ids": __id_list(raw.get("tag_ids")),
    }


# ─────────────────────────────────────────────────────────────
# Field helpers
# ─────────────────────────────────────────────────────────────


def __required_id(raw: dict[str, Any], key: str) -> str:
    value = __optional_id(raw, key)
    if value is None:
        raise MissingFieldError(f"missing field '{key}'")
    return value


def __optional_id(raw: dict[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    value = str(value)
    return value if value != "" else None


def __id_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [
        str(item)
        for item in value
        if isinstance(item, (str, int)) and not isinstance(item, bool) and item != ""
    ]


def __required_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise MissingFieldError(f"missing field '{key}'")
    return value


def __optional_str(raw: dict[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    return value if isinstance(value, str) else None


def __str(raw: dict[str, Any], key: str, default: str) -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else default


def __bool(raw: dict[str, Any], key: str, default: bool = False) -> bool:
    value = raw.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return default


def __int(raw: dict[str, Any], key: str, default: int) -> int:
    value = raw.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return default
    return default


def __completion_state(raw: dict[str, Any]) -> int:
    state = __int(raw, "completion_state", COMPLETION_STATE_NONE)
    if not COMPLETION_STATE_NONE <= state <= COMPLETION_STATE_FAILURE:
        return COMPLETION_STATE_NONE
    return state


def __required_date(raw: dict[str, Any], key: str) -> pendulum.DateTime:
    if raw.get(key) is None:
        raise MissingFieldError(f"missing field '{key}'")
    return time.datetime_from_value(raw[key])


def __optional_date(raw: dict[str, Any], key: str) -> Optional[pendulum.DateTime]:
    if raw.get(key) is None:
        return None
    try:
        return time.datetime_from_value(raw[key])
    except ValueError:
        return None


def __custom_days(value: Any) -> list[int]:
    """Weekday numbers from a list or a comma separated string such as "2,4"."""
    if isinstance(value, str):
        parts: list[Any] = [part.strip() for part in value.split(",")]
    elif isinstance(value, list):
        parts = value
    else:
        return []

    days: list[int] = []
    for part in parts:
        if isinstance(part, bool):
            continue
        if isinstance(part, str):
            try:
                part = int(part)
            except ValueError:
                continue
        if isinstance(part, int) and 1 <= part <= 7 and part not in days:
            days.append(part)
    return sorted(days)
