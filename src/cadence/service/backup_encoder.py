# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional, Union

from cadence import time
from cadence.model.backup import (
    SUPPORTED_VERSION,
    CollectionRecord,
    Envelope,
    HabitEntryRecord,
    HabitRecord,
    JournalEntryRecord,
    TagRecord,
)
from cadence.model.entity_id import generate_entity_id
from cadence.repository.store import Store
from cadence.service.details import coerce_details, serialize_details
from cadence.service.progress import ProgressCallback, ProgressPublisher, as_publisher
from cadence.template.habit import (
    DEFAULT_DETAIL_TYPE,
    DEFAULT_FREQUENCY,
    DEFAULT_HABIT_COLOR,
    DEFAULT_HABIT_ICON,
)

logger = logging.getLogger(__name__)


def encode(
    store: Store,
    progress: Optional[Union[ProgressCallback, ProgressPublisher]] = None,
) -> Envelope:
    """
    Snapshot every entity in the store as backup records.

    Only reads from the store. Store references become the referenced
    entity's id; entities without an id get a generated one.
    """
    publisher = as_publisher(progress)
    publisher.publish(0.1)

    collections = [
        __collection_record(collection)
        for collection in store.fetch_all("collections")
    ]
    publisher.publish(0.2)

    tags = [__tag_record(tag) for tag in store.fetch_all("tags")]
    publisher.publish(0.3)

    habits = [__habit_record(habit) for habit in store.fetch_all("habits")]
    publisher.publish(0.4)

    habit_entries = [
        __habit_entry_record(entry) for entry in store.fetch_all("habit_entries")
    ]
    publisher.publish(0.5)

    journal_entries = [
        __journal_entry_record(entry) for entry in store.fetch_all("journal_entries")
    ]
    publisher.publish(0.6)

    envelope: Envelope = {
        "version": SUPPORTED_VERSION,
        "timestamp": time.now_utc(),
        "collections": collections,
        "tags": tags,
        "habits": habits,
        "habit_entries": habit_entries,
        "journal_entries": journal_entries,
    }
    publisher.publish(0.7)

    logger.debug(
        "encoded %d collections, %d tags, %d habits, %d habit entries, %d journal entries",
        len(collections),
        len(tags),
        len(habits),
        len(habit_entries),
        len(journal_entries),
    )
    return envelope


def __id_or_new(entity: dict[str, Any]) -> str:
    if entity.get("id"):
        return str(entity["id"])
    return generate_entity_id()


def __collection_record(collection: dict[str, Any]) -> CollectionRecord:
    return {
        "id": __id_or_new(collection),
        "name": collection.get("name") or "",
    }


def __tag_record(tag: dict[str, Any]) -> TagRecord:
    return {
        "id": __id_or_new(tag),
        "name": tag.get("name") or "",
    }


def __habit_record(habit: dict[str, Any]) -> HabitRecord:
    return {
        "id": __id_or_new(habit),
        "name": habit.get("name") or "",
        "icon": habit.get("icon") or DEFAULT_HABIT_ICON,
        "color": habit.get("color") or DEFAULT_HABIT_COLOR,
        "frequency": habit.get("frequency") or DEFAULT_FREQUENCY,
        "custom_days": sorted(set(habit.get("custom_days") or [])),
        "start_date": habit.get("start_date") or time.now_utc(),
        "notes": habit.get("notes") or "",
        "order": habit.get("order") or 0,
        "collection_id": habit.get("collection_id"),
        "track_details": bool(habit.get("track_details", False)),
        "detail_type": habit.get("detail_type") or DEFAULT_DETAIL_TYPE,
        "use_multiple_states": bool(habit.get("use_multiple_states", False)),
    }


def __habit_entry_record(entry: dict[str, Any]) -> HabitEntryRecord:
    return {
        "id": __id_or_new(entry),
        "habit_id": entry.get("habit_id") or "",
        "date": entry.get("date") or time.now_utc(),
        "completed": bool(entry.get("completed", False)),
        "completion_state": entry.get("completion_state") or 0,
        "details": serialize_details(coerce_details(entry.get("details"))),
    }


def __journal_entry_record(entry: dict[str, Any]) -> JournalEntryRecord:
    return {
        "id": __id_or_new(entry),
        "content": entry.get("content") or "",
        "date": entry.get("date") or time.now_utc(),
        "entry_type": entry.get("entry_type") or "note",
        "task_status": entry.get("task_status"),
        "priority": bool(entry.get("priority", False)),
        "scheduled_date": entry.get("scheduled_date"),
        "original_date": entry.get("original_date"),
        "is_migrated": bool(entry.get("is_migrated", False)),
        "is_future_entry": bool(entry.get("is_future_entry", False)),
        "collection_id": entry.get("collection_id"),
        "tag_ids": [tag_id for tag_id in entry.get("tag_ids") or [] if tag_id],
    }
