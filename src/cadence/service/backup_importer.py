# SPDX-License-Identifier: MIT

import logging
from typing import Optional, TypeAlias, Union

from cadence.model.backup import Envelope
from cadence.model.entity_id import EntityId
from cadence.model.entity_type import EntityKind
from cadence.repository.store import Store, StoreError
from cadence.service.details import parse_details
from cadence.service.progress import ProgressCallback, ProgressPublisher, as_publisher
from cadence.template.collection import get_collection_template
from cadence.template.habit import get_habit_template
from cadence.template.habit_entry import get_habit_entry_template
from cadence.template.journal_entry import get_journal_entry_template
from cadence.template.tag import get_tag_template

logger = logging.getLogger(__name__)

IdentifierMap: TypeAlias = dict[str, EntityId]

RESTORE_SUCCESS_MESSAGE = "Data restored successfully"


def import_envelope(
    store: Store,
    envelope: Envelope,
    progress: Optional[Union[ProgressCallback, ProgressPublisher]] = None,
    counts: Optional[dict[EntityKind, int]] = None,
) -> tuple[bool, str]:
    """
    Create every record of the envelope in the store and commit once.

    Records are created in dependency order; each stage resolves references
    through the identifier maps (backup id -> new store id) of the stages
    before it. Unresolved optional references are dropped, a habit entry
    whose habit does not resolve is skipped. When the commit fails every
    pending write is rolled back.
    """
    publisher = as_publisher(progress)
    if counts is None:
        counts = {}

    try:
        publisher.publish(0.6)
        collection_map = __import_collections(store, envelope)
        counts["collections"] = len(envelope["collections"])

        publisher.publish(0.7)
        tag_map = __import_tags(store, envelope)
        counts["tags"] = len(envelope["tags"])

        publisher.publish(0.8)
        habit_map = __import_habits(store, envelope, collection_map)
        counts["habits"] = len(envelope["habits"])

        publisher.publish(0.85)
        counts["habit_entries"] = __import_habit_entries(store, envelope, habit_map)

        publisher.publish(0.9)
        counts["journal_entries"] = __import_journal_entries(
            store, envelope, collection_map, tag_map
        )

        store.save_changes()
        publisher.publish(0.95)
    except StoreError as e:
        logger.error("restore failed, rolling back: %s", e)
        store.rollback()
        return False, f"Failed to restore backup: {e}"
    except Exception:
        # Nothing may stay pending after a failed import
        store.rollback()
        raise

    return True, RESTORE_SUCCESS_MESSAGE


def __import_collections(store: Store, envelope: Envelope) -> IdentifierMap:
    collection_map: IdentifierMap = {}

    for record in envelope["collections"]:
        collection = get_collection_template()
        collection["name"] = record["name"]

        collection_map[record["id"]] = store.create("collections", collection)

    return collection_map


def __import_tags(store: Store, envelope: Envelope) -> IdentifierMap:
    tag_map: IdentifierMap = {}

    for record in envelope["tags"]:
        tag = get_tag_template()
        tag["name"] = record["name"]

        tag_map[record["id"]] = store.create("tags", tag)

    return tag_map


def __import_habits(
    store: Store, envelope: Envelope, collection_map: IdentifierMap
) -> IdentifierMap:
    habit_map: IdentifierMap = {}

    for record in envelope["habits"]:
        habit = get_habit_template()
        habit["name"] = record["name"]
        habit["icon"] = record["icon"]
        habit["color"] = record["color"]
        habit["frequency"] = record["frequency"]
        habit["custom_days"] = list(record["custom_days"])
        habit["start_date"] = record["start_date"]
        habit["notes"] = record["notes"]
        habit["order"] = record["order"]
        habit["track_details"] = record["track_details"]
        habit["detail_type"] = record["detail_type"]
        habit["use_multiple_states"] = record["use_multiple_states"]

        collection_id = record["collection_id"]
        if collection_id is not None:
            if collection_id in collection_map:
                habit["collection_id"] = collection_map[collection_id]
            else:
                logger.debug(
                    "habit %s: collection %s not in backup, left unset",
                    record["id"],
                    collection_id,
                )

        habit_map[record["id"]] = store.create("habits", habit)

    return habit_map


def __import_habit_entries(
    store: Store, envelope: Envelope, habit_map: IdentifierMap
) -> int:
    created = 0

    for record in envelope["habit_entries"]:
        if record["habit_id"] not in habit_map:
            logger.debug(
                "habit entry %s: habit %s not in backup, skipped",
                record["id"],
                record["habit_id"],
            )
            continue

        entry = get_habit_entry_template()
        entry["habit_id"] = habit_map[record["habit_id"]]
        entry["date"] = record["date"]
        entry["completed"] = record["completed"]
        entry["completion_state"] = record["completion_state"]
        entry["details"] = parse_details(record["details"])

        store.create("habit_entries", entry)
        created += 1

    return created


def __import_journal_entries(
    store: Store,
    envelope: Envelope,
    collection_map: IdentifierMap,
    tag_map: IdentifierMap,
) -> int:
    created = 0

    for record in envelope["journal_entries"]:
        entry = get_journal_entry_template()
        entry["content"] = record["content"]
        entry["date"] = record["date"]
        entry["entry_type"] = record["entry_type"]
        entry["task_status"] = record["task_status"]
        entry["priority"] = record["priority"]
        entry["scheduled_date"] = record["scheduled_date"]
        entry["original_date"] = record["original_date"]
        entry["is_migrated"] = record["is_migrated"]
        entry["is_future_entry"] = record["is_future_entry"]

        collection_id = record["collection_id"]
        if collection_id is not None and collection_id in collection_map:
            entry["collection_id"] = collection_map[collection_id]

        tag_ids: list[EntityId] = []
        for tag_id in record["tag_ids"]:
            if tag_id not in tag_map:
                logger.debug(
                    "journal entry %s: tag %s not in backup, dropped",
                    record["id"],
                    tag_id,
                )
                continue
            tag_ids.append(tag_map[tag_id])
        entry["tag_ids"] = list(dict.fromkeys(tag_ids))

        store.create("journal_entries", entry)
        created += 1

    return created
