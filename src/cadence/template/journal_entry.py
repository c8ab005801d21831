# SPDX-License-Identifier: MIT

from cadence.model.entity_type import EntityType
from cadence.model.journal_entry import JournalEntry
from cadence.time import now_utc


def get_journal_entry_template() -> JournalEntry:
    return {
        "id": None,
        "entity_type": EntityType.JOURNAL_ENTRY,
        "content": "",
        "date": now_utc(),
        "entry_type": "note",
        "task_status": None,
        "priority": False,
        "scheduled_date": None,
        "original_date": None,
        "is_migrated": False,
        "is_future_entry": False,
        "collection_id": None,
        "tag_ids": [],
    }
