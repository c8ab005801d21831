# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from cadence.model.entity_id import EntityId

JournalEntryType = Literal["task", "event", "note"]
TaskStatus = Literal["pending", "completed", "migrated", "scheduled"]


class JournalEntry(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "journal_entry"
    content: str
    date: pendulum.DateTime
    entry_type: str  # JournalEntryType
    task_status: Optional[str]  # TaskStatus, only for tasks
    priority: bool
    scheduled_date: Optional[pendulum.DateTime]
    original_date: Optional[pendulum.DateTime]  # Date before migration
    is_migrated: bool
    is_future_entry: bool
    collection_id: Optional[EntityId]
    tag_ids: list[EntityId]
