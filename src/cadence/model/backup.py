# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

# Backup records hold backup-local identifier strings instead of store
# references. Every reference points at a record of an earlier array in the
# envelope.

SUPPORTED_VERSION = 1


class CollectionRecord(TypedDict):
    id: str
    name: str


class TagRecord(TypedDict):
    id: str
    name: str


class HabitRecord(TypedDict):
    id: str
    name: str
    icon: str
    color: str
    frequency: str
    custom_days: list[int]
    start_date: pendulum.DateTime
    notes: str
    order: int
    collection_id: Optional[str]
    track_details: bool
    detail_type: str
    use_multiple_states: bool


class HabitEntryRecord(TypedDict):
    id: str
    habit_id: str
    date: pendulum.DateTime
    completed: bool
    completion_state: int
    details: str  # serialized Details


class JournalEntryRecord(TypedDict):
    id: str
    content: str
    date: pendulum.DateTime
    entry_type: str
    task_status: Optional[str]
    priority: bool
    scheduled_date: Optional[pendulum.DateTime]
    original_date: Optional[pendulum.DateTime]
    is_migrated: bool
    is_future_entry: bool
    collection_id: Optional[str]
    tag_ids: list[str]


class Envelope(TypedDict):
    version: int
    timestamp: pendulum.DateTime
    collections: list[CollectionRecord]
    tags: list[TagRecord]
    habits: list[HabitRecord]
    habit_entries: list[HabitEntryRecord]
    journal_entries: list[JournalEntryRecord]
