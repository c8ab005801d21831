# SPDX-License-Identifier: MIT

from typing import Literal


class EntityType:
    COLLECTION = "collection"
    TAG = "tag"
    HABIT = "habit"
    HABIT_ENTRY = "habit_entry"
    JOURNAL_ENTRY = "journal_entry"


EntityKind = Literal[
    "collections",
    "tags",
    "habits",
    "habit_entries",
    "journal_entries",
]

# Dependency order: later kinds only reference ids of earlier kinds.
ENTITY_KINDS: list[EntityKind] = [
    "collections",
    "tags",
    "habits",
    "habit_entries",
    "journal_entries",
]
