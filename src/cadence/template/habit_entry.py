# SPDX-License-Identifier: MIT

from cadence.model.entity_id import UNSET_ENTITY_ID
from cadence.model.entity_type import EntityType
from cadence.model.habit_entry import COMPLETION_STATE_NONE, HabitEntry
from cadence.time import now_utc


def get_habit_entry_template() -> HabitEntry:
    return {
        "id": None,
        "entity_type": EntityType.HABIT_ENTRY,
        "habit_id": UNSET_ENTITY_ID,  # Must be set
        "date": now_utc(),
        "completed": False,
        "completion_state": COMPLETION_STATE_NONE,
        "details": {"kind": "text", "text": ""},
    }
