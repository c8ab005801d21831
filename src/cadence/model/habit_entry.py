# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from cadence.model.details import Details
from cadence.model.entity_id import EntityId

COMPLETION_STATE_NONE = 0
COMPLETION_STATE_SUCCESS = 1
COMPLETION_STATE_PARTIAL = 2
COMPLETION_STATE_FAILURE = 3


class HabitEntry(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "habit_entry"
    habit_id: EntityId  # Reference to owning habit
    date: pendulum.DateTime
    completed: bool
    completion_state: int  # 0 none, 1 success, 2 partial, 3 failure
    details: Details
