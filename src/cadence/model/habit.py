# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from cadence.model.entity_id import EntityId


class Habit(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "habit"
    name: str
    icon: str
    color: str  # hex string, e.g. "#007AFF"
    frequency: str  # daily, weekdays, weekends, weekly or custom
    custom_days: list[int]  # weekday numbers, 1 = Sunday ... 7 = Saturday
    start_date: pendulum.DateTime
    notes: str
    order: int  # display order
    collection_id: Optional[EntityId]

    # Detail tracking
    track_details: bool
    detail_type: str  # e.g. "general", "workout"
    use_multiple_states: bool  # success / partial / failure instead of a checkbox
