# SPDX-License-Identifier: MIT

from cadence.model.entity_type import EntityType
from cadence.model.habit import Habit
from cadence.time import now_utc

DEFAULT_HABIT_ICON = "circle.fill"
DEFAULT_HABIT_COLOR = "#007AFF"
DEFAULT_FREQUENCY = "daily"
DEFAULT_DETAIL_TYPE = "general"


def get_habit_template() -> Habit:
    return {
        "id": None,
        "entity_type": EntityType.HABIT,
        "name": "",
        "icon": DEFAULT_HABIT_ICON,
        "color": DEFAULT_HABIT_COLOR,
        "frequency": DEFAULT_FREQUENCY,
        "custom_days": [],
        "start_date": now_utc(),
        "notes": "",
        "order": 0,
        "collection_id": None,
        "track_details": False,
        "detail_type": DEFAULT_DETAIL_TYPE,
        "use_multiple_states": False,
    }
