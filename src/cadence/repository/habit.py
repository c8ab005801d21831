# SPDX-License-Identifier: MIT

from typing import Any

from cadence import time
from cadence.repository.entity import EntityRepository


class HabitRepository(EntityRepository):
    def convert_for_serialization(self, habit: dict[str, Any]) -> dict[str, Any]:
        habit["start_date"] = time.datetime_to_iso_str(habit["start_date"])
        return habit

    def convert_for_deserialization(self, habit: dict[str, Any]) -> dict[str, Any]:
        habit["start_date"] = time.datetime_from_str(habit["start_date"])
        return habit
