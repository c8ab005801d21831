# SPDX-License-Identifier: MIT

from typing import Any

from cadence import time
from cadence.repository.entity import EntityRepository


class HabitEntryRepository(EntityRepository):
    def convert_for_serialization(self, entry: dict[str, Any]) -> dict[str, Any]:
        entry["date"] = time.datetime_to_iso_str(entry["date"])
        return entry

    def convert_for_deserialization(self, entry: dict[str, Any]) -> dict[str, Any]:
        entry["date"] = time.datetime_from_str(entry["date"])
        return entry
