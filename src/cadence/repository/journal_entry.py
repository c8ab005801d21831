# SPDX-License-Identifier: MIT

from typing import Any

from cadence import time
from cadence.repository.entity import EntityRepository


class JournalEntryRepository(EntityRepository):
    def convert_for_serialization(self, entry: dict[str, Any]) -> dict[str, Any]:
        entry["date"] = time.datetime_to_iso_str(entry["date"])
        entry["scheduled_date"] = time.datetime_to_iso_str_optional(
            entry["scheduled_date"]
        )
        entry["original_date"] = time.datetime_to_iso_str_optional(
            entry["original_date"]
        )
        return entry

    def convert_for_deserialization(self, entry: dict[str, Any]) -> dict[str, Any]:
        entry["date"] = time.datetime_from_str(entry["date"])
        entry["scheduled_date"] = time.datetime_from_str_optional(
            entry["scheduled_date"]
        )
        entry["original_date"] = time.datetime_from_str_optional(
            entry["original_date"]
        )
        return entry
