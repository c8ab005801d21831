"""
Pytest configuration and fixtures

Every test works on its own in-memory store or on a YAML store inside
tmp_path. Nothing touches the user's real data directory.
"""
from typing import Any, Optional

import pendulum
import pytest

from cadence.model.entity_id import EntityId
from cadence.repository.memory import MemoryStore
from cadence.repository.store import StoreError
from cadence.repository.yaml_store import YamlStore
from cadence.service.details import plain_text
from cadence.template.collection import get_collection_template
from cadence.template.habit import get_habit_template
from cadence.template.habit_entry import get_habit_entry_template
from cadence.template.journal_entry import get_journal_entry_template
from cadence.template.tag import get_tag_template


def local_noon(year: int, month: int, day: int) -> pendulum.DateTime:
    """A UTC timestamp that falls on the given local calendar day."""
    return pendulum.datetime(year, month, day, 12, tz="local").in_tz("UTC")


class GraphBuilder:
    """Creates linked entities in a store using the entity templates."""

    def __init__(self, store: Any) -> None:
        self.store = store

    def collection(self, name: str) -> EntityId:
        collection = get_collection_template()
        collection["name"] = name
        return self.store.create("collections", collection)

    def tag(self, name: str) -> EntityId:
        tag = get_tag_template()
        tag["name"] = name
        return self.store.create("tags", tag)

    def habit(self, name: str, **fields: Any) -> EntityId:
        habit = get_habit_template()
        habit["name"] = name
        habit.update(fields)  # type: ignore[typeddict-item]
        return self.store.create("habits", habit)

    def habit_entry(
        self,
        habit_id: EntityId,
        date: pendulum.DateTime,
        completed: bool = True,
        completion_state: int = 0,
        details: Optional[dict[str, Any]] = None,
    ) -> EntityId:
        entry = get_habit_entry_template()
        entry["habit_id"] = habit_id
        entry["date"] = date
        entry["completed"] = completed
        entry["completion_state"] = completion_state
        entry["details"] = details if details is not None else plain_text("")  # type: ignore[typeddict-item]
        return self.store.create("habit_entries", entry)

    def journal_entry(
        self,
        content: str,
        date: pendulum.DateTime,
        collection_id: Optional[EntityId] = None,
        tag_ids: Optional[list[EntityId]] = None,
        **fields: Any,
    ) -> EntityId:
        entry = get_journal_entry_template()
        entry["content"] = content
        entry["date"] = date
        entry["collection_id"] = collection_id
        entry["tag_ids"] = tag_ids or []
        entry.update(fields)  # type: ignore[typeddict-item]
        return self.store.create("journal_entries", entry)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def builder(memory_store: MemoryStore) -> GraphBuilder:
    return GraphBuilder(memory_store)


@pytest.fixture
def scenario_store(memory_store: MemoryStore, builder: GraphBuilder) -> MemoryStore:
    """
    One collection "Daily Log", tags "work" and "home", one daily habit
    "Read" completed on three consecutive days, and one journal entry
    linked to the collection and both tags. Committed.
    """
    collection_id = builder.collection("Daily Log")
    work_id = builder.tag("work")
    home_id = builder.tag("home")
    habit_id = builder.habit("Read", frequency="daily")
    for day in (1, 2, 3):
        builder.habit_entry(habit_id, local_noon(2024, 3, day))
    builder.journal_entry(
        "Finished chapter two",
        local_noon(2024, 3, 3),
        collection_id=collection_id,
        tag_ids=[work_id, home_id],
    )
    memory_store.save_changes()
    return memory_store


@pytest.fixture
def yaml_store(tmp_path: Any) -> YamlStore:
    store = YamlStore(tmp_path / "data")
    store.ensure_directories()
    return store


class FailingCommitStore(MemoryStore):
    """MemoryStore whose commits fail once armed."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_commits = False

    def save_changes(self) -> None:
        if self.fail_commits:
            raise StoreError("disk full")
        super().save_changes()


@pytest.fixture
def failing_store() -> FailingCommitStore:
    return FailingCommitStore()
