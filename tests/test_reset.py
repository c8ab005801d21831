"""
Tests for clearing every entity kind from a store.
"""
from cadence.model.entity_type import ENTITY_KINDS
from cadence.repository.memory import MemoryStore
from cadence.repository.store import StoreError
from cadence.service.reset import reset_store


class FailingTagStore(MemoryStore):
    def delete(self, kind, id):
        if kind == "tags":
            raise StoreError("tags are locked")
        super().delete(kind, id)


class TestResetStore:
    """Deleting every entity of every kind"""

    def test_clears_everything(self, scenario_store):
        result = reset_store(scenario_store)

        assert result["success"]
        assert result["failed_kinds"] == {}
        assert result["deleted"]["habit_entries"] == 3
        assert all(scenario_store.count(kind) == 0 for kind in ENTITY_KINDS)

    def test_commits_by_default(self, scenario_store):
        reset_store(scenario_store)
        scenario_store.rollback()

        assert scenario_store.count("habits") == 0

    def test_idempotent(self, scenario_store):
        reset_store(scenario_store)
        result = reset_store(scenario_store)

        assert result["success"]
        assert all(count == 0 for count in result["deleted"].values())

    def test_without_commit_stays_pending(self, scenario_store):
        reset_store(scenario_store, commit=False)
        assert scenario_store.count("tags") == 0

        scenario_store.rollback()
        assert scenario_store.count("tags") == 2

    def test_failing_kind_does_not_stop_others(self):
        store = FailingTagStore()
        store.create("tags", {"name": "work"})
        store.create("habits", {"name": "Read"})
        store.save_changes()

        result = reset_store(store)

        assert not result["success"]
        assert list(result["failed_kinds"]) == ["tags"]
        assert store.count("habits") == 0
        assert store.count("tags") == 1

    def test_commit_failure_rolls_back(self, failing_store):
        failing_store.create("habits", {"name": "Read"})
        failing_store.save_changes()
        failing_store.fail_commits = True

        result = reset_store(failing_store)

        assert not result["success"]
        assert set(result["failed_kinds"]) == set(ENTITY_KINDS)
        assert failing_store.count("habits") == 1
