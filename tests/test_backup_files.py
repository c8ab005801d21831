"""
Tests for writing backup files and restoring a store from them.
"""
import json
import os

import pytest
import yaml

from cadence.repository.memory import MemoryStore
from cadence.service.backup import (
    BACKUP_FILE_PREFIX,
    create_backup,
    list_backups,
    restore_from_file,
)

from conftest import GraphBuilder, local_noon


class BrokenEntryStore(MemoryStore):
    """MemoryStore that fails on creating habit entries."""

    def create(self, kind, entity):
        if kind == "habit_entries":
            raise RuntimeError("unexpected")
        return super().create(kind, entity)


class TestCreateBackup:
    """Writing the store to a backup file"""

    def test_writes_yaml_file(self, scenario_store, tmp_path):
        result = create_backup(scenario_store, tmp_path)

        assert result["success"]
        assert result["path"] is not None
        assert result["path"].name.startswith(BACKUP_FILE_PREFIX)
        assert result["path"].suffix == ".yaml"
        assert result["message"] == f"Backup created: {result['path'].name}"

        data = yaml.safe_load(result["path"].read_text())
        assert data["version"] == 1
        assert len(data["habit_entries"]) == 3

    def test_progress_ends_at_one(self, scenario_store, tmp_path):
        values: list[float] = []

        create_backup(scenario_store, tmp_path, values.append)

        assert values[-1] == 1.0
        assert values == sorted(values)

    def test_unwritable_directory(self, scenario_store, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        result = create_backup(scenario_store, blocker / "backups")

        assert not result["success"]
        assert result["message"].startswith("Failed to write backup file")
        assert result["path"] is None


class TestRestoreFromFile:
    """Restoring a store from a backup file"""

    def test_restore_replaces_existing_data(self, scenario_store, tmp_path):
        backup_path = create_backup(scenario_store, tmp_path)["path"]
        target = MemoryStore()
        GraphBuilder(target).habit("Old habit")
        target.save_changes()

        result = restore_from_file(target, backup_path)

        assert result["success"]
        assert result["message"] == "Data restored successfully"
        assert result["counts"] == {
            "collections": 1,
            "tags": 2,
            "habits": 1,
            "habit_entries": 3,
            "journal_entries": 1,
        }
        assert [habit["name"] for habit in target.fetch_all("habits")] == ["Read"]

    def test_newer_version_rejected_before_mutation(self, scenario_store, tmp_path):
        backup_path = tmp_path / "future.yaml"
        backup_path.write_text(yaml.safe_dump({"version": 2, "habits": []}))

        result = restore_from_file(scenario_store, backup_path)

        assert not result["success"]
        assert result["message"] == "This backup was created with a newer version of the app"
        assert scenario_store.count("habits") == 1
        assert scenario_store.count("habit_entries") == 3

    def test_not_a_backup(self, scenario_store, tmp_path):
        backup_path = tmp_path / "list.yaml"
        backup_path.write_text("- just\n- a list\n")

        result = restore_from_file(scenario_store, backup_path)

        assert not result["success"]
        assert result["message"] == "The backup file is not in the correct format"
        assert scenario_store.count("tags") == 2

    def test_invalid_yaml(self, scenario_store, tmp_path):
        backup_path = tmp_path / "broken.yaml"
        backup_path.write_text("version: [1\n")

        result = restore_from_file(scenario_store, backup_path)

        assert not result["success"]
        assert result["message"] == "The backup file is not in the correct format"

    def test_record_array_of_wrong_type(self, scenario_store, tmp_path):
        backup_path = tmp_path / "wrong.yaml"
        backup_path.write_text(yaml.safe_dump({"version": 1, "habits": "Read"}))

        result = restore_from_file(scenario_store, backup_path)

        assert not result["success"]
        assert scenario_store.count("habits") == 1

    def test_missing_file(self, scenario_store, tmp_path):
        result = restore_from_file(scenario_store, tmp_path / "missing.yaml")

        assert not result["success"]
        assert result["message"] == "Could not read the backup file"

    def test_commit_failure_keeps_previous_data(self, scenario_store, tmp_path, failing_store):
        backup_path = create_backup(scenario_store, tmp_path)["path"]
        GraphBuilder(failing_store).habit("Keep me")
        failing_store.save_changes()
        failing_store.fail_commits = True

        result = restore_from_file(failing_store, backup_path)

        assert not result["success"]
        assert result["message"].startswith("Failed to restore backup:")
        assert [habit["name"] for habit in failing_store.fetch_all("habits")] == ["Keep me"]
        assert failing_store.count("journal_entries") == 0

    def test_json_backup_from_mobile_app(self, tmp_path):
        backup_path = tmp_path / "Cadence_Backup.json"
        backup_path.write_text(
            json.dumps(
                {
                    "version": 1,
                    "createdAt": 1709290000.0,
                    "collections": [{"id": "c1", "name": "Daily Log"}],
                    "tags": [{"id": "t1", "name": "work"}],
                    "habits": [{"id": "h1", "name": "Read", "collectionId": "c1"}],
                    "habitEntries": [
                        {
                            "id": "e1",
                            "habitId": "h1",
                            "date": "2024-03-01T12:00:00Z",
                            "completed": True,
                            "details": "{\"notes\": \"ten pages\"}",
                        }
                    ],
                    "journalEntries": [
                        {
                            "id": "j1",
                            "content": "note",
                            "entryType": "note",
                            "date": "2024-03-01T12:00:00Z",
                            "tagIds": ["t1"],
                        }
                    ],
                }
            )
        )
        target = MemoryStore()

        result = restore_from_file(target, backup_path)

        assert result["success"]
        entry = target.fetch_all("habit_entries")[0]
        assert entry["details"] == {"kind": "text", "text": "ten pages"}
        habit = target.fetch_all("habits")[0]
        assert target.get("collections", habit["collection_id"])["name"] == "Daily Log"

    def test_progress_is_monotonic(self, scenario_store, tmp_path):
        backup_path = create_backup(scenario_store, tmp_path)["path"]
        values: list[float] = []

        restore_from_file(MemoryStore(), backup_path, values.append)

        assert values[0] == 0.1
        assert values[-1] == 1.0
        assert values == sorted(values)


    def test_out_of_range_timestamp(self, scenario_store, tmp_path):
        backup_path = tmp_path / "inf.yaml"
        backup_path.write_text("version: 1\ntimestamp: .inf\n")

        result = restore_from_file(scenario_store, backup_path)

        assert not result["success"]
        assert result["message"] == "The backup file is not in the correct format"
        assert scenario_store.count("habits") == 1

    def test_infinite_workout_duration(self, tmp_path):
        backup_path = tmp_path / "workout.yaml"
        backup_path.write_text(
            yaml.safe_dump(
                {
                    "version": 1,
                    "habits": [{"id": "h1", "name": "Run"}],
                    "habit_entries": [
                        {
                            "id": "e1",
                            "habit_id": "h1",
                            "date": "2024-03-01T12:00:00Z",
                            "completed": True,
                            "details": '{"types": ["run"], "duration": Infinity}',
                        }
                    ],
                }
            )
        )
        target = MemoryStore()

        result = restore_from_file(target, backup_path)

        assert result["success"]
        assert target.fetch_all("habit_entries")[0]["details"]["duration_minutes"] == 0

    def test_unexpected_import_error_rolls_back(self, scenario_store, tmp_path):
        backup_path = create_backup(scenario_store, tmp_path)["path"]
        target = BrokenEntryStore()
        GraphBuilder(target).habit("Keep me")
        target.save_changes()

        with pytest.raises(RuntimeError):
            restore_from_file(target, backup_path)

        assert target.is_dirty is False
        assert [habit["name"] for habit in target.fetch_all("habits")] == ["Keep me"]
        assert target.count("tags") == 0


class TestListBackups:
    """Listing backup files"""

    def test_newest_first(self, tmp_path):
        older = tmp_path / "Cadence_Backup_2024-01-01_000000.yaml"
        newer = tmp_path / "Cadence_Backup_2024-02-01_000000.yaml"
        older.write_text("version: 1\n")
        newer.write_text("version: 1\n")
        (tmp_path / "notes.txt").write_text("")
        os.utime(older, (1_700_000_000, 1_700_000_000))
        os.utime(newer, (1_700_100_000, 1_700_100_000))

        assert list_backups(tmp_path) == [newer, older]

    def test_missing_directory(self, tmp_path):
        assert list_backups(tmp_path / "nope") == []


def test_entry_dates_survive_file_round_trip(memory_store, builder, tmp_path):
    habit_id = builder.habit("Read")
    builder.habit_entry(habit_id, local_noon(2024, 3, 1))
    memory_store.save_changes()
    backup_path = create_backup(memory_store, tmp_path)["path"]
    target = MemoryStore()

    restore_from_file(target, backup_path)

    assert target.fetch_all("habit_entries")[0]["date"] == local_noon(2024, 3, 1)
