"""
Smoke tests for the command line interface.
"""
import pytest
import yaml
from typer.testing import CliRunner

from cadence import configuration
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.repository.yaml_store import YamlStore
from cadence.terminal.app import app

from conftest import GraphBuilder, local_noon

runner = CliRunner()


@pytest.fixture
def app_paths(tmp_path, monkeypatch):
    """Point every configured path into tmp_path."""
    monkeypatch.setattr(configuration, "DATA_PATH", tmp_path / "data")
    monkeypatch.setattr(configuration, "BACKUP_PATH", tmp_path / "backups")
    monkeypatch.setattr(configuration, "EXPORT_PATH", tmp_path / "exports")
    monkeypatch.setattr(configuration, "BASE_PATH", tmp_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", tmp_path / "config.yaml")
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    (tmp_path / "config.yaml").write_text(
        yaml.safe_dump(dict(configuration.get_default_configuration()))
    )

    store = YamlStore(tmp_path / "data")
    store.ensure_directories()
    builder = GraphBuilder(store)
    habit_id = builder.habit("Read")
    builder.habit_entry(habit_id, local_noon(2024, 3, 1))
    store.save_changes()

    return tmp_path


class TestBackupCommands:
    """cadence backup ..."""

    def test_create_and_list(self, app_paths):
        result = runner.invoke(app, ["backup", "create"])

        assert result.exit_code == 0
        assert "Backup created" in result.stdout
        backups = list((app_paths / "backups").iterdir())
        assert len(backups) == 1

        result = runner.invoke(app, ["b", "ls"])
        assert result.exit_code == 0
        assert backups[0].name in result.stdout

    def test_create_with_output(self, app_paths):
        result = runner.invoke(app, ["backup", "create", "--output", str(app_paths / "elsewhere")])

        assert result.exit_code == 0
        assert len(list((app_paths / "elsewhere").iterdir())) == 1

    def test_restore_with_yes(self, app_paths):
        runner.invoke(app, ["backup", "create"])
        backup_path = next((app_paths / "backups").iterdir())
        stale_store = YamlStore(app_paths / "data")
        GraphBuilder(stale_store).tag("stale")
        stale_store.save_changes()

        result = runner.invoke(app, ["backup", "restore", str(backup_path), "--yes"])

        assert result.exit_code == 0
        assert "Data restored successfully" in result.stdout
        store = YamlStore(app_paths / "data")
        assert [habit["name"] for habit in store.fetch_all("habits")] == ["Read"]
        assert len(store.fetch_all("habit_entries")) == 1
        assert store.fetch_all("tags") == []

    def test_restore_cancelled(self, app_paths):
        runner.invoke(app, ["backup", "create"])
        backup_path = next((app_paths / "backups").iterdir())
        habit_ids = [habit["id"] for habit in YamlStore(app_paths / "data").fetch_all("habits")]

        result = runner.invoke(app, ["backup", "restore", str(backup_path)], input="n\n")

        assert result.exit_code == 0
        assert "Restore cancelled" in result.stdout
        assert [
            habit["id"] for habit in YamlStore(app_paths / "data").fetch_all("habits")
        ] == habit_ids

    def test_restore_newer_version_fails(self, app_paths):
        backup_path = app_paths / "future.yaml"
        backup_path.write_text(yaml.safe_dump({"version": 99}))

        result = runner.invoke(app, ["backup", "restore", str(backup_path), "-y"])

        assert result.exit_code == 1
        assert "newer version" in result.stdout

    def test_restore_missing_file(self, app_paths):
        result = runner.invoke(app, ["backup", "restore", str(app_paths / "nope.yaml"), "-y"])

        assert result.exit_code == 1


class TestExportCommand:
    """cadence export ..."""

    def test_monthly_report(self, app_paths):
        result = runner.invoke(app, ["export", "monthly-report", "--month", "2024-03"])

        assert result.exit_code == 0
        exports = list((app_paths / "exports").iterdir())
        assert len(exports) == 1
        assert "March 2024" in exports[0].read_text()

    def test_alias(self, app_paths):
        result = runner.invoke(app, ["ex", "habits"])

        assert result.exit_code == 0
        assert "Read" in next((app_paths / "exports").iterdir()).read_text()

    def test_bad_month(self, app_paths):
        result = runner.invoke(app, ["export", "monthly-report", "--month", "March"])

        assert result.exit_code != 0

    def test_unknown_kind(self, app_paths):
        result = runner.invoke(app, ["export", "tags"])

        assert result.exit_code == 1
        assert "Invalid export kind: tags" in result.stdout


class TestConfigCommands:
    """cadence config ..."""

    def test_view(self, app_paths):
        result = runner.invoke(app, ["config", "view"])

        assert result.exit_code == 0
        assert "log_level" in result.stdout

    def test_set_log_level(self, app_paths):
        result = runner.invoke(app, ["c", "s", "--log-level", "info"])

        assert result.exit_code == 0
        saved = yaml.safe_load((app_paths / "config.yaml").read_text())
        assert saved["log_level"] == "INFO"

    def test_set_invalid_log_level(self, app_paths):
        result = runner.invoke(app, ["config", "set", "--log-level", "loud"])

        assert result.exit_code == 1
