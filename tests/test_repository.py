"""Tests for the JSON repository: fail-soft loading, backups, migration"""
import json
from pathlib import Path

import pytest

from habit_tracker.core.exceptions import StorageWriteError
from habit_tracker.database.backup import BackupManager
from habit_tracker.database.repository import HabitRepository


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


class TestLoad:
    def test_missing_file_is_initialized(self, repository):
        assert repository.load_all() == []
        data = json.loads(repository.data_file.read_text(encoding="utf-8"))
        assert data == {"schemaVersion": 2, "habits": []}

    def test_empty_file(self, repository):
        repository.data_file.parent.mkdir(parents=True)
        repository.data_file.write_text("", encoding="utf-8")
        assert repository.load_all() == []

    def test_malformed_json_without_backups(self, tmp_path):
        repo = HabitRepository(tmp_path / "habits.json")
        (tmp_path / "habits.json").write_text("{not json", encoding="utf-8")
        assert repo.load_all() == []

    def test_non_object_root(self, tmp_path):
        repo = HabitRepository(tmp_path / "habits.json")
        write_json(tmp_path / "habits.json", [1, 2, 3])
        assert repo.load_all() == []

    def test_unreadable_path(self, tmp_path):
        # directory in place of the file
        (tmp_path / "habits.json").mkdir()
        assert HabitRepository(tmp_path / "habits.json").load_all() == []

    def test_bad_records_are_skipped(self, repository):
        write_json(repository.data_file, {"schemaVersion": 2, "habits": [
            {"id": "a", "name": "Read"},
            {"name": "no id"},
            42,
            {"id": "b", "name": "Walk"},
        ]})
        habits = repository.load_all()
        assert [h.id for h in habits] == ["a", "b"]
        assert repository.stats.records_skipped == 2

    def test_habits_not_a_list(self, repository):
        write_json(repository.data_file, {"schemaVersion": 2, "habits": {"a": {}}})
        assert repository.load_all() == []

    def test_deeply_nested_document(self, repository):
        repository.data_file.parent.mkdir(parents=True)
        depth = 100000
        repository.data_file.write_text(
            '{"habits": ' + "[" * depth + "]" * depth + "}", encoding="utf-8"
        )
        assert repository.load_all() == []


class TestSave:
    def test_save_then_load_preserves_order(self, repository, make_habit):
        habits = [make_habit("b", name="B"), make_habit("a", name="A", completed_days=["2024-03-15"])]
        assert repository.save_all(habits) is True
        loaded = repository.load_all()
        assert [h.id for h in loaded] == ["b", "a"]
        assert loaded[1].completed_days == {"2024-03-15"}

    def test_document_shape(self, repository, make_habit):
        repository.save_all([make_habit()])
        data = json.loads(repository.data_file.read_text(encoding="utf-8"))
        assert data["schemaVersion"] == 2
        assert data["habits"][0]["id"] == "h1"
        assert not repository.data_file.with_suffix(".tmp").exists()

    def test_unwritable_location_raises(self, tmp_path, make_habit):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        repo = HabitRepository(blocker / "habits.json")
        with pytest.raises(StorageWriteError):
            repo.save_all([make_habit()])

    def test_save_creates_backup_of_previous_state(self, repository, make_habit):
        repository.save_all([make_habit("a")])
        repository.save_all([make_habit("a"), make_habit("b")])
        backups = repository.list_backups()
        assert len(backups) == 1
        previous = json.loads(BackupManager.read_backup(Path(backups[0]["path"])))
        assert [h["id"] for h in previous["habits"]] == ["a"]


class TestRecovery:
    def test_corrupt_file_restored_from_backup(self, repository, make_habit):
        repository.save_all([make_habit("a")])
        repository.save_all([make_habit("a"), make_habit("b")])
        repository.data_file.write_text("{broken", encoding="utf-8")

        habits = repository.load_all()
        assert [h.id for h in habits] == ["a"]
        assert json.loads(repository.data_file.read_text(encoding="utf-8"))["habits"][0]["id"] == "a"

    def test_corrupt_file_and_corrupt_backups(self, repository, backup_manager):
        backup_manager.backup_dir.mkdir(parents=True)
        (backup_manager.backup_dir / "backup_20240101_000000_000000.json").write_text("nope")
        repository.data_file.parent.mkdir(parents=True)
        repository.data_file.write_text("[", encoding="utf-8")
        assert repository.load_all() == []


class TestMigration:
    def test_version_one_document(self, repository):
        write_json(repository.data_file, {"habits": [
            {"id": "a", "name": "Read", "completedDays": ["2024-03-01"]},
        ]})
        habits = repository.load_all()
        assert habits[0].completed_days == {"2024-03-01"}
        assert habits[0].goal_count == 1

        data = json.loads(repository.data_file.read_text(encoding="utf-8"))
        assert data["schemaVersion"] == 2
        assert data["habits"][0]["type"] == "check"
        assert data["habits"][0]["dayCounts"] == {}
        assert len(repository.list_backups()) == 1

    def test_newer_version_loads_best_effort(self, repository):
        write_json(repository.data_file, {"schemaVersion": 9, "habits": [{"id": "a", "name": "Read"}]})
        assert [h.id for h in repository.load_all()] == ["a"]


class TestBackupManager:
    def test_old_backups_are_removed(self, tmp_path):
        source = tmp_path / "habits.json"
        source.write_text("{}", encoding="utf-8")
        manager = BackupManager(tmp_path / "backups", max_backups=2)
        for _ in range(4):
            manager.create_backup(source)
        assert len(manager.list_backups()) == 2

    def test_compressed_backup_restores(self, tmp_path):
        source = tmp_path / "habits.json"
        source.write_text('{"habits": []}', encoding="utf-8")
        manager = BackupManager(tmp_path / "backups")
        backup = manager.create_backup(source, compressed=True)
        assert backup.name.endswith(".gz")
        assert json.loads(BackupManager.read_backup(backup)) == {"habits": []}

        target = tmp_path / "restored.json"
        assert manager.restore_backup(backup, target)
        assert json.loads(target.read_text(encoding="utf-8")) == {"habits": []}

    def test_missing_source(self, tmp_path):
        manager = BackupManager(tmp_path / "backups")
        assert manager.create_backup(tmp_path / "missing.json") is None

    def test_manual_restore(self, repository, make_habit):
        repository.save_all([make_habit("a")])
        repository.save_all([make_habit("b")])
        backup = repository.list_backups()[0]
        assert repository.restore_backup(backup["path"]) is True
        assert [h.id for h in repository.load_all()] == ["a"]
