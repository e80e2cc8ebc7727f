"""
Pytest fixtures for testing
"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from habit_tracker.config import TrackerConfig
from habit_tracker.core.models import Habit, HabitType
from habit_tracker.dashboard import dependencies
from habit_tracker.dashboard.app import create_app
from habit_tracker.dashboard.config import DashboardSettings
from habit_tracker.database.backup import BackupManager
from habit_tracker.database.preferences import PreferenceStore
from habit_tracker.database.repository import HabitRepository
from habit_tracker.services.habit_service import HabitService

# Naive datetimes are read as system-local time, so day keys below do not
# depend on the machine's timezone.
FIXED_NOW = datetime(2024, 3, 15, 12, 0)
START_HOUR = 4


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def make_habit():
    """Factory for in-memory habits"""
    def _make(habit_id="h1", habit_type=HabitType.CHECK, goal_count=1,
              completed_days=(), day_counts=None, name="Read"):
        return Habit(
            id=habit_id,
            name=name,
            habit_type=habit_type,
            goal_count=goal_count,
            created_at=datetime(2024, 1, 1, 9, 0),
            completed_days=set(completed_days),
            day_counts=dict(day_counts or {}),
        )
    return _make


@pytest.fixture
def backup_manager(tmp_path):
    return BackupManager(tmp_path / "backups", max_backups=5)


@pytest.fixture
def repository(tmp_path, backup_manager):
    """Repository over a temp habits.json with automatic backups"""
    return HabitRepository(tmp_path / "data" / "habits.json", backup_manager=backup_manager)


@pytest.fixture
def service(repository):
    return HabitService(repository, start_of_day_hour=START_HOUR, clock=lambda: FIXED_NOW)


@pytest.fixture
def preference_store(tmp_path):
    return PreferenceStore(tmp_path / "data" / "settings.json")


@pytest.fixture
def tracker_config(tmp_path):
    return TrackerConfig(env={
        "ENVIRONMENT": "testing",
        "DATA_DIR": str(tmp_path / "data"),
        "BACKUP_DIR": str(tmp_path / "backups"),
        "LOG_DIR": str(tmp_path / "logs"),
        "LOG_TO_FILE": "false",
    })


@pytest.fixture
def client(service, preference_store, tracker_config):
    """API client with services pointing at the temp directory"""
    app = create_app(settings=DashboardSettings(ENVIRONMENT="testing"), config=tracker_config)
    app.dependency_overrides[dependencies.get_habit_service] = lambda: service
    app.dependency_overrides[dependencies.get_preference_store] = lambda: preference_store
    app.dependency_overrides[dependencies.get_tracker_config] = lambda: tracker_config
    yield TestClient(app)
    dependencies.cleanup_resources()
