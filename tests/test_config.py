"""Tests for environment configuration"""
import pytest

from habit_tracker.config import Environment, TrackerConfig
from habit_tracker.dashboard.config import DashboardSettings


def make_config(tmp_path, **env):
    base = {
        "DATA_DIR": str(tmp_path / "data"),
        "BACKUP_DIR": str(tmp_path / "backups"),
        "LOG_DIR": str(tmp_path / "logs"),
    }
    base.update(env)
    return TrackerConfig(env=base)


class TestTrackerConfig:
    def test_defaults(self, tmp_path):
        config = make_config(tmp_path)
        assert config.environment == Environment.DEVELOPMENT
        assert config.calendar.start_of_day_hour == 4
        assert config.calendar.heatmap_weeks == 8
        assert config.calendar.tz is None
        assert config.storage.habits_file == tmp_path / "data" / "habits.json"
        assert (tmp_path / "backups").is_dir()

    def test_timezone(self, tmp_path):
        config = make_config(tmp_path, HABITS_TIMEZONE="Europe/Moscow")
        assert config.calendar.tz.zone == "Europe/Moscow"

    def test_all_errors_reported(self, tmp_path):
        with pytest.raises(ValueError) as exc_info:
            make_config(tmp_path, START_OF_DAY_HOUR="24", HEATMAP_WEEKS="x",
                        HABITS_TIMEZONE="Mars/Base")
        message = str(exc_info.value)
        assert "START_OF_DAY_HOUR" in message
        assert "HEATMAP_WEEKS" in message
        assert "HABITS_TIMEZONE" in message

    def test_logging_config_without_file(self, tmp_path):
        config = make_config(tmp_path, LOG_TO_FILE="false", LOG_LEVEL="debug")
        logging_config = config.get_logging_config()
        assert logging_config["loggers"][""]["handlers"] == ["console"]
        assert logging_config["loggers"][""]["level"] == "DEBUG"

    def test_logging_config_with_file(self, tmp_path):
        config = make_config(tmp_path, ENVIRONMENT="testing")
        handler = config.get_logging_config()["handlers"]["file"]
        assert handler["filename"].endswith("habits_testing.log")


class TestDashboardSettings:
    def test_production_hides_docs(self):
        settings = DashboardSettings(ENVIRONMENT="Production")
        assert settings.ENVIRONMENT == "production"
        assert settings.DEBUG is False
        assert settings.DOCS_URL is None

    def test_origins_are_split(self):
        settings = DashboardSettings(ALLOWED_ORIGINS=" http://a.test , http://b.test ")
        assert settings.origins == ["http://a.test", "http://b.test"]

    def test_invalid_port(self):
        with pytest.raises(ValueError):
            DashboardSettings(DASHBOARD_PORT=70000)

    def test_api_prefix_normalized(self):
        assert DashboardSettings(API_PREFIX="v1/").API_PREFIX == "/v1"
