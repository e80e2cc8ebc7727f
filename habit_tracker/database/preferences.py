# habit_tracker/database/preferences.py

import json
import logging
from pathlib import Path
from typing import Any, Dict

from habit_tracker.core.exceptions import StorageWriteError, ValidationError

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"

THEME_LIGHT = "light"
THEME_DARK = "dark"
THEME_MODES = (THEME_LIGHT, THEME_DARK)
DEFAULT_THEME = THEME_LIGHT


class PreferenceStore:
    """Настройки оформления в файле settings.json"""

    def __init__(self, settings_file: Path):
        self.settings_file = Path(settings_file)

    def load(self) -> Dict[str, Any]:
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            logger.warning(f"Failed to read settings {self.settings_file}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, data: Dict[str, Any]) -> None:
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.error(f"Failed to write settings {self.settings_file}: {e}")
            raise StorageWriteError(f"Failed to save settings: {e}") from e

    def update(self, update: Dict[str, Any]) -> None:
        data = self.load()
        data.update(update)
        self.save(data)

    def get_theme(self) -> str:
        """Текущая тема; по умолчанию светлая"""
        theme = self.load().get("theme")
        return theme if theme in THEME_MODES else DEFAULT_THEME

    def set_theme(self, theme: str) -> bool:
        if theme not in THEME_MODES:
            raise ValidationError(f"theme должен быть одним из: {list(THEME_MODES)}")
        self.update({"theme": theme})
        logger.info(f"Theme set to {theme}")
        return True
