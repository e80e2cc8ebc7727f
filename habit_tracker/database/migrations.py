# habit_tracker/database/migrations.py

"""Версии схемы документа habits.json"""

import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


class DocumentMigration:
    """Система миграций документа с привычками.

    Версия 1 - документ без ключа версии (только CHECK-привычки).
    Версия 2 - добавлены type, goalCount и dayCounts.
    """

    VERSION_KEY = "schemaVersion"
    CURRENT_VERSION = 2

    @classmethod
    def get_version(cls, data: Dict[str, Any]) -> int:
        """Получить версию документа"""
        version = data.get(cls.VERSION_KEY, 1)
        if isinstance(version, bool) or not isinstance(version, int):
            return 1
        return version

    @classmethod
    def set_version(cls, data: Dict[str, Any], version: int) -> None:
        data[cls.VERSION_KEY] = version

    @classmethod
    def needs_migration(cls, data: Dict[str, Any]) -> bool:
        """Проверить, нужна ли миграция"""
        return cls.get_version(data) < cls.CURRENT_VERSION

    @classmethod
    def is_newer(cls, data: Dict[str, Any]) -> bool:
        """Документ записан более новой версией программы"""
        return cls.get_version(data) > cls.CURRENT_VERSION

    @classmethod
    def migrate(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Выполнить миграцию документа до текущей версии"""
        current_version = cls.get_version(data)
        logger.info(f"Migrating habits document from version {current_version} to {cls.CURRENT_VERSION}")

        if current_version <= 1:
            data = cls._migrate_from_v1(data)

        cls.set_version(data, cls.CURRENT_VERSION)
        logger.info("Habits document migration completed")
        return data

    @classmethod
    def _migrate_from_v1(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Миграция с версии 1: у всех привычек появляются поля счётчика"""
        habits = data.get("habits")
        if not isinstance(habits, list):
            return data

        for record in habits:
            if not isinstance(record, dict):
                continue
            record.setdefault("type", "check")
            record.setdefault("goalCount", 1)
            record.setdefault("dayCounts", {})
        return data
