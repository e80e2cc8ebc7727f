#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - JSON Habit Repository
Загрузка и сохранение всей коллекции привычек в одном JSON-документе

Загрузка никогда не бросает исключений: отсутствующий, нечитаемый или
повреждённый файл даёт пустую коллекцию (после попытки восстановления из
резервной копии). Ошибки записи, наоборот, всегда передаются вызывающему
коду как StorageWriteError.
"""

import json
import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from habit_tracker.core.exceptions import (
    StorageCorruptionError, StorageReadError, StorageWriteError, ValidationError
)
from habit_tracker.core.models import Habit
from habit_tracker.database.backup import BackupManager
from habit_tracker.database.migrations import DocumentMigration

logger = logging.getLogger(__name__)

HABITS_FILENAME = "habits.json"


def empty_document() -> Dict[str, Any]:
    return {DocumentMigration.VERSION_KEY: DocumentMigration.CURRENT_VERSION, "habits": []}


@dataclass
class RepositoryStats:
    """Статистика хранилища"""
    load_count: int = 0
    save_count: int = 0
    error_count: int = 0
    last_load: Optional[str] = None
    last_save: Optional[str] = None
    habits_loaded: int = 0
    records_skipped: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'load_count': self.load_count,
            'save_count': self.save_count,
            'error_count': self.error_count,
            'last_load': self.last_load,
            'last_save': self.last_save,
            'habits_loaded': self.habits_loaded,
            'records_skipped': self.records_skipped
        }


class HabitRepository:
    """JSON-хранилище коллекции привычек"""

    def __init__(self, data_file: Path, backup_manager: Optional[BackupManager] = None,
                 auto_backup: bool = True, compress_backups: bool = False):
        self.data_file = Path(data_file)
        self.backup_manager = backup_manager
        self.auto_backup = auto_backup and backup_manager is not None
        self.compress_backups = compress_backups
        self.file_lock = threading.RLock()
        self.stats = RepositoryStats()

    @classmethod
    def from_config(cls, config) -> "HabitRepository":
        """Создание хранилища по конфигурации TrackerConfig"""
        storage = config.storage
        return cls(
            data_file=storage.habits_file,
            backup_manager=BackupManager(storage.backup_dir, storage.max_backups),
            auto_backup=storage.auto_backup,
            compress_backups=storage.compress_backups,
        )

    # ===== PUBLIC API =====

    def load_all(self) -> List[Habit]:
        """Загрузить все привычки; при любой ошибке чтения - пустой список"""
        with self.file_lock:
            try:
                data = self._read_document()
            except StorageCorruptionError as e:
                logger.error(f"Habits file is corrupted: {e}")
                self.stats.error_count += 1
                data = self._recover_from_backup()
                if data is None:
                    logger.warning("Could not restore from any backup, starting with no habits")
                    return []
            except StorageReadError as e:
                logger.error(f"Failed to read habits file: {e}")
                self.stats.error_count += 1
                return []

            if data is None:
                logger.info(f"Habits file {self.data_file} is missing or empty, initializing")
                self._initialize_file()
                return []

            if DocumentMigration.needs_migration(data):
                if self.backup_manager is not None:
                    self.backup_manager.create_backup(self.data_file, compressed=self.compress_backups)
                data = DocumentMigration.migrate(data)
                try:
                    self._write_document(data)
                except StorageWriteError as e:
                    logger.warning(f"Migrated document was not written back: {e}")
            elif DocumentMigration.is_newer(data):
                logger.warning(
                    f"Habits file has schema version {DocumentMigration.get_version(data)}, "
                    f"newer than supported {DocumentMigration.CURRENT_VERSION}; loading best-effort"
                )

            habits = self._parse_habits(data)
            self.stats.load_count += 1
            self.stats.last_load = datetime.now().isoformat()
            self.stats.habits_loaded = len(habits)
            logger.debug(f"Loaded {len(habits)} habits from {self.data_file}")
            return habits

    def save_all(self, habits: Sequence[Habit]) -> bool:
        """Перезаписать всю коллекцию. StorageWriteError при ошибке записи"""
        document = empty_document()
        document["habits"] = [habit.to_dict() for habit in habits]

        with self.file_lock:
            if self.auto_backup and self.data_file.exists():
                self.backup_manager.create_backup(self.data_file, compressed=self.compress_backups)

            self._write_document(document)
            self.stats.save_count += 1
            self.stats.last_save = datetime.now().isoformat()

        logger.info(f"Saved {len(document['habits'])} habits to {self.data_file}")
        return True

    def list_backups(self) -> List[Dict[str, Any]]:
        if self.backup_manager is None:
            return []
        return self.backup_manager.list_backups()

    def restore_backup(self, backup_path: Path) -> bool:
        """Восстановить файл привычек из резервной копии"""
        if self.backup_manager is None:
            return False
        with self.file_lock:
            return self.backup_manager.restore_backup(Path(backup_path), self.data_file)

    def get_stats(self) -> Dict[str, Any]:
        stats = self.stats.to_dict()
        stats['data_file'] = str(self.data_file)
        stats['file_exists'] = self.data_file.exists()
        stats['backups'] = len(self.list_backups())
        return stats

    # ===== INTERNALS =====

    def _read_document(self) -> Optional[Dict[str, Any]]:
        """Прочитать документ; None если файла нет или он пуст"""
        if not self.data_file.exists():
            return None

        try:
            text = self.data_file.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(str(e)) from e

        if not text.strip():
            return None

        return self._parse_document(text)

    @staticmethod
    def _parse_document(text: str) -> Dict[str, Any]:
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            raise StorageCorruptionError(f"Invalid JSON document: {e}") from e

        if not isinstance(data, dict):
            raise StorageCorruptionError(f"Document root must be an object, got {type(data).__name__}")
        return data

    def _parse_habits(self, data: Dict[str, Any]) -> List[Habit]:
        records = data.get("habits")
        if records is None:
            return []
        if not isinstance(records, list):
            logger.warning("'habits' is not a list, ignoring its contents")
            return []

        habits: List[Habit] = []
        for index, record in enumerate(records):
            try:
                habits.append(Habit.from_dict(record))
            except ValidationError as e:
                logger.warning(f"Skipping habit record #{index}: {e}")
                self.stats.records_skipped += 1
        return habits

    def _recover_from_backup(self) -> Optional[Dict[str, Any]]:
        """Найти самую свежую читаемую копию и восстановить из неё файл"""
        if self.backup_manager is None:
            return None

        logger.warning("Attempting to recover habits file from backups...")
        for backup in self.backup_manager.list_backups():
            backup_path = Path(backup['path'])
            try:
                data = self._parse_document(BackupManager.read_backup(backup_path))
            except (OSError, UnicodeDecodeError, StorageCorruptionError) as e:
                logger.warning(f"Backup {backup['name']} is not usable: {e}")
                continue

            if self.backup_manager.restore_backup(backup_path, self.data_file):
                logger.info(f"Successfully restored from backup: {backup['name']}")
                return data
        return None

    def _initialize_file(self) -> None:
        try:
            self._write_document(empty_document())
        except StorageWriteError as e:
            logger.error(f"Could not initialize habits file: {e}")

    def _write_document(self, data: Dict[str, Any]) -> None:
        """Атомарная запись через временный файл"""
        temp_file = self.data_file.with_suffix('.tmp')
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)

            # Проверяем целостность записанного файла
            with open(temp_file, 'r', encoding='utf-8') as f:
                json.load(f)

            os.replace(temp_file, self.data_file)

        except (OSError, TypeError, ValueError) as e:
            self.stats.error_count += 1
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError as cleanup_error:
                logger.warning(f"Could not remove temp file {temp_file}: {cleanup_error}")
            logger.error(f"Failed to write habits file {self.data_file}: {e}")
            raise StorageWriteError(f"Failed to save habits: {e}") from e
