#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - Configuration
Централизованная конфигурация из переменных окружения с валидацией
"""

import os
import sys
from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pytz

from habit_tracker.core.calendar import DEFAULT_START_OF_DAY_HOUR, get_timezone
from habit_tracker.core.metrics import DEFAULT_HEATMAP_WEEKS
from habit_tracker.database.preferences import SETTINGS_FILENAME
from habit_tracker.database.repository import HABITS_FILENAME


class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class StorageConfig:
    """Конфигурация хранилища"""
    data_dir: Path
    backup_dir: Path
    max_backups: int = 10
    auto_backup: bool = True
    compress_backups: bool = False

    @property
    def habits_file(self) -> Path:
        return self.data_dir / HABITS_FILENAME

    @property
    def settings_file(self) -> Path:
        return self.data_dir / SETTINGS_FILENAME


@dataclass
class CalendarConfig:
    """Граница суток и часовой пояс"""
    start_of_day_hour: int = DEFAULT_START_OF_DAY_HOUR
    timezone_name: Optional[str] = None
    heatmap_weeks: int = DEFAULT_HEATMAP_WEEKS

    @property
    def tz(self) -> Optional[tzinfo]:
        return get_timezone(self.timezone_name)


class TrackerConfig:
    """Главный класс конфигурации"""

    def __init__(self, env: Optional[Mapping[str, str]] = None, ensure_directories: bool = True):
        self._env = os.environ if env is None else env
        self._errors: List[str] = []
        self._load_config()
        self._validate_config()
        if ensure_directories:
            self._ensure_directories()

    def _get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._env.get(key, default)

    def _get_bool(self, key: str, default: str) -> bool:
        return self._get(key, default).lower() == 'true'

    def _get_int(self, key: str, default: int) -> int:
        raw = self._get(key)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            self._errors.append(f"{key} должен быть целым числом, получено {raw!r}")
            return default

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""
        try:
            self.environment = Environment(self._get('ENVIRONMENT', 'development').lower())
        except ValueError:
            self._errors.append(f"ENVIRONMENT должен быть одним из: {[e.value for e in Environment]}")
            self.environment = Environment.DEVELOPMENT

        # Директории
        self.data_dir = Path(self._get('DATA_DIR', 'data'))
        self.backup_dir = Path(self._get('BACKUP_DIR', 'backups'))
        self.log_dir = Path(self._get('LOG_DIR', 'logs'))

        # Хранилище
        self.storage = StorageConfig(
            data_dir=self.data_dir,
            backup_dir=self.backup_dir,
            max_backups=self._get_int('MAX_BACKUPS', 10),
            auto_backup=self._get_bool('AUTO_BACKUP', 'true'),
            compress_backups=self._get_bool('COMPRESS_BACKUPS', 'false')
        )

        # Календарь
        self.calendar = CalendarConfig(
            start_of_day_hour=self._get_int('START_OF_DAY_HOUR', DEFAULT_START_OF_DAY_HOUR),
            timezone_name=self._get('HABITS_TIMEZONE') or None,
            heatmap_weeks=self._get_int('HEATMAP_WEEKS', DEFAULT_HEATMAP_WEEKS)
        )

        # Логирование
        try:
            self.log_level = LogLevel(self._get('LOG_LEVEL', 'INFO').upper())
        except ValueError:
            self._errors.append(f"LOG_LEVEL должен быть одним из: {[lvl.value for lvl in LogLevel]}")
            self.log_level = LogLevel.INFO
        self.log_to_file = self._get_bool('LOG_TO_FILE', 'true')
        self.log_format = self._get(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = list(self._errors)

        if not 0 <= self.calendar.start_of_day_hour <= 23:
            errors.append(f"START_OF_DAY_HOUR {self.calendar.start_of_day_hour} вне диапазона (0-23)")

        if self.calendar.heatmap_weeks <= 0:
            errors.append("HEATMAP_WEEKS должен быть положительным числом")

        if self.storage.max_backups < 0:
            errors.append("MAX_BACKUPS не может быть отрицательным")

        if self.calendar.timezone_name:
            try:
                pytz.timezone(self.calendar.timezone_name)
            except pytz.UnknownTimeZoneError:
                errors.append(f"Неизвестный часовой пояс HABITS_TIMEZONE: {self.calendar.timezone_name}")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def _ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [self.data_dir, self.backup_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Конфигурация логирования для logging.config.dictConfig"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        handler_configs: Dict[str, Any] = {
            'console': {
                'class': 'logging.StreamHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'stream': sys.stdout
            }
        }
        if self.log_to_file:
            handler_configs['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"habits_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': handler_configs,
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers
                },
                'uvicorn.access': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'environment': self.environment.value,
            'storage': {
                'habits_file': str(self.storage.habits_file),
                'settings_file': str(self.storage.settings_file),
                'backup_dir': str(self.storage.backup_dir),
                'max_backups': self.storage.max_backups,
                'auto_backup': self.storage.auto_backup
            },
            'calendar': {
                'start_of_day_hour': self.calendar.start_of_day_hour,
                'timezone': self.calendar.timezone_name or 'local',
                'heatmap_weeks': self.calendar.heatmap_weeks
            },
            'log_level': self.log_level.value
        }


@lru_cache()
def get_config() -> TrackerConfig:
    """Глобальный экземпляр конфигурации"""
    return TrackerConfig()
