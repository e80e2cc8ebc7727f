#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - Core Package
Модель привычки, календарь ключей дней и расчёт показателей
"""

from .calendar import (
    DEFAULT_START_OF_DAY_HOUR,
    day_key,
    last_n_days_keys,
    local_day,
    parse_day_key,
    is_valid_day_key,
)

from .exceptions import (
    HabitTrackerError,
    ValidationError,
    HabitNotFoundError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    StorageCorruptionError,
)

from .models import (
    HabitType,
    Habit,
    MAX_COUNT,
)

from .metrics import (
    is_completed_on,
    completed_day_keys_for_metrics,
    compute_current_streak,
    compute_best_streak,
    heatmap_tiles,
    chunk_heatmap,
    HabitSummary,
    summarize,
)

__all__ = [
    # Calendar
    'DEFAULT_START_OF_DAY_HOUR',
    'day_key',
    'last_n_days_keys',
    'local_day',
    'parse_day_key',
    'is_valid_day_key',

    # Exceptions
    'HabitTrackerError',
    'ValidationError',
    'HabitNotFoundError',
    'StorageError',
    'StorageReadError',
    'StorageWriteError',
    'StorageCorruptionError',

    # Models
    'HabitType',
    'Habit',
    'MAX_COUNT',

    # Metrics
    'is_completed_on',
    'completed_day_keys_for_metrics',
    'compute_current_streak',
    'compute_best_streak',
    'heatmap_tiles',
    'chunk_heatmap',
    'HabitSummary',
    'summarize',
]
