#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - Core Data Models
Модель привычки с двумя историями выполнения и мягкой десериализацией

Привычка хранит обе истории (completed_days для CHECK и day_counts для COUNT)
независимо от текущего типа: смена типа не удаляет данные, и при обратном
переключении прежняя история снова становится активной.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from enum import Enum
from typing import Any, Dict, Optional, Set

from habit_tracker.core.calendar import day_key, is_valid_day_key
from habit_tracker.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# ===== CONSTANTS =====

MAX_COUNT = 1_000_000
MIN_GOAL = 1

DEFAULT_EMOJI = "✅"
DEFAULT_COLOR_VALUE = 0xFF3F51B5  # indigo

EMOJI_CHOICES = ["✅", "📚", "🧘", "🏃", "💧", "🍎", "🛏️", "🧠"]

COLOR_PALETTE = [
    0xFF6C63FF,
    0xFF00B894,
    0xFFFF7675,
    0xFFFFC312,
    0xFF0984E3,
    0xFFE84393,
    0xFF2ECC71,
    0xFFE17055,
]

# ===== ENUMS =====

class HabitType(Enum):
    """Типы привычек"""
    CHECK = "check"
    COUNT = "count"

    @classmethod
    def parse(cls, value: Any) -> "HabitType":
        """Разбор значения из файла; неизвестные значения дают CHECK"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.CHECK

# ===== HELPERS =====

def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def effective_goal(goal_count: Optional[int]) -> int:
    """Действующая цель: 1 если цель не задана или <= 0"""
    if goal_count is None or goal_count <= 0:
        return MIN_GOAL
    return clamp(goal_count, MIN_GOAL, MAX_COUNT)


def _coerce_int(value: Any) -> Optional[int]:
    """Приведение к int; None если значение не числовое"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None

# ===== CORE MODELS =====

@dataclass
class Habit:
    """Привычка и её история выполнения"""
    id: str
    name: str
    emoji: str = DEFAULT_EMOJI
    color_value: int = DEFAULT_COLOR_VALUE
    habit_type: HabitType = HabitType.CHECK
    goal_count: Optional[int] = 1
    created_at: datetime = field(default_factory=lambda: datetime.now().astimezone())
    completed_days: Set[str] = field(default_factory=set)
    day_counts: Dict[str, int] = field(default_factory=dict)

    # ===== PROPERTIES =====

    @property
    def effective_goal(self) -> int:
        return effective_goal(self.goal_count)

    @property
    def is_count(self) -> bool:
        return self.habit_type == HabitType.COUNT

    @property
    def color_hex(self) -> str:
        """Цвет в формате #RRGGBB (альфа-канал отбрасывается)"""
        return f"#{self.color_value & 0xFFFFFF:06X}"

    # ===== MUTATIONS =====

    def count_on(self, key: str) -> int:
        return self.day_counts.get(key, 0)

    def toggle_today(self, now: datetime, start_of_day_hour: int,
                     tz: Optional[tzinfo] = None) -> bool:
        """Переключить отметку за сегодня.

        Для COUNT-привычек работает как increment_today: так ведёт себя
        единственная кнопка на карточке привычки.
        Возвращает признак выполнения за сегодня после операции.
        """
        key = day_key(now, start_of_day_hour, tz)

        if self.is_count:
            self.increment_today(now, start_of_day_hour, tz)
            return self.count_on(key) >= self.effective_goal

        if key in self.completed_days:
            self.completed_days.discard(key)
            return False
        self.completed_days.add(key)
        return True

    def increment_today(self, now: datetime, start_of_day_hour: int,
                        tz: Optional[tzinfo] = None) -> int:
        """Увеличить счётчик за сегодня, возвращает новое значение"""
        key = day_key(now, start_of_day_hour, tz)
        self.day_counts[key] = clamp(self.count_on(key) + 1, 0, MAX_COUNT)
        return self.day_counts[key]

    def decrement_today(self, now: datetime, start_of_day_hour: int,
                        tz: Optional[tzinfo] = None) -> int:
        """Уменьшить счётчик за сегодня (не ниже нуля), возвращает новое значение"""
        key = day_key(now, start_of_day_hour, tz)
        self.day_counts[key] = clamp(self.count_on(key) - 1, 0, MAX_COUNT)
        return self.day_counts[key]

    def edit(self, name: Optional[str] = None, emoji: Optional[str] = None,
             color_value: Optional[int] = None, habit_type: Optional[HabitType] = None,
             goal_count: Optional[int] = None) -> None:
        """Изменить атрибуты привычки. Истории выполнения не затрагиваются"""
        if name is not None:
            self.name = name
        if emoji is not None:
            self.emoji = emoji
        if color_value is not None:
            self.color_value = color_value
        if habit_type is not None:
            self.habit_type = habit_type
        if goal_count is not None:
            self.goal_count = goal_count

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь формата habits.json"""
        return {
            "id": self.id,
            "name": self.name,
            "emoji": self.emoji,
            "colorValue": self.color_value,
            "type": self.habit_type.value,
            "goalCount": self.goal_count,
            "createdAt": self.created_at.isoformat(),
            "completedDays": sorted(self.completed_days),
            "dayCounts": {k: self.day_counts[k] for k in sorted(self.day_counts)},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        """Десериализация с подстановкой значений по умолчанию для каждого поля.

        Ошибкой считается только отсутствие id: такую запись нельзя
        сопоставить с коллекцией.
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Habit record must be an object, got {type(data).__name__}")

        habit_id = data.get("id")
        if not isinstance(habit_id, str) or not habit_id:
            raise ValidationError("Habit record has no id")

        def fallback(field_name: str, default: Any) -> Any:
            logger.warning(f"Habit {habit_id}: invalid '{field_name}', using default {default!r}")
            return default

        name = data.get("name", "")
        if not isinstance(name, str):
            name = fallback("name", "")

        emoji = data.get("emoji", DEFAULT_EMOJI)
        if not isinstance(emoji, str):
            emoji = fallback("emoji", DEFAULT_EMOJI)

        color_value = _coerce_int(data.get("colorValue", DEFAULT_COLOR_VALUE))
        if color_value is None:
            color_value = fallback("colorValue", DEFAULT_COLOR_VALUE)

        raw_type = data.get("type", HabitType.CHECK.value)
        habit_type = HabitType.parse(raw_type)
        if habit_type.value != raw_type:
            fallback("type", HabitType.CHECK.value)

        if "goalCount" not in data:
            goal_count = 1
        elif data["goalCount"] is None:
            goal_count = None
        else:
            goal_count = _coerce_int(data["goalCount"])
            if goal_count is None:
                fallback("goalCount", None)

        created_at = _parse_datetime(data.get("createdAt"))
        if created_at is None:
            created_at = fallback("createdAt", datetime.now().astimezone())

        completed_days: Set[str] = set()
        raw_days = data.get("completedDays", [])
        if isinstance(raw_days, list):
            for key in raw_days:
                if is_valid_day_key(key):
                    completed_days.add(key)
                else:
                    logger.warning(f"Habit {habit_id}: dropping malformed day key {key!r}")
        else:
            fallback("completedDays", [])

        day_counts: Dict[str, int] = {}
        raw_counts = data.get("dayCounts", {})
        if isinstance(raw_counts, dict):
            for key, raw_value in raw_counts.items():
                if not is_valid_day_key(key):
                    logger.warning(f"Habit {habit_id}: dropping malformed day key {key!r}")
                    continue
                value = _coerce_int(raw_value)
                if value is None:
                    value = fallback(f"dayCounts[{key}]", 0)
                day_counts[key] = clamp(value, 0, MAX_COUNT)
        else:
            fallback("dayCounts", {})

        return cls(
            id=habit_id,
            name=name,
            emoji=emoji,
            color_value=color_value,
            habit_type=habit_type,
            goal_count=goal_count,
            created_at=created_at,
            completed_days=completed_days,
            day_counts=day_counts,
        )
