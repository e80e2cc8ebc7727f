# habit_tracker/services/habit_service.py

import logging
import threading
import uuid
from datetime import datetime, tzinfo
from typing import Any, Callable, List, Optional, Tuple, Union

from habit_tracker.core.calendar import DEFAULT_START_OF_DAY_HOUR, now_local
from habit_tracker.core.exceptions import HabitNotFoundError, StorageWriteError, ValidationError
from habit_tracker.core.metrics import DEFAULT_HEATMAP_WEEKS, HabitSummary, summarize
from habit_tracker.core.models import (
    DEFAULT_COLOR_VALUE, DEFAULT_EMOJI, MAX_COUNT, Habit, HabitType
)
from habit_tracker.database.repository import HabitRepository

logger = logging.getLogger(__name__)

# Цель по умолчанию, если введённый текст не число или <= 0
DEFAULT_GOAL_INPUT = 8


def parse_goal_input(text: Any, default: int = DEFAULT_GOAL_INPUT) -> int:
    """Разбор введённой цели для COUNT-привычки"""
    try:
        value = int(str(text).strip())
    except (TypeError, ValueError):
        return default
    if value <= 0:
        return default
    return min(value, MAX_COUNT)


def _parse_habit_type(value: Union[HabitType, str]) -> HabitType:
    if isinstance(value, HabitType):
        return value
    try:
        return HabitType(value)
    except ValueError:
        raise ValidationError(f"type должен быть одним из: {[t.value for t in HabitType]}")


class HabitService:
    """
    Сервис привычек: загрузка, изменение и сохранение коллекции

    Каждая операция изменения выполняется как один цикл
    load_all -> изменение -> save_all под общей блокировкой.
    """

    def __init__(self, repository: HabitRepository,
                 start_of_day_hour: int = DEFAULT_START_OF_DAY_HOUR,
                 tz: Optional[tzinfo] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.repository = repository
        self.start_of_day_hour = start_of_day_hour
        self.tz = tz
        self.clock = clock or (lambda: now_local(tz))
        self._lock = threading.RLock()

    # ===== ЧТЕНИЕ =====

    def list_habits(self) -> List[Habit]:
        with self._lock:
            return self.repository.load_all()

    def get_habit(self, habit_id: str) -> Habit:
        return self._find(self.list_habits(), habit_id)

    def summarize(self, habit_id: str, weeks: int = DEFAULT_HEATMAP_WEEKS) -> Tuple[Habit, HabitSummary]:
        """Привычка и её показатели"""
        self._check_weeks(weeks)
        habit = self.get_habit(habit_id)
        return habit, self._summarize(habit, weeks)

    def summarize_all(self, weeks: int = DEFAULT_HEATMAP_WEEKS) -> List[Tuple[Habit, HabitSummary]]:
        self._check_weeks(weeks)
        now = self.clock()
        return [(habit, self._summarize(habit, weeks, now)) for habit in self.list_habits()]

    def summarize_habit(self, habit: Habit, weeks: int = DEFAULT_HEATMAP_WEEKS,
                        now: Optional[datetime] = None) -> HabitSummary:
        """Показатели уже загруженной привычки без повторного чтения файла"""
        self._check_weeks(weeks)
        return self._summarize(habit, weeks, now)

    # ===== ОСНОВНЫЕ МЕТОДЫ CRUD =====

    def create_habit(self, name: str, emoji: str = DEFAULT_EMOJI,
                     color_value: int = DEFAULT_COLOR_VALUE,
                     habit_type: Union[HabitType, str] = HabitType.CHECK,
                     goal_count: Any = None) -> Habit:
        """Создать новую привычку в конце списка"""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Название привычки не может быть пустым")

        habit = Habit(
            id=str(uuid.uuid4()),
            name=name,
            emoji=emoji or DEFAULT_EMOJI,
            color_value=color_value,
            habit_type=_parse_habit_type(habit_type),
            goal_count=1 if goal_count is None else parse_goal_input(goal_count),
            created_at=self.clock(),
        )

        with self._lock:
            habits = self.repository.load_all()
            habits.append(habit)
            self._save(habits)

        logger.info(f"✅ Создана привычка {habit.id}: {habit.name}")
        return habit

    def update_habit(self, habit_id: str, name: Optional[str] = None,
                     emoji: Optional[str] = None, color_value: Optional[int] = None,
                     habit_type: Optional[Union[HabitType, str]] = None,
                     goal_text: Any = None) -> Habit:
        """Изменить привычку.

        Пустое название оставляет прежнее, нечисловая цель или цель <= 0
        заменяется на DEFAULT_GOAL_INPUT.
        """
        new_type = _parse_habit_type(habit_type) if habit_type is not None else None
        new_goal = parse_goal_input(goal_text) if goal_text is not None else None

        def apply(habit: Habit) -> None:
            new_name = None
            if name is not None:
                new_name = name.strip() or habit.name
            habit.edit(
                name=new_name,
                emoji=emoji or None,
                color_value=color_value,
                habit_type=new_type,
                goal_count=new_goal,
            )

        return self._mutate(habit_id, apply, "updated")

    def delete_habit(self, habit_id: str) -> Habit:
        with self._lock:
            habits = self.repository.load_all()
            habit = self._find(habits, habit_id)
            self._save([h for h in habits if h.id != habit_id])

        logger.info(f"🗑 Удалена привычка {habit_id}: {habit.name}")
        return habit

    # ===== ОТМЕТКИ ЗА СЕГОДНЯ =====

    def toggle_today(self, habit_id: str, now: Optional[datetime] = None) -> Habit:
        now = now or self.clock()
        return self._mutate(
            habit_id,
            lambda h: h.toggle_today(now, self.start_of_day_hour, self.tz),
            "toggled"
        )

    def increment_today(self, habit_id: str, now: Optional[datetime] = None) -> Habit:
        now = now or self.clock()
        return self._mutate(
            habit_id,
            lambda h: h.increment_today(now, self.start_of_day_hour, self.tz),
            "incremented"
        )

    def decrement_today(self, habit_id: str, now: Optional[datetime] = None) -> Habit:
        now = now or self.clock()
        return self._mutate(
            habit_id,
            lambda h: h.decrement_today(now, self.start_of_day_hour, self.tz),
            "decremented"
        )

    # ===== ВСПОМОГАТЕЛЬНЫЕ =====

    def _mutate(self, habit_id: str, action: Callable[[Habit], Any], verb: str) -> Habit:
        with self._lock:
            habits = self.repository.load_all()
            habit = self._find(habits, habit_id)
            action(habit)
            self._save(habits)

        logger.info(f"Habit {habit_id} {verb}")
        return habit

    def _save(self, habits: List[Habit]) -> None:
        try:
            self.repository.save_all(habits)
        except StorageWriteError as e:
            logger.error(f"❌ Ошибка сохранения привычек: {e}")
            raise

    def _summarize(self, habit: Habit, weeks: int, now: Optional[datetime] = None) -> HabitSummary:
        return summarize(habit, self.start_of_day_hour, weeks=weeks, now=now or self.clock(), tz=self.tz)

    @staticmethod
    def _find(habits: List[Habit], habit_id: str) -> Habit:
        for habit in habits:
            if habit.id == habit_id:
                return habit
        raise HabitNotFoundError(habit_id)

    @staticmethod
    def _check_weeks(weeks: int) -> None:
        if weeks <= 0:
            raise ValidationError("weeks должен быть положительным числом")

# ===== ГЛОБАЛЬНЫЙ ЭКЗЕМПЛЯР =====

_global_habit_service: Optional[HabitService] = None


def initialize_habit_service(config=None) -> HabitService:
    """Инициализация глобального HabitService по конфигурации"""
    global _global_habit_service
    if config is None:
        from habit_tracker.config import get_config
        config = get_config()

    _global_habit_service = HabitService(
        repository=HabitRepository.from_config(config),
        start_of_day_hour=config.calendar.start_of_day_hour,
        tz=config.calendar.tz,
    )
    logger.info("✅ HabitService инициализирован")
    return _global_habit_service


def get_habit_service() -> HabitService:
    """Получить глобальный экземпляр HabitService"""
    if _global_habit_service is None:
        return initialize_habit_service()
    return _global_habit_service


def reset_habit_service() -> None:
    """Сбросить глобальный экземпляр (при остановке приложения)"""
    global _global_habit_service
    _global_habit_service = None
