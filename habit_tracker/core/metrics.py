#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - Metrics Engine
Выполнение за день, текущая и лучшая серия, тепловая карта

Все значения вычисляются заново из истории привычки при каждом вызове.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Dict, List, Optional, Set

from habit_tracker.core.calendar import (
    format_day_key, last_n_days_keys, local_day, now_local, parse_day_key
)
from habit_tracker.core.models import Habit

DEFAULT_HEATMAP_WEEKS = 8
DAYS_PER_WEEK = 7


def is_completed_on(habit: Habit, key: str) -> bool:
    """Выполнена ли привычка в указанный день"""
    if habit.is_count:
        return habit.count_on(key) >= habit.effective_goal
    return key in habit.completed_days


def completed_day_keys_for_metrics(habit: Habit) -> Set[str]:
    """Множество выполненных дней для расчёта серий и тепловой карты"""
    if habit.is_count:
        goal = habit.effective_goal
        return {key for key, count in habit.day_counts.items() if count >= goal}
    return set(habit.completed_days)


def compute_current_streak(habit: Habit, start_of_day_hour: int,
                           now: Optional[datetime] = None,
                           tz: Optional[tzinfo] = None) -> int:
    """Текущая серия: подряд выполненные дни, заканчивая сегодняшним.

    Один пропущенный день прерывает серию; если сегодня не выполнено, серия 0.
    """
    cursor = local_day(now or now_local(tz), start_of_day_hour, tz)
    streak = 0
    while is_completed_on(habit, format_day_key(cursor)):
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def compute_best_streak(habit: Habit) -> int:
    """Самая длинная серия подряд выполненных дней за всю историю"""
    days: Set[date] = set()
    for key in completed_day_keys_for_metrics(habit):
        try:
            days.add(parse_day_key(key))
        except ValueError:
            continue

    if not days:
        return 0

    ordered = sorted(days)
    best = 1
    current = 1
    for prev, cur in zip(ordered, ordered[1:]):
        gap = (cur - prev).days
        if gap == 1:
            current += 1
            best = max(best, current)
        elif gap > 1:
            current = 1
    return best


def heatmap_tiles(habit: Habit, weeks: int, start_of_day_hour: int,
                  now: Optional[datetime] = None,
                  tz: Optional[tzinfo] = None) -> List[bool]:
    """Плитки тепловой карты за weeks недель, последний элемент - сегодня"""
    completed = completed_day_keys_for_metrics(habit)
    keys = last_n_days_keys(weeks * DAYS_PER_WEEK, start_of_day_hour, now=now, tz=tz)
    return [key in completed for key in keys]


def chunk_heatmap(tiles: List[bool], weeks: int) -> List[List[bool]]:
    """Разбивка плиток по неделям: неделя w = tiles[w*7 : w*7+7]"""
    return [tiles[w * DAYS_PER_WEEK:(w + 1) * DAYS_PER_WEEK] for w in range(weeks)]


@dataclass
class HabitSummary:
    """Производные показатели привычки на момент расчёта"""
    today_key: str
    done_today: bool
    today_count: int
    goal: int
    current_streak: int
    best_streak: int
    heatmap: List[bool] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "todayKey": self.today_key,
            "doneToday": self.done_today,
            "todayCount": self.today_count,
            "goal": self.goal,
            "currentStreak": self.current_streak,
            "bestStreak": self.best_streak,
            "heatmap": self.heatmap,
        }


def summarize(habit: Habit, start_of_day_hour: int, weeks: int = DEFAULT_HEATMAP_WEEKS,
              now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> HabitSummary:
    """Все производные показатели привычки за один вызов"""
    now = now or now_local(tz)
    today_key = format_day_key(local_day(now, start_of_day_hour, tz))
    return HabitSummary(
        today_key=today_key,
        done_today=is_completed_on(habit, today_key),
        today_count=habit.count_on(today_key),
        goal=habit.effective_goal,
        current_streak=compute_current_streak(habit, start_of_day_hour, now=now, tz=tz),
        best_streak=compute_best_streak(habit),
        heatmap=heatmap_tiles(habit, weeks, start_of_day_hour, now=now, tz=tz),
    )
