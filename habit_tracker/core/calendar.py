#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - Day-Key Calendar
Ключи дней (YYYY-MM-DD) с настраиваемым часом начала суток

Час начала суток передаётся явно в каждый вызов: момент времени раньше
этого часа относится к предыдущему календарному дню. Сдвиг выполняется
календарным вычитанием дня, поэтому переходы на летнее время не
смещают границу.
"""

import re
from datetime import date, datetime, timedelta, tzinfo
from typing import List, Optional

import pytz

DEFAULT_START_OF_DAY_HOUR = 4

_DAY_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def get_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Часовой пояс по имени IANA (None - системный локальный пояс)"""
    if not name:
        return None
    return pytz.timezone(name)


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Текущий момент в локальном времени"""
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


def to_local(instant: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Перевод момента времени в локальное время.

    Наивные datetime считаются системным локальным временем.
    """
    if tz is None:
        if instant.tzinfo is None:
            return instant
        return instant.astimezone()
    if instant.tzinfo is None:
        instant = instant.astimezone()
    return instant.astimezone(tz)


def local_day(instant: datetime, start_of_day_hour: int,
              tz: Optional[tzinfo] = None) -> date:
    """Календарный день, к которому относится момент времени"""
    local = to_local(instant, tz)
    day = local.date()
    if local.hour < start_of_day_hour:
        day -= timedelta(days=1)
    return day


def format_day_key(day: date) -> str:
    return day.isoformat()


def day_key(instant: datetime, start_of_day_hour: int,
            tz: Optional[tzinfo] = None) -> str:
    """Ключ дня для момента времени"""
    return format_day_key(local_day(instant, start_of_day_hour, tz))


def is_valid_day_key(key) -> bool:
    if not isinstance(key, str) or not _DAY_KEY_RE.match(key):
        return False
    try:
        date.fromisoformat(key)
    except ValueError:
        return False
    return True


def parse_day_key(key: str) -> date:
    """Разбор ключа дня; ValueError при неверном формате"""
    if not isinstance(key, str) or not _DAY_KEY_RE.match(key):
        raise ValueError(f"Invalid day key: {key!r}")
    return date.fromisoformat(key)


def last_n_days_keys(n: int, start_of_day_hour: int, now: Optional[datetime] = None,
                     tz: Optional[tzinfo] = None) -> List[str]:
    """Ключи последних n дней, от самого старого до сегодняшнего включительно"""
    if n <= 0:
        return []
    today = local_day(now or now_local(tz), start_of_day_hour, tz)
    return [format_day_key(today - timedelta(days=i)) for i in range(n - 1, -1, -1)]
