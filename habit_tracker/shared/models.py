from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum

from habit_tracker.core.metrics import HabitSummary
from habit_tracker.core.models import DEFAULT_COLOR_VALUE, DEFAULT_EMOJI, MAX_COUNT, Habit

# Базовые перечисления
class HabitTypeName(str, Enum):
    CHECK = "check"
    COUNT = "count"

class ThemeName(str, Enum):
    LIGHT = "light"
    DARK = "dark"

# Модели для создания/обновления
class CreateHabitRequest(BaseModel):
    name: str
    emoji: str = DEFAULT_EMOJI
    color_value: int = Field(DEFAULT_COLOR_VALUE, alias="colorValue", ge=0, le=0xFFFFFFFF)
    type: HabitTypeName = HabitTypeName.CHECK
    goal_count: Optional[str] = Field(None, alias="goalCount")

    model_config = {"populate_by_name": True}

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Название привычки не может быть пустым')
        return v.strip()

    @field_validator('goal_count', mode='before')
    @classmethod
    def goal_as_text(cls, v):
        # Цель принимается как введённый текст, разбор делает сервис
        return None if v is None else str(v)

class UpdateHabitRequest(BaseModel):
    name: Optional[str] = None
    emoji: Optional[str] = None
    color_value: Optional[int] = Field(None, alias="colorValue", ge=0, le=0xFFFFFFFF)
    type: Optional[HabitTypeName] = None
    goal_count: Optional[str] = Field(None, alias="goalCount")

    model_config = {"populate_by_name": True}

    @field_validator('goal_count', mode='before')
    @classmethod
    def goal_as_text(cls, v):
        return None if v is None else str(v)

class ThemeUpdateRequest(BaseModel):
    theme: ThemeName

# Модели для API ответов
class HabitSummaryModel(BaseModel):
    todayKey: str
    doneToday: bool
    todayCount: int = Field(ge=0, le=MAX_COUNT)
    goal: int
    currentStreak: int
    bestStreak: int
    heatmap: List[bool] = []

class HabitResponse(BaseModel):
    id: str
    name: str
    emoji: str
    colorValue: int
    colorHex: str
    type: HabitTypeName
    goalCount: Optional[int] = None
    createdAt: datetime
    completedDays: List[str] = []
    dayCounts: Dict[str, int] = {}
    summary: HabitSummaryModel

    @classmethod
    def build(cls, habit: Habit, summary: HabitSummary) -> "HabitResponse":
        return cls(
            **habit.to_dict(),
            colorHex=habit.color_hex,
            summary=HabitSummaryModel(**summary.to_dict()),
        )

class HabitListResponse(BaseModel):
    total: int
    data: List[HabitResponse]

class HeatmapResponse(BaseModel):
    habit_id: str
    weeks: int
    tiles: List[bool]
    chunks: List[List[bool]]
    rows: List[str]
    streak_badge: str
    progress: Optional[str] = None

class ThemeResponse(BaseModel):
    theme: ThemeName
    descriptor: Dict[str, Any]

class ChoicesResponse(BaseModel):
    emoji: List[str]
    colors: List[int]
    default_emoji: str = DEFAULT_EMOJI
    default_color: int = DEFAULT_COLOR_VALUE

class HealthCheck(BaseModel):
    status: str
    version: str
    environment: str
    habits_file: str
    habits_total: int
    storage: Dict[str, Any] = {}
    timestamp: datetime = Field(default_factory=datetime.now)

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[str]] = None
    timestamp: datetime = Field(default_factory=datetime.now)
