from fastapi import APIRouter, Depends, Query, Response, status
from datetime import datetime
from typing import Optional

from habit_tracker.config import TrackerConfig
from habit_tracker.core.metrics import chunk_heatmap
from habit_tracker.core.models import Habit
from habit_tracker.services.habit_service import HabitService
from habit_tracker.shared.models import (
    CreateHabitRequest,
    HabitListResponse,
    HabitResponse,
    HeatmapResponse,
    UpdateHabitRequest,
)
from habit_tracker.ui.progress import goal_progress_bar, heatmap_rows, streak_emoji
from ..dependencies import get_habit_service, get_tracker_config

router = APIRouter(prefix="/habits", tags=["habits"])

MAX_WEEKS = 52


def _weeks(weeks: Optional[int], config: TrackerConfig) -> int:
    return weeks or config.calendar.heatmap_weeks


def _respond(service: HabitService, habit: Habit, weeks: int,
             now: Optional[datetime] = None) -> HabitResponse:
    return HabitResponse.build(habit, service.summarize_habit(habit, weeks, now))


@router.get("", response_model=HabitListResponse)
def list_habits(
    weeks: Optional[int] = Query(None, ge=1, le=MAX_WEEKS),
    service: HabitService = Depends(get_habit_service),
    config: TrackerConfig = Depends(get_tracker_config)
):
    """
    Список привычек в порядке создания с показателями
    """
    data = [
        HabitResponse.build(habit, summary)
        for habit, summary in service.summarize_all(_weeks(weeks, config))
    ]
    return HabitListResponse(total=len(data), data=data)


@router.post("", response_model=HabitResponse, status_code=status.HTTP_201_CREATED)
def create_habit(
    request: CreateHabitRequest,
    service: HabitService = Depends(get_habit_service),
    config: TrackerConfig = Depends(get_tracker_config)
):
    habit = service.create_habit(
        name=request.name,
        emoji=request.emoji,
        color_value=request.color_value,
        habit_type=request.type.value,
        goal_count=request.goal_count,
    )
    return _respond(service, habit, config.calendar.heatmap_weeks)


@router.get("/{habit_id}", response_model=HabitResponse)
def get_habit(
    habit_id: str,
    weeks: Optional[int] = Query(None, ge=1, le=MAX_WEEKS),
    service: HabitService = Depends(get_habit_service),
    config: TrackerConfig = Depends(get_tracker_config)
):
    habit, summary = service.summarize(habit_id, _weeks(weeks, config))
    return HabitResponse.build(habit, summary)


@router.patch("/{habit_id}", response_model=HabitResponse)
def update_habit(
    habit_id: str,
    request: UpdateHabitRequest,
    service: HabitService = Depends(get_habit_service),
    config: TrackerConfig = Depends(get_tracker_config)
):
    """
    Изменение привычки: пустое название сохраняет прежнее,
    некорректная цель заменяется на 8
    """
    habit = service.update_habit(
        habit_id,
        name=request.name,
        emoji=request.emoji,
        color_value=request.color_value,
        habit_type=request.type.value if request.type else None,
        goal_text=request.goal_count,
    )
    return _respond(service, habit, config.calendar.heatmap_weeks)


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_habit(
    habit_id: str,
    service: HabitService = Depends(get_habit_service)
):
    service.delete_habit(habit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{habit_id}/toggle", response_model=HabitResponse)
def toggle_today(
    habit_id: str,
    service: HabitService = Depends(get_habit_service),
    config: TrackerConfig = Depends(get_tracker_config)
):
    now = service.clock()
    habit = service.toggle_today(habit_id, now=now)
    return _respond(service, habit, config.calendar.heatmap_weeks, now)


@router.post("/{habit_id}/increment", response_model=HabitResponse)
def increment_today(
    habit_id: str,
    service: HabitService = Depends(get_habit_service),
    config: TrackerConfig = Depends(get_tracker_config)
):
    now = service.clock()
    habit = service.increment_today(habit_id, now=now)
    return _respond(service, habit, config.calendar.heatmap_weeks, now)


@router.post("/{habit_id}/decrement", response_model=HabitResponse)
def decrement_today(
    habit_id: str,
    service: HabitService = Depends(get_habit_service),
    config: TrackerConfig = Depends(get_tracker_config)
):
    now = service.clock()
    habit = service.decrement_today(habit_id, now=now)
    return _respond(service, habit, config.calendar.heatmap_weeks, now)


@router.get("/{habit_id}/heatmap", response_model=HeatmapResponse)
def get_heatmap(
    habit_id: str,
    weeks: Optional[int] = Query(None, ge=1, le=MAX_WEEKS),
    service: HabitService = Depends(get_habit_service),
    config: TrackerConfig = Depends(get_tracker_config)
):
    """
    Тепловая карта: плитки (последняя - сегодня), разбивка по неделям
    и текстовые строки
    """
    weeks = _weeks(weeks, config)
    habit, summary = service.summarize(habit_id, weeks)
    return HeatmapResponse(
        habit_id=habit_id,
        weeks=weeks,
        tiles=summary.heatmap,
        chunks=chunk_heatmap(summary.heatmap, weeks),
        rows=heatmap_rows(summary.heatmap, weeks),
        streak_badge=f"{streak_emoji(summary.current_streak)} {summary.current_streak}",
        progress=goal_progress_bar(summary.today_count, summary.goal) if habit.is_count else None,
    )
