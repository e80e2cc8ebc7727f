# habit_tracker/services/__init__.py

from .habit_service import (
    HabitService,
    parse_goal_input,
    get_habit_service,
    initialize_habit_service,
    reset_habit_service,
)

__all__ = [
    'HabitService',
    'parse_goal_input',
    'get_habit_service',
    'initialize_habit_service',
    'reset_habit_service',
]
