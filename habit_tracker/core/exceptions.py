# habit_tracker/core/exceptions.py

"""Исключения трекера привычек"""


class HabitTrackerError(Exception):
    """Базовое исключение трекера"""
    pass


class ValidationError(HabitTrackerError):
    """Ошибка валидации пользовательского ввода"""
    pass


class HabitNotFoundError(HabitTrackerError):
    """Привычка с указанным id не найдена"""

    def __init__(self, habit_id: str):
        super().__init__(f"Habit {habit_id} not found")
        self.habit_id = habit_id


class StorageError(HabitTrackerError):
    """Базовое исключение для ошибок хранилища"""
    pass


class StorageReadError(StorageError):
    """Ошибка чтения файла данных"""
    pass


class StorageWriteError(StorageError):
    """Ошибка записи файла данных"""
    pass


class StorageCorruptionError(StorageError):
    """Файл данных повреждён"""
    pass
