# habit_tracker/database/__init__.py

from .backup import BackupManager
from .migrations import DocumentMigration
from .preferences import PreferenceStore
from .repository import HabitRepository

__all__ = [
    'BackupManager',
    'DocumentMigration',
    'PreferenceStore',
    'HabitRepository',
]
