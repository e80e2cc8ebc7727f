# habit_tracker/dashboard/api/__init__.py

from . import habits, settings

__all__ = ['habits', 'settings']
