# habit_tracker/dashboard/__init__.py

from .app import create_app
from .config import DashboardSettings, get_settings

__all__ = ['create_app', 'DashboardSettings', 'get_settings']
