# habit_tracker/ui/themes.py

from habit_tracker.database.preferences import DEFAULT_THEME

THEMES = {
    "light": {
        "emoji": "☀️",
        "background": "#FFFFFF",
        "surface": "#F5F5F7",
        "text": "#1C1C1E",
        "tile_empty": "#E0E0E0",
        "name": "Light"
    },
    "dark": {
        "emoji": "🌑",
        "background": "#111111",
        "surface": "#1E1E1E",
        "text": "#F2F2F2",
        "tile_empty": "#2C2C2E",
        "name": "Dark"
    }
}

def get_theme(theme_name: str):
    return THEMES.get(theme_name, THEMES[DEFAULT_THEME])
