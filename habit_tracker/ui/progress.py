# habit_tracker/ui/progress.py

from typing import List

from habit_tracker.core.metrics import chunk_heatmap

def goal_progress_bar(count: int, goal: int, cells: int = 10) -> str:
    """Полоса выполнения дневной цели: "3/8 🟩🟩🟩⬜️... 37%"

    Перевыполнение закрашивает всю полосу и показывает 100%.
    """
    goal = max(goal, 1)
    reached = min(count, goal)
    filled = reached * cells // goal
    percent = reached * 100 // goal
    return f"{count}/{goal} " + "🟩" * filled + "⬜️" * (cells - filled) + f" {percent}%"

def streak_emoji(streak: int):
    if streak >= 30:
        return "🏆"
    elif streak >= 7:
        return "🔥"
    elif streak >= 3:
        return "✨"
    else:
        return "🔹"

def heatmap_rows(tiles: List[bool], weeks: int) -> List[str]:
    """Текстовая тепловая карта: одна строка на неделю, старые недели сверху"""
    return [
        "".join("🟩" if done else "⬜️" for done in week)
        for week in chunk_heatmap(tiles, weeks)
    ]
