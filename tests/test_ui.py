"""Tests for text rendering helpers"""
from habit_tracker.ui.progress import goal_progress_bar, heatmap_rows, streak_emoji
from habit_tracker.ui.themes import get_theme


class TestProgress:
    def test_goal_progress_bar(self):
        assert goal_progress_bar(1, 2).startswith("1/2 ")
        assert goal_progress_bar(1, 2).endswith(" 50%")

    def test_goal_progress_capped(self):
        assert goal_progress_bar(9, 3).endswith(" 100%")

    def test_goal_progress_cells(self):
        assert goal_progress_bar(3, 8) == "3/8 " + "🟩" * 3 + "⬜️" * 7 + " 37%"
        assert goal_progress_bar(0, 4, cells=4) == "0/4 " + "⬜️" * 4 + " 0%"
        assert goal_progress_bar(5, 2, cells=4) == "5/2 " + "🟩" * 4 + " 100%"

    def test_streak_emoji(self):
        assert streak_emoji(0) == "🔹"
        assert streak_emoji(3) == "✨"
        assert streak_emoji(7) == "🔥"
        assert streak_emoji(30) == "🏆"

    def test_heatmap_rows(self):
        tiles = [False] * 13 + [True]
        rows = heatmap_rows(tiles, 2)
        assert len(rows) == 2
        assert rows[0] == "⬜️" * 7
        assert rows[1].endswith("🟩")


class TestThemes:
    def test_known_and_fallback(self):
        assert get_theme("dark")["name"] == "Dark"
        assert get_theme("sepia")["name"] == "Light"
