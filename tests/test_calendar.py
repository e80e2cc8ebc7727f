"""Tests for day keys and the start-of-day boundary"""
from datetime import datetime, timedelta

import pytest
import pytz

from habit_tracker.core.calendar import (
    day_key, is_valid_day_key, last_n_days_keys, local_day, parse_day_key
)


class TestDayKey:
    def test_before_boundary_belongs_to_previous_day(self):
        assert day_key(datetime(2024, 3, 15, 3, 59), 4) == "2024-03-14"

    def test_at_boundary_belongs_to_same_day(self):
        assert day_key(datetime(2024, 3, 15, 4, 0), 4) == "2024-03-15"

    def test_midnight_boundary(self):
        assert day_key(datetime(2024, 3, 15, 0, 0), 0) == "2024-03-15"

    def test_year_rollover(self):
        assert day_key(datetime(2024, 1, 1, 2, 30), 4) == "2023-12-31"

    def test_aware_instant_uses_given_timezone(self):
        instant = pytz.utc.localize(datetime(2024, 3, 15, 2, 0))
        assert day_key(instant, 4, pytz.timezone("Asia/Tokyo")) == "2024-03-15"
        assert day_key(instant, 4, pytz.timezone("America/New_York")) == "2024-03-14"

    def test_dst_start_keeps_calendar_boundary(self):
        ny = pytz.timezone("America/New_York")
        # 2024-03-10: clocks jump from 02:00 to 03:00
        assert str(local_day(ny.localize(datetime(2024, 3, 10, 3, 30)), 4, ny)) == "2024-03-09"
        assert str(local_day(ny.localize(datetime(2024, 3, 10, 4, 0)), 4, ny)) == "2024-03-10"


class TestDayKeyOverTime:
    """Keys advance with the clock and change only at the boundary"""

    def instants(self):
        start = datetime(2024, 3, 14, 0, 0)
        return [start + timedelta(minutes=15 * step) for step in range(3 * 24 * 4)]

    def test_monotonic_and_stable(self):
        keys = [day_key(instant, 4) for instant in self.instants()]
        assert keys == sorted(keys)
        assert keys == [day_key(instant, 4) for instant in self.instants()]

    def test_changes_only_at_boundary(self):
        instants = self.instants()
        for before, after in zip(instants, instants[1:]):
            if day_key(before, 4) != day_key(after, 4):
                assert (after.hour, after.minute) == (4, 0)

    def test_matches_shifted_date(self):
        for instant in self.instants():
            assert day_key(instant, 4) == (instant - timedelta(hours=4)).date().isoformat()


class TestDayKeyFormat:
    def test_valid(self):
        assert is_valid_day_key("2024-02-29")

    @pytest.mark.parametrize("key", ["2023-02-29", "2024-3-1", "20240301", "", None, 20240301])
    def test_invalid(self, key):
        assert not is_valid_day_key(key)

    def test_parse_rejects_malformed(self):
        with pytest.raises(ValueError):
            parse_day_key("15.03.2024")


class TestLastNDays:
    def test_oldest_first_ending_today(self):
        keys = last_n_days_keys(3, 4, now=datetime(2024, 3, 1, 12, 0))
        assert keys == ["2024-02-28", "2024-02-29", "2024-03-01"]

    def test_respects_boundary(self):
        keys = last_n_days_keys(2, 4, now=datetime(2024, 3, 1, 1, 0))
        assert keys == ["2024-02-28", "2024-02-29"]

    def test_non_positive_is_empty(self):
        assert last_n_days_keys(0, 4, now=datetime(2024, 3, 1)) == []
        assert last_n_days_keys(-2, 4, now=datetime(2024, 3, 1)) == []

    def test_keys_are_unique_and_consecutive(self):
        keys = last_n_days_keys(56, 4, now=datetime(2024, 3, 15, 12, 0))
        assert len(set(keys)) == 56
        assert keys[0] == "2024-01-20"
        assert keys[-1] == "2024-03-15"
