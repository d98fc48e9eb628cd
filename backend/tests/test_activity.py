"""Tests for activity records and time helpers."""

from datetime import date, datetime

import pytest

from app.models.activity import (
    Activity,
    ActivityKind,
    EventResult,
    Weekday,
    format_duration,
    parse_finish_time,
)


class TestParseFinishTime:
    def test_minutes_and_seconds(self):
        assert parse_finish_time("21:30") == 21 * 60 + 30

    def test_hours_minutes_seconds(self):
        assert parse_finish_time("1:02:03") == 3600 + 2 * 60 + 3

    def test_mm_ss_and_hh_mm_ss_are_not_confused(self):
        # "25:00" is 25 minutes, "00:25:00" is also 25 minutes, "25:00:00" is a day
        assert parse_finish_time("25:00") == 1500
        assert parse_finish_time("00:25:00") == 1500
        assert parse_finish_time("25:00:00") == 90000

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_finish_time(" 19:59 ") == 1199

    @pytest.mark.parametrize("text", ["", "abc", "12", "1:2:3:4", "ab:cd"])
    def test_malformed_values_yield_zero(self, text):
        assert parse_finish_time(text) == 0


class TestFormatDuration:
    def test_below_one_hour(self):
        assert format_duration(1500) == "25:00"
        assert format_duration(299.6) == "5:00"

    def test_from_one_hour(self):
        assert format_duration(3723) == "1:02:03"

    def test_zero(self):
        assert format_duration(0) == "0:00"


class TestActivity:
    def test_pace_and_speed(self):
        activity = Activity(
            id="r1",
            occurred_at=datetime(2026, 10, 18, 8, 0),
            distance_meters=10000,
            duration_seconds=3000,
        )
        assert activity.pace_seconds_per_km == 300
        assert activity.speed_kmh == 12
        assert activity.weekday == Weekday.SUNDAY
        assert activity.local_date == date(2026, 10, 18)

    @pytest.mark.parametrize("distance,duration", [(0, 1200), (5000, 0), (0, 0)])
    def test_pace_undefined_without_distance_and_duration(self, distance, duration):
        activity = Activity(
            id="r2",
            occurred_at=datetime(2026, 10, 18, 8, 0),
            distance_meters=distance,
            duration_seconds=duration,
        )
        assert activity.has_pace is False
        assert activity.pace_seconds_per_km is None
        assert activity.speed_kmh is None

    def test_activities_are_immutable(self):
        activity = Activity(
            id="r3",
            occurred_at=datetime(2026, 10, 18, 8, 0),
            distance_meters=5000,
            duration_seconds=1500,
        )
        with pytest.raises(AttributeError):
            activity.distance_meters = 6000


class TestEventResult:
    def test_to_activity(self):
        result = EventResult(id="e1", event_date=date(2026, 10, 17), finish_time="24:10")
        activity = result.to_activity()

        assert activity.kind == ActivityKind.EVENT
        assert activity.is_event
        assert activity.local_date == date(2026, 10, 17)
        assert activity.weekday == Weekday.SATURDAY
        assert activity.distance_meters == 5000
        assert activity.duration_seconds == 24 * 60 + 10
        assert activity.start_coordinates is None

    def test_malformed_finish_time_gives_zero_duration(self):
        result = EventResult(id="e2", event_date=date(2026, 10, 17), finish_time="DNF")
        activity = result.to_activity()

        assert activity.duration_seconds == 0
        assert activity.pace_seconds_per_km is None
