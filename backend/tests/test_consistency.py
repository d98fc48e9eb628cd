"""Tests for streak and frequency statistics."""

import pytest

from app.core.errors import ValidationError
from app.models.activity import ActivityKind
from app.services.analytics import consistency
from app.services.analytics.consistency import current_streak, longest_streak


def test_no_history(now):
    stats = consistency([], include_events=True, lookback_days=30, now=now)

    assert stats.period_days == 30
    assert stats.activities_in_period == 0
    assert stats.current_streak == 0
    assert stats.longest_streak == 0
    assert stats.avg_per_week == 0
    assert stats.days_since_last == 30


def test_single_activity_today(make_activity, today, now):
    stats = consistency([make_activity(today)], lookback_days=30, now=now)

    assert stats.current_streak == 1
    assert stats.longest_streak == 1
    assert stats.days_since_last == 0


def test_streaks_around_a_gap(make_activity, days_ago, now):
    # D, D+1, D+2, gap, D+4, D+5, D+6
    activities = [make_activity(days_ago(n)) for n in (9, 8, 7, 5, 4, 3)]
    stats = consistency(activities, lookback_days=30, now=now)

    assert stats.current_streak == 3
    assert stats.longest_streak == 3
    assert stats.days_since_last == 3


def test_several_activities_on_one_day_count_once_for_streaks(make_activity, days_ago, now):
    activities = [make_activity(days_ago(1)), make_activity(days_ago(1)), make_activity(days_ago(2))]
    stats = consistency(activities, lookback_days=30, now=now)

    assert stats.activities_in_period == 3
    assert stats.current_streak == 2


def test_longest_streak_is_all_time(make_activity, days_ago, now):
    old_streak = [make_activity(days_ago(n)) for n in range(100, 105)]
    recent = [make_activity(days_ago(2)), make_activity(days_ago(1))]
    stats = consistency(old_streak + recent, lookback_days=30, now=now)

    assert stats.current_streak == 2
    assert stats.longest_streak == 5
    assert stats.activities_in_period == 2


def test_current_streak_ignores_dates_outside_window(make_activity, days_ago, now):
    activities = [make_activity(days_ago(n)) for n in range(5, 15)]
    stats = consistency(activities, lookback_days=7, now=now)

    # window covers days_ago(7)..today: dates 7, 6, 5 are in the window
    assert stats.current_streak == 3
    assert stats.longest_streak == 10


def test_events_only_count_when_included(make_activity, days_ago, now):
    activities = [
        make_activity(days_ago(2)),
        make_activity(days_ago(1), kind=ActivityKind.EVENT),
    ]

    without = consistency(activities, include_events=False, lookback_days=30, now=now)
    assert without.activities_in_period == 1
    assert without.current_streak == 1
    assert without.days_since_last == 2

    with_events = consistency(activities, include_events=True, lookback_days=30, now=now)
    assert with_events.activities_in_period == 2
    assert with_events.current_streak == 2
    assert with_events.days_since_last == 1


def test_avg_per_week(make_activity, days_ago, now):
    activities = [make_activity(days_ago(n)) for n in range(10)]
    stats = consistency(activities, lookback_days=30, now=now)

    # 10 / (30 / 7) = 2.333...
    assert stats.avg_per_week == 2.3


def test_days_since_last_uses_all_time_history(make_activity, days_ago, now):
    stats = consistency([make_activity(days_ago(45))], lookback_days=30, now=now)

    assert stats.activities_in_period == 0
    assert stats.current_streak == 0
    assert stats.longest_streak == 1
    assert stats.days_since_last == 45


def test_invalid_lookback():
    with pytest.raises(ValidationError):
        consistency([], lookback_days=0)


def test_streak_helpers(days_ago):
    assert current_streak(set()) == 0
    assert longest_streak([]) == 0
    assert longest_streak([days_ago(1), days_ago(3), days_ago(2), days_ago(10)]) == 3
