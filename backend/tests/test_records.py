"""Tests for personal record tracking."""

from datetime import date

import pytest

from app.services.analytics import personal_records
from app.services.analytics.records import fastest_over


def test_no_activities_means_no_records():
    records = personal_records([])

    assert records.longest_distance is None
    assert records.fastest_5k is None
    assert records.fastest_10k is None
    assert records.most_elevation is None
    assert records.to_dict() == {
        "longest_distance": None,
        "fastest_5k": None,
        "fastest_10k": None,
        "most_elevation": None,
    }


def test_fastest_5k_compares_pace_not_elapsed_time(make_activity):
    longer = make_activity(date(2026, 10, 1), distance_m=6000, duration_s=1800)  # 300 s/km
    five = make_activity(date(2026, 10, 2), distance_m=5000, duration_s=1440)  # 288 s/km
    record = personal_records([longer, five]).fastest_5k

    assert record.activity_id == five.id
    assert record.value == pytest.approx(1440)
    assert record.formatted == "24:00"
    assert record.date == date(2026, 10, 2)


def test_timed_records_extrapolate_pace_to_the_distance(make_activity):
    half = make_activity(distance_m=21097.5, duration_s=6329.25)  # 300 s/km
    records = personal_records([half])

    assert records.fastest_5k.value == pytest.approx(1500)
    assert records.fastest_10k.value == pytest.approx(3000)
    assert records.fastest_10k.formatted == "50:00"


def test_short_activities_do_not_qualify(make_activity):
    records = personal_records([make_activity(distance_m=4999, duration_s=900)])

    assert records.fastest_5k is None
    assert records.fastest_10k is None
    assert records.longest_distance.value == pytest.approx(4.999)


def test_first_activity_wins_ties(make_activity):
    first = make_activity(date(2026, 9, 1), distance_m=5000, duration_s=1500)
    second = make_activity(date(2026, 9, 2), distance_m=10000, duration_s=3000)

    assert fastest_over([first, second], 5000).activity_id == first.id
    assert personal_records([first, second]).fastest_10k.activity_id == second.id


def test_activities_without_pace_are_ignored(make_activity):
    assert fastest_over([make_activity(distance_m=5000, duration_s=0)], 5000) is None


def test_most_elevation(make_activity):
    flat = make_activity(elevation_m=None)
    hilly = make_activity(elevation_m=412.6)
    rolling = make_activity(elevation_m=120.0)
    record = personal_records([flat, hilly, rolling]).most_elevation

    assert record.activity_id == hilly.id
    assert record.value == 413


def test_no_elevation_record_without_gain(make_activity):
    records = personal_records([make_activity(elevation_m=0.0), make_activity()])
    assert records.most_elevation is None


def test_longest_distance_in_km(make_activity):
    records = personal_records([
        make_activity(distance_m=8000),
        make_activity(distance_m=42195),
        make_activity(distance_m=0),
    ])
    assert records.longest_distance.value == pytest.approx(42.195)
