"""Tests for the 5K predictor."""

from datetime import timedelta

import pytest

from app.services.analytics import predict_5k
from app.services.analytics.prediction import confidence_for


def test_no_data():
    assert predict_5k([]) is None


def test_only_short_runs(make_activity):
    assert predict_5k([make_activity(distance_m=3000, duration_s=900)]) is None


def test_mean_pace_extrapolated_to_5k(make_activity, days_ago):
    activities = [
        make_activity(days_ago(1), distance_m=10000, duration_s=3000),  # 300 s/km
        make_activity(days_ago(2), distance_m=5000, duration_s=1600),  # 320 s/km
        make_activity(days_ago(3), distance_m=2000, duration_s=400),  # too short
    ]
    prediction = predict_5k(activities)

    assert prediction.predicted_seconds == 1550
    assert prediction.predicted_time == "25:50"
    assert prediction.sample_size == 2
    assert prediction.confidence == "low"


def test_only_the_twenty_most_recent_are_considered(make_activity, days_ago):
    recent = [
        make_activity(days_ago(n), distance_m=5000, duration_s=1500) for n in range(1, 21)
    ]
    old = [make_activity(days_ago(100), distance_m=5000, duration_s=3000)]
    prediction = predict_5k(old + recent)

    assert prediction.sample_size == 20
    assert prediction.predicted_seconds == 1500
    assert prediction.confidence == "high"


def test_recent_short_runs_crowd_out_older_long_runs(make_activity, days_ago):
    short = [make_activity(days_ago(n), distance_m=3000) for n in range(1, 21)]
    long_run = make_activity(days_ago(30), distance_m=10000, duration_s=3000)

    assert predict_5k(short + [long_run]) is None


def test_recency_uses_timestamp(make_activity, now):
    activities = [
        make_activity(now - timedelta(hours=n), distance_m=4000, duration_s=1200)
        for n in range(5)
    ]
    prediction = predict_5k(activities)

    assert prediction.sample_size == 5
    assert prediction.confidence == "medium"


@pytest.mark.parametrize(
    "samples,expected",
    [(1, "low"), (4, "low"), (5, "medium"), (9, "medium"), (10, "high"), (20, "high")],
)
def test_confidence_levels(samples, expected):
    assert confidence_for(samples) == expected
