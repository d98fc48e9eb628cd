"""
Analytics module - Statistics derived from activity snapshots.

This module provides:
- Aggregation engine (summary, weekly buckets, weekly distance)
- Pace trend analyzer
- Consistency analyzer (streaks)
- Location clusterer
- Personal record tracker
- 5K pace predictor

All functions are pure: they read the activities they are given and keep
no state between calls.
"""
from app.services.analytics.aggregation import (
    most_frequent_weekday,
    summarize,
    weekly_buckets,
    weekly_distance,
)
from app.services.analytics.consistency import consistency
from app.services.analytics.locations import cluster_by_location
from app.services.analytics.prediction import predict_5k
from app.services.analytics.records import personal_records
from app.services.analytics.trends import pace_trend

__all__ = [
    # Aggregation
    "summarize",
    "most_frequent_weekday",
    "weekly_buckets",
    "weekly_distance",
    # Trends
    "pace_trend",
    # Consistency
    "consistency",
    # Locations
    "cluster_by_location",
    # Records
    "personal_records",
    # Prediction
    "predict_5k",
]
