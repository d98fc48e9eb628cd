"""
Personal Record Tracker.

Timed records are pace-based: an activity of at least the record distance
is credited with its average pace extrapolated linearly to exactly that
distance, so runs of different lengths compare on equal terms.
"""
from typing import Iterable, List, Optional

from app.core.logging import get_logger
from app.core.numbers import round_half_up
from app.models.activity import Activity, format_duration
from app.models.stats import PersonalRecord, PersonalRecords

logger = get_logger(__name__)


def _longest_distance(activities: List[Activity]) -> Optional[PersonalRecord]:
    best: Optional[Activity] = None
    for activity in activities:
        if activity.distance_meters > (best.distance_meters if best else 0):
            best = activity
    if best is None:
        return None
    return PersonalRecord(
        value=best.distance_km,
        date=best.local_date,
        activity_id=best.id,
    )


def _most_elevation(activities: List[Activity]) -> Optional[PersonalRecord]:
    best: Optional[Activity] = None
    best_gain = 0.0
    for activity in activities:
        gain = activity.elevation_gain_meters or 0.0
        if gain > best_gain:
            best = activity
            best_gain = gain
    if best is None:
        return None
    return PersonalRecord(
        value=round_half_up(best_gain),
        date=best.local_date,
        activity_id=best.id,
    )


def fastest_over(activities: Iterable[Activity], distance_m: float) -> Optional[PersonalRecord]:
    """
    Fastest extrapolated time over distance_m.

    Only activities of at least distance_m with a defined pace qualify.
    The first activity wins ties.
    """
    best: Optional[Activity] = None
    best_pace = float("inf")
    for activity in activities:
        if activity.distance_meters < distance_m or not activity.has_pace:
            continue
        pace = activity.pace_seconds_per_km
        if pace < best_pace:
            best = activity
            best_pace = pace
    if best is None:
        return None

    seconds = best_pace * distance_m / 1000
    return PersonalRecord(
        value=seconds,
        date=best.local_date,
        activity_id=best.id,
        formatted=format_duration(seconds),
    )


def personal_records(activities: Iterable[Activity]) -> PersonalRecords:
    """Find best efforts across all activities. Missing records are None."""
    items = list(activities)

    records = PersonalRecords(
        longest_distance=_longest_distance(items),
        fastest_5k=fastest_over(items, 5000),
        fastest_10k=fastest_over(items, 10000),
        most_elevation=_most_elevation(items),
    )

    logger.debug(
        "Computed personal records",
        activities=len(items),
        has_5k=records.fastest_5k is not None,
        has_10k=records.fastest_10k is not None,
    )

    return records
