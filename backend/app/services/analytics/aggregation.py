"""
Aggregation Engine - Totals, averages and weekly buckets.
"""
from collections import OrderedDict
from datetime import datetime, timedelta, date
from typing import Dict, Iterable, List, Optional, Sequence

from app.core.errors import validate_range
from app.core.logging import get_logger
from app.core.numbers import round_half_up
from app.models.activity import SUNDAY_FIRST, Activity, Weekday
from app.models.stats import Summary, WeeklyBucket, WeeklyDistancePoint
from app.services.analytics.calendar import (
    mean,
    resolve_now,
    resolve_today,
    week_start,
)

logger = get_logger(__name__)


def within_lookback(
    activities: Iterable[Activity],
    lookback_days: Optional[int],
    now: Optional[datetime] = None,
) -> List[Activity]:
    """Activities with occurred_at >= now - lookback_days (all if no lookback)."""
    if lookback_days is None:
        return list(activities)
    cutoff = resolve_now(now) - timedelta(days=lookback_days)
    return [a for a in activities if a.occurred_at >= cutoff]


def most_frequent_weekday(activities: Sequence[Activity]) -> Optional[Weekday]:
    """
    Weekday with the most activities.

    Weekdays are scanned once in Sunday-first order; the first to reach the
    maximum count wins, so ties go to the earlier weekday in that order.
    """
    counts: Dict[Weekday, int] = {day: 0 for day in SUNDAY_FIRST}
    for activity in activities:
        counts[activity.weekday] += 1

    best: Optional[Weekday] = None
    best_count = 0
    for day in SUNDAY_FIRST:
        if counts[day] > best_count:
            best = day
            best_count = counts[day]
    return best


def summarize(
    activities: Iterable[Activity],
    lookback_days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Summary:
    """
    Summarize a set of activities.

    Pace and speed are unweighted means over activities with a defined
    pace; zero-distance or zero-duration records still count toward the
    totals.

    Args:
        activities: Activities to summarize
        lookback_days: Only include activities from the last N days
        now: Reference time for the lookback window

    Returns:
        Summary (all zeros and no weekday for an empty set)
    """
    if lookback_days is not None:
        validate_range(lookback_days, "lookback_days", 1)

    selected = within_lookback(activities, lookback_days, now)
    if not selected:
        return Summary()

    total_distance = sum(a.distance_meters for a in selected)
    total_duration = sum(a.duration_seconds for a in selected)
    paced = [a for a in selected if a.has_pace]

    summary = Summary(
        total_count=len(selected),
        total_distance_m=total_distance,
        total_duration_s=total_duration,
        average_distance_m=total_distance / len(selected),
        average_pace_s_per_km=mean(a.pace_seconds_per_km for a in paced),
        average_speed_kmh=mean(a.speed_kmh for a in paced),
        longest_distance_m=max(a.distance_meters for a in selected),
        most_frequent_weekday=most_frequent_weekday(selected),
    )

    logger.debug(
        "Summarized activities",
        count=summary.total_count,
        paced=len(paced),
        lookback_days=lookback_days,
    )

    return summary


def weekly_buckets(activities: Iterable[Activity]) -> List[WeeklyBucket]:
    """Group activities into Monday-start weeks. Sparse, oldest first."""
    groups: Dict[date, List[float]] = {}
    for activity in activities:
        key = week_start(activity.local_date)
        groups.setdefault(key, []).append(activity.distance_km)

    return [
        WeeklyBucket(
            week_start_date=key,
            total_distance_km=sum(distances),
            activity_count=len(distances),
        )
        for key, distances in sorted(groups.items())
    ]


def weekly_distance(
    activities: Iterable[Activity],
    weeks: int = 12,
    today: Optional[date] = None,
) -> List[WeeklyDistancePoint]:
    """
    Distance per week for the last `weeks` weeks, including the current one.

    Unlike weekly_buckets the series is dense: weeks without activity are
    reported as 0 km.
    """
    validate_range(weeks, "weeks", 1, 104)

    current = week_start(resolve_today(today))
    totals: "OrderedDict[date, float]" = OrderedDict(
        (current - timedelta(weeks=offset), 0.0)
        for offset in range(weeks - 1, -1, -1)
    )

    for activity in activities:
        key = week_start(activity.local_date)
        if key in totals:
            totals[key] += activity.distance_km

    return [
        WeeklyDistancePoint(
            week_start_date=key,
            label=f"{key.strftime('%b')} {key.day}",
            distance_km=round_half_up(distance, 1),
        )
        for key, distance in totals.items()
    ]
