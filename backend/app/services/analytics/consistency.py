"""
Consistency Analyzer - Activity streaks and frequency.

Streaks are maximal runs of consecutive local calendar dates with at least
one qualifying activity. The current streak is measured inside the lookback
window, backwards from its latest active date; the longest streak is
all-time.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Set

from app.core.errors import validate_range
from app.core.logging import get_logger
from app.core.numbers import round_half_up
from app.models.activity import Activity, ActivityKind
from app.models.stats import ConsistencyStats
from app.services.analytics.calendar import resolve_now

logger = get_logger(__name__)

ONE_DAY = timedelta(days=1)


def current_streak(dates: Set[date]) -> int:
    """Consecutive days ending at the latest date in the set."""
    if not dates:
        return 0
    streak = 0
    check = max(dates)
    while check in dates:
        streak += 1
        check -= ONE_DAY
    return streak


def longest_streak(dates: Iterable[date]) -> int:
    """Length of the longest run of consecutive dates."""
    longest = 0
    run = 0
    previous: Optional[date] = None
    for day in sorted(set(dates)):
        if previous is not None and day - previous == ONE_DAY:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def consistency(
    activities: Iterable[Activity],
    include_events: bool = False,
    lookback_days: int = 30,
    now: Optional[datetime] = None,
) -> ConsistencyStats:
    """
    Compute streak and frequency statistics.

    Args:
        activities: Runs and (optionally) event results
        include_events: Count event results as qualifying activities
        lookback_days: Window for activities_in_period and current_streak
        now: Reference time; its date is "today"

    Returns:
        ConsistencyStats. With no history, streaks are 0 and
        days_since_last falls back to lookback_days.

    Raises:
        ValidationError: lookback_days < 1
    """
    validate_range(lookback_days, "lookback_days", 1)

    today = resolve_now(now).date()
    window_start = today - timedelta(days=lookback_days)

    qualifying: List[Activity] = [
        a for a in activities
        if a.kind == ActivityKind.RUN or (include_events and a.kind == ActivityKind.EVENT)
    ]
    in_period = [a for a in qualifying if a.local_date >= window_start]

    period_dates = {a.local_date for a in in_period}
    all_dates = {a.local_date for a in qualifying}

    if all_dates:
        days_since_last = max((today - max(all_dates)).days, 0)
    else:
        days_since_last = lookback_days

    stats = ConsistencyStats(
        period_days=lookback_days,
        activities_in_period=len(in_period),
        current_streak=current_streak(period_dates),
        longest_streak=longest_streak(all_dates),
        avg_per_week=round_half_up(len(in_period) / (lookback_days / 7), 1),
        days_since_last=days_since_last,
    )

    logger.debug(
        "Computed consistency",
        lookback_days=lookback_days,
        include_events=include_events,
        active_days=len(period_dates),
        current_streak=stats.current_streak,
        longest_streak=stats.longest_streak,
    )

    return stats
