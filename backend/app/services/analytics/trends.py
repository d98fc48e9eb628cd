"""
Pace Trend Analyzer - Average pace per calendar week or month.
"""
from datetime import date
from typing import Callable, Dict, Iterable, Iterator, List, Tuple

from app.core.errors import validate_choice
from app.core.logging import get_logger
from app.models.activity import Activity
from app.models.stats import TrendPoint
from app.services.analytics.calendar import mean, month_start, week_start

logger = get_logger(__name__)

PERIODS = ("weekly", "monthly")


def _weekly_label(start: date) -> str:
    return f"Week of {start.isoformat()}"


def _monthly_label(start: date) -> str:
    return start.strftime("%Y-%m")


_BUCKETING: Dict[str, Tuple[Callable[[date], date], Callable[[date], str]]] = {
    "weekly": (week_start, _weekly_label),
    "monthly": (month_start, _monthly_label),
}


def pace_trend(activities: Iterable[Activity], period: str = "weekly") -> Iterator[TrendPoint]:
    """
    Average pace per period, oldest period first.

    Every activity counts toward its bucket's activity_count; only
    activities with a defined pace contribute to the average. Periods with
    no activities are omitted.

    The period is validated immediately; the points themselves are produced
    lazily, and each call returns a fresh iterator.

    Raises:
        ValidationError: period is not "weekly" or "monthly"
    """
    validate_choice(period, "period", PERIODS)
    return _iter_trend(list(activities), period)


def _iter_trend(activities: List[Activity], period: str) -> Iterator[TrendPoint]:
    key_for, label_for = _BUCKETING[period]

    buckets: Dict[date, List[Activity]] = {}
    for activity in activities:
        buckets.setdefault(key_for(activity.local_date), []).append(activity)

    logger.debug("Computing pace trend", period=period, buckets=len(buckets))

    for start in sorted(buckets):
        members = buckets[start]
        yield TrendPoint(
            period_start=start,
            label=label_for(start),
            average_pace_s_per_km=mean(
                a.pace_seconds_per_km for a in members if a.has_pace
            ),
            activity_count=len(members),
        )
