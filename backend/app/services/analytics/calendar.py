"""
Calendar helpers shared by the analytics components.

Weeks start on Monday everywhere (pace trends, weekly buckets and plan
weeks all use the same convention).
"""
from datetime import date, datetime, timedelta
from typing import Iterable, Optional


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for no values."""
    total = 0.0
    count = 0
    for value in values:
        total += value
        count += 1
    return total / count if count else 0.0


def week_start(day: date) -> date:
    """Monday on or before day."""
    return day - timedelta(days=day.weekday())


def month_start(day: date) -> date:
    return day.replace(day=1)


def next_week_start(day: date) -> date:
    """First Monday on or after day."""
    return day + timedelta(days=(7 - day.weekday()) % 7)


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Naive local wall-clock time unless the caller pins one."""
    return now if now is not None else datetime.now()


def resolve_today(today: Optional[date] = None) -> date:
    return today if today is not None else date.today()
