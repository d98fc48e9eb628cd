"""Shared fixtures for analytics, scheduler and API tests."""

from datetime import date, datetime, time, timedelta
from itertools import count
from typing import Callable, Optional, Tuple

import pytest

from app.core.config import Settings
from app.models.activity import Activity, ActivityKind

# Monday
TODAY = date(2026, 10, 19)
NOW = datetime.combine(TODAY, time(12, 0))


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_activity() -> Callable[..., Activity]:
    """Factory for activities; ids are unique within a test."""
    ids = count(1)

    def _make(
        when: date | datetime = TODAY,
        distance_m: float = 5000.0,
        duration_s: float = 1500.0,
        kind: ActivityKind = ActivityKind.RUN,
        coordinates: Optional[Tuple[float, float]] = None,
        elevation_m: Optional[float] = None,
    ) -> Activity:
        occurred_at = when if isinstance(when, datetime) else datetime.combine(when, time(7, 30))
        return Activity(
            id=f"a{next(ids)}",
            occurred_at=occurred_at,
            distance_meters=distance_m,
            duration_seconds=duration_s,
            kind=kind,
            start_coordinates=coordinates,
            elevation_gain_meters=elevation_m,
        )

    return _make


@pytest.fixture
def days_ago() -> Callable[[int], date]:
    def _days_ago(n: int) -> date:
        return TODAY - timedelta(days=n)

    return _days_ago


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, LOG_FORMAT="console", ACTIVITY_SNAPSHOT_PATH=None)
