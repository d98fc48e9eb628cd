"""
Activity Store - Read access to imported activities.

The store is owned by the import collaborators (activity API sync and the
weekly event scraper). The analytics engine only reads snapshots from it.
"""
import json
from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path
from threading import Lock
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field

from app.core.logging import get_logger
from app.models.activity import Activity, ActivityKind, EventResult

logger = get_logger(__name__)


class ActivityStore(ABC):
    """Abstract read interface over imported activities."""

    event_source_enabled: bool = False

    @abstractmethod
    def list_activities(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        kinds: Optional[Iterable[ActivityKind]] = None,
    ) -> Tuple[Activity, ...]:
        """
        Get a snapshot of activities.

        Args:
            start: Only activities at or after this local time
            end: Only activities before this local time
            kinds: Restrict to these activity kinds

        Returns:
            Activities sorted ascending by occurred_at
        """
        pass

    def count(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        kinds: Optional[Iterable[ActivityKind]] = None,
    ) -> int:
        """Count activities matching the same filters as list_activities."""
        return len(self.list_activities(start=start, end=end, kinds=kinds))

    def list_runs(self) -> Tuple[Activity, ...]:
        return self.list_activities(kinds=[ActivityKind.RUN])

    def get_activity(self, activity_id: str) -> Optional[Activity]:
        """Look up one activity by id."""
        return next((a for a in self.list_activities() if a.id == activity_id), None)

    @abstractmethod
    def list_event_results(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Tuple[EventResult, ...]:
        """
        Get weekly event results with their placing.

        Args:
            start: Only results on or after this date
            end: Only results on or before this date

        Returns:
            Results sorted ascending by event_date
        """
        pass


class InMemoryActivityStore(ActivityStore):
    """
    List-backed store.

    Writers (add/remove) and readers may run concurrently; every read
    returns an independent tuple snapshot.
    """

    def __init__(
        self,
        activities: Optional[Iterable[Activity]] = None,
        event_source_enabled: bool = False,
        event_results: Optional[Iterable[EventResult]] = None,
    ):
        self._activities: List[Activity] = list(activities or [])
        self._event_results: List[EventResult] = []
        self._lock = Lock()
        self.event_source_enabled = event_source_enabled
        for result in event_results or []:
            self.add_event_result(result)

    def add(self, activity: Activity) -> None:
        with self._lock:
            self._activities.append(activity)

    def add_event_result(self, result: EventResult) -> None:
        with self._lock:
            self._event_results.append(result)
            self._activities.append(result.to_activity())

    def remove(self, activity_id: str) -> bool:
        """Remove an activity by id. Returns False if it was not present."""
        with self._lock:
            before = len(self._activities)
            self._activities = [a for a in self._activities if a.id != activity_id]
            self._event_results = [r for r in self._event_results if r.id != activity_id]
            return len(self._activities) < before

    def list_activities(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        kinds: Optional[Iterable[ActivityKind]] = None,
    ) -> Tuple[Activity, ...]:
        with self._lock:
            items = list(self._activities)

        allowed = set(kinds) if kinds is not None else None
        selected = [
            a for a in items
            if (start is None or a.occurred_at >= start)
            and (end is None or a.occurred_at < end)
            and (allowed is None or a.kind in allowed)
        ]
        selected.sort(key=lambda a: a.occurred_at)
        return tuple(selected)

    def list_event_results(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Tuple[EventResult, ...]:
        with self._lock:
            items = list(self._event_results)

        selected = [
            r for r in items
            if (start is None or r.event_date >= start)
            and (end is None or r.event_date <= end)
        ]
        selected.sort(key=lambda r: r.event_date)
        return tuple(selected)


# ========================================
# Snapshot loading
# ========================================

class RunRecord(BaseModel):
    """Run as exported by the activity sync."""
    id: str
    name: str = ""
    start_date_local: datetime
    distance: float = Field(0.0, ge=0, description="Metres")
    moving_time: float = Field(0.0, ge=0, description="Seconds")
    total_elevation_gain: Optional[float] = None
    latitude_start: Optional[float] = None
    longitude_start: Optional[float] = None

    def to_activity(self) -> Activity:
        coordinates = None
        if self.latitude_start is not None and self.longitude_start is not None:
            coordinates = (self.latitude_start, self.longitude_start)
        return Activity(
            id=self.id,
            occurred_at=self.start_date_local,
            distance_meters=self.distance,
            duration_seconds=self.moving_time,
            kind=ActivityKind.RUN,
            start_coordinates=coordinates,
            elevation_gain_meters=self.total_elevation_gain,
            name=self.name,
        )


class EventResultRecord(BaseModel):
    """Weekly event result as exported by the results scraper."""
    id: str
    event_date: date
    finish_time: str
    position: Optional[int] = None
    total_runners: Optional[int] = None

    def to_event_result(self) -> EventResult:
        return EventResult(
            id=self.id,
            event_date=self.event_date,
            finish_time=self.finish_time,
            position=self.position,
            total_runners=self.total_runners,
        )


class ActivitySnapshot(BaseModel):
    runs: List[RunRecord] = Field(default_factory=list)
    event_results: List[EventResultRecord] = Field(default_factory=list)


def load_snapshot(path: str, event_source_enabled: bool = False) -> InMemoryActivityStore:
    """
    Build an in-memory store from a JSON snapshot file.

    Args:
        path: File with "runs" and "event_results" arrays
        event_source_enabled: Whether the weekly event source is on

    Raises:
        FileNotFoundError: Snapshot file does not exist
        pydantic.ValidationError: Snapshot content is malformed
    """
    snapshot_path = Path(path)
    with open(snapshot_path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    snapshot = ActivitySnapshot.model_validate(raw)

    activities = [run.to_activity() for run in snapshot.runs]
    event_results = [record.to_event_result() for record in snapshot.event_results]

    logger.info(
        "Loaded activity snapshot",
        path=str(snapshot_path),
        runs=len(snapshot.runs),
        event_results=len(snapshot.event_results),
    )

    return InMemoryActivityStore(
        activities,
        event_source_enabled=event_source_enabled,
        event_results=event_results,
    )
