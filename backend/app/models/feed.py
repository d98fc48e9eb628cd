"""
Read-only listings and the merged calendar feed.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from app.models.activity import Activity, EventResult


@dataclass(frozen=True)
class ActivityPage:
    """One page of runs plus the total matching the same filters."""
    items: Tuple[Activity, ...]
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "runs": [activity.to_dict() for activity in self.items],
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "has_more": self.has_more,
        }


@dataclass(frozen=True)
class EventResultPage:
    items: Tuple[EventResult, ...]
    total: int
    limit: int
    offset: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [result.to_dict() for result in self.items],
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
        }


class CalendarEntryType(str, Enum):
    RUN = "run"
    EVENT = "event"
    RECOMMENDATION = "recommendation"


@dataclass(frozen=True)
class CalendarEntry:
    """A dated item in the calendar: a past run, an event result or a planned run."""
    id: str
    date: date
    entry_type: CalendarEntryType
    title: str
    source: str
    distance_km: Optional[float] = None
    duration_minutes: Optional[int] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "type": self.entry_type.value,
            "title": self.title,
            "distance_km": self.distance_km,
            "duration_minutes": self.duration_minutes,
            "notes": self.notes,
            "source": self.source,
        }
